"""
Version information for the ERC-7806 SDK.

Installed copies report the distribution metadata. A source checkout that was
never installed reads ``[project].version`` from the repository's
``pyproject.toml``.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION_NAME = "erc7806-sdk"
DEFAULT_VERSION = "0.0.2"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def version_from_pyproject(path: pathlib.Path) -> Optional[str]:
    """
    Read ``[project].version`` from a pyproject file.

    Returns:
        The version string, or None when the file is missing, unparsable,
        or declares no version
    """
    try:
        with path.open("rb") as f:
            data = tomli.load(f)
    except (FileNotFoundError, tomli.TOMLDecodeError):
        return None
    version = data.get("project", {}).get("version")
    return version if isinstance(version, str) else None


def get_version(pyproject: pathlib.Path = PYPROJECT_PATH) -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return version_from_pyproject(pyproject) or DEFAULT_VERSION


__version__ = get_version()
