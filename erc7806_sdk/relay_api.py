"""
RelayApiClient - REST client for the relay submission service.
"""
import logging
from typing import Any, Dict, Optional, Union

import requests
from pydantic import ValidationError as PydanticValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import RelayApiError
from .models import (
    BlockchainEnum,
    CreateRelayRequest,
    CreateRelayResponse,
    GetRelayResponse,
    UpgradeAccountRequest,
)
from .utils import to_hex

DEFAULT_BASE_URL = "https://swaphere.app"


class RelayApiClient:
    """
    Client for the relay service that upgrades accounts and submits signed
    relay intents on-chain.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        retry_count: int = 3,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the RelayApiClient

        Args:
            base_url: Base URL of the relay service
            timeout: Timeout for HTTP requests in seconds
            retry_count: Number of retries for idempotent (GET) requests
            logger: Optional logger instance to use for debug/info logging
        """
        self.base_url = base_url.rstrip('/')  # Remove trailing slash if present
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        # POSTs create relay requests and are never retried
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    @staticmethod
    def _blockchain(blockchain: Union[str, BlockchainEnum]) -> str:
        return blockchain.value if isinstance(blockchain, BlockchainEnum) else str(blockchain)

    def _request(self, method: str, path: str, action: str, payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        self.logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            body = e.response.text if e.response is not None else ""
            status = e.response.status_code if e.response is not None else None
            self.logger.error(f"Failed to {action}: HTTP {status} {body}")
            raise RelayApiError(f"Failed to {action}: {body or str(e)}", status_code=status) from e
        except requests.RequestException as e:
            self.logger.error(f"Failed to {action}: {e}")
            raise RelayApiError(f"Failed to {action}: {str(e)}") from e
        return response

    def _json(self, response: requests.Response, action: str) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise RelayApiError(f"Invalid JSON response while trying to {action}: {str(e)}",
                                status_code=response.status_code) from e

    def upgrade_account(
        self,
        blockchain: Union[str, BlockchainEnum],
        request: UpgradeAccountRequest
    ) -> None:
        """
        Upgrade an EOA to an EIP-7702 account and register a standard

        Raises:
            RelayApiError: If the request fails
        """
        self._request(
            "POST",
            f"/api/{self._blockchain(blockchain)}/upgrade",
            "upgrade account",
            request.model_dump(by_alias=True, exclude_none=True)
        )

    def create_relay(
        self,
        blockchain: Union[str, BlockchainEnum],
        request: Union[CreateRelayRequest, bytes, str]
    ) -> CreateRelayResponse:
        """
        Submit a signed relay intent for on-chain execution

        Args:
            blockchain: Network the intent targets
            request: CreateRelayRequest, or the raw intent frame (bytes or hex)

        Raises:
            RelayApiError: If the request fails
        """
        if isinstance(request, bytes):
            request = CreateRelayRequest(intent=to_hex(request))
        elif isinstance(request, str):
            request = CreateRelayRequest(intent=request)

        action = "create relay request"
        response = self._request(
            "POST",
            f"/api/relays/{self._blockchain(blockchain)}",
            action,
            request.model_dump(by_alias=True, exclude_none=True)
        )
        result = self._parse(CreateRelayResponse, self._json(response, action), action)
        self.logger.info(f"Relay request created: {result.request_id} ({result.status})")
        return result

    def get_relay(self, request_id: str) -> GetRelayResponse:
        """
        Get the status of a relay request

        Raises:
            RelayApiError: If the request fails
        """
        action = "get relay request status"
        response = self._request("GET", f"/api/relays/{request_id}", action)
        return self._parse(GetRelayResponse, self._json(response, action), action)

    @staticmethod
    def _parse(model, data: Any, action: str):
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise RelayApiError(f"Unexpected response while trying to {action}: {str(e)}") from e
