"""
HTTP client for the actions marketplace API
"""

from typing import Any

import requests

from ..shared_utilities import get_logger
from .config import DEFAULT_REQUEST_TIMEOUT
from .exceptions import MarketplaceApiError

FUNCTION_KEY_HEADER = "x-functions-key"
CORRELATION_ID_HEADER = "x-correlation-id"

LIST_ACTIONS_PATH = "/api/actions/list"
UPSERT_ACTION_PATH = "/api/actions/upsert"


class ActionsMarketplaceClient:
    """Thin client exposing the two catalog operations used by the sync."""

    def __init__(
        self,
        api_url: str,
        function_key: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ):
        """
        Initialize the marketplace client.

        Args:
            api_url: Base URL of the marketplace API
            function_key: Function key sent with every request
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        if not api_url:
            raise ValueError("api_url is required")

        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if function_key:
            self.session.headers[FUNCTION_KEY_HEADER] = function_key
        self.logger = get_logger(__name__)

    def list_actions(self) -> list[dict[str, Any]]:
        """Fetch every action currently stored in the catalog."""
        payload = self._request("GET", LIST_ACTIONS_PATH)

        if isinstance(payload, dict):
            payload = payload.get("actions")
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise MarketplaceApiError(
                f"Unexpected list response of type {type(payload).__name__}",
                code="INVALID_RESPONSE",
            )
        return payload

    def upsert_action(self, record: dict[str, Any]) -> dict[str, bool]:
        """
        Create or update one action.

        Returns:
            Dictionary with "created" and "updated" flags
        """
        payload = self._request("POST", UPSERT_ACTION_PATH, json=record)
        if not isinstance(payload, dict):
            payload = {}
        return {
            "created": bool(payload.get("created", False)),
            "updated": bool(payload.get("updated", False)),
        }

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body."""
        url = f"{self.api_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise MarketplaceApiError(
                f"Request to {path} failed: {e}", code="NETWORK_ERROR"
            ) from e

        self.logger.debug(
            "API request", method=method, path=path, status_code=response.status_code
        )

        if response.status_code >= 400:
            raise self._error_from_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MarketplaceApiError(
                f"Invalid JSON response from {path}",
                code="INVALID_RESPONSE",
                status_code=response.status_code,
                correlation_id=response.headers.get(CORRELATION_ID_HEADER),
            ) from e

    def _error_from_response(self, response: requests.Response) -> MarketplaceApiError:
        """Build an API error from a failed response."""
        body: Any = None
        try:
            body = response.json()
        except ValueError:
            pass

        error_info = body.get("error", body) if isinstance(body, dict) else None
        if isinstance(error_info, str):
            error_info = {"message": error_info}
        elif not isinstance(error_info, dict):
            error_info = {}

        message = error_info.get("message") or (
            response.text.strip() if response.text else ""
        )
        if not message:
            message = f"HTTP {response.status_code} {response.reason or ''}".strip()

        return MarketplaceApiError(
            message,
            code=error_info.get("code"),
            status_code=response.status_code,
            correlation_id=response.headers.get(CORRELATION_ID_HEADER)
            or error_info.get("correlationId"),
            details=error_info.get("details"),
        )
