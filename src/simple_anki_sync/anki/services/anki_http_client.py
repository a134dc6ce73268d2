"""HTTP client for AnkiConnect API communication."""

from types import TracebackType
from typing import Any, Literal

import httpx

from simple_anki_sync.domain.interfaces.anki_http_client import IAnkiHttpClient
from simple_anki_sync.error_codes import ErrorCode
from simple_anki_sync.exceptions import AnkiConnectError, AnkiRejectedError
from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)

ANKI_CONNECT_VERSION = 6


class AnkiHttpClient(IAnkiHttpClient):
    """HTTP client for communicating with AnkiConnect API.

    Handles the JSON envelope (``{"action", "version", "params"}`` in,
    ``{"result", "error"}`` out) and maps failures onto the exception
    hierarchy. No retries: a failed call surfaces immediately and the next
    sync pass tries again.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        max_keepalive_connections: int = 5,
        max_connections: int = 10,
        keepalive_expiry: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            url: AnkiConnect URL
            timeout: Request timeout in seconds
            max_keepalive_connections: Max idle connections to keep alive
            max_connections: Max total connections in pool
            keepalive_expiry: Seconds before idle connections expire
            transport: Optional httpx transport (tests)
        """
        self.url = url
        pool_limits = httpx.Limits(
            max_keepalive_connections=max_keepalive_connections,
            max_connections=max_connections,
            keepalive_expiry=keepalive_expiry,
        )
        self._client = httpx.AsyncClient(
            timeout=timeout, limits=pool_limits, transport=transport
        )

        logger.debug("anki_http_client_initialized", url=url, timeout=timeout)

    async def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """
        Invoke AnkiConnect action.

        Args:
            action: Action name
            params: Action parameters

        Returns:
            Action result

        Raises:
            AnkiConnectError: If AnkiConnect cannot be reached or answers garbage
            AnkiRejectedError: If AnkiConnect returns an error
        """
        payload = {"action": action, "version": ANKI_CONNECT_VERSION, "params": params or {}}

        logger.debug("anki_invoke", action=action)

        try:
            response = await self._client.post(self.url, json=payload)
            response.raise_for_status()
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            msg = f"Connection error to AnkiConnect: {e}"
            raise AnkiConnectError(
                msg,
                suggestion="Ensure Anki is running with the AnkiConnect add-on enabled.",
                error_code=ErrorCode.ANK_CONNECTION_FAILED.value,
                context={"action": action, "url": self.url},
            ) from e
        except httpx.HTTPStatusError as e:
            msg = f"HTTP {e.response.status_code} from AnkiConnect: {e}"
            raise AnkiConnectError(
                msg, error_code=ErrorCode.ANK_HTTP_ERROR.value, context={"action": action}
            ) from e
        except httpx.HTTPError as e:
            msg = f"HTTP error calling AnkiConnect: {e}"
            raise AnkiConnectError(
                msg,
                error_code=ErrorCode.ANK_CONNECTION_FAILED.value,
                context={"action": action},
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            msg = f"Invalid JSON response: {e}"
            raise AnkiConnectError(
                msg, error_code=ErrorCode.ANK_MALFORMED_RESPONSE.value
            ) from e

        if not isinstance(result, dict):
            msg = f"Invalid response type: expected dict, got {type(result).__name__}"
            raise AnkiConnectError(msg, error_code=ErrorCode.ANK_MALFORMED_RESPONSE.value)

        if "error" not in result or "result" not in result:
            msg = f"Malformed response: missing error/result fields in {result}"
            raise AnkiConnectError(msg, error_code=ErrorCode.ANK_MALFORMED_RESPONSE.value)

        if result["error"] is not None:
            msg = f"AnkiConnect error: {result['error']}"
            raise AnkiRejectedError(
                msg, error_code=ErrorCode.ANK_REJECTED.value, context={"action": action}
            )

        return result["result"]

    async def check_connection(self) -> bool:
        """Check if AnkiConnect is accessible.

        Asks for permission first (a no-op for trusted origins), then checks
        that deckNames answers with a list.
        """
        try:
            permission = await self.invoke("requestPermission")
            if isinstance(permission, dict) and permission.get("permission") == "denied":
                logger.warning("anki_connection_warning", url=self.url, reason="permission_denied")
                return False
            decks = await self.invoke("deckNames")
        except (AnkiConnectError, AnkiRejectedError) as e:
            logger.warning(
                "anki_connection_warning",
                url=self.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        return isinstance(decks, list)

    async def aclose(self) -> None:
        """Close the HTTP session."""
        await self._client.aclose()
        logger.debug("anki_http_client_closed", url=self.url)

    async def __aenter__(self) -> "AnkiHttpClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        """Async context manager exit with cleanup."""
        await self.aclose()
        return False
