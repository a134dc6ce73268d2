"""Interface for HTTP communication with AnkiConnect."""

from abc import ABC, abstractmethod
from typing import Any


class IAnkiHttpClient(ABC):
    """Interface for HTTP communication with AnkiConnect API.

    Defines the low-level operations needed to talk to AnkiConnect:
    request/response envelope handling and connection management.
    """

    @abstractmethod
    async def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke an AnkiConnect action.

        Args:
            action: Action name
            params: Action parameters

        Returns:
            Action result

        Raises:
            AnkiConnectError: If AnkiConnect cannot be reached
            AnkiRejectedError: If AnkiConnect returns an error
        """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if AnkiConnect is accessible.

        Returns:
            True if connection is successful, False otherwise
        """

    @abstractmethod
    async def aclose(self) -> None:
        """Close the HTTP session."""
