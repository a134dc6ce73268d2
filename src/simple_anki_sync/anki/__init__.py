"""AnkiConnect client and services."""

from .client import AnkiClient
from .services import AnkiHttpClient

__all__ = ["AnkiClient", "AnkiHttpClient"]
