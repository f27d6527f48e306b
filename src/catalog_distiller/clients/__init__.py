"""Network clients for external services."""

from .exceptions import (
    APIError,
    BridgeResponseError,
    BridgeUnavailableError,
    ClientError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .gemini_client import GeminiClient

__all__ = [
    "GeminiClient",
    "ClientError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
    "BridgeUnavailableError",
    "BridgeResponseError",
]
