"""Re-export the provider base class and the request/response contract."""

from .models import ProviderRequest, ProviderResponse, ToolCallRecord
from .backend import CompletionBackend
from .aggregator import aggregate_response
from .base import GenericProvider

__all__ = [
    "ProviderRequest",
    "ProviderResponse",
    "ToolCallRecord",
    "CompletionBackend",
    "aggregate_response",
    "GenericProvider",
]
