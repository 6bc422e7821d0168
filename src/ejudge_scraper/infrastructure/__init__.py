from .context import OperationContext
from .http_client import AsyncHTTPClient

__all__ = [
    "AsyncHTTPClient",
    "OperationContext",
]
