from ._client import HTTPClient
from ._data_classes import (
    ErrorDetails,
    FailedRequest,
    FailedResponse,
    HTTPResult,
    RequestMessage,
    SuccessResponse,
)

__all__ = [
    "ErrorDetails",
    "FailedRequest",
    "FailedResponse",
    "HTTPClient",
    "HTTPResult",
    "RequestMessage",
    "SuccessResponse",
]
