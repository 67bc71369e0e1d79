"""Client library for the RingCentral platform REST API."""

from __future__ import annotations

from .api_response import ApiResponse
from .errors import (
    EnvelopeStatusMismatchError,
    HttpError,
    InvalidEnvelopeError,
    MissingBoundaryError,
    NoBodyError,
    NoPartsError,
    NotJsonError,
    NotMultipartError,
    NotTextualError,
    RcsdkError,
    ResponseError,
)
from .externals import DEFAULT_EXTERNALS, Externals
from .http_client import HttpClient

__version__ = "0.1.0"

__all__ = [
    "ApiResponse",
    "DEFAULT_EXTERNALS",
    "EnvelopeStatusMismatchError",
    "Externals",
    "HttpClient",
    "HttpError",
    "InvalidEnvelopeError",
    "MissingBoundaryError",
    "NoBodyError",
    "NoPartsError",
    "NotJsonError",
    "NotMultipartError",
    "NotTextualError",
    "RcsdkError",
    "ResponseError",
    "__version__",
]
