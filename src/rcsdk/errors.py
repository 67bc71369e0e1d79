from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .api_response import ApiResponse


class RcsdkError(Exception):
    """Base error for RCSDK."""


class ResponseError(RcsdkError):
    """Base error for failures while decoding a response."""


class NotTextualError(ResponseError):
    """Raised when text is requested from a body that is neither JSON nor multipart."""


class NotJsonError(ResponseError):
    pass


class NotMultipartError(ResponseError):
    pass


class NoBodyError(ResponseError):
    """Raised when a multipart response carries no body to split."""


class MissingBoundaryError(ResponseError):
    """Raised when the multipart ``Content-Type`` has no usable ``boundary`` parameter."""


class NoPartsError(ResponseError):
    pass


class InvalidEnvelopeError(ResponseError):
    """Raised when the first multipart segment does not list per-part statuses."""


class EnvelopeStatusMismatchError(ResponseError):
    """Raised when the envelope lists fewer statuses than there are data parts."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Envelope lists {actual} status(es) but the body has {expected} part(s)"
        )
        self.expected = expected
        self.actual = actual


class HttpError(RcsdkError):
    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        details: Optional[Any] = None,
        response: Optional[ApiResponse] = None,
    ) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.details = details
        self.response = response
