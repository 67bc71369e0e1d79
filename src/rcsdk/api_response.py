from __future__ import annotations

import json
import logging
import re
from typing import Any, cast

from pydantic import ValidationError

from .errors import (
    EnvelopeStatusMismatchError,
    InvalidEnvelopeError,
    MissingBoundaryError,
    NoBodyError,
    NoPartsError,
    NotJsonError,
    NotMultipartError,
    NotTextualError,
    ResponseError,
)
from .externals import Externals, ResponseLike
from .models.batch import BatchEnvelope

logger = logging.getLogger(__name__)

CONTENT_TYPE = "Content-Type"
JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/mixed"

HEADER_SEPARATOR = ":"
BODY_SEPARATOR = "\n\n"
BOUNDARY_SEPARATOR = "--"
PART_STATUS_TEXT = "OK"

_BOUNDARY_RE = re.compile(r"boundary=([^;]+)", re.IGNORECASE)
_UNSET: Any = object()


class ApiResponse:
    """Lazily decoded view over one HTTP exchange.

    A real response is created before its body is read and receives it through
    :meth:`receive_response`. Parts of a ``multipart/mixed`` batch response are
    created by :meth:`multipart` with their text already in hand.
    """

    def __init__(
        self,
        externals: Externals,
        *,
        request: Any | None = None,
        response: ResponseLike | None = None,
        response_text: str | None = None,
    ) -> None:
        self._externals = externals
        self._request = request
        self._response = response
        self._text = response_text or ""
        self._json: Any = _UNSET
        self._multipart: list[ApiResponse] | None = None

    async def receive_response(self, response: ResponseLike) -> str:
        """Attach ``response`` and read its body when it is JSON or multipart.

        Must be called exactly once per real response: the body stream cannot
        be read twice. Failures raised while reading propagate to the caller.
        """

        self._response = response
        if self.is_json() or self.is_multipart():
            await response.aread()
            self._text = response.text
            logger.debug("Read %d characters of %s body", len(self._text), self._content_type())
        else:
            # Other content types (e.g. binary attachments) are left unread here.
            self._text = ""
        return self._text

    @property
    def response(self) -> ResponseLike | None:
        return self._response

    @property
    def request(self) -> Any | None:
        return self._request

    @property
    def ok(self) -> bool:
        return bool(self._response is not None and self._response.is_success)

    def text(self) -> str:
        if not self.is_json() and not self.is_multipart():
            raise NotTextualError("Response is not text")
        return self._text

    def json(self) -> Any:
        if not self.is_json():
            raise NotJsonError("Response is not JSON")
        if self._json is _UNSET:
            self._json = json.loads(self._text) if self._text else None
        return self._json

    def error(self, skip_ok_check: bool = False) -> str | None:
        """Return a human readable error message, or ``None`` for a successful response.

        The message defaults to ``"<status> <status text>"``. When the body is a
        JSON object, ``message``, ``error_description`` and ``description`` are
        applied in that order, so the last one present wins.
        """

        if self.ok and not skip_ok_check:
            return None

        pieces: list[str] = []
        if self._response is not None:
            if self._response.status_code:
                pieces.append(str(self._response.status_code))
            if self._response.reason_phrase:
                pieces.append(self._response.reason_phrase)
        msg = " ".join(pieces)

        try:
            payload = self.json()
        except (ResponseError, ValueError):
            logger.debug("Error body is not usable JSON", exc_info=True)
            return msg

        if isinstance(payload, dict):
            for field in ("message", "error_description", "description"):
                value = payload.get(field)
                if value:
                    msg = str(value)
        return msg

    def to_multipart(self) -> list[ApiResponse]:
        """Return the parts of a multipart response, or ``[self]`` for any other response."""

        return self.multipart() if self.is_multipart() else [self]

    def multipart(self) -> list[ApiResponse]:
        if not self.is_multipart():
            raise NotMultipartError("Response is not multipart")

        if self._multipart is None:
            self._multipart = self._split()
        return self._multipart

    def is_content_type(self, content_type: str) -> bool:
        return content_type in self._content_type()

    def is_json(self) -> bool:
        return self.is_content_type(JSON_CONTENT_TYPE)

    def is_multipart(self) -> bool:
        return self.is_content_type(MULTIPART_CONTENT_TYPE)

    def _content_type(self) -> str:
        if self._response is None:
            return ""
        return self._response.headers.get(CONTENT_TYPE) or ""

    def _boundary(self) -> str:
        match = _BOUNDARY_RE.search(self._content_type())
        boundary = match.group(1).strip().strip('"') if match else ""
        if not boundary:
            raise MissingBoundaryError("Cannot find boundary")
        return boundary

    def _split(self) -> list[ApiResponse]:
        text = self.text()
        if not text:
            raise NoBodyError("No response body")

        boundary = self._boundary()
        parts = text.split(BOUNDARY_SEPARATOR + boundary)

        if parts and parts[0].strip() == "":
            parts.pop(0)
        if parts and parts[-1].strip() == BOUNDARY_SEPARATOR:
            parts.pop()

        if not parts:
            raise NoPartsError("No parts in body")

        response = cast(ResponseLike, self._response)
        envelope = self._create(parts[0], response.status_code, response.reason_phrase)
        statuses = self._statuses(envelope)
        data_parts = parts[1:]

        if len(statuses) < len(data_parts):
            raise EnvelopeStatusMismatchError(expected=len(data_parts), actual=len(statuses))
        if len(statuses) > len(data_parts):
            logger.debug(
                "Envelope lists %d statuses for %d parts; ignoring the rest",
                len(statuses),
                len(data_parts),
            )

        logger.debug("Split multipart response on %r into %d part(s)", boundary, len(data_parts))
        return [self._create(part, statuses[i]) for i, part in enumerate(data_parts)]

    @staticmethod
    def _statuses(envelope: ApiResponse) -> list[int]:
        try:
            return BatchEnvelope.model_validate(envelope.json()).statuses
        except ValidationError as exc:
            raise InvalidEnvelopeError(
                "Multipart envelope does not list part statuses"
            ) from exc

    def _create(
        self, text: str = "", status: int = 200, status_text: str = PART_STATUS_TEXT
    ) -> ApiResponse:
        """Build a response from one segment of a multipart body."""

        text = text.replace("\r", "")
        headers_text, separator, remainder = text.partition(BODY_SEPARATOR)
        body: str | None = remainder
        if not separator:
            headers_text, body = "", None

        pairs: list[tuple[str, str]] = []
        for line in headers_text.split("\n"):
            key, _, value = line.strip().partition(HEADER_SEPARATOR)
            key = key.strip()
            if key:
                pairs.append((key, value.strip()))

        response = self._externals.response(
            body,
            headers=self._externals.headers(pairs),
            status=status,
            status_text=status_text,
        )
        return ApiResponse(
            self._externals,
            request=None,
            response=response,
            response_text=body,
        )


__all__ = ["ApiResponse"]
