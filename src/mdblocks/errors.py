"""Error hierarchy for mdblocks.

Conversion itself never raises for parseable input; unsupported
constructs become :class:`~mdblocks.models.ConversionWarning` entries.
The errors here cover the host boundary, where a payload that is not
editor output data at all cannot be turned into a document.

Every error carries a machine-readable ``code`` (from :class:`ErrorCode`),
a human-readable ``message``, an optional structured ``context`` dict, and
an optional ``cause`` (chained exception).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error and warning codes."""

    DOCUMENT_FORMAT = "DOCUMENT_FORMAT"
    UNSUPPORTED_BLOCK = "UNSUPPORTED_BLOCK"
    UNSUPPORTED_INLINE = "UNSUPPORTED_INLINE"
    UNKNOWN_BLOCK = "UNKNOWN_BLOCK"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class MdBlocksError(Exception):
    """Base exception for all mdblocks errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class MdBlocksDocumentError(MdBlocksError):
    """A host payload could not be read as editor output data.

    Context keys: ``index`` (block position, when known), ``block_type``,
    ``field``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DOCUMENT_FORMAT,
            message=message,
            context=context,
            cause=cause,
        )
