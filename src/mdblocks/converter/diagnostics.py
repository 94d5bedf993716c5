"""Skip-event reporting shared by both conversion directions.

A skipped construct is recorded twice: as a :class:`ConversionWarning`
appended to the caller's list, and as a structured WARNING record on the
``mdblocks.converter`` logger.
"""

from __future__ import annotations

from mdblocks.models import ConversionWarning
from mdblocks.observability import get_logger

_log = get_logger("mdblocks.converter")


def add_warning(
    warnings: list[ConversionWarning] | None,
    code: str,
    message: str,
    **context: object,
) -> None:
    """Record a skipped construct.

    *warnings* may be ``None`` when the caller does not collect warnings;
    the event is still logged.
    """
    code = str(getattr(code, "value", code))
    _log.warning(message, extra={"extra_fields": {"code": code, **context}})
    if warnings is not None:
        warnings.append(ConversionWarning(code=code, message=message, context=dict(context)))
