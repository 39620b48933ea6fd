"""
Encoding resolution.

``text_encoding`` is the single point where an omitted ``encoding`` argument
turns into the ``"locale"`` sentinel, and where the pending-deprecation
diagnostic is emitted when dev mode is on. ``determine_encoding`` turns the
sentinel into a real codec name for a given byte stream.
"""

from __future__ import annotations

import io
import logging
import sys
import warnings
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .context import RuntimeContext, get_context
from .errors import NoEncodingError
from .models import DiagnosticEvent
from .rules import DEFAULT_ENCODING_MESSAGE, DIAGNOSTIC_CATEGORY, LOCALE

logger = logging.getLogger(__name__)


def text_encoding(
    encoding: Optional[str],
    stacklevel: int = 1,
    *,
    context: Optional[RuntimeContext] = None,
) -> str:
    """
    Choose the text encoding token for an API with an ``encoding=None`` default.

    An explicit encoding is returned unchanged. ``None`` becomes ``"locale"``;
    in dev mode a PendingDeprecationWarning is also emitted, attributed to the
    frame ``stacklevel + 2`` levels up (this function, the API wrapping it,
    then the API's caller). APIs layered on top of another such API should
    pass an incremented ``stacklevel``.
    """
    if encoding is not None:
        return encoding

    ctx = context if context is not None else get_context()
    if ctx.dev_mode:
        # warnings.warn takes a C ssize_t
        level = min(stacklevel + 2, sys.maxsize)
        logger.debug("encoding not specified, warning at stacklevel %d", level)
        warnings.warn(DEFAULT_ENCODING_MESSAGE, DIAGNOSTIC_CATEGORY, level)
    return LOCALE


def _fileno(buffer) -> Optional[int]:
    try:
        return buffer.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return None


def determine_encoding(buffer, *, context: Optional[RuntimeContext] = None) -> str:
    """
    Resolve the ``"locale"`` sentinel for ``buffer``.

    The device encoding of the buffer's file descriptor wins when the device
    reports one; otherwise the locale's preferred encoding is used.
    """
    ctx = context if context is not None else get_context()

    fd = _fileno(buffer)
    if fd is not None:
        encoding = ctx.device_encoding(fd)
        if encoding:
            logger.debug("fd %d reports device encoding %s", fd, encoding)
            return encoding

    encoding = ctx.preferred_encoding()
    if encoding:
        return encoding

    raise NoEncodingError()


@contextmanager
def record_diagnostics(stacklevel: Optional[int] = 1) -> Iterator[List[DiagnosticEvent]]:
    """
    Collect default-encoding diagnostics emitted inside the block.

    ``stacklevel`` is the value the block passes to ``text_encoding``; each
    event records the frame offset it was attributed at. The list is filled
    when the block exits. Unrelated warnings are re-emitted unchanged.
    """
    offset = min(stacklevel + 2, sys.maxsize) if stacklevel is not None else None
    events: List[DiagnosticEvent] = []
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", DIAGNOSTIC_CATEGORY)
        yield events

    for w in caught:
        if issubclass(w.category, DIAGNOSTIC_CATEGORY) and str(w.message) == DEFAULT_ENCODING_MESSAGE:
            events.append(DiagnosticEvent(
                message=str(w.message),
                category=w.category.__name__,
                stacklevel=offset,
                filename=w.filename,
                lineno=w.lineno,
            ))
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno, source=w.source)
