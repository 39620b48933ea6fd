"""
File-opening helpers that follow the default-encoding policy.

Each helper funnels an omitted ``encoding`` through ``text_encoding`` so the
dev-mode diagnostic points at the code calling the helper.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Optional, Union

from .context import RuntimeContext
from .models import classify
from .resolver import text_encoding
from .textio import TextStream

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, os.PathLike, int]


def open_text(
    file: PathLike,
    mode: str = "r",
    buffering: int = -1,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    newline: Optional[str] = None,
    closefd: bool = True,
    *,
    context: Optional[RuntimeContext] = None,
    stacklevel: int = 1,
) -> TextStream:
    """
    Open ``file`` as a TextStream.

    Same arguments as the builtin ``open`` in text mode. ``stacklevel`` is for
    wrappers: pass 2 from a function calling this one, and so on.
    """
    if "b" in mode:
        raise ValueError("binary mode doesn't take an encoding argument")
    if buffering == 0:
        raise ValueError("can't have unbuffered text I/O")

    token = text_encoding(encoding, stacklevel, context=context)

    line_buffering = buffering == 1
    raw = io.open(file, mode.replace("t", "") + "b", -1 if line_buffering else buffering, closefd=closefd)
    try:
        stream = TextStream(raw, token, errors, newline, line_buffering, context=context)
    except BaseException:
        raw.close()
        raise
    # keep what the caller asked for, not the token passed down
    stream.requested_encoding = classify(encoding)
    return stream


def read_text(
    path: PathLike,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    *,
    context: Optional[RuntimeContext] = None,
) -> str:
    with open_text(path, "r", encoding=encoding, errors=errors, context=context, stacklevel=2) as f:
        return f.read()


def write_text(
    path: PathLike,
    data: str,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    newline: Optional[str] = None,
    *,
    context: Optional[RuntimeContext] = None,
) -> int:
    if not isinstance(data, str):
        raise TypeError(f"data must be str, not {type(data).__name__}")
    with open_text(path, "w", encoding=encoding, errors=errors, newline=newline,
                   context=context, stacklevel=2) as f:
        written = f.write(data)
    logger.debug("wrote %d characters to %s as %s", written, path, f.encoding)
    return written
