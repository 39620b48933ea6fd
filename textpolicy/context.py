"""
Process-wide runtime context read by the resolver and the text stream.

The dev-mode flag and the two encoding queries live on one frozen object so
that tests can swap them without touching the real locale or ``sys.flags``.
"""

from __future__ import annotations

import locale
import logging
import os
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .config import DevModeSettings

logger = logging.getLogger(__name__)


def _preferred_encoding() -> Optional[str]:
    # False: do not call setlocale()
    return locale.getpreferredencoding(False)


class RuntimeContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    dev_mode: bool = False
    device_encoding: Callable[[int], Optional[str]] = os.device_encoding
    preferred_encoding: Callable[[], Optional[str]] = _preferred_encoding

    @classmethod
    def from_settings(cls, settings: DevModeSettings) -> "RuntimeContext":
        return cls(dev_mode=settings.dev_mode)


_current: Optional[RuntimeContext] = None


def _default_dev_mode() -> bool:
    # only the flag is read here; a bad value must not break resolution
    try:
        return DevModeSettings().dev_mode
    except ValidationError as e:
        logger.warning("ignoring invalid TEXTPOLICY_DEV_MODE: %s", e.errors()[0]["msg"])
        return bool(sys.flags.dev_mode)


def get_context() -> RuntimeContext:
    global _current
    if _current is None:
        _current = RuntimeContext(dev_mode=_default_dev_mode())
    return _current


def set_context(ctx: RuntimeContext) -> None:
    global _current
    _current = ctx


@contextmanager
def use_context(ctx: RuntimeContext) -> Iterator[RuntimeContext]:
    global _current
    previous = _current
    _current = ctx
    try:
        yield ctx
    finally:
        _current = previous
