"""
Default-encoding audit.

Decodes a byte payload the way a text stream would under the current policy
and reports whether the result depends on the locale default, i.e. whether
the planned switch of the default to UTF-8 would change it.
"""

from __future__ import annotations

import codecs
import hashlib
import io
import logging
from typing import Any, Dict, Optional

from charset_normalizer import from_bytes

from .context import RuntimeContext
from .models import classify
from .resolver import record_diagnostics, text_encoding
from .rules import FUTURE_DEFAULT_ENCODING
from .textio import TextStream

logger = logging.getLogger(__name__)


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _decode(raw: bytes, token: str, errors: str, context) -> tuple[str, str]:
    stream = TextStream(io.BytesIO(raw), token, errors, newline="", context=context)
    try:
        return stream.read(), stream.encoding
    finally:
        stream.detach()


def audit_bytes(
    raw: bytes,
    encoding: Optional[str] = None,
    *,
    context: Optional[RuntimeContext] = None,
) -> Dict[str, Any]:
    """
    Audit ``raw`` as if it were read with ``encoding``.

    Raises LookupError for an unknown codec and NoEncodingError when the
    locale reports nothing.
    """
    requested = classify(encoding)

    with record_diagnostics() as diagnostics:
        token = text_encoding(encoding, context=context)

    try:
        text, used = _decode(raw, token, "strict", context)
        decoded_strictly = True
    except UnicodeDecodeError:
        # Keep going with replacement characters so the report is complete
        text, used = _decode(raw, token, "replace", context)
        decoded_strictly = False

    effective = codecs.lookup(used).name

    try:
        future_text = raw.decode(FUTURE_DEFAULT_ENCODING)
        future_ok = True
    except UnicodeDecodeError:
        future_text = None
        future_ok = False

    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    # ASCII decodes the same under every default the policy can pick
    relies_on_default = (
        requested.kind != "named"
        and not raw.isascii()
        and effective != codecs.lookup(FUTURE_DEFAULT_ENCODING).name
    )
    affects = relies_on_default and (not future_ok or future_text != text)

    logger.info(
        "audited %d bytes: requested=%s effective=%s detected=%s affects=%s",
        len(raw), requested.kind, effective, detected, affects,
    )

    return {
        "sha256": _sha256_hex(raw),
        "size": len(raw),
        "report": {
            "requested": requested.model_dump(),
            "effective_encoding": effective,
            "decoded_strictly": decoded_strictly,
            "future_default": FUTURE_DEFAULT_ENCODING,
            "decodes_as_future_default": future_ok,
            "detected_encoding": detected,
            "default_change_affects": affects,
            "diagnostics": [d.model_dump() for d in diagnostics],
        },
    }
