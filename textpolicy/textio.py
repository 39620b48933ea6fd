from __future__ import annotations

import io
from typing import Optional

from .context import RuntimeContext
from .models import EncodingSpec, classify
from .resolver import determine_encoding, text_encoding
from .rules import LOCALE


class TextStream(io.TextIOWrapper):
    """
    Text stream over a buffered byte stream, with the default-encoding policy.

    - explicit codec name: used as is, no diagnostic
    - ``"locale"``: device encoding of the buffer, else the locale's
      preferred encoding, no diagnostic
    - omitted: same as ``"locale"``, plus the dev-mode diagnostic pointing at
      the code constructing the stream

    Raises NoEncodingError when no encoding can be determined.
    """

    def __init__(
        self,
        buffer,
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
        newline: Optional[str] = None,
        line_buffering: bool = False,
        write_through: bool = False,
        *,
        context: Optional[RuntimeContext] = None,
    ):
        self._context = context
        self.requested_encoding: EncodingSpec = classify(encoding)

        token = text_encoding(encoding, context=context)
        if token == LOCALE:
            token = determine_encoding(buffer, context=context)

        super().__init__(
            buffer,
            encoding=token,
            errors=errors,
            newline=newline,
            line_buffering=line_buffering,
            write_through=write_through,
        )

    def reconfigure(self, *, encoding: Optional[str] = None, **kwargs) -> None:
        # None keeps the current encoding, as in io.TextIOWrapper
        if encoding is not None:
            self.requested_encoding = classify(encoding)
            if encoding == LOCALE:
                encoding = determine_encoding(self.buffer, context=self._context)
            kwargs["encoding"] = encoding
        super().reconfigure(**kwargs)
