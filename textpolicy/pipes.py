"""
Text pipes to child processes.

The default encoding of subprocess pipes is a separate question from the
default of files, so this layer never emits the default-encoding diagnostic:
an omitted encoding is replaced by ``"locale"`` before any TextStream is
built.
"""

from __future__ import annotations

import io
import logging
import subprocess
from typing import Optional

from .context import RuntimeContext
from .rules import LOCALE
from .textio import TextStream

logger = logging.getLogger(__name__)

PIPE = subprocess.PIPE


def _pipe_encoding(encoding: Optional[str]) -> str:
    return encoding if encoding is not None else LOCALE


def _reject_text_kwargs(popen_kwargs) -> None:
    for key in ("text", "universal_newlines"):
        if popen_kwargs.pop(key, None):
            raise TypeError(f"{key!r} is implied; pipes are always text")


def spawn_text(
    args,
    *,
    stdin=None,
    stdout=None,
    stderr=None,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    context: Optional[RuntimeContext] = None,
    **popen_kwargs,
) -> subprocess.Popen:
    """
    Start ``args`` and wrap each piped stream in a TextStream.

    Use ``run_text`` to collect the whole output; ``Popen.communicate`` on the
    returned process only reads text when a single stream is piped.
    """
    _reject_text_kwargs(popen_kwargs)
    token = _pipe_encoding(encoding)
    line_buffering = popen_kwargs.get("bufsize") == 1
    if line_buffering:
        # binary pipes can't be line buffered; the TextStream does it
        popen_kwargs["bufsize"] = -1

    logger.debug("spawning %r with pipe encoding %s", args, token)
    proc = subprocess.Popen(args, stdin=stdin, stdout=stdout, stderr=stderr, **popen_kwargs)
    try:
        if proc.stdin is not None:
            proc.stdin = TextStream(proc.stdin, token, errors, line_buffering=line_buffering,
                                    write_through=True, context=context)
        if proc.stdout is not None:
            proc.stdout = TextStream(proc.stdout, token, errors, context=context)
        if proc.stderr is not None:
            proc.stderr = TextStream(proc.stderr, token, errors, context=context)
    except BaseException:
        proc.kill()
        proc.wait()
        raise
    return proc


def _encode(text: str, token: str, errors: Optional[str], context) -> bytes:
    buf = io.BytesIO()
    stream = TextStream(buf, token, errors, write_through=True, context=context)
    stream.write(text)
    stream.flush()
    stream.detach()
    return buf.getvalue()


def _decode(data: Optional[bytes], token: str, errors: Optional[str], context) -> Optional[str]:
    if data is None:
        return None
    stream = TextStream(io.BytesIO(data), token, errors, context=context)
    try:
        return stream.read()
    finally:
        stream.detach()


def run_text(
    args,
    *,
    input: Optional[str] = None,
    capture_output: bool = False,
    timeout: Optional[float] = None,
    check: bool = False,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    context: Optional[RuntimeContext] = None,
    **popen_kwargs,
) -> subprocess.CompletedProcess:
    """Run ``args`` to completion, like ``subprocess.run(..., text=True)``."""
    _reject_text_kwargs(popen_kwargs)
    token = _pipe_encoding(encoding)

    data = None
    if input is not None:
        if "stdin" in popen_kwargs:
            raise ValueError("stdin and input arguments may not both be used.")
        popen_kwargs["stdin"] = PIPE
        data = _encode(input, token, errors, context)

    if capture_output:
        if "stdout" in popen_kwargs or "stderr" in popen_kwargs:
            raise ValueError("stdout and stderr arguments may not be used with capture_output.")
        popen_kwargs["stdout"] = PIPE
        popen_kwargs["stderr"] = PIPE

    logger.debug("running %r with pipe encoding %s", args, token)
    with subprocess.Popen(args, **popen_kwargs) as proc:
        try:
            out, err = proc.communicate(data, timeout=timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            raise
        except BaseException:
            proc.kill()
            raise
        retcode = proc.poll()

    stdout = _decode(out, token, errors, context)
    stderr = _decode(err, token, errors, context)
    if check and retcode:
        raise subprocess.CalledProcessError(retcode, proc.args, output=stdout, stderr=stderr)
    return subprocess.CompletedProcess(proc.args, retcode, stdout, stderr)
