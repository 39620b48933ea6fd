import inspect
import io

import pytest

from textpolicy.context import RuntimeContext
from textpolicy.errors import NoEncodingError
from textpolicy.textio import TextStream


def test_locale_sentinel_never_warns(pending, latin1_dev, latin1_plain):
    for ctx in (latin1_dev, latin1_plain):
        stream = TextStream(io.BytesIO("Montréal".encode("latin-1")), encoding="locale", context=ctx)
        assert stream.encoding == "latin-1"
        assert stream.read() == "Montréal"
    assert pending() == []


def test_omitted_matches_locale_and_warns_in_dev_mode(pending, latin1_dev):
    explicit = TextStream(io.BytesIO(b""), encoding="locale", context=latin1_dev)

    lineno = inspect.currentframe().f_lineno + 1
    omitted = TextStream(io.BytesIO(b""), context=latin1_dev)

    assert omitted.encoding == explicit.encoding
    caught = pending()
    assert len(caught) == 1
    assert caught[0].filename == __file__
    assert caught[0].lineno == lineno


def test_omitted_without_dev_mode_is_silent(pending, latin1_plain):
    stream = TextStream(io.BytesIO(b""), context=latin1_plain)
    assert stream.encoding == "latin-1"
    assert pending() == []


def test_named_codec_used_verbatim(pending, latin1_dev):
    stream = TextStream(io.BytesIO("é".encode("utf-16")), encoding="utf-16", context=latin1_dev)
    assert stream.encoding == "utf-16"
    assert stream.read() == "é"
    assert stream.requested_encoding.kind == "named"
    assert stream.requested_encoding.codec == "utf-16"
    assert pending() == []


def test_requested_encoding_kinds(latin1_plain):
    assert TextStream(io.BytesIO(b""), context=latin1_plain).requested_encoding.kind == "unspecified"
    assert TextStream(io.BytesIO(b""), "locale", context=latin1_plain).requested_encoding.kind == "locale"


def test_device_encoding_of_underlying_file(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"\x82")
    ctx = RuntimeContext(device_encoding=lambda fd: "cp437", preferred_encoding=lambda: "latin-1")

    with open(path, "rb") as raw:
        stream = TextStream(raw, "locale", context=ctx)
        assert stream.encoding == "cp437"
        assert stream.read() == "é"
        stream.detach()


def test_construction_fails_without_any_encoding(no_encoding):
    with pytest.raises(NoEncodingError):
        TextStream(io.BytesIO(b"x"), "locale", context=no_encoding)


def test_unknown_codec_is_a_lookup_error(latin1_plain):
    with pytest.raises(LookupError):
        TextStream(io.BytesIO(b"x"), "no-such-codec", context=latin1_plain)


def test_reconfigure_accepts_locale(pending, latin1_dev):
    stream = TextStream(io.BytesIO("é".encode("latin-1")), "utf-8", context=latin1_dev)
    stream.reconfigure(encoding="locale")

    assert stream.encoding == "latin-1"
    assert stream.requested_encoding.kind == "locale"
    assert stream.read() == "é"
    assert pending() == []


def test_reconfigure_without_encoding_keeps_it(latin1_plain):
    stream = TextStream(io.BytesIO(b"a\r\nb"), "utf-8", context=latin1_plain)
    stream.reconfigure(newline="")
    assert stream.encoding == "utf-8"
    assert stream.read() == "a\r\nb"


@pytest.mark.parametrize("codec", ["", " "])
def test_blank_codec_is_a_lookup_error(latin1_dev, codec):
    with pytest.raises(LookupError):
        TextStream(io.BytesIO(b"x"), codec, context=latin1_dev)


def test_blank_codec_is_a_named_request():
    from textpolicy.models import classify

    spec = classify("")
    assert spec.kind == "named"
    assert spec.token == ""
