import warnings

import pytest

from textpolicy.context import RuntimeContext


def _no_device(fd):
    return None


@pytest.fixture
def latin1_dev():
    """Dev mode on, locale reports latin-1, no device encoding."""
    return RuntimeContext(dev_mode=True, device_encoding=_no_device, preferred_encoding=lambda: "latin-1")


@pytest.fixture
def latin1_plain():
    return RuntimeContext(dev_mode=False, device_encoding=_no_device, preferred_encoding=lambda: "latin-1")


@pytest.fixture
def no_encoding():
    return RuntimeContext(dev_mode=True, device_encoding=_no_device, preferred_encoding=lambda: None)


@pytest.fixture
def pending():
    """Call to get the PendingDeprecationWarnings raised so far in the test."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        yield lambda: [w for w in caught if issubclass(w.category, PendingDeprecationWarning)]
