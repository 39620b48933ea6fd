class EncodingPolicyError(Exception):
    """Base class for errors raised by textpolicy."""


class NoEncodingError(EncodingPolicyError, OSError):
    """Neither the device nor the locale reported an encoding."""

    def __init__(self, message: str = "could not determine default encoding"):
        super().__init__(message)
