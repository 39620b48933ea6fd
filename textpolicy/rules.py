"""
Default-encoding policy rules.

This file exists to keep the policy constants in one place.
"""

LOCALE = "locale"  # sentinel, never a registered codec alias
FUTURE_DEFAULT_ENCODING = "utf-8"
MAX_STACKLEVEL = 1000  # upper bound accepted by the service

DIAGNOSTIC_CATEGORY = PendingDeprecationWarning
DEFAULT_ENCODING_MESSAGE = (
    "'encoding' argument not specified. "
    f"The default encoding will change to '{FUTURE_DEFAULT_ENCODING}' in a future release."
)
