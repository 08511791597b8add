"""
Reference Numbers

Human-quotable submission references of the form
``<PREFIX>-<base36 millisecond timestamp>-<random base36 suffix>``,
e.g. ``WL-MA3K9Z1Q-7F2KQD``.
"""

import re
import secrets
import string
import time

ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 6


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("Only non-negative integers can be encoded")
    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_reference(prefix: str, suffix_length: int = SUFFIX_LENGTH) -> str:
    """
    Generate a new reference for a submission.

    The timestamp part keeps references roughly sortable; the random suffix
    comes from ``secrets`` so two references minted in the same millisecond
    still differ.
    """
    if not 4 <= suffix_length <= 6:
        raise ValueError("suffix_length must be between 4 and 6")

    timestamp = to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(suffix_length))
    return f"{prefix}-{timestamp}-{suffix}".upper()


def reference_pattern(prefix: str) -> re.Pattern[str]:
    """Pattern matching references minted for ``prefix``."""
    return re.compile(rf"^{re.escape(prefix.upper())}-[A-Z0-9]+-[A-Z0-9]{{4,6}}$")
