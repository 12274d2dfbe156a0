"""
Core authorization logic.

Mutating requests carry a shared secret. Authorization fails closed: when no
secret is configured, nothing can be authorized, not even an empty header.
"""

from typing import Optional

from .utils import constant_time_equals


def is_authorized(presented: Optional[str], secret: Optional[str]) -> bool:
    """
    Check a presented shared secret against the configured one.

    Args:
        presented (Optional[str]): Value of the X-Authorization header, None if absent.
        secret (Optional[str]): Configured shared secret.

    Returns:
        bool: True only if a secret is configured and the header matches it exactly.
    """
    if not secret or presented is None:
        return False
    return constant_time_equals(presented, secret)
