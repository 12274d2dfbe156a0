"""
Utility functions for the auth module.
"""

import hmac


def constant_time_equals(a: str, b: str) -> bool:
    """
    Compare two strings without leaking their common prefix length via timing.
    """
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
