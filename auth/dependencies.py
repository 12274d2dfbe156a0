"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to pull the presented secret.
The check itself happens in the resolver so every outcome goes through
one code path.
"""

from typing import Optional

from fastapi import Header

from .config import AUTH_HEADER


def get_presented_secret(
    x_authorization: Optional[str] = Header(None, alias=AUTH_HEADER),
) -> Optional[str]:
    """
    Dependency that returns the raw `X-Authorization` header value.

    Returns:
        Optional[str]: The header value, or None when the caller sent none.
    """
    return x_authorization
