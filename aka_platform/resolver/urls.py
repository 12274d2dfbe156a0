"""
URL helpers for the alias resolver.

Two small, pure functions:
    - is_absolute_url: accept only syntactically valid absolute URIs as targets
    - merge_query_string: append an incoming query string to a stored target

Merging is plain string composition, not URI-semantic merging: parameters
are neither deduplicated nor reordered, and a fragment in the target is left
where it is.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
# RFC 3986 characters: unreserved, reserved and the percent sign. Anything
# else (spaces, controls, non-ASCII, `|`, `"`, `{`, `}`) must arrive percent-encoded.
_URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")

# Schemes that are meaningless without a host.
_HOST_REQUIRED = {"http", "https", "ftp", "ws", "wss"}


def is_absolute_url(value: Optional[str]) -> bool:
    """
    Return True if `value` parses as an absolute URI.

    Rules:
        - non-empty, only RFC 3986 characters (ASCII, no whitespace, no
          `|`, `"`, `{`, `}`); other characters must be percent-encoded
        - a valid scheme
        - a network location, or (for non-hierarchical schemes such as
          `mailto:` or `urn:`) a non-empty path
        - a numeric port when one is given

    LLM Prompt Example:
        "Explain why relative references must never be stored as redirect
        targets and how urlsplit distinguishes them from absolute URIs."
    """
    if not value or not _URI_CHARS.fullmatch(value):
        return False
    try:
        parts = urlsplit(value)
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        return False

    if not _SCHEME.match(parts.scheme):
        return False
    if parts.netloc:
        return bool(parts.hostname)
    if parts.scheme.lower() in _HOST_REQUIRED:
        return False
    return bool(parts.path)


def _has_query(url: str) -> bool:
    return "?" in url.split("#", 1)[0]


def merge_query_string(target_url: str, query_string: Optional[str]) -> str:
    """
    Append an inbound query string to a stored target URL.

    Args:
        target_url (str): Stored absolute URL, possibly with its own query.
        query_string (Optional[str]): Raw inbound query, with or without the leading '?'.

    Returns:
        str: `target_url` unchanged when there is nothing to merge,
             `target_url + "?" + query` when the target has no query yet,
             `target_url + "&" + query` otherwise.

    Examples:
        >>> merge_query_string("https://a.com/x", "?y=1")
        'https://a.com/x?y=1'
        >>> merge_query_string("https://a.com/x?y=1", "?z=2")
        'https://a.com/x?y=1&z=2'
    """
    query = (query_string or "").lstrip("?")
    if not query:
        return target_url
    if _has_query(target_url):
        return f"{target_url}&{query}"
    return f"{target_url}?{query}"
