"""
Domain models for Aka Platform.

AliasRecord is the only persisted entity: an alias key, the URL it redirects
to, and the store's optimistic-concurrency token.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class AliasRecord:
    """
    A single alias -> target URL mapping.

    Attributes:
        alias (str): Case-sensitive key, never empty.
        target_url (str): Absolute URL the alias redirects to.
        version (Optional[Any]): Opaque token assigned by the store on every
            write. None for a record that has not been persisted yet.
    """

    alias: str
    target_url: str
    version: Optional[Any] = None

    def with_target(self, target_url: str) -> "AliasRecord":
        """Return a copy pointing at `target_url`, keeping alias and version."""
        return replace(self, target_url=target_url)

    @property
    def is_new(self) -> bool:
        return self.version is None
