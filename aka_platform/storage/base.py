"""
Base storage interface for Aka Platform.

Purpose:
    Define a small, stable contract that multiple alias stores
    (in-memory, PostgreSQL, any key-value service with compare-and-set)
    can implement without requiring changes to the resolver or the API.

Concurrency:
    Stores use optimistic concurrency. Every persisted record carries a
    `version`; `upsert` only succeeds when the caller's version still matches
    the stored one (or, for `version=None`, when the alias does not exist yet).

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.

LLM Prompt Example:
    "Show how a narrow, explicit storage interface with version tokens
    enables lost-update detection without distributed locks."
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from ..models import AliasRecord


class UpsertOutcome(str, Enum):
    """Result of a store write."""

    SUCCESS = "success"
    CONFLICT = "conflict"
    FAILURE = "failure"


class BaseAliasStore(ABC):
    """Abstract base class for alias stores."""

    @abstractmethod  # pragma: no cover
    def lookup(self, alias: str) -> Optional[AliasRecord]:
        """
        Retrieve the record stored under `alias`.

        Returns:
            Optional[AliasRecord]: The record (with its current version) or None.

        Raises:
            StoreFailure: The backend could not be queried.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def upsert(self, record: AliasRecord) -> UpsertOutcome:
        """
        Create or update a record keyed by its alias.

        Rules:
            - record.version is None: create; CONFLICT if the alias exists.
            - otherwise: update only if the stored version equals record.version;
              CONFLICT if it changed or the record vanished.
            - A successful write assigns a new version.

        Returns:
            UpsertOutcome: SUCCESS, CONFLICT, or FAILURE (backend error).
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete(self, alias: str) -> bool:
        """
        Remove an alias. Operational helper; not reachable over HTTP.

        Returns:
            bool: True if a record was removed.
        """
        raise NotImplementedError
