"""
Storage module for Aka Platform (in-memory implementation).

Responsibilities:
    - Keep alias records keyed by alias
    - Assign a fresh version on every successful write
    - Reject writes whose version is stale (optimistic concurrency)

Design:
    - This is an in-memory reference implementation that satisfies the BaseAliasStore contract.
    - A single lock serializes the compare-and-set so concurrent writers see conflicts
      instead of silently overwriting each other.
    - For production, use the PostgreSQL-backed DBAliasStore.

LLM Prompt Example:
    "Explain how this in-memory store can be swapped for a database-backed layer
     without changing the resolver or API code, by adhering to the BaseAliasStore
     interface."
"""

import itertools
import logging
import threading
from typing import Dict, Optional

from ..models import AliasRecord
from .base import BaseAliasStore, UpsertOutcome

log = logging.getLogger("aka.storage")


class AliasStore(BaseAliasStore):
    def __init__(self):
        """
        Initialize an empty store.

        Internal schema:
            self.records = {alias: AliasRecord(alias, target_url, version)}
        """
        self.records: Dict[str, AliasRecord] = {}
        self._lock = threading.Lock()
        self._versions = itertools.count(1)

    def lookup(self, alias: str) -> Optional[AliasRecord]:
        return self.records.get(alias)

    def upsert(self, record: AliasRecord) -> UpsertOutcome:
        """
        Compare-and-set write of `record`.

        Returns:
            UpsertOutcome: SUCCESS on write, CONFLICT on a stale or duplicate
            create, FAILURE when the record would break the store invariants.
        """
        if not record.alias or not record.target_url:
            return UpsertOutcome.FAILURE

        with self._lock:
            current = self.records.get(record.alias)
            if record.is_new:
                if current is not None:
                    log.warning("Create conflict for alias %r: already exists", record.alias)
                    return UpsertOutcome.CONFLICT
            elif current is None or current.version != record.version:
                log.warning(
                    "Version conflict for alias %r: expected %r, found %r",
                    record.alias, record.version, current.version if current else None,
                )
                return UpsertOutcome.CONFLICT

            self.records[record.alias] = AliasRecord(
                alias=record.alias,
                target_url=record.target_url,
                version=next(self._versions),
            )
        return UpsertOutcome.SUCCESS

    def delete(self, alias: str) -> bool:
        with self._lock:
            return self.records.pop(alias, None) is not None
