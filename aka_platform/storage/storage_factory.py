"""
Storage factory – switch alias store backend from config (lazy env version)
===========================================================================

This module centralizes selection of the storage backend (in-memory vs DB)
so the rest of the app can stay ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- AKA_STORAGE_BACKEND: "memory" (default) or "postgres"
- AKA_DB_DSN:          DSN string if backend=="postgres"
"""

import logging
import os
from typing import Optional

# In-memory storage always available/lightweight
from aka_platform.storage.storage import AliasStore

log = logging.getLogger("aka.storage")


def get_storage(backend: Optional[str] = None, **kwargs):
    """
    Return an alias store based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads AKA_STORAGE_BACKEND.
    kwargs : dict
        Extra args passed to the backend constructor. For postgres, use dsn="...".

    Returns
    -------
    BaseAliasStore-compatible instance

    Raises
    ------
    ValueError
        Unknown backend, or postgres selected without a DSN.
    """
    be = (backend or os.getenv("AKA_STORAGE_BACKEND", "memory")).strip().lower()
    log.debug("Selected storage backend: %r", be)

    if be == "memory":
        return AliasStore()

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("AKA_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env AKA_DB_DSN)")
        # Local import to avoid hard dependency when not using postgres
        from aka_platform.storage.db_storage import DBAliasStore
        return DBAliasStore(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")
