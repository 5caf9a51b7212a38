"""Cache reconciliation policies.

merge      result = observed | persisted, always written back.
overwrite  a non-empty observation replaces the persisted set; an empty
           one returns the persisted set and writes nothing.
"""

import logging
from typing import Set

from ..constants import CACHE_STRATEGY_MERGE
from .store import CacheStore

logger = logging.getLogger(__name__)


def _apply(observed: Set[str], existing: Set[str], strategy: str):
    """Return ``(result, should_write)`` for a reconciliation."""
    if strategy == CACHE_STRATEGY_MERGE:
        return observed | existing, True
    if observed:
        return set(observed), True
    # An empty run carries no signal; keep history.
    return existing, False


def reconcile_sync(store: CacheStore, observed: Set[str], strategy: str) -> Set[str]:
    if not store.enabled:
        return observed

    result, should_write = _apply(observed, store.read_sync(), strategy)
    if should_write:
        store.write_sync(result)
        logger.debug(f"Cache reconciled ({strategy}): {len(result)} classes")
    return result


async def reconcile(store: CacheStore, observed: Set[str], strategy: str) -> Set[str]:
    if not store.enabled:
        return observed

    result, should_write = _apply(observed, await store.read(), strategy)
    if should_write:
        await store.write(result)
        logger.debug(f"Cache reconciled ({strategy}): {len(result)} classes")
    return result
