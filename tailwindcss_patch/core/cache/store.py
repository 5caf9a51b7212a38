"""File-backed class cache.

Persists a set of class names as a JSON array at ``{cache.dir}/{cache.file}``.
Reads tolerate a missing or corrupt file (empty set); writes replace the
whole file via a temporary sibling and ``os.replace``.

Usage:
    store = CacheStore(options.cache)
    classes = store.read_sync()
    store.write_sync(classes | {"flex"})
    classes = await store.read()
"""

import asyncio
import json
import logging
import os
import tempfile
from typing import Iterable, Optional, Set

from ..errors import CacheReadError
from ..options.models import CacheOptions

logger = logging.getLogger(__name__)


class CacheStore:
    """Durable set-of-strings store with sync and async access.

    The store does not reconcile; callers decide what to write (see
    ``reconcile``). No locking: concurrent writers to one file are not
    supported.
    """

    def __init__(self, options: CacheOptions):
        self._options = options

    @property
    def enabled(self) -> bool:
        return self._options.enabled

    @property
    def path(self) -> str:
        return self._options.path

    # =========================================================================
    # Sync API
    # =========================================================================

    def read_sync(self) -> Set[str]:
        """Return the persisted set; empty when disabled, absent or unreadable."""
        if not self.enabled:
            return set()
        try:
            return self._load()
        except CacheReadError as e:
            logger.warning(f"Ignoring unreadable class cache: {e}")
            return set()

    def write_sync(self, classes: Iterable[str]) -> Optional[str]:
        """Replace the persisted set with ``classes``.

        Returns:
            Path written, or None when the cache is disabled
        """
        if not self.enabled:
            return None

        values = sorted(set(classes))
        parent = os.path.dirname(self.path)
        os.makedirs(parent, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=parent, prefix=f".{os.path.basename(self.path)}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.debug(f"Wrote {len(values)} classes to {self.path}")
        return self.path

    # =========================================================================
    # Async API
    # =========================================================================

    async def read(self) -> Set[str]:
        return await asyncio.to_thread(self.read_sync)

    async def write(self, classes: Iterable[str]) -> Optional[str]:
        return await asyncio.to_thread(self.write_sync, set(classes))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _load(self) -> Set[str]:
        if not os.path.exists(self.path):
            return set()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CacheReadError(f"{self.path}: {e}") from e

        if not isinstance(data, list):
            raise CacheReadError(f"{self.path}: expected a JSON array, got {type(data).__name__}")
        return {value for value in data if isinstance(value, str)}
