from .reconcile import reconcile, reconcile_sync
from .store import CacheStore

__all__ = ["CacheStore", "reconcile", "reconcile_sync"]
