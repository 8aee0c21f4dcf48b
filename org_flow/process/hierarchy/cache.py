# Path: org_flow/process/hierarchy/cache.py
"""
Cached Forest - An explicit, caller-owned cache value.

The hierarchy core keeps no hidden state. A caller that wants to reuse a
Forest between requests holds a CachedForest and swaps the reference on
rebuild; the old Forest is never mutated.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from process.hierarchy.forest import Forest
from process.hierarchy.index import HierarchyIndex


DEFAULT_CACHE_TTL_SECONDS = 300


@dataclass(frozen=True)
class CachedForest:
    """
    A Forest with its build time and time-to-live.

    Attributes:
        forest: Built Forest
        built_at: When the forest was built
        ttl: How long the forest stays fresh
        index: Lookup index over the forest
    """
    forest: Forest
    built_at: datetime
    ttl: timedelta = timedelta(seconds=DEFAULT_CACHE_TTL_SECONDS)
    index: Optional[HierarchyIndex] = field(default=None, compare=False, repr=False)

    @classmethod
    def wrap(
        cls,
        forest: Forest,
        ttl: timedelta,
        built_at: Optional[datetime] = None
    ) -> 'CachedForest':
        """Wrap a freshly built forest together with its index."""
        return cls(
            forest=forest,
            built_at=built_at or datetime.now(),
            ttl=ttl,
            index=HierarchyIndex.build(forest),
        )

    def age(self, now: Optional[datetime] = None) -> timedelta:
        return (now or datetime.now()) - self.built_at

    def is_fresh(self, now: Optional[datetime] = None) -> bool:
        """True while the age is below the TTL."""
        return self.age(now) < self.ttl

    def expires_at(self) -> datetime:
        return self.built_at + self.ttl


__all__ = [
    'CachedForest',
    'DEFAULT_CACHE_TTL_SECONDS',
]
