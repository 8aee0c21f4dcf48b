# Path: org_flow/process/hierarchy/service.py
"""
Org Flowchart Service - Caller-side facade over the hierarchy core.

Sources raw rows from a caller-supplied callable, builds the Forest, keeps it
in a CachedForest for a configurable time-to-live, and answers hierarchy,
branch, search and expansion queries from the cached copy.

Rebuilds always produce a new Forest and swap the cache reference; readers
holding the previous Forest keep a consistent view.

Example:
    service = OrgFlowchartService(lambda: reader.read(Path('units.csv')))
    result = service.get_hierarchy()
    print(result.source, result.forest.statistics)

    finance = service.search('finance', SearchKind.ORGANIZATION)
"""

import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, Mapping, Optional

from core.logger import get_process_logger
from process.hierarchy.cache import CachedForest, DEFAULT_CACHE_TTL_SECONDS
from process.hierarchy.constants import SearchKind
from process.hierarchy.errors import RecordSourceError
from process.hierarchy.expander import Expansion, ForestExpander, NodeSummary
from process.hierarchy.forest import Forest
from process.hierarchy.index import SearchResult
from process.hierarchy.node import Node
from process.hierarchy.tree_builder import HierarchyBuilder


logger = get_process_logger('hierarchy.service')

RecordSource = Callable[[], Iterable[Mapping[str, Any]]]


@dataclass(frozen=True)
class HierarchyResult:
    """
    Forest returned by the service.

    Attributes:
        forest: Built Forest
        source: 'cache' when served from the cache, 'source' after a rebuild
        built_at: When the forest was built
    """
    forest: Forest
    source: str
    built_at: datetime

    @property
    def from_cache(self) -> bool:
        return self.source == 'cache'


class OrgFlowchartService:
    """
    Cached access to the organization forest.

    Attributes:
        builder: HierarchyBuilder used for rebuilds
        ttl: Cache time-to-live
        rebuild_count: Number of rebuilds performed
    """

    def __init__(
        self,
        record_source: RecordSource,
        builder: Optional[HierarchyBuilder] = None,
        ttl: Optional[timedelta] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the service.

        Args:
            record_source: Zero-argument callable returning raw rows
            builder: HierarchyBuilder to use (default builder when None)
            ttl: Cache time-to-live (300 seconds when None)
            clock: Time source, datetime.now when None
        """
        if not callable(record_source):
            raise TypeError("record_source must be callable")

        self._record_source = record_source
        self.builder = builder or HierarchyBuilder()
        self.ttl = ttl if ttl is not None else timedelta(seconds=DEFAULT_CACHE_TTL_SECONDS)
        self._clock = clock or datetime.now
        self._cache: Optional[CachedForest] = None
        self._expander: Optional[ForestExpander] = None
        self._lock = threading.Lock()
        self.rebuild_count = 0

    @classmethod
    def from_config(cls, record_source: RecordSource, config: Any) -> 'OrgFlowchartService':
        """Create a service using ConfigLoader values for TTL and pass budget."""
        return cls(
            record_source,
            builder=HierarchyBuilder(max_passes=config.get('max_resolution_passes')),
            ttl=timedelta(seconds=config.get('cache_ttl_seconds')),
        )

    # =========================================================================
    # HIERARCHY
    # =========================================================================

    def get_hierarchy(self, force_refresh: bool = False) -> HierarchyResult:
        """
        Return the forest, rebuilding when the cache is missing or stale.

        Args:
            force_refresh: Rebuild even if the cached forest is fresh

        Returns:
            HierarchyResult

        Raises:
            RecordSourceError: If the record source fails
        """
        cached = self._cache
        if not force_refresh and cached is not None and cached.is_fresh(self._clock()):
            logger.debug("Serving forest from cache")
            return HierarchyResult(cached.forest, 'cache', cached.built_at)

        cached, _ = self._rebuild()
        return HierarchyResult(cached.forest, 'source', cached.built_at)

    def get_branch(self, node_id: str) -> Optional[Node]:
        """
        Return the subtree rooted at an organization.

        Returns:
            Node, or None when no organization has this id
        """
        cached, _ = self._current()
        return cached.index.get_node(node_id)

    def search(
        self,
        term: str,
        kind: SearchKind = SearchKind.ANY,
        limit: Optional[int] = None
    ) -> list[SearchResult]:
        """Substring search over the cached forest."""
        cached, _ = self._current()
        return cached.index.search(term, kind, limit)

    def children_of(self, node_id: str) -> Optional[Expansion]:
        """Direct children of an organization, None when not found."""
        _, expander = self._current()
        return expander.children_of(node_id)

    def roots(self) -> list[NodeSummary]:
        """Top-level organizations: true roots first, then orphans."""
        _, expander = self._current()
        return expander.roots()

    # =========================================================================
    # CACHE CONTROL
    # =========================================================================

    def clear_cache(self) -> None:
        """Forget the cached forest; the next query rebuilds."""
        with self._lock:
            self._cache = None
            self._expander = None
        logger.info("Hierarchy cache cleared")

    def cache_status(self) -> dict[str, Any]:
        cached = self._cache
        if cached is None:
            return {'cached': False}
        now = self._clock()
        return {
            'cached': True,
            'fresh': cached.is_fresh(now),
            'age_seconds': cached.age(now).total_seconds(),
            'built_at': cached.built_at.isoformat(),
        }

    def refresh_in_background(self, executor: Executor) -> Future:
        """
        Submit a full rebuild to a caller-owned executor.

        The cached forest is replaced only when the rebuild completes;
        cancelling the future leaves the previous forest in place.

        Returns:
            Future resolving to the new HierarchyResult
        """
        def task() -> HierarchyResult:
            cached, _ = self._rebuild()
            return HierarchyResult(cached.forest, 'source', cached.built_at)

        return executor.submit(task)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _current(self) -> tuple[CachedForest, ForestExpander]:
        with self._lock:
            cached, expander = self._cache, self._expander
        if cached is None or not cached.is_fresh(self._clock()):
            cached, expander = self._rebuild()
        return cached, expander

    def _rebuild(self) -> tuple[CachedForest, ForestExpander]:
        logger.info("Rebuilding organization forest from record source")
        try:
            rows = list(self._record_source())
        except Exception as e:
            logger.error(f"Record source failed: {e}")
            raise RecordSourceError(f"Record source failed: {e}") from e

        forest = self.builder.build_from_rows(rows)
        cached = CachedForest.wrap(forest, self.ttl, built_at=self._clock())
        expander = ForestExpander(forest)

        with self._lock:
            self._cache = cached
            self._expander = expander
            self.rebuild_count += 1

        for notice in forest.report.notices():
            logger.info(notice)
        return cached, expander


__all__ = [
    'OrgFlowchartService',
    'HierarchyResult',
    'RecordSource',
]
