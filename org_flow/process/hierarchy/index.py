# Path: org_flow/process/hierarchy/index.py
"""
Hierarchy Index - Lookup and search over a built Forest.

Built once per Forest in a single depth-first traversal that records every
organization and position by id together with the names of its ancestors.
Queries never walk the tree again.

Example:
    index = HierarchyIndex.build(forest)
    node = index.lookup_by_id('50000123')

    for hit in index.search('finance', SearchKind.ORGANIZATION):
        print(' > '.join(hit.path + [hit.entity.name]))
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from core.logger import get_process_logger
from process.hierarchy.constants import SearchKind
from process.hierarchy.forest import Forest
from process.hierarchy.node import Node, Position


logger = get_process_logger('hierarchy.index')

Entity = Union[Node, Position]


@dataclass(frozen=True)
class SearchResult:
    """
    One search hit.

    Attributes:
        entity: Matching Node or Position
        kind: SearchKind.ORGANIZATION or SearchKind.POSITION
        path: Ancestor names from the root down to the parent; excludes
            the entity itself
    """
    entity: Entity
    kind: SearchKind
    path: list[str] = field(default_factory=list)

    @property
    def breadcrumb(self) -> str:
        return ' > '.join(self.path + [self.entity.name])

    def to_dict(self) -> dict:
        return {
            'id': self.entity.id,
            'name': self.entity.name,
            'kind': self.kind.value,
            'level': self.entity.level,
            'path': list(self.path),
        }


@dataclass
class _IndexEntry:
    entity: Entity
    kind: SearchKind
    path: tuple[str, ...]


class HierarchyIndex:
    """
    Read-only index over one Forest.

    Entries are kept in pre-order forest order (root by root, each
    organization followed by its positions and then its children), which
    is also the order of search results.
    """

    def __init__(self, forest: Forest):
        """
        Index a forest.

        Args:
            forest: Built Forest

        Raises:
            TypeError: If forest is None
        """
        if forest is None:
            raise TypeError("forest must be a Forest, not None")

        self.forest = forest
        self._entries: list[_IndexEntry] = []
        self._organizations: dict[str, _IndexEntry] = {}
        self._positions: dict[str, _IndexEntry] = {}
        self._index_forest(forest)

    @classmethod
    def build(cls, forest: Forest) -> 'HierarchyIndex':
        return cls(forest)

    def _index_forest(self, forest: Forest) -> None:
        for root in forest.roots:
            stack: list[tuple[Node, tuple[str, ...]]] = [(root, ())]
            while stack:
                node, path = stack.pop()
                entry = _IndexEntry(node, SearchKind.ORGANIZATION, path)
                self._entries.append(entry)
                self._organizations.setdefault(node.id, entry)

                child_path = path + (node.name,)
                for position in node.positions:
                    pos_entry = _IndexEntry(position, SearchKind.POSITION, child_path)
                    self._entries.append(pos_entry)
                    self._positions.setdefault(position.id, pos_entry)

                for child in reversed(node.children):
                    stack.append((child, child_path))

        logger.debug(
            f"Indexed {len(self._organizations)} organizations and "
            f"{len(self._positions)} positions"
        )

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def lookup_by_id(self, unit_id: str) -> Optional[Entity]:
        """
        Find an organization or position by identifier.

        Organizations take precedence when a position shares the id.

        Returns:
            Node or Position, None when not found
        """
        entry = self._organizations.get(unit_id) or self._positions.get(unit_id)
        return entry.entity if entry else None

    def get_node(self, unit_id: str) -> Optional[Node]:
        entry = self._organizations.get(unit_id)
        return entry.entity if entry else None

    def path_of(self, unit_id: str) -> Optional[list[str]]:
        """Ancestor names of an entity, None when not found."""
        entry = self._organizations.get(unit_id) or self._positions.get(unit_id)
        return list(entry.path) if entry else None

    def __contains__(self, unit_id: str) -> bool:
        return unit_id in self._organizations or unit_id in self._positions

    def __len__(self) -> int:
        return len(self._entries)

    # =========================================================================
    # SEARCH
    # =========================================================================

    def search(
        self,
        term: str,
        kind: SearchKind = SearchKind.ANY,
        limit: Optional[int] = None
    ) -> list[SearchResult]:
        """
        Case-insensitive substring search.

        Organizations match on name; positions match on name or holder.

        Args:
            term: Search text; blank returns no results
            kind: Restrict to organizations, positions, or both
            limit: Maximum results, None for all (0 gives no results)

        Returns:
            SearchResults in pre-order forest order
        """
        needle = (term or '').strip().lower()
        if not needle:
            return []

        results = []
        for entry in self._entries:
            if limit is not None and len(results) >= limit:
                break
            if kind != SearchKind.ANY and entry.kind != kind:
                continue
            if not self._matches(entry, needle):
                continue
            results.append(SearchResult(entry.entity, entry.kind, list(entry.path)))

        logger.debug(f"Search '{term}' ({kind.value}): {len(results)} results")
        return results

    @staticmethod
    def _matches(entry: _IndexEntry, needle: str) -> bool:
        if needle in entry.entity.name.lower():
            return True
        if entry.kind == SearchKind.POSITION:
            return needle in entry.entity.holder.lower()
        return False


__all__ = [
    'HierarchyIndex',
    'SearchResult',
]
