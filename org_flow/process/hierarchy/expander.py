# Path: org_flow/process/hierarchy/expander.py
"""
Incremental Expander - One level of the hierarchy at a time.

Rendering layers expand a chart node by node; they only need the direct
children of the node being opened. Two backends answer the same queries:

- ForestExpander: reads an already built Forest
- RecordExpander: reads normalized records directly, grouping them by
  declared parent once, without materializing the whole forest

Both apply the builder's placement policy: an organization is listed under
its declared parent when that parent exists and the organization is not on
a parent cycle; everything else is a root (true root or orphan).

Example:
    expander = IncrementalExpander.from_records(records)
    for summary in expander.roots():
        expansion = expander.children_of(summary.id)
        print(summary.name, [c.name for c in expansion.children])
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from core.logger import get_process_logger
from process.hierarchy.builder_utils import create_position
from process.hierarchy.forest import Forest
from process.hierarchy.node import Node, Position
from process.hierarchy.records import UnitRecord


logger = get_process_logger('hierarchy.expander')


@dataclass(frozen=True)
class NodeSummary:
    """
    Shallow, serializable slice of one organization.

    Attributes:
        id: Organization id
        name: Display name
        manager: Head of the unit, empty when unknown
        level: Depth from its root
        has_children: Whether expanding it would show anything
        direct_children: Number of child organizations
        direct_positions: Number of attached positions
        auxiliary: Secondary descriptive fields
    """
    id: str
    name: str
    manager: str = ''
    level: int = 0
    has_children: bool = False
    direct_children: int = 0
    direct_positions: int = 0
    auxiliary: dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_node(cls, node: Node) -> 'NodeSummary':
        return cls(
            id=node.id,
            name=node.name,
            manager=node.manager,
            level=node.level,
            has_children=node.has_children,
            direct_children=node.child_count,
            direct_positions=node.position_count,
            auxiliary=dict(node.auxiliary),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'manager': self.manager,
            'level': self.level,
            'has_children': self.has_children,
            'direct_children': self.direct_children,
            'direct_positions': self.direct_positions,
            'auxiliary': dict(self.auxiliary),
        }


@dataclass(frozen=True)
class Expansion:
    """Direct children and positions of one organization."""
    node_id: str
    children: list[NodeSummary] = field(default_factory=list)
    positions: list[Position] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'node_id': self.node_id,
            'children': [c.to_dict() for c in self.children],
            'positions': [p.to_dict() for p in self.positions],
            'stats': {
                'child_count': len(self.children),
                'position_count': len(self.positions),
            },
        }


class IncrementalExpander(ABC):
    """
    Abstract base for one-level expansion.

    Queries are idempotent and side-effect free: repeated calls for the
    same id return equal results.
    """

    @classmethod
    def from_forest(cls, forest: Forest) -> 'IncrementalExpander':
        """Expander backed by a built Forest."""
        return ForestExpander(forest)

    @classmethod
    def from_records(cls, records: Iterable[UnitRecord]) -> 'IncrementalExpander':
        """Expander backed by normalized records."""
        return RecordExpander(records)

    @abstractmethod
    def children_of(self, node_id: str) -> Optional[Expansion]:
        """
        Direct children and positions of an organization.

        Args:
            node_id: Organization id

        Returns:
            Expansion, or None when the id is unknown. A position id
            gives an empty Expansion since positions are leaves.
        """
        pass

    @abstractmethod
    def roots(self) -> list[NodeSummary]:
        """Top-level organizations: true roots first, then orphans."""
        pass


class ForestExpander(IncrementalExpander):
    """Expansion over an already built Forest."""

    def __init__(self, forest: Forest):
        if forest is None:
            raise TypeError("forest must be a Forest, not None")
        self.forest = forest
        self._nodes: dict[str, Node] = {}
        self._position_ids: set[str] = set()
        for node in forest.iter_nodes():
            self._nodes.setdefault(node.id, node)
            self._position_ids.update(p.id for p in node.positions)

    def children_of(self, node_id: str) -> Optional[Expansion]:
        node = self._nodes.get(node_id)
        if node is None:
            if node_id in self._position_ids:
                return Expansion(node_id=node_id)
            logger.debug(f"Expand: unit {node_id} not found")
            return None
        return Expansion(
            node_id=node.id,
            children=[NodeSummary.from_node(child) for child in node.children],
            positions=list(node.positions),
        )

    def roots(self) -> list[NodeSummary]:
        return [NodeSummary.from_node(root) for root in self.forest.roots]


class RecordExpander(IncrementalExpander):
    """
    Expansion straight from normalized records.

    Construction groups records by declared parent and finds the
    organizations lying on parent cycles, both in linear time. Levels are
    computed on demand by walking up to the nearest root or orphan and
    are memoized.
    """

    def __init__(self, records: Iterable[UnitRecord]):
        if records is None:
            raise TypeError("records must be an iterable of UnitRecord, not None")

        self._organizations: dict[str, UnitRecord] = {}
        self._positions_by_parent: dict[str, list[UnitRecord]] = {}
        self._position_parents: dict[str, Optional[str]] = {}

        for record in records:
            if record.is_organization:
                self._organizations.setdefault(record.id, record)
            elif record.id not in self._position_parents:
                self._position_parents[record.id] = record.parent_id
                if record.parent_id:
                    self._positions_by_parent.setdefault(record.parent_id, []).append(record)

        self._cycle_members = self._find_cycle_members()
        self._children_by_parent: dict[str, list[str]] = {}
        for uid, record in self._organizations.items():
            parent_id = self._placed_parent(record)
            if parent_id is not None:
                self._children_by_parent.setdefault(parent_id, []).append(uid)

        self._levels: dict[str, int] = {}

    # =========================================================================
    # QUERIES
    # =========================================================================

    def children_of(self, node_id: str) -> Optional[Expansion]:
        if node_id not in self._organizations:
            if self._position_parents.get(node_id) in self._organizations:
                return Expansion(node_id=node_id)
            logger.debug(f"Expand: unit {node_id} not found")
            return None

        child_level = self.level_of(node_id) + 1
        children = [
            self._summary(uid, child_level)
            for uid in self._children_by_parent.get(node_id, [])
        ]
        positions = [
            create_position(record, child_level)
            for record in self._positions_by_parent.get(node_id, [])
        ]
        return Expansion(node_id=node_id, children=children, positions=positions)

    def roots(self) -> list[NodeSummary]:
        true_roots = []
        orphans = []
        for uid, record in self._organizations.items():
            if record.is_root_candidate:
                true_roots.append(uid)
            elif self._placed_parent(record) is None:
                orphans.append(uid)
        return [self._summary(uid, 0) for uid in true_roots + orphans]

    def level_of(self, node_id: str) -> int:
        """Depth below the nearest root or orphan."""
        trail = []
        current = node_id
        while current not in self._levels:
            parent_id = self._placed_parent(self._organizations[current])
            if parent_id is None:
                self._levels[current] = 0
                break
            trail.append(current)
            current = parent_id

        level = self._levels[current]
        for uid in reversed(trail):
            level += 1
            self._levels[uid] = level
        return self._levels[node_id]

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _placed_parent(self, record: UnitRecord) -> Optional[str]:
        """Parent the organization is listed under, None for roots and orphans."""
        if record.is_root_candidate:
            return None
        if record.parent_id not in self._organizations:
            return None
        if record.id in self._cycle_members:
            return None
        return record.parent_id

    def _find_cycle_members(self) -> set[str]:
        """Organizations whose parent chain leads back to themselves."""
        on_cycle: set[str] = set()
        visited: set[str] = set()

        for start in self._organizations:
            if start in visited:
                continue
            trail_index: dict[str, int] = {}
            trail: list[str] = []
            current: Optional[str] = start
            while current is not None and current not in visited:
                visited.add(current)
                trail_index[current] = len(trail)
                trail.append(current)
                record = self._organizations[current]
                if record.is_root_candidate or record.parent_id not in self._organizations:
                    current = None
                else:
                    current = record.parent_id
            if current is not None and current in trail_index:
                on_cycle.update(trail[trail_index[current]:])

        return on_cycle

    def _summary(self, uid: str, level: int) -> NodeSummary:
        record = self._organizations[uid]
        direct_children = len(self._children_by_parent.get(uid, []))
        direct_positions = len(self._positions_by_parent.get(uid, []))
        return NodeSummary(
            id=uid,
            name=record.name,
            manager=record.manager_or_holder_text or '',
            level=level,
            has_children=bool(direct_children or direct_positions),
            direct_children=direct_children,
            direct_positions=direct_positions,
            auxiliary=dict(record.auxiliary),
        )


__all__ = [
    'IncrementalExpander',
    'ForestExpander',
    'RecordExpander',
    'Expansion',
    'NodeSummary',
]
