# Path: org_flow/process/hierarchy/node.py
"""
Hierarchy Node - Organizations and positions in a reconstructed forest.

A Node is one organizational unit. It exclusively owns its child Nodes and
its Position leaves. Nodes hold no back-reference to their parent, so any
tree serializes directly to JSON; root-to-node paths live in HierarchyIndex.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from process.hierarchy.constants import DEFAULT_INDENT_SIZE


@dataclass
class Position:
    """
    A single role/seat attached to an organization.

    Attributes:
        id: Position identifier
        name: Position title
        holder: Assigned person; empty string means vacant
        level: Owning node's level + 1
        department: Cost-centre text, empty when unknown
        position_level: Heuristic display label (e.g., 'Management Level')
        auxiliary: Secondary descriptive fields from the source row
    """
    id: str
    name: str
    holder: str = ''
    level: int = 0
    department: str = ''
    position_level: str = ''
    auxiliary: dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def is_vacant(self) -> bool:
        """Check if nobody holds this seat."""
        return self.holder == ''

    @property
    def is_assignable(self) -> bool:
        """A vacant seat is never a valid assignee for person-level actions."""
        return not self.is_vacant

    def to_dict(self) -> dict[str, Any]:
        result = {
            'id': self.id,
            'name': self.name,
            'holder': self.holder,
            'vacant': self.is_vacant,
            'level': self.level,
            'department': self.department,
            'position_level': self.position_level,
        }
        if self.auxiliary:
            result['auxiliary'] = dict(self.auxiliary)
        return result


@dataclass
class Node:
    """
    A single organizational unit in the forest.

    Attributes:
        id: Organization identifier
        name: Display name
        manager: Head of the unit; empty when the source names nobody
        level: Depth from its root (0 = root)
        children: Child organizations, in attachment order
        positions: Attached positions, in input order
        auxiliary: Secondary descriptive fields from the source row
        is_orphan: True when promoted to root because its parent could
            not be resolved
        orphan_reason: OrphanReason value for orphans, else None

    Example:
        root = Node(id='1000', name='Head Office')
        root.add_child(Node(id='1100', name='Finance'))
        root.children[0].level   # 1
    """
    id: str
    name: str
    manager: str = ''
    level: int = 0
    children: list[Node] = field(default_factory=list, repr=False)
    positions: list[Position] = field(default_factory=list, repr=False)
    auxiliary: dict[str, str] = field(default_factory=dict, repr=False)
    is_orphan: bool = False
    orphan_reason: Optional[str] = None

    # ===========================================================================
    # TREE CONSTRUCTION
    # ===========================================================================
    def add_child(self, child: Node) -> None:
        """
        Add a child organization, setting its level.

        Args:
            child: Node to add as child

        Raises:
            ValueError: If child is this node
        """
        if child is self:
            raise ValueError("Cannot add node as its own child")
        child.level = self.level + 1
        self.children.append(child)

    def add_position(self, position: Position) -> None:
        """Attach a position leaf, setting its level."""
        position.level = self.level + 1
        self.positions.append(position)

    # ===========================================================================
    # RELATIONSHIP QUERIES
    # ===========================================================================
    @property
    def is_root(self) -> bool:
        return self.level == 0

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no child organizations."""
        return len(self.children) == 0

    @property
    def has_children(self) -> bool:
        """Check if expanding this node would show anything."""
        return bool(self.children or self.positions)

    # ===========================================================================
    # TREE ITERATION
    # ===========================================================================
    def iter_preorder(self) -> Iterator[Node]:
        """
        Iterate organizations in pre-order (parent before children).

        Uses an explicit stack so very deep exports do not hit the
        interpreter recursion limit.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_level_order(self) -> Iterator[Node]:
        """Iterate organizations breadth-first."""
        queue = [self]
        index = 0
        while index < len(queue):
            node = queue[index]
            index += 1
            yield node
            queue.extend(node.children)

    def iter_positions(self) -> Iterator[Position]:
        """Iterate every position in this subtree, in pre-order."""
        for node in self.iter_preorder():
            yield from node.positions

    # ===========================================================================
    # SEARCH
    # ===========================================================================
    def find_by_id(self, unit_id: str) -> Optional[Node]:
        """
        Find an organization in this subtree by identifier.

        Args:
            unit_id: Organization id

        Returns:
            Found node or None
        """
        for node in self.iter_preorder():
            if node.id == unit_id:
                return node
        return None

    # ===========================================================================
    # STATISTICS
    # ===========================================================================
    @property
    def child_count(self) -> int:
        """Number of direct child organizations."""
        return len(self.children)

    @property
    def position_count(self) -> int:
        """Number of directly attached positions."""
        return len(self.positions)

    @property
    def descendant_count(self) -> int:
        """Organizations below this node."""
        return sum(1 for _ in self.iter_preorder()) - 1

    @property
    def total_positions(self) -> int:
        """Positions in the whole subtree."""
        return sum(node.position_count for node in self.iter_preorder())

    @property
    def max_depth(self) -> int:
        """Deepest organization level in the subtree."""
        return max(node.level for node in self.iter_preorder())

    # ===========================================================================
    # CONVERSION AND REPRESENTATION
    # ===========================================================================
    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert node to dictionary.

        Args:
            include_children: Whether to include child organizations
                recursively; positions are always included

        Returns:
            Dictionary representation
        """
        result = {
            'id': self.id,
            'name': self.name,
            'manager': self.manager,
            'level': self.level,
            'positions': [p.to_dict() for p in self.positions],
        }
        if self.auxiliary:
            result['auxiliary'] = dict(self.auxiliary)
        if self.is_orphan:
            result['orphan'] = True
            result['orphan_reason'] = self.orphan_reason

        if include_children:
            result['children'] = [
                child.to_dict(include_children=True)
                for child in self.children
            ]
        else:
            result['child_count'] = self.child_count

        return result

    def to_text(self, indent_size: int = DEFAULT_INDENT_SIZE, with_positions: bool = True) -> str:
        """
        Convert subtree to indented text.

        Args:
            indent_size: Spaces per indentation level
            with_positions: Whether to list positions under each unit

        Returns:
            Multi-line text representation
        """
        lines = []
        for node in self.iter_preorder():
            indent = ' ' * (node.level * indent_size)
            manager_str = f" ({node.manager})" if node.manager else ""
            lines.append(f"{indent}{node.name}{manager_str}")
            if with_positions:
                pos_indent = ' ' * ((node.level + 1) * indent_size)
                for position in node.positions:
                    holder = position.holder or 'vacant'
                    lines.append(f"{pos_indent}- {position.name} [{holder}]")
        return '\n'.join(lines)

    def __str__(self) -> str:
        children_str = f" ({self.child_count} children)" if self.children else ""
        return f"{self.name}{children_str}"


__all__ = [
    'Node',
    'Position',
]
