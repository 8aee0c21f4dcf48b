# Path: org_flow/process/hierarchy/forest.py
"""
Forest - Result of one hierarchy build.

Wraps the root Nodes with statistics and the aggregate data-quality report,
and provides iteration and export helpers. A Forest is treated as immutable
once HierarchyBuilder returns it; rebuilds produce a new Forest.
"""

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

from core.logger import get_output_logger
from process.hierarchy.node import Node, Position


logger = get_output_logger('hierarchy.forest')


@dataclass(frozen=True)
class ForestStatistics:
    """Counts computed in one traversal of the finished forest."""
    total_organizations: int = 0
    total_positions: int = 0
    max_depth: int = 0
    root_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class BuildReport:
    """
    Aggregate data-quality counters for one build.

    Nothing counted here is an error: each condition was resolved by policy
    (dropped with a count, or promoted to an orphan root).

    Attributes:
        organization_records: ORGANIZATION records received
        position_records: POSITION records received
        duplicate_organizations: Repeated organization ids (first kept)
        duplicate_positions: Repeated position ids (first kept)
        unattached_positions: Positions whose parent organization is unknown
        missing_parent_orphans: Organizations whose parent does not exist
        circular_orphans: Organizations found on a parent cycle
        pass_limit_orphans: Organizations unresolved at the pass limit
        resolution_passes: Attachment passes run
        missing_required_field: Raw rows dropped before the build (no id)
        unsupported_kind: Raw rows dropped before the build (type tag)
    """
    organization_records: int = 0
    position_records: int = 0
    duplicate_organizations: int = 0
    duplicate_positions: int = 0
    unattached_positions: int = 0
    missing_parent_orphans: int = 0
    circular_orphans: int = 0
    pass_limit_orphans: int = 0
    resolution_passes: int = 0
    missing_required_field: int = 0
    unsupported_kind: int = 0

    @property
    def orphan_count(self) -> int:
        return self.missing_parent_orphans + self.circular_orphans + self.pass_limit_orphans

    @property
    def dropped_organizations(self) -> int:
        return self.duplicate_organizations

    @property
    def dropped_positions(self) -> int:
        return self.duplicate_positions + self.unattached_positions

    def notices(self) -> list[str]:
        """
        Informational messages for end users.

        Returns:
            One message per non-zero condition, empty when the data was clean
        """
        messages = []
        if self.unattached_positions:
            messages.append(
                f"{self.unattached_positions} positions could not be attached "
                f"to a known organization"
            )
        if self.missing_parent_orphans:
            messages.append(
                f"{self.missing_parent_orphans} organizations reference a parent "
                f"that does not exist and are shown as separate trees"
            )
        if self.circular_orphans:
            messages.append(
                f"{self.circular_orphans} organizations form circular reporting "
                f"lines and are shown as separate trees"
            )
        if self.pass_limit_orphans:
            messages.append(
                f"{self.pass_limit_orphans} organizations could not be placed "
                f"within {self.resolution_passes} passes and are shown as separate trees"
            )
        if self.duplicate_organizations or self.duplicate_positions:
            messages.append(
                f"{self.duplicate_organizations + self.duplicate_positions} "
                f"duplicate rows were ignored"
            )
        if self.missing_required_field:
            messages.append(f"{self.missing_required_field} rows had no identifier")
        if self.unsupported_kind:
            messages.append(
                f"{self.unsupported_kind} rows had an unsupported object type"
            )
        return messages

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class Forest:
    """
    Complete set of root trees produced by one build.

    Attributes:
        roots: True roots in input order, followed by orphan roots
        orphans: Organizations promoted to roots (also present in roots)
        statistics: Totals over the whole forest
        report: Data-quality counters
        built_at: Build timestamp

    Example:
        forest = HierarchyBuilder().build(records)
        for root in forest.roots:
            print(root.name, root.descendant_count)
        print(forest.to_json())
    """
    roots: list[Node] = field(default_factory=list)
    orphans: list[Node] = field(default_factory=list)
    statistics: ForestStatistics = field(default_factory=ForestStatistics)
    report: BuildReport = field(default_factory=BuildReport)
    built_at: datetime = field(default_factory=datetime.now)

    # ===========================================================================
    # ITERATION
    # ===========================================================================
    def iter_nodes(self) -> Iterator[Node]:
        """Iterate every organization, root by root in pre-order."""
        for root in self.roots:
            yield from root.iter_preorder()

    def iter_positions(self) -> Iterator[Position]:
        """Iterate every attached position."""
        for root in self.roots:
            yield from root.iter_positions()

    def iter_at_level(self, level: int) -> Iterator[Node]:
        """Iterate organizations at a given level."""
        for node in self.iter_nodes():
            if node.level == level:
                yield node

    @property
    def is_empty(self) -> bool:
        return not self.roots

    # ===========================================================================
    # EXPORT
    # ===========================================================================
    def to_dict(self) -> dict[str, Any]:
        """
        Convert forest to a JSON-ready dictionary.

        Orphans are listed by id only; their trees are already in roots.
        """
        return {
            'metadata': {
                'built_at': self.built_at.isoformat(),
                'notices': self.report.notices(),
            },
            'statistics': self.statistics.to_dict(),
            'report': self.report.to_dict(),
            'orphan_ids': [node.id for node in self.orphans],
            'roots': [root.to_dict(include_children=True) for root in self.roots],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def to_json_file(self, path: Path, indent: int = 2) -> None:
        """
        Write forest to a JSON file.

        Args:
            path: Output file path
            indent: JSON indentation
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json(indent=indent))
        logger.info(f"Wrote forest to {path}")

    def to_text(self, with_positions: bool = True) -> str:
        """Indented text of every tree, separated by blank lines."""
        return '\n\n'.join(
            root.to_text(with_positions=with_positions) for root in self.roots
        )

    def to_flat_list(self) -> list[dict[str, Any]]:
        """
        Flatten organizations and positions into rows.

        Useful for CSV export. Each row carries its ' > '-joined path.
        """
        rows = []

        def walk(node: Node, path: list[str]) -> None:
            current = path + [node.name]
            rows.append({
                'kind': 'organization',
                'id': node.id,
                'name': node.name,
                'level': node.level,
                'manager': node.manager,
                'holder': '',
                'orphan': node.is_orphan,
                'path': ' > '.join(current),
            })
            for position in node.positions:
                rows.append({
                    'kind': 'position',
                    'id': position.id,
                    'name': position.name,
                    'level': position.level,
                    'manager': '',
                    'holder': position.holder,
                    'orphan': False,
                    'path': ' > '.join(current + [position.name]),
                })
            for child in node.children:
                walk(child, current)

        for root in self.roots:
            walk(root, [])
        return rows

    # ===========================================================================
    # SPECIAL METHODS
    # ===========================================================================
    def __str__(self) -> str:
        s = self.statistics
        return (
            f"Forest({s.root_count} roots, {s.total_organizations} organizations, "
            f"{s.total_positions} positions, depth {s.max_depth})"
        )

    def __len__(self) -> int:
        return self.statistics.total_organizations

    def __iter__(self) -> Iterator[Node]:
        return self.iter_nodes()


__all__ = [
    'Forest',
    'ForestStatistics',
    'BuildReport',
]
