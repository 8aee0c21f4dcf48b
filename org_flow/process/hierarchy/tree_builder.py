# Path: org_flow/process/hierarchy/tree_builder.py
"""
Hierarchy Builder - Reconstructs the organization forest from flat records.

The input is an unordered flat table: a child's parent row may appear
anywhere relative to the child. The builder resolves parents in bounded
passes over an arena of entries (id -> resolved parent, child ids) and
materializes Node objects only once every organization is placed.

Resolution outline:
    1. Partition records; first occurrence of an id wins
    2. Pass 0: no parent or self-reference -> root at level 0
    3. Passes 1..K: attach pending organizations whose parent is resolved
    4. No progress: promote missing-parent organizations to orphans, or
       failing that every organization on a parent cycle, then resume
    5. Pass limit reached: everything still pending becomes an orphan
    6. Attach positions, compute statistics

Example:
    builder = HierarchyBuilder()
    forest = builder.build(records)

    for root in forest.roots:
        print(root.to_text())

    for notice in forest.report.notices():
        print(notice)
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from core.logger import get_process_logger
from process.hierarchy.constants import (
    MAX_RESOLUTION_PASSES,
    ORPHAN_LOG_SAMPLE,
    OrphanReason,
)
from process.hierarchy.builder_utils import create_node, create_position
from process.hierarchy.forest import Forest, ForestStatistics, BuildReport
from process.hierarchy.node import Node
from process.hierarchy.records import UnitRecord, normalize_records


logger = get_process_logger('hierarchy.builder')


@dataclass
class _ArenaEntry:
    """Build-time state of one organization."""
    record: UnitRecord
    order: int = 0
    resolved: bool = False
    level: int = 0
    parent_id: Optional[str] = None
    child_ids: list[str] = field(default_factory=list)
    orphan_reason: Optional[OrphanReason] = None


class HierarchyBuilder:
    """
    Builds a Forest from normalized UnitRecords.

    Stateless between builds apart from simple counters; the same builder
    may be reused for any number of record sets.

    Attributes:
        max_passes: Attachment pass budget before pending units are orphaned
        build_count: Number of completed builds
        last_report: BuildReport of the most recent build

    Example:
        builder = HierarchyBuilder(max_passes=50)
        forest = builder.build_from_rows(rows_from_spreadsheet)
        print(forest.statistics.root_count)
    """

    def __init__(self, max_passes: int = MAX_RESOLUTION_PASSES):
        """
        Initialize the hierarchy builder.

        Args:
            max_passes: Maximum resolution passes (must be positive)

        Raises:
            ValueError: If max_passes is not positive
        """
        if max_passes < 1:
            raise ValueError(f"max_passes must be positive, got {max_passes}")
        self.max_passes = max_passes
        self.build_count = 0
        self.last_report: Optional[BuildReport] = None

    # =========================================================================
    # PUBLIC BUILD METHODS
    # =========================================================================

    def build(self, records: Iterable[UnitRecord]) -> Forest:
        """
        Build the forest from normalized records.

        Args:
            records: UnitRecords in input order

        Returns:
            Forest (empty when there are no records)

        Raises:
            TypeError: If records is None
        """
        if records is None:
            raise TypeError("records must be an iterable of UnitRecord, not None")

        return self._build(records, BuildReport())

    def build_from_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        first_row_number: int = 1
    ) -> Forest:
        """
        Normalize raw rows and build the forest.

        Normalization drop counts are merged into the BuildReport.

        Args:
            rows: Raw row mappings (spreadsheet or database rows)
            first_row_number: Row number of the first row

        Returns:
            Forest
        """
        normalized = normalize_records(rows, first_row_number)
        report = BuildReport(
            missing_required_field=normalized.missing_required_field,
            unsupported_kind=normalized.unsupported_kind,
        )
        return self._build(normalized.records, report)

    def reset_stats(self) -> None:
        """Reset build counters."""
        self.build_count = 0
        self.last_report = None

    # =========================================================================
    # BUILD STAGES
    # =========================================================================

    def _build(self, records: Iterable[UnitRecord], report: BuildReport) -> Forest:
        arena, positions = self._partition(records, report)

        root_ids = self._detect_roots(arena)
        orphan_ids = self._resolve(arena, report)

        nodes = self._materialize(arena)
        roots = [nodes[uid] for uid in root_ids + orphan_ids]
        orphans = [nodes[uid] for uid in orphan_ids]

        attached = self._attach_positions(nodes, positions, report)
        statistics = ForestStatistics(
            total_organizations=len(nodes),
            total_positions=attached,
            max_depth=max((entry.level for entry in arena.values()), default=0),
            root_count=len(roots),
        )

        self.build_count += 1
        self.last_report = report
        self._log_summary(statistics, report, orphans)

        return Forest(
            roots=roots,
            orphans=orphans,
            statistics=statistics,
            report=report,
        )

    def _partition(
        self,
        records: Iterable[UnitRecord],
        report: BuildReport
    ) -> tuple[dict[str, _ArenaEntry], list[UnitRecord]]:
        """Split records into the organization arena and position list."""
        arena: dict[str, _ArenaEntry] = {}
        positions: list[UnitRecord] = []
        position_ids: set[str] = set()

        for record in records:
            if record.is_organization:
                report.organization_records += 1
                if record.id in arena:
                    report.duplicate_organizations += 1
                    logger.debug(f"Duplicate organization {record.id} ignored")
                    continue
                arena[record.id] = _ArenaEntry(record=record, order=len(arena))
            else:
                report.position_records += 1
                if record.id in position_ids:
                    report.duplicate_positions += 1
                    logger.debug(f"Duplicate position {record.id} ignored")
                    continue
                position_ids.add(record.id)
                positions.append(record)

        return arena, positions

    def _detect_roots(self, arena: dict[str, _ArenaEntry]) -> list[str]:
        """Pass 0: organizations without a parent or pointing at themselves."""
        root_ids = []
        for uid, entry in arena.items():
            if entry.record.is_root_candidate:
                entry.resolved = True
                entry.level = 0
                root_ids.append(uid)
        return root_ids

    def _resolve(
        self,
        arena: dict[str, _ArenaEntry],
        report: BuildReport
    ) -> list[str]:
        """
        Attach pending organizations in bounded passes.

        Returns:
            Ids of organizations promoted to orphan roots, in promotion order
        """
        pending = [uid for uid, entry in arena.items() if not entry.resolved]
        orphan_ids: list[str] = []
        passes = 0
        budget = self.max_passes

        while pending:
            if budget == 0:
                self._promote(arena, pending, OrphanReason.PASS_LIMIT, orphan_ids)
                report.pass_limit_orphans += len(pending)
                logger.warning(
                    f"Pass limit {self.max_passes} reached with "
                    f"{len(pending)} organizations unresolved"
                )
                pending = []
                break

            passes += 1
            budget -= 1
            remaining = []
            for uid in pending:
                entry = arena[uid]
                parent = arena.get(entry.record.parent_id)
                if (
                    parent is not None
                    and parent.resolved
                    and not self._chain_contains(arena, entry.record.parent_id, uid)
                ):
                    entry.resolved = True
                    entry.level = parent.level + 1
                    entry.parent_id = entry.record.parent_id
                    parent.child_ids.append(uid)
                else:
                    remaining.append(uid)

            logger.debug(
                f"Pass {passes}: attached {len(pending) - len(remaining)}, "
                f"{len(remaining)} pending"
            )

            if remaining and len(remaining) == len(pending):
                remaining = self._break_deadlock(arena, remaining, report, orphan_ids)
                # Deadlock passes do not use up the budget
                budget += 1
            pending = remaining

        report.resolution_passes = passes
        return orphan_ids

    def _break_deadlock(
        self,
        arena: dict[str, _ArenaEntry],
        pending: list[str],
        report: BuildReport,
        orphan_ids: list[str]
    ) -> list[str]:
        """
        Promote the organizations blocking progress.

        Missing parents are promoted first. Only when every pending parent
        exists (so every pending organization waits on another pending one)
        are the organizations lying on cycles promoted.

        Returns:
            Still-pending ids
        """
        missing = [uid for uid in pending if arena[uid].record.parent_id not in arena]
        if missing:
            self._promote(arena, missing, OrphanReason.MISSING_PARENT, orphan_ids)
            report.missing_parent_orphans += len(missing)
        else:
            missing = self._cycle_members(arena, pending)
            self._promote(arena, missing, OrphanReason.CIRCULAR, orphan_ids)
            report.circular_orphans += len(missing)

        promoted = set(missing)
        return [uid for uid in pending if uid not in promoted]

    def _cycle_members(
        self,
        arena: dict[str, _ArenaEntry],
        pending: list[str]
    ) -> list[str]:
        """
        Find pending organizations that lie on a parent cycle.

        Every pending organization points at another pending one, so
        following parent links from any of them ends in a cycle.
        """
        pending_set = set(pending)
        on_cycle: set[str] = set()
        visited: set[str] = set()

        for start in pending:
            if start in visited:
                continue
            trail: list[str] = []
            trail_index: dict[str, int] = {}
            current = start
            while current in pending_set and current not in visited:
                visited.add(current)
                trail_index[current] = len(trail)
                trail.append(current)
                current = arena[current].record.parent_id
            if current in trail_index:
                on_cycle.update(trail[trail_index[current]:])

        return [uid for uid in pending if uid in on_cycle]

    def _chain_contains(
        self,
        arena: dict[str, _ArenaEntry],
        start_id: Optional[str],
        target_id: str
    ) -> bool:
        """Walk the resolved ancestor chain from start_id looking for target_id."""
        current = start_id
        while current is not None:
            if current == target_id:
                return True
            current = arena[current].parent_id
        return False

    def _promote(
        self,
        arena: dict[str, _ArenaEntry],
        uids: list[str],
        reason: OrphanReason,
        orphan_ids: list[str]
    ) -> None:
        for uid in uids:
            entry = arena[uid]
            entry.resolved = True
            entry.level = 0
            entry.orphan_reason = reason
            orphan_ids.append(uid)

        if uids:
            sample = ', '.join(uids[:ORPHAN_LOG_SAMPLE])
            logger.warning(
                f"{len(uids)} organizations promoted to orphan roots "
                f"({reason.value}): {sample}"
            )

    def _materialize(self, arena: dict[str, _ArenaEntry]) -> dict[str, Node]:
        """Create Nodes from resolved entries and link children in input order."""
        nodes = {
            uid: create_node(entry.record, level=entry.level)
            for uid, entry in arena.items()
        }
        for uid, entry in arena.items():
            node = nodes[uid]
            child_ids = sorted(entry.child_ids, key=lambda cid: arena[cid].order)
            node.children = [nodes[child_id] for child_id in child_ids]
            if entry.orphan_reason is not None:
                node.is_orphan = True
                node.orphan_reason = entry.orphan_reason.value
        return nodes

    def _attach_positions(
        self,
        nodes: dict[str, Node],
        positions: list[UnitRecord],
        report: BuildReport
    ) -> int:
        """Attach positions in input order; count those with no known owner."""
        attached = 0
        unattached_ids = []

        for record in positions:
            owner = nodes.get(record.parent_id) if record.parent_id else None
            if owner is None:
                unattached_ids.append(record.id)
                continue
            owner.add_position(create_position(record, owner.level + 1))
            attached += 1

        report.unattached_positions = len(unattached_ids)
        if unattached_ids:
            sample = ', '.join(unattached_ids[:ORPHAN_LOG_SAMPLE])
            logger.warning(
                f"{len(unattached_ids)} positions without a known organization: {sample}"
            )
        return attached

    def _log_summary(
        self,
        statistics: ForestStatistics,
        report: BuildReport,
        orphans: list[Node]
    ) -> None:
        logger.info(
            f"Built forest: {statistics.total_organizations} organizations, "
            f"{statistics.total_positions} positions, {statistics.root_count} roots "
            f"({len(orphans)} orphans), depth {statistics.max_depth}, "
            f"{report.resolution_passes} passes"
        )


__all__ = ['HierarchyBuilder']
