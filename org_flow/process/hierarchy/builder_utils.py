# Path: org_flow/process/hierarchy/builder_utils.py
"""
Shared Utility Functions for the Hierarchy Builder.

Contains the record-to-node conversions and display heuristics:
- Position level classification from free text
- Vacancy detection
- Node and Position creation from UnitRecords
"""

import re
from typing import Optional

from process.hierarchy.constants import (
    NUMERIC_LEVEL_PATTERNS,
    TITLE_LEVELS,
    DEFAULT_POSITION_LEVEL,
    VACANT_MARKERS,
)
from process.hierarchy.node import Node, Position
from process.hierarchy.records import UnitRecord


_NUMERIC_LEVELS = tuple(re.compile(p, re.IGNORECASE) for p in NUMERIC_LEVEL_PATTERNS)


def map_title_to_level(title: str) -> Optional[str]:
    """
    Map a job title to a level category.

    Args:
        title: Free-text title (e.g., 'Senior Tax Analyst')

    Returns:
        Level label, or None when no keyword matches

    Example:
        >>> map_title_to_level('Head of Treasury')
        'Management Level'
    """
    title_lower = title.lower()
    for label, keywords in TITLE_LEVELS:
        if any(re.search(rf'\b{re.escape(k)}\b', title_lower) for k in keywords):
            return label
    return None


def extract_position_level(*texts: Optional[str]) -> str:
    """
    Derive a display-only level label for a position.

    Looks for explicit numeric levels ("Level 3", "Grade 12", "L4") first,
    then for title keywords, across all given texts in order.

    Args:
        *texts: Candidate texts (position name, holder, relationship text)

    Returns:
        Level label; 'Staff Level' when nothing matches
    """
    candidates = [t for t in texts if t]

    for pattern in _NUMERIC_LEVELS:
        for text in candidates:
            match = pattern.search(text)
            if match:
                return f"Level {int(match.group(1))}"

    for text in candidates:
        label = map_title_to_level(text)
        if label:
            return label

    return DEFAULT_POSITION_LEVEL


def is_marked_vacant(record: UnitRecord) -> bool:
    """Check the record's vacant_status column."""
    status = record.auxiliary.get('vacant_status', '')
    return status.strip().lower() in VACANT_MARKERS


def create_node(record: UnitRecord, level: int = 0) -> Node:
    """
    Create an organization Node from a record.

    Args:
        record: ORGANIZATION record
        level: Depth in the forest

    Returns:
        Node with empty children and positions
    """
    return Node(
        id=record.id,
        name=record.name,
        manager=record.manager_or_holder_text or '',
        level=level,
        auxiliary=dict(record.auxiliary),
    )


def create_position(record: UnitRecord, level: int) -> Position:
    """
    Create a Position leaf from a record.

    A seat flagged vacant in vacant_status gets an empty holder even when
    the export repeats some relationship text in the holder column.

    Args:
        record: POSITION record
        level: Owning node's level + 1

    Returns:
        Position
    """
    holder = '' if is_marked_vacant(record) else (record.manager_or_holder_text or '')
    return Position(
        id=record.id,
        name=record.name,
        holder=holder,
        level=level,
        department=record.auxiliary.get('cost_center', ''),
        position_level=extract_position_level(
            record.name,
            record.manager_or_holder_text,
            record.auxiliary.get('relationship_text'),
        ),
        auxiliary=dict(record.auxiliary),
    )


__all__ = [
    'map_title_to_level',
    'extract_position_level',
    'is_marked_vacant',
    'create_node',
    'create_position',
]
