# Path: org_flow/process/hierarchy/constants.py
"""
Constants for Hierarchy Builder

Defines unit kinds, search scopes, raw-field aliases and the limits used
throughout hierarchy reconstruction.
"""

from enum import Enum
from typing import Final, Optional


# ==============================================================================
# UNIT KIND ENUMERATION
# ==============================================================================
class UnitKind(Enum):
    """
    Kinds of flat records found in an organizational export.

    ORGANIZATION: Organizational unit (type tag "O"), may own units and positions
    POSITION: Single role/seat (type tag "S"), always a leaf
    """
    ORGANIZATION = "O"
    POSITION = "S"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["UnitKind"]:
        """
        Map a raw type tag to a UnitKind.

        Args:
            tag: Raw tag from the export (e.g., "O", "s ")

        Returns:
            Matching UnitKind, or None for unrecognized tags
        """
        cleaned = tag.strip().upper()
        for kind in cls:
            if kind.value == cleaned:
                return kind
        return None


class SearchKind(Enum):
    """Entity scope for hierarchy searches."""
    ORGANIZATION = "organization"
    POSITION = "position"
    ANY = "any"


class OrphanReason(Enum):
    """
    Why an organization was promoted to an orphan root.

    MISSING_PARENT: Declared parent does not exist in the input
    CIRCULAR: Organization lies on a parent cycle
    PASS_LIMIT: Still unresolved when the pass budget ran out
    """
    MISSING_PARENT = "missing_parent"
    CIRCULAR = "circular"
    PASS_LIMIT = "pass_limit"


# ==============================================================================
# RESOLUTION LIMITS
# ==============================================================================
MAX_RESOLUTION_PASSES: Final[int] = 100
"""Upper bound on attachment passes before remaining units become orphans."""

DEFAULT_INDENT_SIZE: Final[int] = 2
"""Default indentation spaces for text representation."""

ORPHAN_LOG_SAMPLE: Final[int] = 5
"""How many orphaned/unattached examples are logged per build."""


# ==============================================================================
# PLACEHOLDERS AND NULL MARKERS
# ==============================================================================
DEFAULT_UNIT_NAME: Final[str] = "Unnamed Unit"
"""Display name used when a record carries no name field at all."""

NULL_MARKERS: Final[frozenset] = frozenset({'null', 'none', 'nan', 'undefined'})
"""Text values spreadsheets and drivers export for an empty cell."""

VACANT_MARKERS: Final[frozenset] = frozenset({'yes', 'vacant', 'true', 'y', '1'})
"""vacant_status values that flag a seat as vacant."""


# ==============================================================================
# RAW FIELD ALIASES
# ==============================================================================
# Keys are compared after lower-casing and collapsing every run of
# non-alphanumeric characters into a single underscore, so
# "Parent Relationship Obj ID" and "parent_relationship_obj_id" match.
ID_KEYS: Final[tuple] = (
    'object_id',
    'objectid',
    'unit_id',
    'id',
)

NAME_KEYS: Final[tuple] = (
    'object_description',
    'objectdescription',
    'description',
    'name',
)

TYPE_KEYS: Final[tuple] = (
    'object_type',
    'objecttype',
    'type',
    'kind',
)

PARENT_KEYS: Final[tuple] = (
    'parent_relationship_obj_id',
    'parent_relationship_object_id',
    'parent_id',
    'parentid',
    'parent',
)

# Positions: only the superior relationship text names the seat holder.
# The parent relationship text is the owning organization's name.
HOLDER_KEYS: Final[tuple] = (
    'rel_obj_text_sup',
    'holder',
)

# Organizations: the relationship object text is the head of the unit
MANAGER_KEYS: Final[tuple] = (
    'relationship_obj_text',
    'relationship_object_text',
    'rel_obj_text_sup',
    'manager',
    'holder',
)

AUXILIARY_KEYS: Final[dict] = {
    'object_abbr': 'abbreviation',
    'abbreviation': 'abbreviation',
    'status_object': 'status',
    'status': 'status',
    'start_date': 'start_date',
    'end_date': 'end_date',
    'relationship_text': 'relationship_text',
    'parent_relationship_text': 'parent_relationship_text',
    'cost_center_id': 'cost_center_id',
    'cost_center_text': 'cost_center',
    'cost_center': 'cost_center',
    'department': 'cost_center',
    'vacant_status': 'vacant_status',
}
"""Recognized secondary columns and their canonical auxiliary names."""


# ==============================================================================
# POSITION LEVEL HEURISTICS
# ==============================================================================
NUMERIC_LEVEL_PATTERNS: Final[tuple] = (
    r'\blevel\s*(\d+)\b',
    r'\bgrade\s*(\d+)\b',
    r'\bl(\d+)\b',
)

TITLE_LEVELS: Final[tuple] = (
    ('Executive Level', ('chief', 'director', 'vice president', 'president')),
    ('Management Level', ('manager', 'head', 'superintendent')),
    ('Supervisory Level', ('supervisor', 'lead', 'coordinator')),
    ('Senior Level', ('senior', 'principal', 'specialist')),
    ('Junior Level', ('junior', 'trainee', 'assistant')),
)
"""Title keywords checked in order; first match wins."""

DEFAULT_POSITION_LEVEL: Final[str] = 'Staff Level'


# ==============================================================================
# EXPORTS
# ==============================================================================
__all__ = [
    # Enums
    'UnitKind',
    'SearchKind',
    'OrphanReason',
    # Limits
    'MAX_RESOLUTION_PASSES',
    'DEFAULT_INDENT_SIZE',
    'ORPHAN_LOG_SAMPLE',
    # Placeholders
    'DEFAULT_UNIT_NAME',
    'NULL_MARKERS',
    'VACANT_MARKERS',
    # Field aliases
    'ID_KEYS',
    'NAME_KEYS',
    'TYPE_KEYS',
    'PARENT_KEYS',
    'HOLDER_KEYS',
    'MANAGER_KEYS',
    'AUXILIARY_KEYS',
    # Position levels
    'NUMERIC_LEVEL_PATTERNS',
    'TITLE_LEVELS',
    'DEFAULT_POSITION_LEVEL',
]
