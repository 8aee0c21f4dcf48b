# Path: org_flow/database/models/organizational_units.py
"""
Organizational Unit Model

One row per organization ("O") or position ("S") exactly as exported by the
HR system. Rows are stored flat; the hierarchy is reconstructed in memory
by HierarchyBuilder from parent_relationship_obj_id.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, BigInteger, Integer, String, DateTime

from database.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Source columns in export order; everything except id and timestamps
UNIT_COLUMNS = (
    'object_description',
    'object_abbr',
    'object_type',
    'object_id',
    'status_object',
    'start_date',
    'end_date',
    'parent_relationship_id',
    'parent_relationship_text',
    'parent_relationship_obj_id',
    'parent_relationship_obj_text',
    'relationship_id',
    'relationship_text',
    'relationship_obj',
    'relationship_obj_text',
    'rel_id_sup',
    'rel_text_sup',
    'rel_obj_sup',
    'rel_obj_text_sup',
    'cost_center_id',
    'cost_center_text',
    'vacant_status',
)


class OrganizationalUnit(Base):
    """
    Flat organizational unit record.

    Example:
        unit = OrganizationalUnit(
            object_id='50000001',
            object_type='O',
            object_description='Finance Directorate',
            parent_relationship_obj_id='50000000',
        )
    """
    __tablename__ = 'organizational_units'

    # BigInteger maps to INTEGER on SQLite so autoincrement still works
    id = Column(
        BigInteger().with_variant(Integer, 'sqlite'),
        primary_key=True,
        autoincrement=True,
    )

    # Identification
    object_description = Column(String(500), comment="Unit or position name")
    object_abbr = Column(String(100), comment="Short name")
    object_type = Column(
        String(10),
        index=True,
        comment="O = organization, S = position"
    )
    object_id = Column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Source system object identifier"
    )
    status_object = Column(String(50), index=True)
    start_date = Column(String(20))
    end_date = Column(String(20))

    # Parent relationship (owning organization)
    parent_relationship_id = Column(String(50))
    parent_relationship_text = Column(String(100))
    parent_relationship_obj_id = Column(
        String(50),
        index=True,
        comment="Owning organization object_id"
    )
    parent_relationship_obj_text = Column(String(500))

    # Relationship (manager of an organization)
    relationship_id = Column(String(50))
    relationship_text = Column(String(100))
    relationship_obj = Column(String(50))
    relationship_obj_text = Column(String(500), comment="Manager name")

    # Superior relationship (holder of a position)
    rel_id_sup = Column(String(50))
    rel_text_sup = Column(String(100))
    rel_obj_sup = Column(String(50))
    rel_obj_text_sup = Column(String(500), comment="Position holder name")

    # Cost centre
    cost_center_id = Column(String(50))
    cost_center_text = Column(String(200))

    vacant_status = Column(String(10))

    # Timestamps
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def to_row(self) -> dict[str, Any]:
        """Source columns as a raw row for the record normalizer."""
        return {column: getattr(self, column) for column in UNIT_COLUMNS}

    def __repr__(self) -> str:
        return (
            f"<OrganizationalUnit(object_id='{self.object_id}', "
            f"type='{self.object_type}', description='{self.object_description}')>"
        )


__all__ = ['OrganizationalUnit', 'UNIT_COLUMNS']
