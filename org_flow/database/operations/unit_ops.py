# Path: org_flow/database/operations/unit_ops.py
"""
Unit Operations

Import and retrieval of flat OrganizationalUnit rows.

Import is an upsert keyed by object_id: existing rows are updated in place,
new ones inserted, rows without an object_id skipped. Retrieval returns raw
row dictionaries ready for HierarchyBuilder.build_from_rows().
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from constants import SUPPORTED_TAGS
from core.logger import get_input_logger
from database.models.organizational_units import OrganizationalUnit, UNIT_COLUMNS
from process.hierarchy.records import normalize_key, clean_value


logger = get_input_logger('database.unit_ops')


@dataclass
class ImportSummary:
    """
    Outcome of one upsert batch.

    Attributes:
        inserted: New rows written
        updated: Existing rows overwritten
        skipped: Rows without an object_id
    """
    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.skipped

    def to_dict(self) -> dict[str, int]:
        return {
            'inserted': self.inserted,
            'updated': self.updated,
            'skipped': self.skipped,
        }


class UnitOperations:
    """
    Operations for OrganizationalUnit records.

    Example:
        from database import session_scope, UnitOperations

        with session_scope() as session:
            summary = UnitOperations.upsert_rows(session, reader.read(path))
            print(summary.inserted, summary.updated)

        with session_scope() as session:
            rows = UnitOperations.fetch_rows(session)
    """

    @staticmethod
    def map_row(raw: Mapping[str, Any]) -> dict[str, Optional[str]]:
        """
        Map a raw export row onto table columns.

        Headers are matched after normalization, so "Relationship Obj (Text)"
        fills relationship_obj_text. Unknown headers are ignored.

        Args:
            raw: Raw row mapping

        Returns:
            Column values (None for blanks)
        """
        values: dict[str, Optional[str]] = {}
        for key, value in raw.items():
            column = normalize_key(key)
            if column in UNIT_COLUMNS and column not in values:
                values[column] = clean_value(value)
        return values

    @staticmethod
    def upsert_rows(
        session: Session,
        rows: Iterable[Mapping[str, Any]]
    ) -> ImportSummary:
        """
        Insert or update rows keyed by object_id.

        Later rows with the same object_id overwrite earlier ones within the
        batch.

        Args:
            session: Database session
            rows: Raw export rows

        Returns:
            ImportSummary
        """
        summary = ImportSummary()
        pending: dict[str, OrganizationalUnit] = {}

        for raw in rows:
            values = UnitOperations.map_row(raw)
            object_id = values.get('object_id')
            if not object_id:
                summary.skipped += 1
                continue

            unit = pending.get(object_id)
            if unit is None:
                unit = session.query(OrganizationalUnit).filter_by(
                    object_id=object_id
                ).first()

            if unit is None:
                unit = OrganizationalUnit(**values)
                session.add(unit)
                summary.inserted += 1
            else:
                for column in UNIT_COLUMNS:
                    if column != 'object_id':
                        setattr(unit, column, values.get(column))
                summary.updated += 1
            pending[object_id] = unit

        session.flush()
        logger.info(
            f"Imported units: {summary.inserted} inserted, "
            f"{summary.updated} updated, {summary.skipped} skipped"
        )
        return summary

    @staticmethod
    def fetch_rows(
        session: Session,
        kinds: Iterable[str] = SUPPORTED_TAGS
    ) -> list[dict[str, Any]]:
        """
        Fetch raw rows for the hierarchy builder.

        Args:
            session: Database session
            kinds: Object type tags to include

        Returns:
            Row dictionaries ordered by object type then object id
        """
        units = session.query(OrganizationalUnit).filter(
            OrganizationalUnit.object_type.in_(list(kinds))
        ).order_by(
            OrganizationalUnit.object_type,
            OrganizationalUnit.object_id,
        ).all()

        logger.debug(f"Fetched {len(units)} organizational units")
        return [unit.to_row() for unit in units]

    @staticmethod
    def find_by_object_id(
        session: Session,
        object_id: str
    ) -> Optional[OrganizationalUnit]:
        """Find a unit by source object id."""
        return session.query(OrganizationalUnit).filter_by(
            object_id=object_id
        ).first()

    @staticmethod
    def count_by_type(session: Session) -> dict[str, int]:
        """
        Count units per object type.

        Returns:
            Mapping of object type tag to row count
        """
        results = session.query(
            OrganizationalUnit.object_type,
            func.count(OrganizationalUnit.id)
        ).group_by(OrganizationalUnit.object_type).all()

        return {object_type or '': count for object_type, count in results}

    @staticmethod
    def delete_all(session: Session) -> int:
        """Delete every unit; returns the number of rows removed."""
        deleted = session.query(OrganizationalUnit).delete()
        logger.warning(f"Deleted {deleted} organizational units")
        return deleted

    @staticmethod
    def record_source(
        session_factory: Callable[[], Session],
        kinds: Iterable[str] = SUPPORTED_TAGS
    ) -> Callable[[], list[dict[str, Any]]]:
        """
        Build a zero-argument record source for OrgFlowchartService.

        Each call opens its own session and closes it after reading.

        Args:
            session_factory: Callable returning new sessions
            kinds: Object type tags to include

        Returns:
            Callable returning raw rows
        """
        kinds = tuple(kinds)

        def source() -> list[dict[str, Any]]:
            session = session_factory()
            try:
                return UnitOperations.fetch_rows(session, kinds)
            finally:
                session.close()

        return source


__all__ = [
    'UnitOperations',
    'ImportSummary',
]
