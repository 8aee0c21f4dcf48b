# Path: org_flow/process/hierarchy/records.py
"""
Record Normalizer - Canonical form for flat organizational rows.

Raw rows arrive from spreadsheet exports or the organizational_units table
with arbitrary key spellings ("Object ID", "object_id", "objectId"...).
normalize() turns one row into a UnitRecord so the rest of the hierarchy
code never branches on raw field presence.

Example:
    record = normalize({
        'Object ID': '50000001',
        'Object Description': 'Finance Directorate',
        'Object Type': 'O',
        'Parent Relationship Obj ID': '50000000',
    })
    record.kind        # UnitKind.ORGANIZATION
    record.parent_id   # '50000000'
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from core.logger import get_process_logger
from process.hierarchy.constants import (
    UnitKind,
    DEFAULT_UNIT_NAME,
    NULL_MARKERS,
    ID_KEYS,
    NAME_KEYS,
    TYPE_KEYS,
    PARENT_KEYS,
    HOLDER_KEYS,
    MANAGER_KEYS,
    AUXILIARY_KEYS,
)
from process.hierarchy.errors import MissingRequiredFieldError


logger = get_process_logger('hierarchy.records')

_KEY_SEPARATORS = re.compile(r'[^0-9a-z]+')


@dataclass(frozen=True)
class UnitRecord:
    """
    One normalized flat record.

    Attributes:
        id: Unit identifier (non-empty)
        name: Display description (may be empty)
        kind: ORGANIZATION or POSITION
        parent_id: Declared owning organization, None when absent
        manager_or_holder_text: Manager (organizations) or seat holder
            (positions), None when blank
        auxiliary: Secondary descriptive fields, carried through unchanged
        row_number: Source row for diagnostics
    """
    id: str
    name: str
    kind: UnitKind
    parent_id: Optional[str] = None
    manager_or_holder_text: Optional[str] = None
    auxiliary: dict[str, str] = field(default_factory=dict, compare=False)
    row_number: Optional[int] = field(default=None, compare=False)

    @property
    def is_organization(self) -> bool:
        return self.kind == UnitKind.ORGANIZATION

    @property
    def is_position(self) -> bool:
        return self.kind == UnitKind.POSITION

    @property
    def is_root_candidate(self) -> bool:
        """No declared parent, or the record points at itself."""
        return self.parent_id is None or self.parent_id == self.id


@dataclass
class NormalizationResult:
    """
    Outcome of normalizing a batch of raw rows.

    Attributes:
        records: Records that survived normalization, in input order
        missing_required_field: Rows dropped for lacking an identifier
        unsupported_kind: Rows dropped for a missing/unrecognized type tag
    """
    records: list[UnitRecord] = field(default_factory=list)
    missing_required_field: int = 0
    unsupported_kind: int = 0

    @property
    def dropped(self) -> int:
        return self.missing_required_field + self.unsupported_kind


# ==============================================================================
# NORMALIZATION
# ==============================================================================
def normalize_key(key: Any) -> str:
    """
    Normalize a raw column name for alias matching.

    >>> normalize_key('Parent Relationship Obj ID')
    'parent_relationship_obj_id'
    >>> normalize_key('Status (Object)')
    'status_object'
    """
    return _KEY_SEPARATORS.sub('_', str(key).strip().lower()).strip('_')


def clean_value(value: Any) -> Optional[str]:
    """
    Convert a raw cell value to trimmed text.

    None, NaN and spreadsheet null markers become None. Whole floats lose
    their trailing ".0" so numeric identifiers read back as typed.
    """
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            value = int(value)
    text = str(value).strip()
    if text.lower() in NULL_MARKERS:
        return None
    return text


def _pick(fields: dict[str, Any], keys: tuple) -> tuple[Optional[str], Optional[str]]:
    """Return (matched key, cleaned value) of the first non-blank alias."""
    for key in keys:
        if key in fields:
            value = clean_value(fields[key])
            if value:
                return key, value
    return None, None


def normalize(
    raw: Mapping[str, Any],
    row_number: Optional[int] = None
) -> Optional[UnitRecord]:
    """
    Normalize one raw record.

    Args:
        raw: Raw row mapping (spreadsheet row or database row)
        row_number: Optional source row number for diagnostics

    Returns:
        UnitRecord, or None when the type tag is missing or unsupported

    Raises:
        MissingRequiredFieldError: If the identifier is missing or blank
    """
    fields = {normalize_key(k): v for k, v in raw.items()}

    id_key, unit_id = _pick(fields, ID_KEYS)
    if not unit_id:
        raise MissingRequiredFieldError('id', row_number)

    type_key, tag = _pick(fields, TYPE_KEYS)
    kind = UnitKind.from_tag(tag) if tag else None
    if kind is None:
        return None

    name_key = next((k for k in NAME_KEYS if fields.get(k) is not None), None)
    if name_key is None:
        name = DEFAULT_UNIT_NAME
    else:
        name = clean_value(fields[name_key]) or ''

    parent_key, parent_id = _pick(fields, PARENT_KEYS)

    text_keys = HOLDER_KEYS if kind == UnitKind.POSITION else MANAGER_KEYS
    text_key, text = _pick(fields, text_keys)

    consumed = {id_key, type_key, name_key, parent_key, text_key}
    auxiliary: dict[str, str] = {}
    for key, value in fields.items():
        if key in consumed:
            continue
        cleaned = clean_value(value)
        if not cleaned:
            continue
        aux_name = AUXILIARY_KEYS.get(key, key)
        auxiliary.setdefault(aux_name, cleaned)

    return UnitRecord(
        id=unit_id,
        name=name,
        kind=kind,
        parent_id=parent_id,
        manager_or_holder_text=text,
        auxiliary=auxiliary,
        row_number=row_number,
    )


def normalize_records(
    rows: Iterable[Mapping[str, Any]],
    first_row_number: int = 1
) -> NormalizationResult:
    """
    Normalize a batch of raw rows, dropping and counting bad ones.

    Args:
        rows: Raw row mappings
        first_row_number: Row number assigned to the first row
            (2 for spreadsheets with a header row)

    Returns:
        NormalizationResult with surviving records and drop counts

    Raises:
        TypeError: If rows is None
    """
    if rows is None:
        raise TypeError("rows must be an iterable of mappings, not None")

    result = NormalizationResult()
    for offset, raw in enumerate(rows):
        row_number = first_row_number + offset
        try:
            record = normalize(raw, row_number)
        except MissingRequiredFieldError as e:
            result.missing_required_field += 1
            logger.debug(str(e))
            continue
        if record is None:
            result.unsupported_kind += 1
            continue
        result.records.append(record)

    if result.dropped:
        logger.info(
            f"Normalized {len(result.records)} records, dropped "
            f"{result.missing_required_field} without id and "
            f"{result.unsupported_kind} with unsupported type"
        )
    return result


__all__ = [
    'UnitRecord',
    'NormalizationResult',
    'normalize',
    'normalize_key',
    'normalize_records',
    'clean_value',
]
