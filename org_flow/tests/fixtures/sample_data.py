# Path: org_flow/tests/fixtures/sample_data.py
"""
Sample Data Generators for Testing

Provides functions to generate organizational records and export rows for
various scenarios.
"""

import random
from typing import Optional

from process.hierarchy.constants import UnitKind
from process.hierarchy.records import UnitRecord


SAMPLE_EXPORT_HEADERS = [
    'Object Description',
    'Object Abbr.',
    'Object Type',
    'Object ID',
    'Status (Object)',
    'Parent Relationship Obj ID',
    'Relationship Obj (Text)',
    'Rel Obj Text Sup',
    'Cost Center (Text)',
    'Vacant Status',
]


def make_record(
    unit_id: str,
    tag: str,
    parent: Optional[str] = None,
    name: Optional[str] = None,
    holder: Optional[str] = None,
    manager: Optional[str] = None,
    auxiliary: Optional[dict] = None,
) -> UnitRecord:
    """
    Create a normalized record.

    Args:
        unit_id: Record id
        tag: 'O' or 'S'
        parent: Declared parent id
        name: Display name (defaults to the id)
        holder: Holder text for positions
        manager: Manager text for organizations
        auxiliary: Secondary fields

    Returns:
        UnitRecord
    """
    kind = UnitKind.from_tag(tag)
    text = holder if kind == UnitKind.POSITION else manager
    return UnitRecord(
        id=unit_id,
        name=name if name is not None else unit_id,
        kind=kind,
        parent_id=parent,
        manager_or_holder_text=text or None,
        auxiliary=dict(auxiliary or {}),
    )


def export_row(
    object_id: str,
    object_type: str,
    description: str = '',
    parent: str = '',
    manager: str = '',
    holder: str = '',
    cost_center: str = '',
    vacant: str = '',
    abbr: str = '',
    status: str = 'Active',
) -> dict[str, str]:
    """Create one raw row keyed by spreadsheet headers."""
    return {
        'Object Description': description,
        'Object Abbr.': abbr,
        'Object Type': object_type,
        'Object ID': object_id,
        'Status (Object)': status,
        'Parent Relationship Obj ID': parent,
        'Relationship Obj (Text)': manager,
        'Rel Obj Text Sup': holder,
        'Cost Center (Text)': cost_center,
        'Vacant Status': vacant,
    }


def sample_export_rows() -> list[dict[str, str]]:
    """
    A small export in shuffled order.

    Contents: two levels under one head office, a dangling department,
    one vacant position and one position pointing nowhere.
    """
    return [
        export_row('50000003', 'S', 'Chief Financial Officer', parent='50000002',
                   holder='Maria Lopez', cost_center='Finance CC'),
        export_row('50000002', 'O', 'Finance Directorate', parent='50000001',
                   manager='Maria Lopez', abbr='FIN'),
        export_row('50000001', 'O', 'Head Office', manager='Sam Chair', abbr='HO'),
        export_row('50000004', 'O', 'Treasury', parent='50000002'),
        export_row('50000005', 'S', 'Treasury Analyst', parent='50000004',
                   vacant='Yes', cost_center='Treasury CC'),
        export_row('50000006', 'O', 'Legacy Unit', parent='49999999'),
        export_row('50000007', 'S', 'Lost Position', parent='48888888',
                   holder='Nobody'),
    ]


def generate_random_records(
    org_count: int = 200,
    position_count: int = 300,
    seed: int = 7,
    cycle_fraction: float = 0.05,
    dangling_fraction: float = 0.05,
) -> list[UnitRecord]:
    """
    Generate a shuffled record set with a sprinkling of bad parents.

    Args:
        org_count: Organization records
        position_count: Position records
        seed: Random seed
        cycle_fraction: Share of organizations re-pointed to a descendant
        dangling_fraction: Share of organizations pointing at unknown ids

    Returns:
        List of UnitRecords in random order
    """
    rng = random.Random(seed)
    parents: dict[str, Optional[str]] = {}
    org_ids = [f'O{i:05d}' for i in range(org_count)]

    for i, uid in enumerate(org_ids):
        if i < 3:
            parents[uid] = None
        else:
            parents[uid] = org_ids[rng.randrange(0, i)]

    for uid in org_ids[3:]:
        roll = rng.random()
        if roll < cycle_fraction:
            # Point at a later id; may close a loop
            parents[uid] = org_ids[rng.randrange(0, org_count)]
        elif roll < cycle_fraction + dangling_fraction:
            parents[uid] = f'MISSING-{uid}'

    records = [
        make_record(uid, 'O', parent=parent, name=f'Unit {uid}')
        for uid, parent in parents.items()
    ]
    for j in range(position_count):
        owner = org_ids[rng.randrange(0, org_count)] if rng.random() > 0.05 else 'NOWHERE'
        holder = '' if rng.random() < 0.2 else f'Person {j}'
        records.append(make_record(f'P{j:05d}', 'S', parent=owner,
                                   name=f'Position {j}', holder=holder))

    rng.shuffle(records)
    return records
