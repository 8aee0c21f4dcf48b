# Path: org_flow/database/__init__.py
"""
org_flow Database Module

Stores the flat organizational_units table that the hierarchy is
reconstructed from.

This module provides:
- The OrganizationalUnit model
- Upsert import of export rows
- Retrieval of raw rows (and a record source) for the hierarchy service

Example:
    from database import initialize_database, session_scope, UnitOperations

    initialize_database('sqlite:///org_flow.db')

    with session_scope() as session:
        UnitOperations.upsert_rows(session, rows)

    with session_scope() as session:
        print(UnitOperations.count_by_type(session))
"""

from typing import Optional

from database.models.base import (
    Base,
    initialize_engine,
    get_engine,
    get_session,
    get_session_factory,
    session_scope,
    create_all_tables,
    drop_all_tables,
    reset_engine,
    get_database_type,
    get_connection_info,
)
from database.models.organizational_units import OrganizationalUnit, UNIT_COLUMNS
from database.operations.unit_ops import UnitOperations, ImportSummary


def initialize_database(db_url: Optional[str] = None) -> None:
    """
    Initialize the org_flow database and create tables.

    Args:
        db_url: Optional database URL. If None, uses ORG_FLOW_DATABASE_URL.

    Example:
        initialize_database()
        initialize_database(':memory:')
    """
    initialize_engine(db_url)
    create_all_tables()


__all__ = [
    # Initialization
    'initialize_database',
    'initialize_engine',
    'get_engine',
    'get_session',
    'get_session_factory',
    'session_scope',
    'create_all_tables',
    'drop_all_tables',
    'reset_engine',
    'get_database_type',
    'get_connection_info',
    # Models
    'Base',
    'OrganizationalUnit',
    'UNIT_COLUMNS',
    # Operations
    'UnitOperations',
    'ImportSummary',
]
