# Path: org_flow/database/models/__init__.py
"""
Database Models for org_flow.

Provides SQLAlchemy models for storing:
- Organizational units (flat organization and position rows)
"""

from database.models.base import (
    Base,
    initialize_engine,
    get_engine,
    get_session,
    get_session_factory,
    session_scope,
    create_all_tables,
    drop_all_tables,
)
from database.models.organizational_units import OrganizationalUnit, UNIT_COLUMNS


__all__ = [
    'Base',
    'initialize_engine',
    'get_engine',
    'get_session',
    'get_session_factory',
    'session_scope',
    'create_all_tables',
    'drop_all_tables',
    'OrganizationalUnit',
    'UNIT_COLUMNS',
]
