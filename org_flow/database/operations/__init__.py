# Path: org_flow/database/operations/__init__.py
"""
Database Operations for org_flow.

Provides import and retrieval of organizational unit rows.
"""

from database.operations.unit_ops import UnitOperations, ImportSummary


__all__ = [
    'UnitOperations',
    'ImportSummary',
]
