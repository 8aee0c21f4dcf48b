# Path: org_flow/process/hierarchy/errors.py
"""
Exceptions raised by the hierarchy package.

Data-quality problems inside a batch (dangling parents, cycles, stray rows)
are never raised; they are counted in the BuildReport. Only per-record
contract failures and failing record sources surface as exceptions.
"""

from typing import Optional


class OrgFlowError(Exception):
    """Base class for all org_flow errors."""


class MissingRequiredFieldError(OrgFlowError):
    """
    A raw record lacks a required field (the unit identifier).

    Attributes:
        field_name: Canonical name of the missing field
        row_number: Source row number, when known
    """

    def __init__(self, field_name: str, row_number: Optional[int] = None):
        self.field_name = field_name
        self.row_number = row_number
        where = f" (row {row_number})" if row_number is not None else ""
        super().__init__(f"Missing required field '{field_name}'{where}")


class RecordSourceError(OrgFlowError):
    """The callable supplying raw records failed."""


__all__ = [
    'OrgFlowError',
    'MissingRequiredFieldError',
    'RecordSourceError',
]
