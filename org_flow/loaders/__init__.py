# Path: org_flow/loaders/__init__.py
"""
org_flow Loaders Package

Readers for external organizational exports.

Data Sources:
    - unit files: Delimited text exports (CSV/TSV) of organizational units

Binary spreadsheet decoding is left to the caller; export the sheet to CSV
first or pass already decoded rows straight to the hierarchy builder.

Example:
    from loaders import UnitFileReader

    rows = UnitFileReader().read(Path('units.csv'))
"""

from .unit_file_reader import UnitFileReader, ReadStats

__all__ = [
    'UnitFileReader',
    'ReadStats',
]
