# Path: org_flow/constants.py
"""
System-Wide Constants for org_flow (Organization Flowchart)

Central repository for constant values shared by the CLI, loaders and
database layer. Hierarchy-specific constants live in
process/hierarchy/constants.py.

Constants are organized by category:
- Record sources
- Output formats
- Display formatting
- Logging categories
"""

from enum import Enum
from typing import Final


# ==============================================================================
# RECORD SOURCES
# ==============================================================================

class RecordSourceType(str, Enum):
    """Where the CLI reads raw organizational rows from."""
    CSV = 'csv'
    DATABASE = 'database'


# Object type tags stored in the organizational_units table
ORGANIZATION_TAG: Final[str] = 'O'
POSITION_TAG: Final[str] = 'S'
SUPPORTED_TAGS: Final[tuple] = (ORGANIZATION_TAG, POSITION_TAG)

# Delimiters tried when sniffing a text export
CSV_DELIMITERS: Final[str] = ',;\t|'
CSV_SNIFF_BYTES: Final[int] = 64 * 1024


# ==============================================================================
# OUTPUT FORMATS
# ==============================================================================

class OutputFormat(str, Enum):
    """Supported export formats."""
    JSON = 'json'
    TEXT = 'text'
    CSV = 'csv'


# ==============================================================================
# DISPLAY FORMATTING
# ==============================================================================

# Menu formatting
MENU_WIDTH: Final[int] = 60
MENU_SEPARATOR: Final[str] = '-' * MENU_WIDTH
MENU_HEADER: Final[str] = '=' * MENU_WIDTH

# Status indicators (ASCII only - no emojis)
STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'
STATUS_INFO: Final[str] = '[INFO]'


# ==============================================================================
# LOGGING CATEGORIES
# ==============================================================================

class LogCategory(str, Enum):
    """
    IPO logging categories for org_flow.
    """
    INPUT = 'input'
    PROCESS = 'process'
    OUTPUT = 'output'


# ==============================================================================
# EXPORTS
# ==============================================================================

__all__ = [
    # Enums
    'RecordSourceType',
    'OutputFormat',
    'LogCategory',

    # Record sources
    'ORGANIZATION_TAG',
    'POSITION_TAG',
    'SUPPORTED_TAGS',
    'CSV_DELIMITERS',
    'CSV_SNIFF_BYTES',

    # Display
    'MENU_WIDTH',
    'MENU_SEPARATOR',
    'MENU_HEADER',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'STATUS_INFO',
]
