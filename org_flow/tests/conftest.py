# Path: org_flow/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for org_flow

Provides common test fixtures used across all test modules.
"""

import csv
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add org_flow to path for imports
TESTS_ROOT = Path(__file__).parent
ORG_FLOW_ROOT = TESTS_ROOT.parent
sys.path.insert(0, str(ORG_FLOW_ROOT))
sys.path.insert(0, str(TESTS_ROOT))

from fixtures.sample_data import (
    make_record,
    sample_export_rows,
    SAMPLE_EXPORT_HEADERS,
)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars(temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'ORG_FLOW_ENVIRONMENT': 'test',
        'ORG_FLOW_DEBUG': 'true',
        'ORG_FLOW_LOG_DIR': str(temp_dir / 'logs'),
        'ORG_FLOW_LOG_LEVEL': 'DEBUG',
        'ORG_FLOW_LOG_CONSOLE': 'false',
        'ORG_FLOW_DATABASE_URL': 'sqlite:///:memory:',
        'ORG_FLOW_CACHE_TTL_SECONDS': '60',
        'ORG_FLOW_MAX_RESOLUTION_PASSES': '25',
        'ORG_FLOW_SEARCH_LIMIT': '10',
        'ORG_FLOW_JSON_INDENT': '4',
        'ORG_FLOW_DB_POOL_SIZE': '3',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# SAMPLE DATA FIXTURES
# ==============================================================================

@pytest.fixture
def chain_records():
    """A -> B with position C under B."""
    return [
        make_record('A', 'O', name='A'),
        make_record('B', 'O', parent='A', name='B'),
        make_record('C', 'S', parent='B', name='C', holder='Jane Doe'),
    ]


@pytest.fixture
def company_records():
    """Small company: two roots, nested departments and positions."""
    return [
        make_record('1000', 'O', name='Head Office', manager='Alice Chief'),
        make_record('1100', 'O', parent='1000', name='Finance', manager='Bob Money'),
        make_record('1110', 'O', parent='1100', name='Treasury'),
        make_record('1200', 'O', parent='1000', name='Operations'),
        make_record('2000', 'O', name='Subsidiary'),
        make_record('9001', 'S', parent='1100', name='Finance Manager', holder='Bob Money'),
        make_record('9002', 'S', parent='1110', name='Treasury Analyst', holder=''),
        make_record('9003', 'S', parent='1200', name='Operations Lead', holder='Carol Ops'),
        make_record('9004', 'S', parent='2000', name='Country Director', holder='Dan Finance'),
    ]


@pytest.fixture
def export_rows():
    """Raw rows with spreadsheet headers."""
    return sample_export_rows()


@pytest.fixture
def export_csv(temp_dir, export_rows):
    """Write export rows to a CSV file with spreadsheet headers."""
    path = temp_dir / 'units.csv'
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=SAMPLE_EXPORT_HEADERS)
        writer.writeheader()
        writer.writerows(export_rows)
    return path


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture
def memory_db():
    """Initialize in-memory SQLite with all tables; reset afterwards."""
    from database import initialize_database, reset_engine

    reset_engine()
    initialize_database(':memory:')
    yield
    reset_engine()


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

@pytest.fixture
def mock_config(temp_dir):
    """Create a mock ConfigLoader for testing."""
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {
        'environment': 'test',
        'debug': True,
        'log_dir': temp_dir / 'logs',
        'log_level': 'INFO',
        'log_console': False,
        'database_url': 'sqlite:///:memory:',
        'cache_ttl_seconds': 300,
        'max_resolution_passes': 100,
        'search_limit': 50,
        'json_indent': 2,
    }.get(key, default)
    return config


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def reset_singletons():
    """Reset the ConfigLoader singleton around a test."""
    from config_loader import ConfigLoader

    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def restore_logging():
    """Restore root logger handlers and level after a test."""
    import logging

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
