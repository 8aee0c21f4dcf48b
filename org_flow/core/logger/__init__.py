# Path: org_flow/core/logger/__init__.py
"""
org_flow Logger Package

IPO-aware logging for the Organization Flowchart system.

Provides separate log streams for:
- INPUT layer (file reader, unit store)
- PROCESS layer (normalizer, builder, index, service)
- OUTPUT layer (JSON and text exports)
"""

from .ipo_logging import (
    IPOFilter,
    setup_ipo_logging,
    setup_from_config,
    shutdown_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'setup_from_config',
    'shutdown_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
