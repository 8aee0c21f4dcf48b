# Path: org_flow/core/__init__.py
"""
org_flow Core Package

Core utilities for the Organization Flowchart system.

Submodules:
    - logger: IPO-aware logging system
"""

from .logger import setup_ipo_logging

__all__ = [
    'setup_ipo_logging',
]
