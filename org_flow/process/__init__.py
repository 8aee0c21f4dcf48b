# Path: org_flow/process/__init__.py
"""
Process Layer for org_flow (Organization Flowchart)

The PROCESS layer turns flat organizational rows into a navigable forest:
- hierarchy/ - Normalization, reconstruction, lookup, search and expansion

All components follow the IPO pattern:
- Read from INPUT layer (loaders, database)
- Process data (normalization, parent resolution)
- Prepare for OUTPUT layer (JSON and text exports)
"""

from process.hierarchy import (
    HierarchyBuilder,
    HierarchyIndex,
    IncrementalExpander,
    OrgFlowchartService,
    Forest,
    Node,
    Position,
)

__all__ = [
    'HierarchyBuilder',
    'HierarchyIndex',
    'IncrementalExpander',
    'OrgFlowchartService',
    'Forest',
    'Node',
    'Position',
]
