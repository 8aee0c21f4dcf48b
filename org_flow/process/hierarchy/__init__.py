# Path: org_flow/process/hierarchy/__init__.py
"""
Hierarchy Package for org_flow

Reconstructs an organization as a rooted forest from flat records
(self id, parent id, type tag) and answers lookup, search and one-level
expansion queries over the result.

Components:
- normalize / normalize_records: Raw rows to canonical UnitRecords
- HierarchyBuilder: Multi-pass parent resolution into a Forest
- Forest / Node / Position: The reconstructed structure
- HierarchyIndex: Lookup by id and substring search with paths
- IncrementalExpander: Direct children of one node at a time
- CachedForest / OrgFlowchartService: Caller-side caching facade

Example:
    from process.hierarchy import HierarchyBuilder, HierarchyIndex, SearchKind

    forest = HierarchyBuilder().build_from_rows(rows)
    index = HierarchyIndex.build(forest)
    for hit in index.search('finance', SearchKind.ORGANIZATION):
        print(hit.breadcrumb)
"""

from process.hierarchy.constants import (
    UnitKind,
    SearchKind,
    OrphanReason,
    MAX_RESOLUTION_PASSES,
    DEFAULT_UNIT_NAME,
)
from process.hierarchy.errors import (
    OrgFlowError,
    MissingRequiredFieldError,
    RecordSourceError,
)
from process.hierarchy.records import (
    UnitRecord,
    NormalizationResult,
    normalize,
    normalize_records,
)
from process.hierarchy.node import Node, Position
from process.hierarchy.forest import Forest, ForestStatistics, BuildReport
from process.hierarchy.tree_builder import HierarchyBuilder
from process.hierarchy.index import HierarchyIndex, SearchResult
from process.hierarchy.expander import (
    IncrementalExpander,
    ForestExpander,
    RecordExpander,
    Expansion,
    NodeSummary,
)
from process.hierarchy.cache import CachedForest
from process.hierarchy.service import OrgFlowchartService, HierarchyResult

__all__ = [
    # Enums and constants
    'UnitKind',
    'SearchKind',
    'OrphanReason',
    'MAX_RESOLUTION_PASSES',
    'DEFAULT_UNIT_NAME',
    # Errors
    'OrgFlowError',
    'MissingRequiredFieldError',
    'RecordSourceError',
    # Records
    'UnitRecord',
    'NormalizationResult',
    'normalize',
    'normalize_records',
    # Structure
    'Node',
    'Position',
    'Forest',
    'ForestStatistics',
    'BuildReport',
    # Operations
    'HierarchyBuilder',
    'HierarchyIndex',
    'SearchResult',
    'IncrementalExpander',
    'ForestExpander',
    'RecordExpander',
    'Expansion',
    'NodeSummary',
    'CachedForest',
    'OrgFlowchartService',
    'HierarchyResult',
]
