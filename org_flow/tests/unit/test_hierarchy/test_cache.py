# Path: org_flow/tests/unit/test_hierarchy/test_cache.py
"""
Tests for the CachedForest value.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add org_flow to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from process.hierarchy.cache import CachedForest, DEFAULT_CACHE_TTL_SECONDS
from process.hierarchy.tree_builder import HierarchyBuilder


BUILT_AT = datetime(2024, 1, 1, 12, 0, 0)


class TestCachedForest:
    """Test freshness and wrapping."""

    def test_wrap_builds_index(self, chain_records):
        forest = HierarchyBuilder().build(chain_records)
        cached = CachedForest.wrap(forest, timedelta(seconds=60), built_at=BUILT_AT)

        assert cached.forest is forest
        assert cached.index.lookup_by_id('C') is not None

    def test_fresh_within_ttl(self, chain_records):
        forest = HierarchyBuilder().build(chain_records)
        cached = CachedForest.wrap(forest, timedelta(seconds=60), built_at=BUILT_AT)

        assert cached.is_fresh(BUILT_AT + timedelta(seconds=59))
        assert not cached.is_fresh(BUILT_AT + timedelta(seconds=60))

    def test_age_and_expiry(self, chain_records):
        forest = HierarchyBuilder().build(chain_records)
        cached = CachedForest.wrap(forest, timedelta(seconds=60), built_at=BUILT_AT)

        assert cached.age(BUILT_AT + timedelta(seconds=30)) == timedelta(seconds=30)
        assert cached.expires_at() == BUILT_AT + timedelta(seconds=60)

    def test_default_ttl(self, chain_records):
        cached = CachedForest(forest=HierarchyBuilder().build(chain_records), built_at=BUILT_AT)
        assert cached.ttl == timedelta(seconds=DEFAULT_CACHE_TTL_SECONDS)
        assert cached.index is None
