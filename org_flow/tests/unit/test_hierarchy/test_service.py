# Path: org_flow/tests/unit/test_hierarchy/test_service.py
"""
Tests for the cached org flowchart service.
"""

import pytest
import sys
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from pathlib import Path

# Add org_flow to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from process.hierarchy.constants import SearchKind
from process.hierarchy.errors import RecordSourceError
from process.hierarchy.service import OrgFlowchartService


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


class CountingSource:
    """Record source that counts calls."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return list(self.rows)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source(export_rows):
    return CountingSource(export_rows)


@pytest.fixture
def service(source, clock):
    return OrgFlowchartService(source, ttl=timedelta(seconds=60), clock=clock)


class TestServiceInit:
    """Test construction."""

    def test_requires_callable(self):
        with pytest.raises(TypeError):
            OrgFlowchartService(['not', 'callable'])

    def test_from_config(self, source, mock_config):
        service = OrgFlowchartService.from_config(source, mock_config)
        assert service.ttl == timedelta(seconds=300)
        assert service.builder.max_passes == 100

    def test_no_cache_initially(self, service):
        assert service.cache_status() == {'cached': False}


class TestGetHierarchy:
    """Test cache hits, misses and expiry."""

    def test_first_call_builds(self, service, source):
        result = service.get_hierarchy()

        assert result.source == 'source'
        assert not result.from_cache
        assert result.forest.statistics.total_organizations == 4
        assert source.calls == 1

    def test_second_call_uses_cache(self, service, source):
        first = service.get_hierarchy()
        second = service.get_hierarchy()

        assert second.source == 'cache'
        assert second.forest is first.forest
        assert source.calls == 1

    def test_expired_cache_rebuilds(self, service, source, clock):
        first = service.get_hierarchy()
        clock.advance(60)
        second = service.get_hierarchy()

        assert second.source == 'source'
        assert second.forest is not first.forest
        assert source.calls == 2
        assert service.rebuild_count == 2

    def test_force_refresh(self, service, source):
        service.get_hierarchy()
        result = service.get_hierarchy(force_refresh=True)

        assert result.source == 'source'
        assert source.calls == 2

    def test_clear_cache(self, service, source):
        service.get_hierarchy()
        service.clear_cache()

        assert service.cache_status() == {'cached': False}
        assert service.get_hierarchy().source == 'source'
        assert source.calls == 2

    def test_cache_status(self, service, clock):
        service.get_hierarchy()
        clock.advance(15)
        status = service.cache_status()

        assert status['cached'] is True
        assert status['fresh'] is True
        assert status['age_seconds'] == 15.0

    def test_source_failure(self, clock):
        def broken():
            raise ConnectionError("database unreachable")

        service = OrgFlowchartService(broken, clock=clock)
        with pytest.raises(RecordSourceError) as exc_info:
            service.get_hierarchy()
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_failure_keeps_previous_cache(self, clock, export_rows):
        state = {'fail': False}

        def flaky():
            if state['fail']:
                raise OSError("file locked")
            return export_rows

        service = OrgFlowchartService(flaky, ttl=timedelta(seconds=10), clock=clock)
        first = service.get_hierarchy()
        state['fail'] = True

        with pytest.raises(RecordSourceError):
            service.get_hierarchy(force_refresh=True)
        assert service.get_hierarchy().forest is first.forest


class TestQueries:
    """Test queries served from the cache."""

    def test_get_branch(self, service):
        branch = service.get_branch('50000002')
        assert branch.name == 'Finance Directorate'
        assert [c.id for c in branch.children] == ['50000004']

    def test_get_branch_missing(self, service):
        assert service.get_branch('nope') is None

    def test_search(self, service):
        results = service.search('treasury', SearchKind.ORGANIZATION)
        assert [r.entity.id for r in results] == ['50000004']
        assert results[0].path == ['Head Office', 'Finance Directorate']

    def test_children_of(self, service):
        expansion = service.children_of('50000001')
        assert [c.id for c in expansion.children] == ['50000002']
        assert service.children_of('nope') is None

    def test_roots(self, service):
        assert [r.id for r in service.roots()] == ['50000001', '50000006']

    def test_queries_share_one_build(self, service, source):
        service.search('finance')
        service.children_of('50000001')
        service.get_branch('50000001')
        assert source.calls == 1


class TestBackgroundRefresh:
    """Test rebuilding on a caller-owned executor."""

    def test_refresh_swaps_forest(self, service, source):
        old = service.get_hierarchy().forest
        old_roots = list(old.roots)

        with ThreadPoolExecutor(max_workers=1) as executor:
            result = service.refresh_in_background(executor).result(timeout=10)

        assert result.source == 'source'
        assert result.forest is not old
        assert old.roots == old_roots
        assert service.get_hierarchy().forest is result.forest
        assert source.calls == 2
