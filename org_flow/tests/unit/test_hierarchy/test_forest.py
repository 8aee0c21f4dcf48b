# Path: org_flow/tests/unit/test_hierarchy/test_forest.py
"""
Tests for the Forest result and its report.
"""

import json
import pytest
import sys
from pathlib import Path

# Add org_flow to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from process.hierarchy.forest import Forest, BuildReport
from process.hierarchy.tree_builder import HierarchyBuilder
from fixtures.sample_data import make_record


@pytest.fixture
def company_forest(company_records):
    return HierarchyBuilder().build(company_records)


class TestBuildReport:
    """Test report properties and notices."""

    def test_clean_report_has_no_notices(self):
        assert BuildReport().notices() == []

    def test_orphan_count(self):
        report = BuildReport(missing_parent_orphans=1, circular_orphans=2, pass_limit_orphans=3)
        assert report.orphan_count == 6

    def test_dropped_counts(self):
        report = BuildReport(duplicate_organizations=1, duplicate_positions=2,
                             unattached_positions=3)
        assert report.dropped_organizations == 1
        assert report.dropped_positions == 5

    def test_notices(self):
        report = BuildReport(circular_orphans=2, duplicate_positions=1, unsupported_kind=4)
        notices = report.notices()
        assert any('form circular reporting lines' in n for n in notices)
        assert '1 duplicate rows were ignored' in notices
        assert '4 rows had an unsupported object type' in notices


class TestForestIteration:
    """Test iteration helpers."""

    def test_iter_nodes_preorder(self, company_forest):
        ids = [n.id for n in company_forest.iter_nodes()]
        assert ids == ['1000', '1100', '1110', '1200', '2000']

    def test_iter_positions(self, company_forest):
        ids = [p.id for p in company_forest.iter_positions()]
        assert ids == ['9001', '9002', '9003', '9004']

    def test_iter_at_level(self, company_forest):
        assert [n.id for n in company_forest.iter_at_level(1)] == ['1100', '1200']

    def test_len_and_iter(self, company_forest):
        assert len(company_forest) == 5
        assert [n.id for n in company_forest][0] == '1000'

    def test_empty(self):
        assert Forest().is_empty
        assert len(Forest()) == 0


class TestForestExport:
    """Test dictionary, JSON and text output."""

    def test_to_dict(self, company_forest):
        data = company_forest.to_dict()

        assert set(data) == {'metadata', 'statistics', 'report', 'orphan_ids', 'roots'}
        assert data['statistics']['total_organizations'] == 5
        assert data['orphan_ids'] == []
        assert [r['id'] for r in data['roots']] == ['1000', '2000']
        assert data['metadata']['notices'] == []

    def test_to_json(self, company_forest):
        parsed = json.loads(company_forest.to_json())
        assert parsed['roots'][0]['children'][0]['name'] == 'Finance'

    def test_to_json_file(self, company_forest, temp_dir):
        path = temp_dir / 'out' / 'forest.json'
        company_forest.to_json_file(path, indent=4)

        assert path.exists()
        parsed = json.loads(path.read_text(encoding='utf-8'))
        assert parsed['statistics']['root_count'] == 2

    def test_orphans_listed_by_id(self):
        forest = HierarchyBuilder().build([make_record('A', 'O', parent='gone')])
        data = forest.to_dict()
        assert data['orphan_ids'] == ['A']
        assert data['roots'][0]['orphan'] is True
        assert len(data['metadata']['notices']) == 1

    def test_to_text_separates_roots(self, company_forest):
        text = company_forest.to_text()
        blocks = text.split('\n\n')
        assert len(blocks) == 2
        assert blocks[0].startswith('Head Office (Alice Chief)')
        assert blocks[1].startswith('Subsidiary')

    def test_to_flat_list(self, company_forest):
        rows = company_forest.to_flat_list()
        by_id = {row['id']: row for row in rows}

        assert len(rows) == 9
        assert by_id['1110']['path'] == 'Head Office > Finance > Treasury'
        assert by_id['9002']['kind'] == 'position'
        assert by_id['9002']['path'] == 'Head Office > Finance > Treasury > Treasury Analyst'
        assert by_id['9002']['holder'] == ''

    def test_str(self, company_forest):
        assert str(company_forest) == (
            'Forest(2 roots, 5 organizations, 4 positions, depth 2)'
        )
