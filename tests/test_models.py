"""Tests for response models and CLI rendering"""

import json

from loadsplit.models import PartitionRequest, PartitionResponse
from loadsplit.partitioner import Strategy, TieBreak, partition


def build_response(items, workers, **kwargs):
    assignment = partition(items, workers)
    return PartitionResponse.from_assignment(
        assignment, requested_workers=workers, strategy=Strategy.CLOSED_FORM, elapsed=0.001, **kwargs
    )


class TestPartitionResponse:
    """Tests for PartitionResponse."""

    def test_from_assignment(self):
        response = build_response([('a', 100), ('b', 10), ('c', 10), ('d', 10), ('e', 10)], 2, path='/data')
        assert response.path == '/data'
        assert response.phase.value == 'greedy'
        assert response.item_count == 5
        assert response.total_weight == 140
        assert response.mean_weight == 70
        assert response.max_weight == 100
        assert [w.worker for w in response.workers] == [1, 2]
        assert response.workers[0].items == ['a']
        assert response.workers[1].items == ['b', 'c', 'd', 'e']
        assert response.workers[1].total_weight == 40

    def test_to_cli_lines(self):
        response = build_response([('a', 1), ('b', 2), ('c', 3)], 4)
        assert response.to_cli() == 'Worker 1: [a]\nWorker 2: [b]\nWorker 3: [c]'

    def test_to_cli_verbose(self):
        response = build_response([('a', 100), ('b', 10), ('c', 10)], 2, path='/data')
        output = response.to_cli(verbose=True)
        assert 'Path: /data' in output
        assert 'Items: 3' in output
        assert 'Workers: 2 of 2 (greedy)' in output
        assert 'Aggregate skew:' in output
        assert 'Worker 1: [a] (100.00 B, skew +' in output

    def test_to_cli_colorized(self):
        response = build_response([('a', 1)], 1)
        assert '\033[' in response.to_cli(colorize=True)
        assert '\033[' not in response.to_cli(colorize=False)

    def test_json_round_trip(self):
        response = build_response([('a', 5), ('b', 5), ('c', 5)], 2)
        data = json.loads(response.model_dump_json())
        assert data['phase'] == 'greedy'
        assert data['tie_break'] == 'first'
        assert data['strategy'] == 'closed-form'
        assert PartitionResponse.model_validate(data) == response


class TestPartitionRequest:
    """Tests for PartitionRequest defaults and parsing."""

    def test_defaults(self):
        request = PartitionRequest(items=[{'handle': 'a', 'weight': 1}])
        assert request.workers == 4
        assert request.tie_break is TieBreak.FIRST
        assert request.strategy is Strategy.CLOSED_FORM

    def test_enum_values_parsed(self):
        request = PartitionRequest(items=[], workers=2, tie_break='last', strategy='simulate')
        assert request.tie_break is TieBreak.LAST
        assert request.strategy is Strategy.SIMULATE
