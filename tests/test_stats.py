"""Tests for load statistics and aggregate skew"""

import pytest

from loadsplit.errors import InvalidArgumentError
from loadsplit.stats import (
    LoadStatistics,
    aggregate_skew,
    aggregate_skew_for_totals,
    placement_skew,
    refresh,
)
from loadsplit.worker import Item, Worker


def make_workers(*totals):
    return [Worker(i, Item(f'w{i}', total)) for i, total in enumerate(totals, start=1)]


class TestLoadStatistics:
    """Tests for LoadStatistics."""

    def test_compute_mean_and_max(self):
        stats = LoadStatistics.compute(make_workers(100, 10, 40))
        assert stats.worker_count == 3
        assert stats.total_weight == 150
        assert stats.mean_weight == 50
        assert stats.max_weight == 100

    def test_from_totals_matches_compute(self):
        workers = make_workers(7, 3, 5)
        assert LoadStatistics.from_totals([7, 3, 5]) == LoadStatistics.compute(workers)

    def test_empty_worker_set_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LoadStatistics.compute([])

    def test_overflowing_totals_rejected(self):
        with pytest.raises(InvalidArgumentError, match='too large'):
            LoadStatistics.from_totals([1e308, 1e308])

    def test_skew_of(self):
        stats = LoadStatistics.from_totals([100, 20])
        assert stats.skew_of(100) == pytest.approx(0.4)
        assert stats.skew_of(20) == pytest.approx(-0.4)

    def test_skew_of_all_empty_is_zero(self):
        stats = LoadStatistics.from_totals([0, 0, 0])
        assert stats.skew_of(0) == 0.0


class TestAggregateSkew:
    """Tests for aggregate skew evaluation."""

    def test_refresh_updates_every_worker(self):
        workers = make_workers(100, 20)
        stats = refresh(workers)
        assert stats.mean_weight == 60
        assert workers[0].skew == pytest.approx(0.4)
        assert workers[1].skew == pytest.approx(-0.4)

    def test_aggregate_is_sum_of_absolute_skews(self):
        workers = make_workers(100, 20)
        refresh(workers)
        assert aggregate_skew(workers) == pytest.approx(0.8)

    def test_balanced_workers_have_zero_skew(self):
        workers = make_workers(10, 10, 10, 10)
        refresh(workers)
        assert aggregate_skew(workers) == 0.0

    def test_aggregate_is_idempotent(self):
        workers = make_workers(13, 7, 29, 1)
        refresh(workers)
        first = aggregate_skew(workers)
        assert aggregate_skew(workers) == first
        assert [w.total_weight for w in workers] == [13, 7, 29, 1]

    def test_stale_skew_until_refresh(self):
        workers = make_workers(10, 10)
        refresh(workers)
        workers[0].add_item(Item('extra', 10))
        assert aggregate_skew(workers) == 0.0
        refresh(workers)
        assert aggregate_skew(workers) > 0.0

    def test_closed_form_matches_refreshed_workers(self):
        workers = make_workers(13, 7, 29, 1)
        refresh(workers)
        assert aggregate_skew_for_totals([13, 7, 29, 1]) == aggregate_skew(workers)

    def test_closed_form_independent_of_worker_order(self):
        assert aggregate_skew_for_totals([3, 11, 17, 5]) == aggregate_skew_for_totals([17, 5, 3, 11])


class TestPlacementSkew:
    """Tests for evaluating a candidate placement from totals."""

    def test_placement_does_not_modify_totals(self):
        totals = [100, 10]
        placement_skew(totals, 1, 10)
        assert totals == [100, 10]

    def test_placement_on_lighter_worker_is_better(self):
        totals = [100, 10]
        assert placement_skew(totals, 1, 10) < placement_skew(totals, 0, 10)

    def test_placement_values(self):
        # [110, 10]: mean 60, max 110 -> 2 * 50/110; [100, 20]: mean 60, max 100 -> 2 * 40/100
        assert placement_skew([100, 10], 0, 10) == pytest.approx(100 / 110)
        assert placement_skew([100, 10], 1, 10) == pytest.approx(0.8)

    def test_matches_speculative_add(self):
        workers = make_workers(40, 25, 60)
        extra = Item('extra', 15)
        workers[1].add_item(extra)
        refresh(workers)
        assert placement_skew([40, 25, 60], 1, 15) == aggregate_skew(workers)
