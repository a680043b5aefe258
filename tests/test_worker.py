"""Tests for Item and Worker"""

import math

import pytest

from loadsplit.errors import InvalidArgumentError, ItemNotFoundError
from loadsplit.stats import LoadStatistics
from loadsplit.worker import Item, Worker


class TestItem:
    """Tests for Item validation."""

    def test_item_holds_handle_and_weight(self):
        item = Item('a.dat', 42)
        assert item.handle == 'a.dat'
        assert item.weight == 42
        assert str(item) == 'a.dat'

    def test_zero_weight_allowed(self):
        assert Item('empty.dat', 0).weight == 0

    def test_float_weight_allowed(self):
        assert Item('x', 1.5).weight == 1.5

    @pytest.mark.parametrize('weight', [-1, -0.5, math.inf, math.nan])
    def test_invalid_weight_rejected(self, weight):
        with pytest.raises(InvalidArgumentError):
            Item('bad', weight)

    def test_integer_weight_beyond_float_range_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Item('huge', 10**400)

    @pytest.mark.parametrize('weight', ['10', None, True])
    def test_non_numeric_weight_rejected(self, weight):
        with pytest.raises(InvalidArgumentError):
            Item('bad', weight)

    def test_item_is_immutable(self):
        item = Item('a', 1)
        with pytest.raises(AttributeError):
            item.weight = 2


class TestWorker:
    """Tests for Worker bookkeeping."""

    def test_new_worker_with_seed_item(self):
        worker = Worker(1, Item('a', 10))
        assert worker.worker_id == 1
        assert worker.assigned == [Item('a', 10)]
        assert worker.total_weight == 10
        assert worker.skew == 0.0

    def test_empty_worker(self):
        worker = Worker(3)
        assert len(worker) == 0
        assert worker.total_weight == 0

    def test_add_item_keeps_insertion_order(self):
        worker = Worker(1)
        for name, weight in [('c', 3), ('a', 1), ('b', 2)]:
            worker.add_item(Item(name, weight))
        assert [item.handle for item in worker] == ['c', 'a', 'b']
        assert worker.total_weight == 6

    def test_remove_item_updates_total(self):
        a, b = Item('a', 10), Item('b', 5)
        worker = Worker(1, a)
        worker.add_item(b)
        worker.remove_item(a)
        assert worker.assigned == [b]
        assert worker.total_weight == 5
        assert a not in worker
        assert b in worker

    def test_remove_missing_item_raises(self):
        worker = Worker(2, Item('a', 10))
        with pytest.raises(ItemNotFoundError):
            worker.remove_item(Item('b', 10))
        assert worker.total_weight == 10
        assert len(worker) == 1

    def test_refresh_skew_uses_given_statistics(self):
        worker = Worker(1, Item('a', 30))
        stats = LoadStatistics(worker_count=2, total_weight=40, mean_weight=20.0, max_weight=30)
        assert worker.refresh_skew(stats) == pytest.approx(10 / 30)
        assert worker.skew == pytest.approx(10 / 30)

    def test_refresh_skew_with_zero_max(self):
        worker = Worker(1, Item('empty', 0))
        stats = LoadStatistics(worker_count=1, total_weight=0, mean_weight=0.0, max_weight=0)
        assert worker.refresh_skew(stats) == 0.0

    def test_copy_is_independent(self):
        worker = Worker(1, Item('a', 10))
        clone = worker.copy()
        clone.add_item(Item('b', 5))
        assert worker.total_weight == 10
        assert len(worker) == 1
        assert clone.total_weight == 15
        assert clone.worker_id == 1
