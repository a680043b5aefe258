"""Two-phase greedy partitioning of weighted items onto workers.

Phase A (direct): when there are no more items than workers, every item gets a
worker of its own, in input order.

Phase B (greedy): otherwise the first `worker_count` items seed one worker each
and every remaining item, in input order, goes to the worker whose placement
yields the lowest aggregate skew. Candidates are evaluated in worker creation
order and the argmin is an explicit linear scan, with the tie-break rule
deciding which candidate keeps the slot when two objective values are equal.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from loadsplit import stats as stats_module
from loadsplit.errors import InvalidArgumentError
from loadsplit.stats import LoadStatistics
from loadsplit.worker import Item, Worker


logger = logging.getLogger(__name__)


class Phase(str, Enum):
    DIRECT = 'direct'
    GREEDY = 'greedy'


class TieBreak(str, Enum):
    """Which candidate wins when two placements give exactly the same skew.

    FIRST keeps the lowest worker index. LAST lets later candidates overwrite
    earlier ones, reproducing what a skew-keyed sorted map would return.
    """

    FIRST = 'first'
    LAST = 'last'


class Strategy(str, Enum):
    """How a candidate placement is evaluated.

    CLOSED_FORM recomputes the objective from worker totals without touching
    any worker. SIMULATE adds the item to the worker, refreshes the whole set,
    reads the aggregate skew and removes the item again.
    """

    CLOSED_FORM = 'closed-form'
    SIMULATE = 'simulate'


@dataclass
class Assignment:
    """Result of a partitioning run."""

    workers: list[Worker]
    phase: Phase
    tie_break: TieBreak
    statistics: LoadStatistics

    @property
    def totals(self) -> list[int | float]:
        return [w.total_weight for w in self.workers]

    @property
    def aggregate_skew(self) -> float:
        return stats_module.aggregate_skew(self.workers)

    @property
    def item_count(self) -> int:
        return sum(len(w) for w in self.workers)

    def as_mapping(self) -> dict[int, list[Item]]:
        return {w.worker_id: list(w.assigned) for w in self.workers}


def normalize_items(items: Iterable[Item | tuple]) -> list[Item]:
    """Accept Item objects or (handle, weight) pairs and validate them.

    Raises:
        InvalidArgumentError: On an empty list, a bad weight, an unhashable or repeated
            handle, or a total weight too large to represent
    """
    normalized: list[Item] = []
    seen = set()
    for entry in items:
        if isinstance(entry, Item):
            item = entry
        else:
            try:
                handle, weight = entry
            except (TypeError, ValueError):
                raise InvalidArgumentError(f'Expected an Item or a (handle, weight) pair, got {entry!r}') from None
            item = Item(handle, weight)
        try:
            duplicate = item.handle in seen
        except TypeError:
            raise InvalidArgumentError(f'Item handle must be hashable, got {item.handle!r}') from None
        if duplicate:
            raise InvalidArgumentError(f'Item {item.handle!r} appears more than once')
        seen.add(item.handle)
        normalized.append(item)

    if not normalized:
        raise InvalidArgumentError('Cannot partition an empty item list')
    try:
        total = math.fsum(item.weight for item in normalized)
    except OverflowError:
        total = math.inf
    if not math.isfinite(total):
        raise InvalidArgumentError('Total weight of the items is too large to represent')
    return normalized


class Partitioner:
    """Assigns items to a fixed number of workers, balancing total weight.

    A Partitioner holds only configuration; every call to partition() builds
    fresh workers, so one instance can be reused across runs.
    """

    def __init__(
        self,
        worker_count: int,
        tie_break: TieBreak | str = TieBreak.FIRST,
        strategy: Strategy | str = Strategy.CLOSED_FORM,
    ):
        """
        Args:
            worker_count: Number of workers to spread items over (>= 1)
            tie_break: Rule for equal objective values, see TieBreak
            strategy: Candidate evaluation method, see Strategy

        Raises:
            InvalidArgumentError: If worker_count is not a positive integer or
                an option value is unknown
        """
        if isinstance(worker_count, bool) or not isinstance(worker_count, int) or worker_count < 1:
            raise InvalidArgumentError(f'Worker count must be a positive integer, got {worker_count!r}')
        try:
            self.tie_break = TieBreak(tie_break)
            self.strategy = Strategy(strategy)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from None
        self.worker_count = worker_count

    def partition(self, items: Iterable[Item | tuple]) -> Assignment:
        """Partition items over the configured number of workers.

        Args:
            items: Ordered Item objects or (handle, weight) pairs

        Returns:
            Assignment with min(worker_count, len(items)) workers
        """
        items = normalize_items(items)

        if len(items) <= self.worker_count:
            workers = self._seed(items)
            logger.debug(f'[PARTITION] Direct assignment of {len(items)} items')
            return Assignment(
                workers=workers,
                phase=Phase.DIRECT,
                tie_break=self.tie_break,
                statistics=stats_module.refresh(workers),
            )

        workers = self._seed(items[: self.worker_count])
        current = stats_module.refresh(workers)
        logger.debug(
            f'[PARTITION] Seeded {len(workers)} workers, '
            f'greedy placement of {len(items) - len(workers)} remaining items'
        )

        for item in items[self.worker_count :]:
            index = self.best_worker(workers, item)
            workers[index].add_item(item)
            current = stats_module.refresh(workers)
            logger.debug(
                f'[PARTITION] {item.handle} ({item.weight}) -> worker {workers[index].worker_id}, '
                f'mean={current.mean_weight:.2f} max={current.max_weight}'
            )

        return Assignment(workers=workers, phase=Phase.GREEDY, tie_break=self.tie_break, statistics=current)

    def best_worker(self, workers: Sequence[Worker], item: Item) -> int:
        """Index of the worker whose taking `item` gives the lowest aggregate skew.

        The worker set is left exactly as it was found.
        """
        if not workers:
            raise InvalidArgumentError('Cannot place an item without workers')
        candidates = self.candidate_skews(workers, item)

        best_index = 0
        best_skew = candidates[0]
        for index, skew in enumerate(candidates[1:], start=1):
            if skew < best_skew or (skew == best_skew and self.tie_break is TieBreak.LAST):
                best_index, best_skew = index, skew
        return best_index

    def candidate_skews(self, workers: Sequence[Worker], item: Item) -> list[float]:
        """Aggregate skew of placing `item` on each worker, in worker order."""
        if self.strategy is Strategy.SIMULATE:
            return [self._simulate(workers, worker, item) for worker in workers]

        totals = [w.total_weight for w in workers]
        return [stats_module.placement_skew(totals, index, item.weight) for index in range(len(totals))]

    @staticmethod
    def _simulate(workers: Sequence[Worker], worker: Worker, item: Item) -> float:
        # Adding then subtracting a float weight does not always round-trip
        saved_total = worker.total_weight
        worker.add_item(item)
        try:
            stats_module.refresh(workers)
            return stats_module.aggregate_skew(workers)
        finally:
            worker.remove_item(item)
            worker.total_weight = saved_total
            stats_module.refresh(workers)

    @staticmethod
    def _seed(items: Sequence[Item]) -> list[Worker]:
        return [Worker(worker_id, item) for worker_id, item in enumerate(items, start=1)]


def partition(
    items: Iterable[Item | tuple],
    worker_count: int,
    tie_break: TieBreak | str = TieBreak.FIRST,
    strategy: Strategy | str = Strategy.CLOSED_FORM,
) -> Assignment:
    """Shortcut for Partitioner(worker_count, tie_break, strategy).partition(items)."""
    return Partitioner(worker_count, tie_break=tie_break, strategy=strategy).partition(items)
