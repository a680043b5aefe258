"""Load statistics and the aggregate skew objective.

Statistics are plain values computed on demand from a worker set (or from the
worker totals alone) and passed explicitly into skew computation. Nothing here
keeps state between calls.

Sums go through math.fsum, which is correctly rounded, so the aggregate skew of
a worker set does not depend on the order the workers are visited in. Two
placements that are mirror images of each other therefore produce exactly equal
objective values, which keeps tie-breaking well defined.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loadsplit.errors import InvalidArgumentError
from loadsplit.worker import Worker


@dataclass(frozen=True)
class LoadStatistics:
    """Mean and maximum total weight over a worker set."""

    worker_count: int
    total_weight: float
    mean_weight: float
    max_weight: float

    @classmethod
    def from_totals(cls, totals: Iterable[float]) -> 'LoadStatistics':
        totals = list(totals)
        if not totals:
            raise InvalidArgumentError('Load statistics need at least one worker')
        try:
            total = math.fsum(totals)
        except OverflowError:
            raise InvalidArgumentError('Total weight of the workers is too large to represent') from None
        return cls(
            worker_count=len(totals),
            total_weight=total,
            mean_weight=total / len(totals),
            max_weight=max(totals),
        )

    @classmethod
    def compute(cls, workers: Iterable[Worker]) -> 'LoadStatistics':
        return cls.from_totals(w.total_weight for w in workers)

    def skew_of(self, total_weight: float) -> float:
        """Relative deviation of a total from the mean, normalized by the max.

        A max of zero means every worker is empty, which is perfectly balanced.
        """
        if self.max_weight == 0:
            return 0.0
        return (total_weight - self.mean_weight) / self.max_weight


def refresh(workers: Sequence[Worker]) -> LoadStatistics:
    """Recompute statistics for the worker set and refresh every worker's skew."""
    stats = LoadStatistics.compute(workers)
    for worker in workers:
        worker.refresh_skew(stats)
    return stats


def aggregate_skew(workers: Iterable[Worker]) -> float:
    """Sum of absolute worker skews.

    Reads the cached skew of each worker, so refresh() must have been called
    since the last change to the worker set.
    """
    return math.fsum(abs(w.skew) for w in workers)


def aggregate_skew_for_totals(totals: Sequence[float]) -> float:
    """Aggregate skew computed from worker totals alone."""
    stats = LoadStatistics.from_totals(totals)
    return math.fsum(abs(stats.skew_of(t)) for t in totals)


def placement_skew(totals: Sequence[float], index: int, weight: float) -> float:
    """Aggregate skew that adding `weight` to worker `index` would produce.

    Args:
        totals: Current total weight of every worker, in worker order
        index: Position of the candidate worker in `totals`
        weight: Weight of the item being placed

    Returns:
        The objective value of the candidate placement; `totals` is not modified
    """
    candidate = list(totals)
    candidate[index] += weight
    return aggregate_skew_for_totals(candidate)
