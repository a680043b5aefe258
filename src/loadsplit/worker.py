"""Work items and the workers that accumulate them"""

import math
from collections.abc import Hashable, Iterator
from dataclasses import dataclass

from loadsplit.errors import InvalidArgumentError, ItemNotFoundError


@dataclass(frozen=True)
class Item:
    """A unit of work with a fixed, non-negative weight.

    Attributes:
        handle: Opaque identifier of the work unit (a file path for scanned items)
        weight: Weight of the item, in bytes for files
    """

    handle: Hashable
    weight: int | float

    def __post_init__(self):
        weight = self.weight
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise InvalidArgumentError(f'Weight of {self.handle!r} must be a number, got {weight!r}')
        try:
            finite = math.isfinite(weight)
        except OverflowError:
            finite = False
        if not finite or weight < 0:
            raise InvalidArgumentError(f'Weight of {self.handle!r} must be a finite non-negative number, got {weight}')

    def __str__(self) -> str:
        return str(self.handle)


class Worker:
    """A weighted bag of items.

    The running total is maintained incrementally by add_item/remove_item.
    The skew is only meaningful right after refresh_skew() was called with
    statistics computed over the current worker set.
    """

    def __init__(self, worker_id: int, item: Item | None = None):
        self.worker_id = worker_id
        self.assigned: list[Item] = []
        self.total_weight: int | float = 0
        self.skew: float = 0.0
        if item is not None:
            self.add_item(item)

    def add_item(self, item: Item) -> None:
        self.assigned.append(item)
        self.total_weight += item.weight

    def remove_item(self, item: Item) -> None:
        try:
            self.assigned.remove(item)
        except ValueError:
            raise ItemNotFoundError(f'Worker {self.worker_id} does not hold {item.handle!r}') from None
        self.total_weight -= item.weight

    def refresh_skew(self, stats) -> float:
        """Recompute skew from the given LoadStatistics and return it."""
        self.skew = stats.skew_of(self.total_weight)
        return self.skew

    def copy(self) -> 'Worker':
        """Independent clone, safe to mutate while this worker is in use elsewhere."""
        clone = Worker(self.worker_id)
        clone.assigned = list(self.assigned)
        clone.total_weight = self.total_weight
        clone.skew = self.skew
        return clone

    def __len__(self) -> int:
        return len(self.assigned)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.assigned)

    def __contains__(self, item) -> bool:
        return item in self.assigned

    def __repr__(self) -> str:
        return f'Worker(id={self.worker_id}, items={len(self.assigned)}, total={self.total_weight}, skew={self.skew:.4f})'
