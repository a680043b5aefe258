"""Plan building shared by the CLI and the HTTP API.

Wraps the partitioner with timing, logging and metrics, and turns the
Assignment into a PartitionResponse. The CLI runs with no-op metrics; the web
app swaps the real prometheus module in.
"""

import logging
from collections.abc import Iterable
from time import time

from loadsplit.cli import prometheus as prom
from loadsplit.errors import InvalidArgumentError, ScanError
from loadsplit.models import PartitionResponse
from loadsplit.partitioner import Partitioner, Strategy, TieBreak
from loadsplit.scanner import collect_items
from loadsplit.utils import DEFAULT_PATTERN
from loadsplit.worker import Item


logger = logging.getLogger(__name__)


def plan_items(
    items: Iterable[Item | tuple],
    worker_count: int,
    tie_break: TieBreak | str = TieBreak.FIRST,
    strategy: Strategy | str = Strategy.CLOSED_FORM,
    path: str | None = None,
) -> PartitionResponse:
    """Partition items and build the response model.

    Raises:
        InvalidArgumentError: If the partitioner rejects the input
    """
    start_time = time()
    try:
        partitioner = Partitioner(worker_count, tie_break=tie_break, strategy=strategy)
        assignment = partitioner.partition(items)
    except InvalidArgumentError as e:
        logger.debug(f'[PLAN] Rejected: {e}')
        prom.record_failure('invalid_argument')
        raise
    elapsed = time() - start_time

    response = PartitionResponse.from_assignment(
        assignment,
        requested_workers=worker_count,
        strategy=partitioner.strategy,
        elapsed=elapsed,
        path=path,
    )
    logger.info(
        f'[PLAN] {response.item_count} items over {len(response.workers)} workers '
        f'({response.phase.value}) in {elapsed:.3f}s, aggregate skew {response.aggregate_skew:.4f}'
    )
    prom.record_partition(
        item_count=response.item_count,
        total_weight=response.total_weight,
        worker_count=len(response.workers),
        skew=response.aggregate_skew,
        duration=elapsed,
    )
    return response


def plan_directory(
    directory: str,
    worker_count: int,
    pattern: str = DEFAULT_PATTERN,
    recursive: bool = False,
    tie_break: TieBreak | str = TieBreak.FIRST,
    strategy: Strategy | str = Strategy.CLOSED_FORM,
) -> PartitionResponse:
    """Scan a directory and partition the matching files by size.

    Raises:
        ScanError: If the directory yields no items
        InvalidArgumentError: If the partitioner rejects the input
    """
    try:
        items = collect_items(directory, pattern=pattern, recursive=recursive)
    except ScanError:
        prom.record_failure('scan_error')
        raise
    return plan_items(items, worker_count, tie_break=tie_break, strategy=strategy, path=directory)
