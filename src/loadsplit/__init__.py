"""loadsplit - static greedy partitioning of weighted files across workers"""

from loadsplit.__version__ import __version__
from loadsplit.errors import InvalidArgumentError, ItemNotFoundError, LoadSplitError, ScanError
from loadsplit.partitioner import Assignment, Partitioner, Phase, Strategy, TieBreak, partition
from loadsplit.stats import LoadStatistics, aggregate_skew
from loadsplit.worker import Item, Worker


__all__ = [
    '__version__',
    'Assignment',
    'InvalidArgumentError',
    'Item',
    'ItemNotFoundError',
    'LoadSplitError',
    'LoadStatistics',
    'Partitioner',
    'Phase',
    'ScanError',
    'Strategy',
    'TieBreak',
    'Worker',
    'aggregate_skew',
    'partition',
]
