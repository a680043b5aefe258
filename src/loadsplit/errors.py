"""Exception hierarchy for loadsplit"""


class LoadSplitError(Exception):
    """Base class for all loadsplit errors."""


class InvalidArgumentError(LoadSplitError, ValueError):
    """Raised when partitioning input violates the contract.

    Zero workers, an empty item list, negative weights and duplicate items are
    all rejected before any computation starts.
    """


class ItemNotFoundError(LoadSplitError, LookupError):
    """Raised when removing an item that a worker does not hold.

    Only speculative placement ever removes items, so this always indicates
    broken bookkeeping rather than bad input.
    """


class ScanError(LoadSplitError):
    """Raised when a directory cannot provide any items to partition."""
