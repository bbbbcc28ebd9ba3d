"""
Validation errors raised by the splitting engine.

All of them are user-correctable: the operation that raised leaves the
ledger exactly as it was.
"""
from __future__ import annotations

from utils import MAX_QUANTITY


class SplitError(ValueError):
    """Base class for all splitting validation errors"""


class EmptyName(SplitError):
    pass


class DuplicateName(SplitError):
    def __init__(self, name: str):
        super().__init__(f"A guest named {name!r} already exists")
        self.name = name


class NoItemsSelected(SplitError):
    pass


class InvalidSplitCount(SplitError):
    def __init__(self, count):
        super().__init__(f"Split count must be an integer from 2 to {MAX_QUANTITY}, got {count!r}")
        self.count = count


class UnitNotSplittable(SplitError):
    pass


class UnknownUnit(SplitError):
    pass


class InvalidLedgerState(SplitError):
    pass
