"""
Guest assignment ledger for ReceiptSplit.

One GuestLedger drives a single splitting session: guests are named one at
a time, pick the units they had from the pool, and on confirmation get an
immutable GuestRecord with their share of tax and tip. Tax and tip are
allocated against the bill's subtotal, not against what is left in the pool,
so the guest totals add up to the bill once every unit is assigned.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from computations import build_report, make_guest_record
from errors import (
    DuplicateName,
    EmptyName,
    InvalidLedgerState,
    NoItemsSelected,
    UnitNotSplittable,
    UnknownUnit,
)
from items import expand_items, split_unit
from models import Bill, GuestRecord, Report, Unit
from utils import ZERO, to_safe_decimal

logger = logging.getLogger(__name__)


class LedgerState(str, Enum):
    AWAITING_NAME = "awaiting_name"
    SELECTING_ITEMS = "selecting_items"
    ALL_ASSIGNED = "all_assigned"


class GuestLedger:
    """Item-by-item splitting session for one bill"""

    def __init__(self, bill: Bill, tolerance_per_guest: Decimal = Decimal("0.01")):
        self.bill = replace(
            bill,
            subtotal=to_safe_decimal(bill.subtotal),
            tax=to_safe_decimal(bill.tax),
            tip=to_safe_decimal(bill.tip),
            total=to_safe_decimal(bill.total),
        )
        self.tolerance_per_guest = tolerance_per_guest
        self.pool: List[Unit]
        self.pool, self.recalculated_subtotal = expand_items(self.bill.items)
        self.history: List[GuestRecord] = []
        self.current_guest: Optional[str] = None
        self._selection: List[str] = []
        self.state = LedgerState.AWAITING_NAME if self.pool else LedgerState.ALL_ASSIGNED

        if self.subtotal_drift != ZERO:
            logger.warning(
                "Bill subtotal %s differs from item total %s; allocating against the bill subtotal",
                self.bill.subtotal, self.recalculated_subtotal,
            )
        if self.bill.subtotal <= ZERO:
            logger.warning("Bill subtotal is %s; tax and tip will not be allocated", self.bill.subtotal)

    @property
    def subtotal_drift(self) -> Decimal:
        return self.recalculated_subtotal - self.bill.subtotal

    @property
    def selection(self) -> List[Unit]:
        """Units picked by the current guest, in the order they were picked"""
        by_id = {u.id: u for u in self.pool}
        return [by_id[i] for i in self._selection]

    @property
    def is_complete(self) -> bool:
        return self.state == LedgerState.ALL_ASSIGNED

    @property
    def assigned_subtotal(self) -> Decimal:
        return sum((g.subtotal for g in self.history), ZERO)

    def selection_subtotal(self) -> Decimal:
        return sum((u.price for u in self.selection), ZERO)

    def begin_guest(self, name: str) -> str:
        """Start item selection for a new guest. Names are unique, ignoring case."""
        if self.state != LedgerState.AWAITING_NAME:
            raise InvalidLedgerState(f"Cannot start a guest while {self.state.value}")
        name = (name or "").strip()
        if not name:
            raise EmptyName("Please enter a guest name")
        if any(g.name.lower() == name.lower() for g in self.history):
            raise DuplicateName(name)
        self.current_guest = name
        self.state = LedgerState.SELECTING_ITEMS
        return name

    def toggle_select(self, unit_id: str) -> bool:
        """Add unit to the current selection, or remove it if already there. Returns True if now selected."""
        if self.state != LedgerState.SELECTING_ITEMS:
            raise InvalidLedgerState(f"Cannot select items while {self.state.value}")
        if unit_id in self._selection:
            self._selection.remove(unit_id)
            return False
        if not any(u.id == unit_id for u in self.pool):
            raise UnknownUnit(f"Unit {unit_id!r} is not available")
        self._selection.append(unit_id)
        return True

    def split(self, unit_id: str, n: int) -> List[Unit]:
        """Split a pool unit into n shares; returns the new units"""
        if self.state == LedgerState.ALL_ASSIGNED:
            raise InvalidLedgerState("All items have been assigned")
        if unit_id in self._selection:
            raise UnitNotSplittable(f"Unit {unit_id!r} is selected; deselect it before splitting")
        self.pool, parts = split_unit(self.pool, unit_id, n)
        return parts

    def cancel_guest(self) -> None:
        """Abandon the current guest without recording anything"""
        if self.state != LedgerState.SELECTING_ITEMS:
            raise InvalidLedgerState(f"No guest in progress while {self.state.value}")
        self._selection = []
        self.current_guest = None
        self.state = LedgerState.AWAITING_NAME

    def confirm(self) -> GuestRecord:
        """Settle the current guest's selection and remove it from the pool"""
        if self.state != LedgerState.SELECTING_ITEMS:
            raise InvalidLedgerState(f"No guest in progress while {self.state.value}")
        if not self._selection:
            raise NoItemsSelected("Please select at least one item for this guest")

        record = make_guest_record(self.current_guest, self.selection, self.bill, self.assigned_subtotal)
        chosen = set(self._selection)
        self.pool = [u for u in self.pool if u.id not in chosen]
        self.history.append(record)
        self._selection = []
        self.current_guest = None
        self.state = LedgerState.AWAITING_NAME if self.pool else LedgerState.ALL_ASSIGNED

        logger.info(
            "Confirmed %s: %d items, subtotal=%s tax=%s tip=%s total=%s (%d units left)",
            record.name, len(record.items), record.subtotal, record.tax, record.tip, record.total, len(self.pool),
        )
        return record

    def report(self) -> Report:
        return build_report(self.history, self.bill, self.pool, self.tolerance_per_guest)
