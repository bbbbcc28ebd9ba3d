"""
Business logic and computations for ReceiptSplit
"""
from __future__ import annotations
from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional, Sequence

from models import Bill, EvenSplit, GuestRecord, LineItem, Report, Unit
from utils import MAX_QUANTITY, ZERO, round_money, safe_int, split_amount, to_safe_decimal


def proportional_share(amount: Decimal, assigned_before: Decimal, subtotal: Decimal, denominator: Decimal) -> Decimal:
    """
    Share of a bill-wide amount (tax, tip) for a guest whose items total
    `subtotal`, after `assigned_before` of the bill has already been settled.
    Rounded cumulatively so consecutive guests never lose or gain a cent.
    """
    if denominator <= ZERO:
        return ZERO
    before = round_money(amount * assigned_before / denominator)
    after = round_money(amount * (assigned_before + subtotal) / denominator)
    return after - before


def make_guest_record(name: str, items: Sequence[Unit], bill: Bill, assigned_before: Decimal) -> GuestRecord:
    """Compute a guest's subtotal, proportional tax and tip, and total"""
    subtotal = sum((u.price for u in items), ZERO)
    tax = proportional_share(bill.tax, assigned_before, subtotal, bill.subtotal)
    tip = proportional_share(bill.tip, assigned_before, subtotal, bill.subtotal)
    return GuestRecord(
        name=name,
        items=tuple(items),
        subtotal=subtotal,
        tax=tax,
        tip=tip,
        total=subtotal + tax + tip,
    )


# ---------- Even split ----------

def even_split(subtotal: Any, tax: Any, tip: Any, people: Any) -> Decimal:
    """Per-person amount when the whole bill is shared evenly"""
    total = to_safe_decimal(subtotal) + to_safe_decimal(tax) + to_safe_decimal(tip)
    return round_money(total / safe_int(people, maximum=MAX_QUANTITY))


def build_even_split(subtotal: Any, tax: Any, tip: Any, people: Any, tip_percent: Any = None) -> EvenSplit:
    """
    Even split with exact per-person shares.
    When tip_percent is given the tip is that percentage of the subtotal.
    """
    subtotal = to_safe_decimal(subtotal)
    tax = to_safe_decimal(tax)
    percent: Optional[Decimal] = None
    if tip_percent is not None:
        percent = to_safe_decimal(tip_percent)
        tip = round_money(subtotal * percent / 100)
    else:
        tip = to_safe_decimal(tip)
    people = safe_int(people, maximum=MAX_QUANTITY)
    total = subtotal + tax + tip
    return EvenSplit(
        subtotal=subtotal,
        tax=tax,
        tip=tip,
        total=total,
        people=people,
        per_person=round_money(total / people),
        shares=tuple(split_amount(total, people)),
        tip_percent=percent,
    )


# ---------- Bill editing ----------

def items_subtotal(items: Sequence[LineItem]) -> Decimal:
    """Sum of line item prices"""
    return sum((to_safe_decimal(i.price) for i in items), ZERO)


def with_tip(bill: Bill, tip: Any) -> Bill:
    """Set the tip and recompute the total"""
    tip = to_safe_decimal(tip)
    return replace(bill, tip=tip, total=bill.subtotal + bill.tax + tip)


def with_tip_percent(bill: Bill, percent: Any) -> Bill:
    """Set the tip to a percentage of the subtotal"""
    return with_tip(bill, round_money(bill.subtotal * to_safe_decimal(percent) / 100))


def tip_percent(bill: Bill) -> Decimal:
    """Tip as a percentage of the subtotal, one decimal place"""
    if bill.subtotal <= ZERO:
        return Decimal("0.0")
    return (bill.tip / bill.subtotal * 100).quantize(Decimal("0.1"))


def update_item(bill: Bill, index: int, name: Optional[str] = None, quantity: Any = None, price: Any = None) -> Bill:
    """Edit one line item; unspecified fields are kept"""
    items = list(bill.items)
    item = items[index]
    if name is not None:
        item = replace(item, name=name.strip() or "Item")
    if quantity is not None:
        item = replace(item, quantity=safe_int(quantity, maximum=MAX_QUANTITY))
    if price is not None:
        item = replace(item, price=to_safe_decimal(price))
    items[index] = item
    return replace(bill, items=items)


def add_item(bill: Bill, name: str = "New Item", quantity: Any = 1, price: Any = 0) -> Bill:
    """Append a line item"""
    item = LineItem(
        name=name.strip() or "Item",
        quantity=safe_int(quantity, maximum=MAX_QUANTITY),
        price=to_safe_decimal(price),
    )
    return replace(bill, items=list(bill.items) + [item])


def remove_item(bill: Bill, index: int) -> Bill:
    """Drop a line item"""
    items = list(bill.items)
    del items[index]
    return replace(bill, items=items)


def reconcile_bill(bill: Bill) -> Bill:
    """Recompute subtotal from the items and total from subtotal, tax and tip"""
    subtotal = items_subtotal(bill.items)
    return replace(bill, subtotal=subtotal, total=subtotal + bill.tax + bill.tip)


# ---------- Settlement report ----------

def build_report(
    guests: Sequence[GuestRecord],
    bill: Bill,
    pool: Sequence[Unit],
    tolerance_per_guest: Decimal = Decimal("0.01"),
) -> Report:
    """
    Summarize guest totals against the bill.
    A non-empty pool makes the report partial: complete=False, never balanced.
    """
    collected = sum((g.total for g in guests), ZERO)
    unassigned = sum((u.price for u in pool), ZERO)
    complete = len(pool) == 0
    difference = bill.total - collected
    tolerance = tolerance_per_guest * max(1, len(guests))
    return Report(
        guests=tuple(guests),
        subtotal=bill.subtotal,
        tax=bill.tax,
        tip=bill.tip,
        total=bill.total,
        total_collected=collected,
        unassigned_items=tuple(pool),
        unassigned_amount=unassigned,
        complete=complete,
        difference=difference,
        tolerance=tolerance,
        balanced=complete and abs(difference) <= tolerance,
        currency=bill.currency,
    )


def _convert_unit(unit: Unit, rate: Decimal) -> Unit:
    return replace(unit, price=round_money(unit.price * rate))


def _convert_guest(guest: GuestRecord, rate: Decimal) -> GuestRecord:
    return GuestRecord(
        name=guest.name,
        items=tuple(_convert_unit(u, rate) for u in guest.items),
        subtotal=round_money(guest.subtotal * rate),
        tax=round_money(guest.tax * rate),
        tip=round_money(guest.tip * rate),
        total=round_money(guest.total * rate),
    )


def convert_report(report: Report, rate: Any, currency: str) -> Report:
    """
    Re-express every figure of a report in another currency.
    Display only: the report's settlement status is carried over unchanged.
    """
    rate = Decimal(str(rate))

    def conv(amount: Decimal) -> Decimal:
        return round_money(amount * rate)

    return replace(
        report,
        guests=tuple(_convert_guest(g, rate) for g in report.guests),
        subtotal=conv(report.subtotal),
        tax=conv(report.tax),
        tip=conv(report.tip),
        total=conv(report.total),
        total_collected=conv(report.total_collected),
        unassigned_items=tuple(_convert_unit(u, rate) for u in report.unassigned_items),
        unassigned_amount=conv(report.unassigned_amount),
        difference=conv(report.difference),
        tolerance=conv(report.tolerance),
        currency=currency,
        exchange_rate=report.exchange_rate * rate,
    )
