"""
Item expansion and splitting for ReceiptSplit
"""
from __future__ import annotations
import logging
from typing import List, Sequence, Tuple
from decimal import Decimal

from errors import InvalidSplitCount, UnitNotSplittable
from models import LineItem, Unit
from utils import MAX_QUANTITY, ZERO, safe_int, split_amount, to_safe_decimal

logger = logging.getLogger(__name__)


def expand_items(items: Sequence[LineItem]) -> Tuple[List[Unit], Decimal]:
    """
    Expand line items into one Unit per quantity unit.
    Returns (units, recalculated subtotal). Unit ids depend only on the
    item and unit index, so expanding unchanged input twice gives the same ids.
    """
    units: List[Unit] = []
    subtotal = ZERO
    for index, item in enumerate(items):
        quantity = safe_int(item.quantity, maximum=MAX_QUANTITY)
        price = to_safe_decimal(item.price)
        if quantity != item.quantity or price != item.price:
            logger.debug("Coerced item %d (%r): quantity=%s price=%s", index, item.name, quantity, price)
        subtotal += price
        original_id = f"item-{index}"
        for i, unit_price in enumerate(split_amount(price, quantity)):
            units.append(Unit(
                id=f"{original_id}-{i}",
                original_id=original_id,
                name=item.name,
                price=unit_price,
            ))
    return units, subtotal


def _validate_split_count(n) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or not 2 <= n <= MAX_QUANTITY:
        raise InvalidSplitCount(n)
    return n


def split_unit(pool: Sequence[Unit], unit_id: str, n: int) -> Tuple[List[Unit], List[Unit]]:
    """
    Replace one unsplit unit in pool with n fractional units.
    Returns (new pool, new units). Fragments are kept next to earlier
    fragments of the same original item, otherwise they take the unit's slot.
    """
    n = _validate_split_count(n)
    position = next((i for i, u in enumerate(pool) if u.id == unit_id), None)
    if position is None:
        raise UnitNotSplittable(f"Unit {unit_id!r} is not in the pool")
    target = pool[position]
    if target.is_split:
        raise UnitNotSplittable(f"Unit {unit_id!r} has already been split")

    parts = [
        Unit(
            id=f"{target.id}-split-{i}",
            original_id=target.original_id,
            name=f"{i}/{n} {target.name}",
            price=price,
            is_split=True,
            split_part=i,
            split_total=n,
        )
        for i, price in enumerate(split_amount(target.price, n), start=1)
    ]

    remaining = [u for u in pool if u.id != unit_id]
    insert_at = position
    sibling = next(
        (i for i, u in enumerate(remaining) if u.original_id == target.original_id and u.is_split),
        None,
    )
    if sibling is not None:
        last = sibling
        while (
            last + 1 < len(remaining)
            and remaining[last + 1].original_id == target.original_id
            and remaining[last + 1].is_split
        ):
            last += 1
        insert_at = last + 1

    logger.info("Split %s (%s) into %d parts", target.id, target.name, n)
    return remaining[:insert_at] + parts + remaining[insert_at:], parts
