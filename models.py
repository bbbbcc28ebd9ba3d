"""
Data models for ReceiptSplit
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

ZERO = Decimal("0.00")


@dataclass
class LineItem:
    """One receipt line as confirmed by the user"""
    name: str
    quantity: int
    price: Decimal  # total price for the full quantity


@dataclass
class Bill:
    """Confirmed bill handed to the splitting engine"""
    items: List[LineItem]
    subtotal: Decimal
    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Decimal = ZERO
    currency: str = "USD"


@dataclass(frozen=True)
class Unit:
    """A single priced piece of a line item, selectable by one guest"""
    id: str
    original_id: str
    name: str
    price: Decimal
    is_split: bool = False
    split_part: Optional[int] = None
    split_total: Optional[int] = None


@dataclass(frozen=True)
class GuestRecord:
    """Settled cost breakdown for one guest"""
    name: str
    items: Tuple[Unit, ...]
    subtotal: Decimal
    tax: Decimal
    tip: Decimal
    total: Decimal


@dataclass(frozen=True)
class Report:
    """Settlement of all guests against the bill"""
    guests: Tuple[GuestRecord, ...]
    subtotal: Decimal
    tax: Decimal
    tip: Decimal
    total: Decimal
    total_collected: Decimal
    unassigned_items: Tuple[Unit, ...]
    unassigned_amount: Decimal
    complete: bool
    difference: Decimal  # bill total - collected
    tolerance: Decimal
    balanced: bool
    currency: str = "USD"
    exchange_rate: Decimal = Decimal("1")


@dataclass(frozen=True)
class EvenSplit:
    """Result of splitting a bill evenly, without item assignment"""
    subtotal: Decimal
    tax: Decimal
    tip: Decimal
    total: Decimal
    people: int
    per_person: Decimal
    shares: Tuple[Decimal, ...]
    tip_percent: Optional[Decimal] = None


@dataclass
class Settings:
    """User preferences"""
    currency: str = "USD"
    tip_presets: List[int] = field(default_factory=lambda: [0, 15, 20])
    tolerance_per_guest: Decimal = Decimal("0.01")
