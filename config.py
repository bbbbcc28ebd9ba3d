"""
Configuration and bill loading/serialization for ReceiptSplit
"""
from __future__ import annotations
import json
import logging
import os
from decimal import Decimal
from typing import Any, Dict, Optional

from models import Bill, EvenSplit, GuestRecord, LineItem, Report, Settings, Unit
from utils import MAX_QUANTITY, app_dir, safe_int, to_safe_decimal

logger = logging.getLogger(__name__)


def dict_to_line_item(d: Dict[str, Any]) -> LineItem:
    """Build a LineItem from loosely typed JSON/CSV data"""
    name = str(d.get("name") or "").strip() or "Item"
    return LineItem(
        name=name,
        quantity=safe_int(d.get("quantity"), maximum=MAX_QUANTITY),
        price=to_safe_decimal(d.get("price")),
    )


def dict_to_bill(d: Dict[str, Any], currency: Optional[str] = None) -> Bill:
    """
    Convert bill data from the OCR service or the manual entry form.
    Every numeric field is coerced; a missing subtotal is taken from the items
    and a missing total from subtotal + tax + tip.
    """
    items = [dict_to_line_item(i) for i in d.get("items") or [] if isinstance(i, dict)]
    subtotal = to_safe_decimal(d.get("subtotal"), default=None)
    if subtotal is None:
        subtotal = sum((i.price for i in items), Decimal("0.00"))
        logger.debug("Bill has no usable subtotal, using item total %s", subtotal)
    tax = to_safe_decimal(d.get("tax"))
    tip = to_safe_decimal(d.get("tip"))
    total = to_safe_decimal(d.get("total"))
    if not total:
        total = subtotal + tax + tip
    return Bill(
        items=items,
        subtotal=subtotal,
        tax=tax,
        tip=tip,
        total=total,
        currency=str(currency or d.get("currency") or "USD").upper(),
    )


def bill_to_dict(bill: Bill) -> dict:
    """Convert Bill to a JSON-friendly dictionary"""
    return {
        "items": [
            {"name": i.name, "quantity": i.quantity, "price": str(i.price)} for i in bill.items
        ],
        "subtotal": str(bill.subtotal),
        "tax": str(bill.tax),
        "tip": str(bill.tip),
        "total": str(bill.total),
        "currency": bill.currency,
    }


def load_bill(path: str) -> Bill:
    """Load bill JSON from file"""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid bill JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a bill object")
    return dict_to_bill(data)


def unit_to_dict(unit: Unit) -> dict:
    return {
        "id": unit.id,
        "original_id": unit.original_id,
        "name": unit.name,
        "price": str(unit.price),
        "is_split": unit.is_split,
        "split_part": unit.split_part,
        "split_total": unit.split_total,
    }


def guest_to_dict(guest: GuestRecord) -> dict:
    return {
        "name": guest.name,
        "items": [unit_to_dict(u) for u in guest.items],
        "subtotal": str(guest.subtotal),
        "tax": str(guest.tax),
        "tip": str(guest.tip),
        "total": str(guest.total),
    }


def report_to_dict(report: Report) -> dict:
    """Convert Report to a JSON-friendly dictionary for the presentation layer"""
    return {
        "guests": [guest_to_dict(g) for g in report.guests],
        "subtotal": str(report.subtotal),
        "tax": str(report.tax),
        "tip": str(report.tip),
        "total": str(report.total),
        "total_collected": str(report.total_collected),
        "unassigned_items": [unit_to_dict(u) for u in report.unassigned_items],
        "unassigned_amount": str(report.unassigned_amount),
        "complete": report.complete,
        "difference": str(report.difference),
        "tolerance": str(report.tolerance),
        "balanced": report.balanced,
        "currency": report.currency,
        "exchange_rate": str(report.exchange_rate),
    }


def even_split_to_dict(split: EvenSplit) -> dict:
    return {
        "subtotal": str(split.subtotal),
        "tax": str(split.tax),
        "tip": str(split.tip),
        "total": str(split.total),
        "people": split.people,
        "per_person": str(split.per_person),
        "shares": [str(s) for s in split.shares],
        "tip_percent": None if split.tip_percent is None else str(split.tip_percent),
    }


def load_settings(path: Optional[str] = None) -> Settings:
    """Load user settings from JSON file, falling back to defaults"""
    if path is None:
        path = os.path.join(app_dir(), "settings.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return Settings()
    if not isinstance(data, dict):
        return Settings()

    defaults = Settings()
    presets = data.get("tip_presets")
    if isinstance(presets, list):
        presets = [safe_int(p, default=0, minimum=0) for p in presets]
    else:
        presets = defaults.tip_presets
    return Settings(
        currency=str(data.get("currency") or defaults.currency).upper(),
        tip_presets=presets,
        tolerance_per_guest=to_safe_decimal(data.get("tolerance_per_guest"), default=defaults.tolerance_per_guest),
    )


def save_settings(settings: Settings, path: Optional[str] = None) -> None:
    """Write user settings as JSON"""
    if path is None:
        path = os.path.join(app_dir(), "settings.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(
            {
                "currency": settings.currency,
                "tip_presets": settings.tip_presets,
                "tolerance_per_guest": str(settings.tolerance_per_guest),
            },
            f,
            indent=2,
        )
