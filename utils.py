"""
Utility functions for ReceiptSplit: money coercion, rounding and formatting
"""
from __future__ import annotations
import logging
import os
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any, List, Optional

from currency import currency_symbol

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# upper bound for item quantities, split counts and head counts
MAX_QUANTITY = 999
# amounts of 10**15 or more are rejected as unparsable
MAX_AMOUNT_DIGITS = 15


def round_money(amount: Decimal) -> Decimal:
    """Round a Decimal to cents using ROUND_HALF_UP"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_safe_decimal(value: Any, default: Decimal = ZERO, allow_negative: bool = False) -> Decimal:
    """
    Convert loosely typed input (OCR output, form text) to a cent-rounded Decimal.
    Strings may carry '$' and thousands separators. Anything unparsable,
    non-finite, absurdly large or (unless allow_negative) negative yields default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("$", "")
        if not value:
            return default
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default
    if not d.is_finite():
        return default
    if d < 0 and not allow_negative:
        return default
    if d.adjusted() >= MAX_AMOUNT_DIGITS:
        return default
    return round_money(d)


def safe_int(value: Any, default: int = 1, minimum: int = 1, maximum: Optional[int] = None) -> int:
    """
    Convert input to int (truncating), returning default when unparsable or below minimum.
    Values above maximum are clamped to it.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        n = int(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        return default
    if n < minimum:
        return default
    if maximum is not None and n > maximum:
        logger.warning("Clamped %s to %d", value, maximum)
        return maximum
    return n


def split_amount(amount: Decimal, parts: int) -> List[Decimal]:
    """
    Divide amount into parts cent-exact shares that sum back to amount.
    Residual cents go one at a time to the leading shares.
    """
    if parts < 1:
        raise ValueError("parts must be at least 1")
    amount = round_money(amount)
    base = (amount / parts).quantize(CENT, rounding=ROUND_DOWN)
    shares = [base] * parts
    residual = amount - base * parts
    i = 0
    while residual != ZERO:
        if residual > ZERO:
            shares[i] += CENT
            residual -= CENT
        else:
            shares[i] -= CENT
            residual += CENT
        i = (i + 1) % parts
    return shares


def format_amount(amount: Any) -> str:
    """Two-decimal number without currency symbol"""
    return f"{to_safe_decimal(amount, allow_negative=True):.2f}"


def format_money(amount: Any, currency: Optional[str] = None, symbol: Optional[str] = None) -> str:
    """Format amount for display, e.g. '$12.50' or '€3.00'"""
    if symbol is None:
        symbol = currency_symbol(currency) if currency else "$"
    return f"{symbol}{format_amount(amount)}"


def app_dir() -> str:
    """
    Get application data directory: $RECEIPTSPLIT_HOME or ~/.receiptsplit
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("RECEIPTSPLIT_HOME") or os.path.join(os.path.expanduser("~"), ".receiptsplit")
    os.makedirs(path, exist_ok=True)
    return path
