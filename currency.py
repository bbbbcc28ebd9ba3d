"""
Currency table and exchange-rate resolution for ReceiptSplit
"""
from __future__ import annotations
import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

# code -> (symbol, name)
CURRENCIES: Dict[str, tuple] = {
    "USD": ("$", "US Dollar"),
    "EUR": ("€", "Euro"),
    "GBP": ("£", "British Pound"),
    "JPY": ("¥", "Japanese Yen"),
    "CNY": ("¥", "Chinese Yuan"),
    "AUD": ("A$", "Australian Dollar"),
    "CAD": ("C$", "Canadian Dollar"),
    "CHF": ("Fr", "Swiss Franc"),
    "INR": ("₹", "Indian Rupee"),
    "KRW": ("₩", "South Korean Won"),
    "SGD": ("S$", "Singapore Dollar"),
    "HKD": ("HK$", "Hong Kong Dollar"),
    "NZD": ("NZ$", "New Zealand Dollar"),
    "SEK": ("kr", "Swedish Krona"),
    "NOK": ("kr", "Norwegian Krone"),
    "DKK": ("kr", "Danish Krone"),
    "MXN": ("Mex$", "Mexican Peso"),
    "BRL": ("R$", "Brazilian Real"),
    "ZAR": ("R", "South African Rand"),
    "THB": ("฿", "Thai Baht"),
    "MYR": ("RM", "Malaysian Ringgit"),
    "PHP": ("₱", "Philippine Peso"),
    "IDR": ("Rp", "Indonesian Rupiah"),
    "VND": ("₫", "Vietnamese Dong"),
    "TWD": ("NT$", "New Taiwan Dollar"),
    "AED": ("د.إ", "UAE Dirham"),
    "TRY": ("₺", "Turkish Lira"),
    "PLN": ("zł", "Polish Zloty"),
}

RateFetcher = Callable[[str, str], object]


def currency_symbol(code: Optional[str]) -> str:
    """Display symbol for a currency code, '$' when unknown"""
    entry = CURRENCIES.get((code or "").upper())
    return entry[0] if entry else "$"


def resolve_exchange_rate(fetch_rate: Optional[RateFetcher], from_currency: str, to_currency: str) -> Decimal:
    """
    Ask fetch_rate(from, to) for a conversion rate.
    Falls back to 1 on any failure so a flaky rate source never blocks a split.
    """
    if (from_currency or "").upper() == (to_currency or "").upper() or fetch_rate is None:
        return Decimal("1")
    try:
        raw = fetch_rate(from_currency, to_currency)
        rate = Decimal(str(raw))
    except (InvalidOperation, ValueError, TypeError) as e:
        logger.warning("Unusable exchange rate %s->%s: %s", from_currency, to_currency, e)
        return Decimal("1")
    except Exception as e:
        logger.warning("Failed to fetch exchange rate %s->%s: %s", from_currency, to_currency, e)
        return Decimal("1")
    if not rate.is_finite() or rate <= 0:
        logger.warning("Unusable exchange rate %s->%s: %s", from_currency, to_currency, raw)
        return Decimal("1")
    return rate
