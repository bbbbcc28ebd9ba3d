"""
Shareable text messages built from a settlement report or an even split
"""
from __future__ import annotations
from typing import List, Optional

from models import EvenSplit, Report
from utils import format_money

RULE = "━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━"
FOOTER = [
    RULE,
    "💳 Please Venmo or pay in cash!",
    "🚀 Sent via ReceiptSplit",
]


def format_report_message(report: Report, original_currency: Optional[str] = None) -> str:
    """
    Build the itemized bill split summary.
    original_currency, when different from report.currency, adds a conversion note.
    """
    if not report.guests:
        return "No guests have been added yet."

    def money(amount) -> str:
        return format_money(amount, report.currency)

    lines: List[str] = ["💸💸💸 BILL SPLIT SUMMARY 💸💸💸", ""]
    if not report.complete:
        lines += [
            f"⚠️ PARTIAL SPLIT: {len(report.unassigned_items)} item(s) worth "
            f"{money(report.unassigned_amount)} not yet assigned",
            "",
        ]

    lines += ["👥 PAYMENT REQUESTS 👥", RULE, ""]
    for g in report.guests:
        lines.append(f"{g.name} owes {money(g.total)} 💰")

    lines += [
        "",
        "📋 BILL DETAILS 📋",
        RULE,
        f"🧾 Subtotal: {money(report.subtotal)}",
        f"🏛️ Tax: {money(report.tax)}",
        f"💁 Tip: {money(report.tip)}",
        f"💯 Total: {money(report.total)}",
        f"✅ Collected: {money(report.total_collected)}",
        f"👥 Split between {len(report.guests)} people",
        "",
    ]

    if original_currency and original_currency.upper() != report.currency.upper():
        lines += [
            f"🌍 Converted from {original_currency.upper()} to {report.currency}",
            f"📈 Exchange rate: 1 {original_currency.upper()} = {report.exchange_rate:.4f} {report.currency}",
            RULE,
            "",
        ]

    lines += ["📊 DETAILED BREAKDOWN 📊", RULE, ""]
    for g in report.guests:
        lines.append(f"👤 {g.name}'s TOTAL: {money(g.total)}")
        lines.append("   ITEMS:")
        for u in g.items:
            lines.append(f"   • {u.name}: {money(u.price)}")
        lines += [
            f"   📝 Subtotal: {money(g.subtotal)}",
            f"   🏛️ Tax: {money(g.tax)}",
            f"   💁 Tip: {money(g.tip)}",
            f"   💰 Total: {money(g.total)}",
            "",
        ]

    if report.unassigned_items:
        lines.append("❓ STILL UNASSIGNED:")
        for u in report.unassigned_items:
            lines.append(f"   • {u.name}: {money(u.price)}")
        lines.append("")

    return "\n".join(lines + FOOTER)


def format_even_split_message(split: EvenSplit, currency: Optional[str] = None) -> str:
    """Build the payment request for an even split"""
    def money(amount) -> str:
        return format_money(amount, currency)

    if split.tip_percent is not None:
        tip_line = f"- Tip ({split.tip_percent.normalize():f}%): {money(split.tip)}"
    else:
        tip_line = f"- Tip: {money(split.tip)}"

    lines = [
        "💰 PAYMENT REQUEST 💰",
        "",
        f"You guys all owe me {money(split.per_person)} each for our meal.",
        "",
        "Bill Details:",
        f"- Subtotal: {money(split.subtotal)}",
        f"- Tax: {money(split.tax)}",
        tip_line,
        f"- Total: {money(split.total)}",
        "",
        f"Split between {split.people} people",
    ]
    return "\n".join(lines + FOOTER)
