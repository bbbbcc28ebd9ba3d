"""
Excel export functionality for ReceiptSplit
"""
from __future__ import annotations
import logging
import re
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Report

logger = logging.getLogger(__name__)

MONEY_FORMAT = "0.00"
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill("solid", fgColor="3442C6")
HEADER_BORDER = Border(*(Side(style="thin", color="A0A0A0"),) * 4)
TOTAL_FILL = PatternFill("solid", fgColor="E3E6FA")


def _add_header(ws, headers: Sequence[str]) -> None:
    """Write the first row as a styled, frozen header"""
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER
        cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.freeze_panes = "A2"


def _add_total_row(ws, values: Sequence) -> None:
    """Append a bold, shaded summary row"""
    ws.append(list(values))
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)
        cell.fill = TOTAL_FILL


def _format_money_columns(ws, first_col: int, last_col: int) -> None:
    for row in ws.iter_rows(min_row=2, min_col=first_col, max_col=last_col):
        for cell in row:
            if isinstance(cell.value, (int, float)):
                cell.number_format = MONEY_FORMAT


def _fit_columns(ws, min_width=10, max_width=45):
    """Size each column to its longest value"""
    for index, column in enumerate(ws.iter_cols(values_only=True), start=1):
        longest = max((len(str(v)) for v in column if v is not None), default=0)
        ws.column_dimensions[get_column_letter(index)].width = max(min_width, min(max_width, longest + 2))


def _sheet_title(name: str, used: set) -> str:
    """Excel sheet titles: max 31 chars, no []:*?/\\ and unique"""
    base = re.sub(r"[\[\]:*?/\\]", "_", name).strip() or "Guest"
    base = base[:31]
    title = base
    n = 2
    while title.lower() in used:
        suffix = f" ({n})"
        title = base[:31 - len(suffix)] + suffix
        n += 1
    used.add(title.lower())
    return title


def _status(report: Report) -> str:
    if not report.complete:
        return f"Partial: {len(report.unassigned_items)} item(s) unassigned"
    return "Balanced" if report.balanced else "Does not match bill"


def export_report_excel(report: Report, filepath: str) -> None:
    """
    Export settlement report to Excel file with multiple sheets:
    - Summary sheet
    - One sheet per guest
    - Unassigned sheet when the split is not finished
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Summary"
    used = {"summary", "unassigned"}

    _add_header(ws, ["Guest", "Subtotal", "Tax", "Tip", "Total"])
    for g in report.guests:
        ws.append([g.name, float(g.subtotal), float(g.tax), float(g.tip), float(g.total)])
    ws.append([])
    _add_total_row(ws, ["Bill", float(report.subtotal), float(report.tax), float(report.tip), float(report.total)])
    ws.append(["Collected", None, None, None, float(report.total_collected)])
    ws.append(["Difference", None, None, None, float(report.difference)])
    ws.append(["Status", _status(report)])
    ws.append(["Currency", report.currency])
    _format_money_columns(ws, 2, 5)
    _fit_columns(ws)

    for g in report.guests:
        gs = wb.create_sheet(_sheet_title(g.name, used))
        _add_header(gs, ["Item", "Price"])
        for u in g.items:
            gs.append([u.name, float(u.price)])
        gs.append([])
        gs.append(["Subtotal", float(g.subtotal)])
        gs.append(["Tax", float(g.tax)])
        gs.append(["Tip", float(g.tip)])
        _add_total_row(gs, ["Total", float(g.total)])
        _format_money_columns(gs, 2, 2)
        _fit_columns(gs)

    if report.unassigned_items:
        us = wb.create_sheet("Unassigned")
        _add_header(us, ["Item", "Price"])
        for u in report.unassigned_items:
            us.append([u.name, float(u.price)])
        _add_total_row(us, ["Total", float(report.unassigned_amount)])
        _format_money_columns(us, 2, 2)
        _fit_columns(us)

    wb.save(filepath)
    logger.info("Exported report workbook to %s", filepath)
