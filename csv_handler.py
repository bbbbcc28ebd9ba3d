"""
CSV export and import functionality for ReceiptSplit
"""
from __future__ import annotations
import csv
import logging
from typing import List

from config import dict_to_line_item
from models import LineItem, Report

logger = logging.getLogger(__name__)


def export_report_to_csv(report: Report, filepath: str) -> None:
    """
    Export a settlement report to CSV file
    CSV columns: guest, item, price. Each guest's items are followed by
    subtotal, tax, tip and total rows; unassigned units are listed last.
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['guest', 'item', 'price'])

        for g in report.guests:
            for u in g.items:
                writer.writerow([g.name, u.name, f"{u.price:.2f}"])
            writer.writerow([g.name, 'Subtotal', f"{g.subtotal:.2f}"])
            writer.writerow([g.name, 'Tax', f"{g.tax:.2f}"])
            writer.writerow([g.name, 'Tip', f"{g.tip:.2f}"])
            writer.writerow([g.name, 'Total', f"{g.total:.2f}"])

        for u in report.unassigned_items:
            writer.writerow(['(unassigned)', u.name, f"{u.price:.2f}"])

    logger.info("Exported report with %d guests to %s", len(report.guests), filepath)


def import_items_from_csv(filepath: str) -> List[LineItem]:
    """
    Import line items from CSV file
    Expects columns name, quantity, price; values are coerced like OCR input.
    """
    items = []

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        for row in reader:
            if not any((v or '').strip() for v in row.values() if isinstance(v, str)):
                continue
            items.append(dict_to_line_item(row))

    return items
