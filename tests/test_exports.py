import csv
from decimal import Decimal

from openpyxl import load_workbook

from csv_handler import export_report_to_csv, import_items_from_csv
from excel_export import export_report_excel
from ledger import GuestLedger
from models import Bill, LineItem


def _report(finish=True):
    bill = Bill(
        items=[LineItem("Pho", 2, Decimal("28.00")), LineItem("Spring rolls", 1, Decimal("7.00"))],
        subtotal=Decimal("35.00"),
        tax=Decimal("3.50"),
        tip=Decimal("7.00"),
        total=Decimal("45.50"),
    )
    ledger = GuestLedger(bill)
    ledger.begin_guest("Minh")
    ledger.toggle_select("item-0-0")
    ledger.confirm()
    if finish:
        ledger.begin_guest("An/Bao")
        ledger.toggle_select("item-0-1")
        ledger.toggle_select("item-1-0")
        ledger.confirm()
    return ledger.report()


def test_export_report_to_csv(tmp_path):
    path = tmp_path / "report.csv"
    export_report_to_csv(_report(finish=False), str(path))

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["guest", "item", "price"]
    assert rows[1] == ["Minh", "Pho", "14.00"]
    assert ["Minh", "Total", "18.20"] in rows
    assert rows[-2:] == [["(unassigned)", "Pho", "14.00"], ["(unassigned)", "Spring rolls", "7.00"]]


def test_import_items_from_csv(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text(
        "name,quantity,price\nBanh mi,2,$12.00\n,,\nTea,zero,1.5\n",
        encoding="utf-8",
    )
    items = import_items_from_csv(str(path))
    assert items == [
        LineItem("Banh mi", 2, Decimal("12.00")),
        LineItem("Tea", 1, Decimal("1.50")),
    ]


def test_export_report_excel(tmp_path):
    path = tmp_path / "report.xlsx"
    export_report_excel(_report(), str(path))

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Minh", "An_Bao"]
    summary = wb["Summary"]
    assert [c.value for c in summary[1]] == ["Guest", "Subtotal", "Tax", "Tip", "Total"]
    assert summary["A2"].value == "Minh"
    assert summary["E2"].value == 18.2
    assert summary["E3"].value == 27.3
    statuses = [row[1].value for row in summary.iter_rows() if row[0].value == "Status"]
    assert statuses == ["Balanced"]


def test_export_partial_report_excel(tmp_path):
    path = tmp_path / "partial.xlsx"
    export_report_excel(_report(finish=False), str(path))

    wb = load_workbook(path)
    assert "Unassigned" in wb.sheetnames
    assert wb["Unassigned"]["A2"].value == "Pho"
    statuses = [row[1].value for row in wb["Summary"].iter_rows() if row[0].value == "Status"]
    assert statuses[0].startswith("Partial")
    unassigned = wb["Unassigned"]
    assert unassigned.freeze_panes == "A2"
    assert [c.value for c in unassigned[unassigned.max_row]] == ["Total", 21.0]
    assert unassigned[unassigned.max_row][0].font.bold


def test_guest_sheet_ends_with_bold_total(tmp_path):
    path = tmp_path / "report.xlsx"
    export_report_excel(_report(), str(path))

    ws = load_workbook(path)["Minh"]
    assert ws.freeze_panes == "A2"
    assert ws[1][0].font.bold
    last = ws[ws.max_row]
    assert [c.value for c in last] == ["Total", 18.2]
    assert last[1].number_format == "0.00"
