"""Tests for CSV, XLSX and PDF rendering of daily summaries."""
import csv
from datetime import date
from decimal import Decimal
from io import StringIO

from openpyxl import load_workbook

from connect_reports.models.daily_summary import DailySummary
from connect_reports.models.report import FailureStage, FetchFailure
from connect_reports.services.export_service import EXPORT_HEADERS, ExportService, export_filename
from connect_reports.services.pdf_service import PDFService

ROWS = [
    DailySummary(
        date=date(2024, 1, 2),
        account_id="acct_1",
        charges_count=1,
        charges_amount=Decimal("100.00"),
        declines_count=1,
        approval_pct=Decimal("50.00"),
        totals_count=2,
        totals_amount=Decimal("100.00"),
    ),
    DailySummary(date=date(2024, 1, 1), account_id="acct_1"),
]


def test_csv_has_header_and_two_decimal_amounts():
    text = ExportService().generate_csv(ROWS).getvalue().decode("utf-8")

    lines = list(csv.reader(StringIO(text)))
    assert lines[0] == EXPORT_HEADERS
    assert lines[1] == [
        "acct_1", "2024-01-02", "1", "100.00", "0", "0.00", "0", "0.00", "1", "50.00", "2", "100.00",
    ]
    assert lines[2][9] == "100.00"
    assert len(lines) == 3
    # Every cell is quoted
    assert text.splitlines()[1].startswith('"acct_1","2024-01-02"')


def test_csv_with_no_rows_is_header_only():
    text = ExportService().generate_csv([]).getvalue().decode("utf-8")
    assert len(text.splitlines()) == 1


def test_xlsx_round_trips_values():
    workbook = load_workbook(ExportService().generate_xlsx(ROWS))
    sheet = workbook["Report"]

    assert [cell.value for cell in sheet[1]] == EXPORT_HEADERS
    assert sheet["A2"].value == "acct_1"
    assert sheet["D2"].value == 100
    assert sheet["J2"].value == 50
    assert sheet.max_row == 3


def test_pdf_is_generated():
    failures = [FetchFailure("acct_2", FailureStage.ACCOUNT, "No such account")]
    buffer = PDFService().generate_transaction_report(
        ROWS, date(2024, 1, 1), date(2024, 1, 2), failures=failures
    )
    assert buffer.getvalue().startswith(b"%PDF")


def test_pdf_with_no_rows():
    buffer = PDFService().generate_transaction_report([], date(2024, 1, 1), date(2024, 1, 2))
    assert buffer.getvalue().startswith(b"%PDF")


def test_export_filename():
    assert export_filename(date(2024, 1, 1), date(2024, 1, 31), "csv") == (
        "stripe-report-2024-01-01-2024-01-31.csv"
    )
