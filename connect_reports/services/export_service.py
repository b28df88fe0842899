"""
Delimited-text and spreadsheet exports of daily summary rows.
"""
import csv
from datetime import date
from decimal import Decimal
from io import BytesIO, StringIO
from typing import Iterable
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from connect_reports.models.daily_summary import DailySummary

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Account ID",
    "Date",
    "Charges Count",
    "Charges Amount",
    "Refunds Count",
    "Refunds Amount",
    "Chargebacks Count",
    "Chargebacks Amount",
    "Declines Count",
    "Approval %",
    "Total Count",
    "Total Amount",
]


def export_filename(start_date: date, end_date: date, extension: str) -> str:
    """Return the download filename for a report export."""
    return f"stripe-report-{start_date.isoformat()}-{end_date.isoformat()}.{extension}"


def _row_values(row: DailySummary) -> list:
    return [
        row.account_id or "N/A",
        row.date.isoformat(),
        row.charges_count,
        row.charges_amount,
        row.refunds_count,
        row.refunds_amount,
        row.chargebacks_count,
        row.chargebacks_amount,
        row.declines_count,
        row.approval_pct,
        row.totals_count,
        row.totals_amount,
    ]


class ExportService:
    """Service for serializing report rows to downloadable files."""

    def generate_csv(self, rows: Iterable[DailySummary]) -> BytesIO:
        """Return a UTF-8 CSV buffer with one line per daily summary."""
        logger.info("Generating CSV export")
        text = StringIO()
        writer = csv.writer(text, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(EXPORT_HEADERS)
        count = 0
        for row in rows:
            values = _row_values(row)
            # Amounts and percentage as fixed two-decimal text
            writer.writerow(
                f"{value:.2f}" if isinstance(value, Decimal) else value
                for value in values
            )
            count += 1

        buffer = BytesIO(text.getvalue().encode("utf-8"))
        logger.info("CSV export generated rows=%s", count)
        return buffer

    def generate_xlsx(self, rows: Iterable[DailySummary]) -> BytesIO:
        """Return an XLSX workbook buffer with a single report sheet."""
        logger.info("Generating XLSX export")
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Report"

        sheet.append(EXPORT_HEADERS)
        header_fill = PatternFill("solid", fgColor="2C3E50")
        for cell in sheet[1]:
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = header_fill

        count = 0
        for row in rows:
            sheet.append(_row_values(row))
            count += 1

        # Two-decimal display for amount and percentage columns
        for column in ("D", "F", "H", "J", "L"):
            for cell in sheet[column][1:]:
                cell.number_format = "0.00"
        for index, header in enumerate(EXPORT_HEADERS, start=1):
            sheet.column_dimensions[sheet.cell(row=1, column=index).column_letter].width = max(
                12, len(header) + 2
            )

        buffer = BytesIO()
        workbook.save(buffer)
        buffer.seek(0)
        logger.info("XLSX export generated rows=%s", count)
        return buffer
