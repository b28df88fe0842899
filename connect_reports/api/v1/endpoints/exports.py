"""
Report export endpoints:
  POST /export/csv/{account_ids}    – Download the report as CSV
  POST /export/xlsx/{account_ids}   – Download the report as an Excel workbook
  POST /export/pdf/{account_ids}    – Download the report as a formatted PDF
"""
from datetime import date
from io import BytesIO
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from connect_reports.core.dependencies import get_transaction_service
from connect_reports.models.report import MultiAccountReport
from connect_reports.schemas.export import ExportRequest
from connect_reports.services.export_service import ExportService, export_filename
from connect_reports.services.pdf_service import PDFService
from connect_reports.services.report_period import resolve_date_range
from connect_reports.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["Export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _build_report(
    account_ids: str,
    body: ExportRequest,
    service: TransactionService,
) -> tuple[MultiAccountReport, date, date]:
    start, end = resolve_date_range(body.period, body.start_date, body.end_date, body.timezone)
    report = service.aggregate(account_ids.split(","), start, end, body.timezone)
    return report, start, end


def _attachment(buffer: BytesIO, media_type: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        buffer,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/csv/{account_ids}",
    summary="Export report as CSV",
    response_class=StreamingResponse,
)
def export_csv(
    account_ids: str,
    body: ExportRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    """Export the daily summaries for the comma-separated **account_ids** as CSV."""
    report, start, end = _build_report(account_ids, body, service)
    logger.info("Exporting CSV %s..%s rows=%s", start, end, len(report.rows))
    buffer = ExportService().generate_csv(report.rows)
    return _attachment(buffer, "text/csv", export_filename(start, end, "csv"))


@router.post(
    "/xlsx/{account_ids}",
    summary="Export report as Excel workbook",
    response_class=StreamingResponse,
)
def export_xlsx(
    account_ids: str,
    body: ExportRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    """Export the daily summaries for the comma-separated **account_ids** as XLSX."""
    report, start, end = _build_report(account_ids, body, service)
    logger.info("Exporting XLSX %s..%s rows=%s", start, end, len(report.rows))
    buffer = ExportService().generate_xlsx(report.rows)
    return _attachment(buffer, XLSX_MEDIA_TYPE, export_filename(start, end, "xlsx"))


@router.post(
    "/pdf/{account_ids}",
    summary="Export report as PDF",
    response_class=StreamingResponse,
)
def export_pdf(
    account_ids: str,
    body: ExportRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    """Export the daily summaries for the comma-separated **account_ids** as PDF."""
    report, start, end = _build_report(account_ids, body, service)
    logger.info("Exporting PDF %s..%s rows=%s", start, end, len(report.rows))
    buffer = PDFService().generate_transaction_report(
        report.rows, start, end, failures=report.failures
    )
    return _attachment(buffer, "application/pdf", export_filename(start, end, "pdf"))
