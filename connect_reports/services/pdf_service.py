"""
PDF generation service for transaction reports.
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from io import BytesIO
from typing import Sequence
import logging

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from connect_reports.models.daily_summary import DailySummary
from connect_reports.models.report import FetchFailure

logger = logging.getLogger(__name__)


class PDFService:
    """Service for generating PDF reports."""

    def generate_transaction_report(
        self,
        rows: Sequence[DailySummary],
        start_date: date,
        end_date: date,
        failures: Sequence[FetchFailure] = (),
    ) -> BytesIO:
        """
        Generate a PDF transaction report for the given date range.

        Args:
            rows: Daily summaries, already sorted
            start_date: Report start date
            end_date: Report end date
            failures: Partial data losses to flag under the title

        Returns:
            BytesIO buffer containing the PDF
        """
        logger.info("Generating transaction PDF report rows=%s", len(rows))

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(letter),
            rightMargin=0.5 * inch,
            leftMargin=0.5 * inch,
            topMargin=0.5 * inch,
            bottomMargin=0.5 * inch,
        )

        elements = []
        styles = getSampleStyleSheet()
        title_style = styles['Heading1']
        subtitle_style = styles['Heading2']
        normal_style = styles['Normal']

        elements.append(Paragraph("Stripe Connect Report", title_style))
        elements.append(Spacer(1, 0.2 * inch))
        elements.append(Paragraph(f"Report Period: {start_date} to {end_date}", subtitle_style))
        generated_at = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        elements.append(Paragraph(f"Generated on: {generated_at}", normal_style))
        elements.append(Spacer(1, 0.3 * inch))

        if failures:
            elements.append(
                Paragraph(
                    f"Warning: {len(failures)} account or event listing(s) could not be "
                    "fully retrieved; totals may be incomplete.",
                    normal_style,
                )
            )
            elements.append(Spacer(1, 0.2 * inch))

        if not rows:
            elements.append(
                Paragraph("No transactions found for the selected period.", normal_style)
            )
        else:
            table_data = [[
                'Date', 'Account ID', 'Charges', 'Charges Amt', 'Refunds', 'Refunds Amt',
                'Chargebacks', 'Chargebacks Amt', 'Declines', 'Approval %', 'Total', 'Total Amt',
            ]]
            total_charges = Decimal('0')
            total_refunds = Decimal('0')
            total_chargebacks = Decimal('0')
            total_amount = Decimal('0')
            total_count = 0

            for row in rows:
                table_data.append([
                    row.date.isoformat(),
                    row.account_id or 'N/A',
                    str(row.charges_count),
                    f"${row.charges_amount:.2f}",
                    str(row.refunds_count),
                    f"${row.refunds_amount:.2f}",
                    str(row.chargebacks_count),
                    f"${row.chargebacks_amount:.2f}",
                    str(row.declines_count),
                    f"{row.approval_pct:.2f}%",
                    str(row.totals_count),
                    f"${row.totals_amount:.2f}",
                ])
                total_charges += row.charges_amount
                total_refunds += row.refunds_amount
                total_chargebacks += row.chargebacks_amount
                total_amount += row.totals_amount
                total_count += row.totals_count

            table = Table(table_data, repeatRows=1, hAlign='LEFT')
            table_style = TableStyle([
                ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2c3e50')),
                ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
                ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
                ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
                ('FONTSIZE', (0, 0), (-1, 0), 8),
                ('BOTTOMPADDING', (0, 0), (-1, 0), 8),

                ('BACKGROUND', (0, 1), (-1, -1), colors.white),
                ('TEXTCOLOR', (0, 1), (-1, -1), colors.black),
                ('ALIGN', (2, 1), (-1, -1), 'RIGHT'),
                ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
                ('FONTSIZE', (0, 1), (-1, -1), 7),
                ('BOTTOMPADDING', (0, 1), (-1, -1), 5),

                ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
            ])
            for i in range(1, len(table_data)):
                if i % 2 == 0:
                    table_style.add('BACKGROUND', (0, i), (-1, i), colors.HexColor('#f7f9fb'))
            table.setStyle(table_style)
            elements.append(table)

            elements.append(Spacer(1, 0.3 * inch))
            elements.append(Paragraph("Summary", subtitle_style))
            elements.append(Spacer(1, 0.1 * inch))

            summary_data = [
                ['Metric', 'Value'],
                ['Rows', str(len(rows))],
                ['Total Transactions', str(total_count)],
                ['Charges', f"${total_charges:.2f}"],
                ['Refunds', f"${total_refunds:.2f}"],
                ['Chargebacks', f"${total_chargebacks:.2f}"],
                ['Net Total', f"${total_amount:.2f}"],
            ]
            summary_table = Table(summary_data, colWidths=[3 * inch, 2 * inch])
            summary_table.setStyle(TableStyle([
                ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#3498db')),
                ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
                ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
                ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
                ('FONTSIZE', (0, 0), (-1, 0), 10),
                ('BOTTOMPADDING', (0, 0), (-1, 0), 12),

                ('ALIGN', (0, 1), (0, -1), 'LEFT'),
                ('ALIGN', (1, 1), (1, -1), 'RIGHT'),
                ('FONTNAME', (0, 1), (0, -1), 'Helvetica-Bold'),
                ('FONTSIZE', (0, 1), (-1, -1), 9),
                ('BOTTOMPADDING', (0, 1), (-1, -1), 8),

                ('BACKGROUND', (0, -1), (-1, -1), colors.HexColor('#e8f6f3')),
                ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),

                ('GRID', (0, 0), (-1, -1), 1, colors.grey),
            ]))
            elements.append(summary_table)

        doc.build(elements)
        buffer.seek(0)

        logger.info("Transaction PDF report generated successfully")
        return buffer
