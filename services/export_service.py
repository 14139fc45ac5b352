"""
Export service: Supplier performance reports for a date range.

Two formats:
- json: ExportResponse (sale totals in range + current catalog)
- xlsx: the same data as an Excel workbook with SUMMARY and PRODUCTS sheets
"""

from datetime import date
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side
import structlog

from models.analytics import ExportProduct, ExportResponse
from models.metrics import AnalyticsWindow
from services.metrics_service import calculate_sales_totals
from services.record_source import RecordSource
from utils.dates import utc_today
from exceptions import UnsupportedExportTypeError

logger = structlog.get_logger(__name__)

EXPORT_TYPES = ("json", "xlsx")


def check_export_type(export_type: str) -> str:
    """Normalize and validate the requested export format."""
    normalized = (export_type or "").strip().lower()
    if normalized not in EXPORT_TYPES:
        raise UnsupportedExportTypeError(export_type)
    return normalized


class ExportService:
    """Report generation for one supplier at a time."""

    def __init__(self, source: RecordSource):
        self.source = source

    def build_report(self, tenant_id: int, start: date, end: date) -> ExportResponse:
        """
        Sale totals for [start, end] and the current product list.

        Raises:
            InvalidWindowError: If start is after end
        """
        window = AnalyticsWindow(tenant_id=tenant_id, start_date=start, end_date=end)
        logger.info("building_export", tenant_id=tenant_id, start=start, end=end)

        sales = self.source.list_sales(tenant_id, window.start_date, window.end_date)
        products = self.source.list_products(tenant_id)

        report = ExportResponse(
            start=start,
            end=end,
            kpis=calculate_sales_totals(sales),
            products=[
                ExportProduct(
                    id=p.id,
                    title=p.title,
                    stock_quantity=p.stock_quantity,
                    supplier_purchase_price=p.supplier_purchase_price,
                    supplier_sold_price=p.supplier_sold_price,
                )
                for p in sorted(products, key=lambda p: p.id)
            ],
        )

        logger.info(
            "export_built",
            tenant_id=tenant_id,
            sales=len(sales),
            products=len(report.products)
        )
        return report

    def generate_report_excel(
        self,
        report: ExportResponse,
        generated_on: Optional[date] = None
    ) -> BytesIO:
        """
        Render a report as an Excel workbook.

        Args:
            report: Output of build_report
            generated_on: Date printed on the summary sheet (defaults to today)

        Returns:
            BytesIO containing the Excel file
        """
        generated_on = generated_on or utc_today()

        wb = Workbook()
        bold_font = Font(bold=True)
        header_font = Font(bold=True, size=14)
        thin_border = Border(bottom=Side(style="thin", color="000000"))

        # Summary sheet
        ws = wb.active
        ws.title = "SUMMARY"
        ws.column_dimensions["A"].width = 24
        ws.column_dimensions["B"].width = 16

        ws["A1"] = "Supplier Performance Report"
        ws["A1"].font = header_font
        ws["A3"] = "Period:"
        ws["B3"] = f"{report.start.isoformat()} to {report.end.isoformat()}"
        ws["A4"] = "Generated:"
        ws["B4"] = generated_on.isoformat()

        summary_rows = [
            ("Total investment", report.kpis.total_investment),
            ("Total sales value", report.kpis.total_sales_value),
            ("Total profit", report.kpis.total_profit),
        ]
        row = 6
        for label, value in summary_rows:
            ws[f"A{row}"] = label
            ws[f"A{row}"].font = bold_font
            ws[f"B{row}"] = float(value)
            ws[f"B{row}"].number_format = "#,##0.00"
            row += 1

        # Products sheet
        ws_products = wb.create_sheet(title="PRODUCTS")
        headers = ["ID", "Title", "Stock", "Purchase price", "Sold price"]
        for col, header in enumerate(headers, start=1):
            cell = ws_products.cell(row=1, column=col, value=header)
            cell.font = bold_font
            cell.border = thin_border
        ws_products.column_dimensions["B"].width = 36

        for row, product in enumerate(report.products, start=2):
            ws_products.cell(row=row, column=1, value=product.id)
            ws_products.cell(row=row, column=2, value=product.title)
            ws_products.cell(row=row, column=3, value=product.stock_quantity)
            ws_products.cell(row=row, column=4, value=float(product.supplier_purchase_price))
            ws_products.cell(
                row=row,
                column=5,
                value=float(product.supplier_sold_price) if product.supplier_sold_price is not None else None
            )

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        logger.info("export_excel_generated", products=len(report.products))
        return output
