# =============================================================================
# core/services/export_service.py - Spreadsheet Exports
# =============================================================================
# Builds inventory and sales spreadsheets with pandas.
# XLSX files are written with the openpyxl engine and get a styled header:
# bold text on a light grey fill, an auto-filter, and content-sized columns.
# =============================================================================

import io
import logging
from datetime import date, datetime
from typing import Any

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from app.exceptions import UnsupportedExportFormatError
from core.models.common import ExportFormat
from core.services.inventory_service import InventoryService
from lib.currency import format_currency

logger = logging.getLogger(__name__)

INVENTORY_COLUMNS = [
    "Name",
    "Category",
    "Quantity",
    "Unit",
    "Cost per Unit",
    "Total Value",
    "Reorder Level",
    "Status",
    "Expiry Date",
]

SALES_COLUMNS = ["Date", "Item", "Category", "Quantity", "Price", "Total"]

STATUS_LABELS = {"A": "In Stock", "B": "Low Stock", "C": "Out of Stock"}

HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE0E0E0")
HEADER_FONT = Font(bold=True)
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 40

MEDIA_TYPES = {
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv",
}


def _format_date(value: Any) -> str:
    """YYYY-MM-DD for dates, datetimes and ISO strings; "" for blanks."""
    if value is None or value == "":
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


class ExportService:
    """Build export rows and serialize them to XLSX or CSV."""

    # -------------------------------------------------------------------------
    # Row builders
    # -------------------------------------------------------------------------

    @staticmethod
    def inventory_rows(items: list[dict[str, Any]], currency: str = "USD") -> list[dict[str, Any]]:
        """One row per inventory item, money columns formatted in `currency`."""
        rows = []
        for item in items:
            status = InventoryService.stock_status(item).value
            rows.append({
                "Name": item.get("name") or "",
                "Category": item.get("category") or "Uncategorized",
                "Quantity": item.get("quantity") or 0,
                "Unit": item.get("unit") or "",
                "Cost per Unit": format_currency(item.get("cost"), currency),
                "Total Value": format_currency(InventoryService.item_value(item), currency),
                "Reorder Level": InventoryService.reorder_threshold(item),
                "Status": STATUS_LABELS[status],
                "Expiry Date": _format_date(item.get("expiry_date")),
            })
        return rows

    @staticmethod
    def sales_rows(
        sales: list[dict[str, Any]],
        dishes: list[dict[str, Any]],
        currency: str = "USD",
    ) -> list[dict[str, Any]]:
        """
        One row per sale line.

        Price is the unit price (total / quantity); Category comes from the dish.
        """
        dish_by_id = {dish["id"]: dish for dish in dishes}
        rows = []
        for sale in sales:
            dish = dish_by_id.get(sale.get("dish_id")) or {}
            quantity = float(sale.get("quantity") or 0)
            total = float(sale.get("total_amount") or 0)
            unit_price = total / quantity if quantity else float(dish.get("price") or 0)
            rows.append({
                "Date": _format_date(sale.get("date")),
                "Item": sale.get("dish_name") or dish.get("name") or "",
                "Category": dish.get("category") or "Uncategorized",
                "Quantity": sale.get("quantity") or 0,
                "Price": format_currency(unit_price, currency),
                "Total": format_currency(total, currency),
            })
        return rows

    # -------------------------------------------------------------------------
    # Serializers
    # -------------------------------------------------------------------------

    @staticmethod
    def to_csv(rows: list[dict[str, Any]], columns: list[str]) -> bytes:
        df = pd.DataFrame(rows, columns=columns)
        return df.to_csv(index=False).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict[str, Any]], columns: list[str], sheet_name: str) -> bytes:
        """
        Write rows to a single-sheet workbook.

        An empty row list still produces the header row.
        """
        df = pd.DataFrame(rows, columns=columns)
        buffer = io.BytesIO()

        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            worksheet = writer.sheets[sheet_name]

            for cell in worksheet[1]:
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL

            last_column = get_column_letter(len(columns))
            worksheet.auto_filter.ref = f"A1:{last_column}1"

            for index, column in enumerate(columns, start=1):
                longest = max(
                    [len(str(column))] + [len(str(value)) for value in df[column].tolist()]
                )
                width = min(max(longest + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)
                worksheet.column_dimensions[get_column_letter(index)].width = width

        logger.debug(f"Wrote {len(df)} rows to sheet {sheet_name}")
        return buffer.getvalue()

    @staticmethod
    def render(
        rows: list[dict[str, Any]],
        columns: list[str],
        export_format: str,
        sheet_name: str,
    ) -> tuple[bytes, str]:
        """
        Serialize rows in the requested format.

        Returns:
            (file bytes, media type)

        Raises:
            UnsupportedExportFormatError: If the format is not xlsx or csv
        """
        try:
            fmt = ExportFormat(export_format.lower())
        except ValueError:
            raise UnsupportedExportFormatError(export_format, [f.value for f in ExportFormat])

        if fmt == ExportFormat.XLSX:
            content = ExportService.to_xlsx(rows, columns, sheet_name)
        else:
            content = ExportService.to_csv(rows, columns)
        return content, MEDIA_TYPES[fmt]
