# =============================================================================
# app/routers/reports.py - Reports and Dashboard Endpoints
# =============================================================================
# All endpoints require authentication and a business profile.
# =============================================================================

from datetime import date, timedelta
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from app.dependencies import BusinessProfileDep
from app.responses import spreadsheet_response
from core.models.common import ExportFormat
from core.services.business_profile_service import BusinessProfileService
from core.services.dish_service import DishService
from core.services.export_service import SALES_COLUMNS, ExportService
from core.services.report_service import TOP_DISHES_LIMIT, ReportService
from core.services.sales_service import SalesService

router = APIRouter()

DEFAULT_RANGE_DAYS = 30


def _resolve_range(start: date | None, end: date | None) -> tuple[date, date]:
    """Default to the last 30 days; reject inverted ranges with 400."""
    end = end or date.today()
    start = start or end - timedelta(days=DEFAULT_RANGE_DAYS - 1)
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start must be on or before end",
        )
    return start, end


@router.get("/sales")
async def sales_report(
    business_profile_id: BusinessProfileDep,
    start: Annotated[date | None, Query(description="First day (inclusive)")] = None,
    end: Annotated[date | None, Query(description="Last day (inclusive)")] = None,
):
    """Daily revenue and order counts with range metrics."""
    start, end = _resolve_range(start, end)
    sales = SalesService.list_sales(business_profile_id, start=start, end=end)
    return {
        "start": start.isoformat(),
        "end": end.isoformat(),
        **ReportService.sales_overview(sales, start, end),
    }


@router.get("/top-dishes")
async def top_dishes(
    business_profile_id: BusinessProfileDep,
    start: date | None = None,
    end: date | None = None,
    limit: Annotated[int, Query(ge=1, le=50)] = TOP_DISHES_LIMIT,
):
    """Best-selling dishes by revenue over the range."""
    start, end = _resolve_range(start, end)
    sales = SalesService.list_sales(business_profile_id, start=start, end=end)
    return {"dishes": ReportService.top_dishes(sales, limit=limit)}


@router.get("/dashboard")
async def dashboard(business_profile_id: BusinessProfileDep):
    return ReportService.dashboard(business_profile_id)


@router.get("/sales/export")
async def export_sales_report(
    business_profile_id: BusinessProfileDep,
    start: date | None = None,
    end: date | None = None,
    format: Annotated[str, Query(description="xlsx or csv")] = ExportFormat.XLSX.value,
):
    """Download the report's sales lines as a spreadsheet."""
    start, end = _resolve_range(start, end)
    sales = SalesService.list_sales(business_profile_id, start=start, end=end)
    dishes = DishService.list_dishes(business_profile_id, include_archived=True)
    currency = BusinessProfileService.get_currency(business_profile_id)["currency"]

    rows = ExportService.sales_rows(sales, dishes, currency)
    content, media_type = ExportService.render(rows, SALES_COLUMNS, format, "Sales Data")
    return spreadsheet_response(content, media_type, f"sales-report-{start}-to-{end}")
