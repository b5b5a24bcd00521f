# =============================================================================
# app/routers/sales.py - Sales Endpoints
# =============================================================================
# All endpoints require authentication and a business profile.
# =============================================================================

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import BusinessProfileDep, CurrentUserDep
from app.responses import spreadsheet_response
from core.models.common import ExportFormat
from core.models.sale import SaleEntry, SalesSummaryResponse
from core.services.business_profile_service import BusinessProfileService
from core.services.dish_service import DishService
from core.services.export_service import SALES_COLUMNS, ExportService
from core.services.sales_service import SalesService

router = APIRouter()


@router.get("")
async def list_sales(
    business_profile_id: BusinessProfileDep,
    search: Annotated[str | None, Query(description="Matches the dish name")] = None,
    on_date: Annotated[date | None, Query(alias="date", description="YYYY-MM-DD")] = None,
):
    """List sales, newest first, with the sales screen's filters applied."""
    sales = SalesService.list_sales(business_profile_id)
    filtered = SalesService.filter_sales(sales, search=search, on_date=on_date)
    return {
        "sales": filtered,
        "total": len(filtered),
        "total_amount": SalesService.total_amount(filtered),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_sales(
    entries: list[SaleEntry],
    business_profile_id: BusinessProfileDep,
    user: CurrentUserDep,
):
    """Record a batch of sales. An empty list records nothing."""
    saved = SalesService.add_sales(
        business_profile_id,
        str(user.id),
        [entry.model_dump(mode="json") for entry in entries],
    )
    return {"sales": saved, "count": len(saved)}


@router.get("/summary", response_model=SalesSummaryResponse)
async def sales_summary(
    business_profile_id: BusinessProfileDep,
    start: Annotated[date | None, Query(description="First day (inclusive)")] = None,
    end: Annotated[date | None, Query(description="Last day (inclusive)")] = None,
):
    """Quantity and amount per dish."""
    sales = SalesService.list_sales(business_profile_id, start=start, end=end)
    dishes = DishService.list_dishes(business_profile_id, include_archived=True)
    return {
        "dishes": SalesService.summarize_by_dish(sales, dishes),
        "total_amount": SalesService.total_amount(sales),
    }


@router.get("/export")
async def export_sales(
    business_profile_id: BusinessProfileDep,
    format: Annotated[str, Query(description="xlsx or csv")] = ExportFormat.XLSX.value,
    start: date | None = None,
    end: date | None = None,
):
    """Download sales as a spreadsheet."""
    sales = SalesService.list_sales(business_profile_id, start=start, end=end)
    dishes = DishService.list_dishes(business_profile_id, include_archived=True)
    currency = BusinessProfileService.get_currency(business_profile_id)["currency"]

    rows = ExportService.sales_rows(sales, dishes, currency)
    content, media_type = ExportService.render(rows, SALES_COLUMNS, format, "Sales Data")
    return spreadsheet_response(content, media_type, "sales-report")


@router.get("/by-date/{sale_date}")
async def list_sales_by_date(
    sale_date: Annotated[date, Path(description="YYYY-MM-DD")],
    business_profile_id: BusinessProfileDep,
):
    sales = SalesService.list_sales_by_date(business_profile_id, sale_date)
    return {
        "date": sale_date.isoformat(),
        "sales": sales,
        "total_amount": SalesService.total_amount(sales),
    }
