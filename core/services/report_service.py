# =============================================================================
# core/services/report_service.py - Sales Reports and Dashboard
# =============================================================================
# Aggregates sales rows with pandas for the reports screen and the dashboard.
# =============================================================================

import logging
from datetime import date, timedelta
from typing import Any

import pandas as pd

from core.services.inventory_service import InventoryService
from core.services.sales_service import UNKNOWN_DISH, SalesService

logger = logging.getLogger(__name__)

TOP_DISHES_LIMIT = 5


def _sales_frame(sales: list[dict[str, Any]]) -> pd.DataFrame:
    """Sales rows as a DataFrame with parsed dates and numeric amounts."""
    df = pd.DataFrame(sales, columns=["date", "dish_id", "dish_name", "quantity", "total_amount"])
    df["date"] = pd.to_datetime(df["date"].astype(str).str[:10], errors="coerce")
    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce").fillna(0)
    df["total_amount"] = pd.to_numeric(df["total_amount"], errors="coerce").fillna(0)
    return df.dropna(subset=["date"])


def _month_start(day: date) -> date:
    return day.replace(day=1)


class ReportService:
    """Sales aggregation for reports and the dashboard."""

    @staticmethod
    def sales_overview(
        sales: list[dict[str, Any]],
        start: date,
        end: date,
    ) -> dict[str, Any]:
        """
        Daily revenue and order counts over [start, end].

        Every day in the range gets an entry, zero when nothing was sold.
        Sales outside the range are ignored.

        Returns:
            {"daily": [{"date", "revenue", "orders"}], "metrics": {...}}

        Raises:
            ValueError: If start is after end
        """
        if start > end:
            raise ValueError("start must be on or before end")

        days = pd.date_range(start, end, freq="D")
        df = _sales_frame(sales)
        df = df[(df["date"] >= days[0]) & (df["date"] <= days[-1])]

        daily = (
            df.groupby("date")
            .agg(revenue=("total_amount", "sum"), orders=("total_amount", "size"))
            .reindex(days, fill_value=0)
        )

        total_sales = float(df["total_amount"].sum())
        total_orders = int(len(df))

        return {
            "daily": [
                {
                    "date": day.strftime("%Y-%m-%d"),
                    "revenue": round(float(row.revenue), 2),
                    "orders": int(row.orders),
                }
                for day, row in daily.iterrows()
            ],
            "metrics": {
                "total_sales": round(total_sales, 2),
                "avg_daily_sales": round(total_sales / len(days), 2),
                "total_orders": total_orders,
                "items_sold": float(df["quantity"].sum()),
                "avg_order_value": round(total_sales / total_orders, 2) if total_orders else 0.0,
            },
        }

    @staticmethod
    def top_dishes(sales: list[dict[str, Any]], limit: int = TOP_DISHES_LIMIT) -> list[dict[str, Any]]:
        """
        Best-selling dishes by revenue.

        percentage is each dish's rounded share of the top-`limit` revenue.
        """
        df = _sales_frame(sales)
        if df.empty:
            return []

        df["dish_name"] = df["dish_name"].fillna("").replace("", UNKNOWN_DISH)
        ranked = (
            df.groupby("dish_name")
            .agg(revenue=("total_amount", "sum"), quantity=("quantity", "sum"))
            .sort_values("revenue", ascending=False, kind="stable")
            .head(limit)
        )

        top_total = float(ranked["revenue"].sum())
        return [
            {
                "dish_name": name,
                "revenue": round(float(row.revenue), 2),
                "quantity": float(row.quantity),
                "percentage": round(float(row.revenue) / top_total * 100) if top_total else 0,
            }
            for name, row in ranked.iterrows()
        ]

    @staticmethod
    def month_over_month_growth(current: float, previous: float) -> float | None:
        """Percent change from `previous` to `current`; None when there is no baseline."""
        if not previous:
            return None
        return round((current - previous) / previous * 100, 1)

    @staticmethod
    def dashboard(business_profile_id: str, today: date | None = None) -> dict[str, Any]:
        """
        Headline numbers for the dashboard.

        Compares month-to-date sales with the whole previous month.
        """
        today = today or date.today()
        month_start = _month_start(today)
        previous_start = _month_start(month_start - timedelta(days=1))

        items = InventoryService.list_items(business_profile_id)
        stats = InventoryService.calculate_stats(items)

        current_sales = SalesService.list_sales(business_profile_id, start=month_start, end=today)
        previous_sales = SalesService.list_sales(
            business_profile_id,
            start=previous_start,
            end=month_start - timedelta(days=1),
        )

        current_total = SalesService.total_amount(current_sales)
        previous_total = SalesService.total_amount(previous_sales)

        logger.debug(f"Built dashboard for {business_profile_id} ({len(current_sales)} sales this month)")
        return {
            "total_inventory_value": stats["total_value"],
            "low_stock_items": stats["low_stock_items"] + stats["out_of_stock_items"],
            "monthly_sales": current_total,
            "previous_month_sales": previous_total,
            "sales_growth": ReportService.month_over_month_growth(current_total, previous_total),
            "top_dishes": ReportService.top_dishes(current_sales),
        }
