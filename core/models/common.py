# =============================================================================
# core/models/common.py - Shared Schemas
# =============================================================================
# Small request/query types reused by several entity routers.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class SortDirection(str, Enum):
    """Sort order for list endpoints."""
    ASC = "asc"
    DESC = "desc"


class ExportFormat(str, Enum):
    """Spreadsheet formats offered by the export endpoints."""
    XLSX = "xlsx"
    CSV = "csv"


class BulkDeleteRequest(BaseModel):
    """
    Body for POST /<entity>/bulk-delete.

    Example:
        {"ids": ["6f1c...", "a02b..."]}
    """
    ids: list[str] = Field(
        ...,
        min_length=1,
        description="Ids of the records to delete"
    )


class BulkDeleteResponse(BaseModel):
    """Ids actually removed by a bulk delete."""
    deleted_ids: list[str]
    deleted_count: int
