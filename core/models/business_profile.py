# =============================================================================
# core/models/business_profile.py - Business Profile Schemas
# =============================================================================
# A business profile is the restaurant tenant every other record is scoped to.
# - BusinessProfileUpsert: body of POST /business-profile
# - TaxSettings: grouped tax fields the web client sends
# - CurrencyResponse: GET /business-profile/{id}/currency
# - MemberAdd, MemberRoleUpdate: team membership bodies
# =============================================================================

from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class BusinessType(str, Enum):
    """Kind of food business."""
    CASUAL_DINING = "CASUAL_DINING"
    FINE_DINING = "FINE_DINING"
    FAST_FOOD = "FAST_FOOD"
    CAFE = "CAFE"
    BAR = "BAR"
    FOOD_TRUCK = "FOOD_TRUCK"
    CATERING = "CATERING"
    GHOST_KITCHEN = "GHOST_KITCHEN"
    OTHER = "OTHER"


class CurrencyCode(str, Enum):
    """Currencies a business profile can price in."""
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    SEK = "SEK"
    JPY = "JPY"
    CAD = "CAD"
    AUD = "AUD"
    CHF = "CHF"
    CNY = "CNY"
    INR = "INR"


class MembershipRole(str, Enum):
    """Role of a user inside a business profile."""
    OWNER = "owner"
    MANAGER = "manager"
    STAFF = "staff"


class TaxSettings(BaseModel):
    """Tax fields as grouped by the web client."""
    enabled: Optional[bool] = None
    rate: Optional[float] = Field(default=None, ge=0, le=100)
    name: Optional[str] = None


class BusinessProfileUpsert(BaseModel):
    """
    Schema for creating or updating a business profile.

    user_id is the upsert key: one profile per owner.

    Example:
        {
            "user_id": "3f0c6b1e-...",
            "name": "Trattoria Roma",
            "type": "CASUAL_DINING",
            "default_currency": "EUR",
            "tax_settings": {"enabled": true, "rate": 12, "name": "VAT"}
        }
    """

    user_id: str = Field(
        ...,
        min_length=1,
        description="Owner of the profile (must match the caller)"
    )

    name: Optional[str] = Field(default=None, max_length=255)
    type: Optional[BusinessType] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    operating_hours: Optional[dict[str, Any]] = None
    default_currency: Optional[CurrencyCode] = None

    tax_rate: Optional[float] = Field(default=None, ge=0, le=100)
    tax_enabled: Optional[bool] = None
    tax_name: Optional[str] = None
    tax_settings: Optional[TaxSettings] = None


class CurrencyResponse(BaseModel):
    """Currency used by a business profile."""
    currency: str
    symbol: str


class MemberAdd(BaseModel):
    """
    Body of POST /business-profile/{id}/users.

    Example:
        {"user_id": "3f0c6b1e-...", "role": "staff"}
    """
    user_id: UUID
    role: MembershipRole = MembershipRole.STAFF


class MemberRoleUpdate(BaseModel):
    """Body of PATCH /business-profile/{id}/users/{user_id}."""
    role: MembershipRole
