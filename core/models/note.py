# =============================================================================
# core/models/note.py - Note Schemas
# =============================================================================
# Free-text notes attached to the business as a whole or to one inventory
# item, supplier or sale, labelled with tags from the business's tag list.
# =============================================================================

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class NoteEntityType(str, Enum):
    """What a note is about."""
    GENERAL = "general"
    INVENTORY = "inventory"
    SUPPLIER = "supplier"
    SALE = "sale"


def _clean_tags(tags: list[str]) -> list[str]:
    # Trimmed, non-blank, first occurrence wins
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class NoteCreate(BaseModel):
    """
    Schema for adding a note.

    Example:
        {"content": "Order more flour by Tuesday", "tags": ["urgent"],
         "entity_type": "inventory", "entity_id": "…"}
    """

    title: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    entity_type: NoteEntityType = NoteEntityType.GENERAL
    entity_id: Optional[str] = None

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class NoteUpdate(BaseModel):
    """Partial update; only fields that are sent are written."""

    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    tags: Optional[list[str]] = None
    entity_type: Optional[NoteEntityType] = None
    entity_id: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _clean_tags(v) if v is not None else v


class NoteTagCreate(BaseModel):
    """Schema for adding a tag to the business's tag list."""

    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field(default="#6b7280", description="Hex color, e.g. #ef4444")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Tag name cannot be blank")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if not HEX_COLOR.match(v):
            raise ValueError("Color must be a hex value like #ef4444")
        return v.lower()
