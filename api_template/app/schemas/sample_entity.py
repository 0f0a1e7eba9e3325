"""
Pydantic schemas for the sample entity collection.

A sample entity is a generic record used to demonstrate CRUD
operations: a unique ``name``, optional ``description`` and ``value``,
an ``is_active`` flag, a closed ``category`` enumeration, ordered
``tags`` and an open-ended ``metadata`` mapping.  Timestamps are
assigned by the server and are never read from request bodies.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

# At most 15 significant digits survive the trip through a JSON double.
VALUE_MAX_DIGITS = 15

# Decimals are kept exact internally but rendered as JSON numbers.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class SampleEntityType(str, Enum):
    """Category classification of a sample entity."""

    standard = "Standard"
    premium = "Premium"
    enterprise = "Enterprise"
    custom = "Custom"


class _SampleEntityFields(BaseModel):
    """Validation rules shared by the create and update schemas."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v


class SampleEntityCreate(_SampleEntityFields):
    """Schema for creating a new sample entity."""

    name: str = Field(..., min_length=1, max_length=100, description="Unique name of the entity")
    description: Optional[str] = Field(None, max_length=500, description="Optional description")
    is_active: bool = Field(True, description="Whether the entity is active")
    value: Optional[JsonDecimal] = Field(
        None, ge=0, max_digits=VALUE_MAX_DIGITS, description="Optional non-negative numeric value"
    )
    category: SampleEntityType = Field(SampleEntityType.standard, description="Category classification")
    tags: List[str] = Field(default_factory=list, description="Ordered list of tags")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Arbitrary JSON metadata")


class SampleEntityUpdate(_SampleEntityFields):
    """Schema for replacing an existing sample entity.

    Every mutable field is required: an update replaces the stored
    record wholesale, so nullable fields must be sent explicitly as
    ``null`` to clear them.  Nothing is merged from the old record.
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(..., max_length=500)
    is_active: bool = Field(...)
    value: Optional[JsonDecimal] = Field(..., ge=0, max_digits=VALUE_MAX_DIGITS)
    category: SampleEntityType = Field(...)
    tags: List[str] = Field(...)
    metadata: Optional[Dict[str, Any]] = Field(...)


class SampleEntityRead(BaseModel):
    """Schema for reading a sample entity."""

    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    value: Optional[JsonDecimal] = None
    category: SampleEntityType
    tags: List[str] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginatedResult(BaseModel):
    """One page of a filtered, id-ordered listing."""

    items: List[SampleEntityRead]
    total_count: int
    page_number: int = Field(..., description="1-based page number")
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(
        cls,
        items: List[SampleEntityRead],
        total_count: int,
        page_number: int,
        page_size: int,
    ) -> "PaginatedResult":
        total_pages = -(-total_count // page_size) if page_size else 0
        return cls(
            items=items,
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
            has_next_page=page_number < total_pages,
            has_previous_page=page_number > 1,
        )
