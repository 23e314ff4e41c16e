"""
Base schema classes
"""
from pydantic import BaseModel as PydanticBaseModel, field_validator
from datetime import datetime


class BaseSchema(PydanticBaseModel):
    """Base schema with common configuration"""

    class Config:
        from_attributes = True  # Allows ORM mode (formerly orm_mode)
        populate_by_name = True


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields"""
    created_at: datetime
    updated_at: datetime


class IDSchema(BaseSchema):
    """Schema with ID field"""
    id: int


class BaseResponseSchema(TimestampSchema, IDSchema):
    """Base response schema with common fields"""
    pass


def blank_to_none(value):
    """Forms submit cleared inputs as empty strings."""
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class BlankDatesMixin(BaseSchema):
    """Treats "" as null for date fields."""

    @field_validator(
        "date_of_birth", "application_date", "issue_date", "expiry_date",
        mode="before", check_fields=False,
    )
    @classmethod
    def empty_dates_are_null(cls, v):
        return blank_to_none(v)
