"""
Pydantic schemas for request/response validation

Fields are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog.database.models import AvailabilityStatus


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, also accepts snake_case"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class ProductBase(CamelModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(..., description="Product description")
    category: str = Field(..., min_length=1, description="Product category")
    brand: str = Field(..., min_length=1, description="Product brand")
    price: float = Field(..., ge=0, description="Product price")
    quantity: int = Field(..., ge=0, description="Units in stock")
    sku: str = Field(..., min_length=1, description="Globally unique stock keeping unit")
    release_date: datetime = Field(..., description="Release date")
    availability_status: AvailabilityStatus = Field(..., description="Availability status")
    customer_rating: float = Field(0.0, ge=0, le=5, description="Average customer rating")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(CamelModel):
    """Schema for a partial product update (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = Field(None, min_length=1)
    release_date: Optional[datetime] = None
    availability_status: Optional[AvailabilityStatus] = None
    customer_rating: Optional[float] = Field(None, ge=0, le=5)

    def changes(self) -> dict:
        """Fields explicitly supplied by the caller, excluding nulls"""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Plain status message"""
    message: str

