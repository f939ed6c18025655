"""
Pydantic schemas for categories and products
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from greengrocer.schemas.common import CamelModel


class CategoryResponse(CamelModel):
    """Schema for category response"""
    id: int
    name: str
    icon: str


class ProductBase(CamelModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str = Field(..., description="Product description")
    price: float = Field(..., ge=0, description="Unit price (non-negative)")
    unit: str = Field(..., min_length=1, max_length=50, description="Unit label, e.g. lb, kg, bunch")
    stock: float = Field(0, ge=0, description="Quantity on hand (non-negative)")
    image: Optional[str] = Field(None, max_length=500, description="Product image URL")
    is_organic: bool = False
    rating: float = Field(0, ge=0, le=5)
    category_id: Optional[int] = None
    sku: str = Field(..., min_length=1, max_length=100, description="Unique stock keeping unit")


class ProductCreate(ProductBase):
    """Schema for creating a new product; status is derived from stock"""
    pass


class ProductUpdate(CamelModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    stock: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, max_length=500)
    is_organic: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    category_id: Optional[int] = None
    sku: Optional[str] = Field(None, min_length=1, max_length=100)


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductCreatedResponse(CamelModel):
    """Schema for the product creation acknowledgement"""
    message: str = "Product created successfully"
    product: ProductResponse
