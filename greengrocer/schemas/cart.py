"""
Pydantic schemas for the shopping cart
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from greengrocer.schemas.common import CamelModel
from greengrocer.schemas.catalog import ProductResponse


class CartItemAdd(CamelModel):
    """Schema for adding a product to the cart"""
    product_id: int
    quantity: float = Field(..., gt=0, description="Quantity to add (must be positive)")


class CartItemUpdate(CamelModel):
    """Schema for setting a cart line quantity; zero removes the line"""
    quantity: float = Field(..., ge=0)


class CartItemResponse(CamelModel):
    """Cart line joined with its product"""
    id: int
    cart_id: int
    product_id: int
    quantity: float
    product: Optional[ProductResponse] = None


class CartResponse(CamelModel):
    """Cart with its lines"""
    id: int
    user_id: int
    updated_at: Optional[datetime] = None
    items: List[CartItemResponse] = []
