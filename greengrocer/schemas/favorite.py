"""
Pydantic schemas for favorites
"""
from typing import Optional
from datetime import datetime

from greengrocer.schemas.common import CamelModel
from greengrocer.schemas.catalog import ProductResponse


class FavoriteCreate(CamelModel):
    """Schema for favoriting a product"""
    product_id: int


class FavoriteResponse(CamelModel):
    """Favorite joined with its product"""
    id: int
    user_id: int
    product_id: int
    created_at: Optional[datetime] = None
    product: Optional[ProductResponse] = None
