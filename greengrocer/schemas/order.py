"""
Pydantic schemas for orders
"""
from pydantic import Field, EmailStr
from typing import List, Optional
from datetime import datetime

from greengrocer.schemas.common import CamelModel
from greengrocer.schemas.catalog import ProductResponse


class OrderCreate(CamelModel):
    """Shipping and contact details for checkout; amounts come from the cart"""
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    contact_email: EmailStr
    contact_phone: str = Field(..., min_length=1, max_length=50)
    delivery_instructions: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    delivery_fee: float = Field(..., ge=0, description="Delivery fee (non-negative)")


class OrderStatusUpdate(CamelModel):
    """Schema for updating order status; the value is checked against OrderStatus"""
    status: str
    notes: Optional[str] = None


class OrderItemResponse(CamelModel):
    """Order line joined with its product"""
    id: int
    order_id: int
    product_id: int
    quantity: float
    unit_price: float
    total_price: float
    product: Optional[ProductResponse] = None


class OrderResponse(CamelModel):
    """Schema for order response"""
    id: int
    user_id: int
    status: str
    subtotal: float
    delivery_fee: float
    tax: float
    total: float
    address: str
    city: str
    state: str
    zip_code: str
    contact_email: str
    contact_phone: str
    delivery_instructions: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []


class OrderStatusHistoryResponse(CamelModel):
    """One entry of an order's status audit trail"""
    id: int
    order_id: int
    status: str
    timestamp: Optional[datetime] = None
    notes: Optional[str] = None


class OrderStatusOptionsResponse(CamelModel):
    """Statuses an admin may move an order to next"""
    order_id: int
    current_status: str
    available_statuses: List[str]
    enforced: bool
