"""
Schemas package
"""
from greengrocer.schemas.common import CamelModel, MessageResponse
from greengrocer.schemas.user import UserRegister, UserLogin, UserUpdate, UserResponse
from greengrocer.schemas.catalog import (
    CategoryResponse,
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductCreatedResponse
)
from greengrocer.schemas.cart import CartItemAdd, CartItemUpdate, CartItemResponse, CartResponse
from greengrocer.schemas.order import (
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
    OrderStatusHistoryResponse,
    OrderStatusOptionsResponse
)
from greengrocer.schemas.favorite import FavoriteCreate, FavoriteResponse
from greengrocer.schemas.admin import DashboardStats

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "CategoryResponse",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductCreatedResponse",
    "CartItemAdd",
    "CartItemUpdate",
    "CartItemResponse",
    "CartResponse",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "OrderResponse",
    "OrderStatusHistoryResponse",
    "OrderStatusOptionsResponse",
    "FavoriteCreate",
    "FavoriteResponse",
    "DashboardStats",
]
