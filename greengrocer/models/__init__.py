"""
Models package
"""
from greengrocer.models.user import User, UserRole
from greengrocer.models.category import Category
from greengrocer.models.product import Product, ProductStatus, derive_product_status
from greengrocer.models.cart import Cart, CartItem
from greengrocer.models.order import Order, OrderItem, OrderStatus, OrderStatusHistory
from greengrocer.models.favorite import Favorite

__all__ = [
    "User",
    "UserRole",
    "Category",
    "Product",
    "ProductStatus",
    "derive_product_status",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusHistory",
    "Favorite",
]
