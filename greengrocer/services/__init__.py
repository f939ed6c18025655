"""
Services package
"""
from greengrocer.services.auth_service import AuthService
from greengrocer.services.product_service import ProductService
from greengrocer.services.cart_service import CartService
from greengrocer.services.favorite_service import FavoriteService
from greengrocer.services.order_service import OrderService, allowed_transitions
from greengrocer.services.admin_service import AdminService

__all__ = [
    "AuthService",
    "ProductService",
    "CartService",
    "FavoriteService",
    "OrderService",
    "AdminService",
    "allowed_transitions",
]
