"""
Persistence contract shared by the in-memory and SQL repositories

Every entity gets the same shape of operations: list, get by id (None when
absent), get by foreign key, create (assigns id and timestamps), partial
update (None when absent, refreshes updated_at) and delete (bool). No
operation enforces cross-entity integrity; deleting a category does not
touch the products that reference it.
"""
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from greengrocer.models import (
    User, Category, Product, Cart, CartItem, Order, OrderItem, OrderStatusHistory, Favorite
)

DEFAULT_CATEGORIES = [
    {"name": "Vegetables", "icon": "ri-leaf-line"},
    {"name": "Fruits", "icon": "ri-apple-line"},
    {"name": "Organic", "icon": "ri-seedling-line"},
    {"name": "Fresh Herbs", "icon": "ri-plant-line"},
    {"name": "Dairy", "icon": "ri-cup-line"},
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Repository(ABC):
    """Uniform CRUD interface over all GreenGrocer entities"""
    
    # Transactions
    
    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        Group writes into one all-or-nothing unit
        
        Any exception raised inside the block undoes every write made in it
        and is re-raised. Nested blocks join the outermost one.
        """
    
    def seed_default_categories(self) -> None:
        """Insert the default categories when none exist"""
        if self.get_all_categories():
            return
        with self.transaction():
            for category in DEFAULT_CATEGORIES:
                self.create_category(dict(category))
    
    # Users
    
    @abstractmethod
    def get_all_users(self) -> List[User]: ...
    
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...
    
    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...
    
    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...
    
    @abstractmethod
    def create_user(self, user_data: Dict[str, Any]) -> User: ...
    
    @abstractmethod
    def update_user(self, user_id: int, user_data: Dict[str, Any]) -> Optional[User]: ...
    
    # Categories
    
    @abstractmethod
    def get_all_categories(self) -> List[Category]: ...
    
    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]: ...
    
    @abstractmethod
    def create_category(self, category_data: Dict[str, Any]) -> Category: ...
    
    @abstractmethod
    def update_category(self, category_id: int, category_data: Dict[str, Any]) -> Optional[Category]: ...
    
    @abstractmethod
    def delete_category(self, category_id: int) -> bool: ...
    
    # Products
    
    @abstractmethod
    def get_all_products(self) -> List[Product]: ...
    
    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]: ...
    
    @abstractmethod
    def get_product_by_sku(self, sku: str) -> Optional[Product]: ...
    
    @abstractmethod
    def get_products_by_category_id(self, category_id: int) -> List[Product]: ...
    
    @abstractmethod
    def create_product(self, product_data: Dict[str, Any]) -> Product: ...
    
    @abstractmethod
    def update_product(self, product_id: int, product_data: Dict[str, Any]) -> Optional[Product]: ...
    
    @abstractmethod
    def delete_product(self, product_id: int) -> bool: ...
    
    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: float) -> Optional[Product]:
        """
        Subtract quantity from stock only if enough is on hand
        
        Recomputes the product status. Returns the updated product, or None
        when the product is missing or its stock is below quantity.
        """
    
    # Orders
    
    @abstractmethod
    def get_all_orders(self) -> List[Order]: ...
    
    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]: ...
    
    @abstractmethod
    def get_orders_by_user_id(self, user_id: int) -> List[Order]: ...
    
    @abstractmethod
    def create_order(self, order_data: Dict[str, Any]) -> Order:
        """Create the order and its initial "Order created" history row"""
    
    @abstractmethod
    def update_order_status(self, order_id: int, status: str, notes: Optional[str] = None) -> Optional[Order]:
        """Set status, refresh updated_at and append one history row"""
    
    @abstractmethod
    def get_order_status_history(self, order_id: int) -> List[OrderStatusHistory]: ...
    
    # Order items
    
    @abstractmethod
    def get_order_items(self, order_id: int) -> List[OrderItem]: ...
    
    @abstractmethod
    def add_order_item(self, item_data: Dict[str, Any]) -> OrderItem: ...
    
    # Cart
    
    @abstractmethod
    def get_cart(self, user_id: int) -> Optional[Cart]: ...
    
    @abstractmethod
    def create_cart(self, user_id: int) -> Cart: ...
    
    @abstractmethod
    def get_cart_items(self, cart_id: int) -> List[CartItem]: ...
    
    @abstractmethod
    def get_cart_item(self, item_id: int) -> Optional[CartItem]: ...
    
    @abstractmethod
    def add_cart_item(self, item_data: Dict[str, Any]) -> CartItem:
        """Insert a line, or add to the quantity of the cart's existing line for that product"""
    
    @abstractmethod
    def update_cart_item(self, item_id: int, quantity: float) -> Optional[CartItem]:
        """Set quantity; zero or below removes the line and returns None"""
    
    @abstractmethod
    def remove_cart_item(self, item_id: int) -> bool: ...
    
    @abstractmethod
    def clear_cart(self, cart_id: int) -> bool: ...
    
    # Favorites
    
    @abstractmethod
    def get_user_favorites(self, user_id: int) -> List[Favorite]: ...
    
    @abstractmethod
    def get_favorite(self, favorite_id: int) -> Optional[Favorite]: ...
    
    @abstractmethod
    def add_favorite(self, favorite_data: Dict[str, Any]) -> Favorite:
        """Create a favorite, or return the existing one for the same user and product"""
    
    @abstractmethod
    def remove_favorite(self, favorite_id: int) -> bool: ...
