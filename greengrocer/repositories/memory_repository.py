"""
In-memory repository for tests and demos

Records are model instances kept in per-table dicts keyed by id. Stored
records are never mutated: updates put a fresh copy in the table, so a
transaction only needs a shallow copy of each table to roll back.
"""
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from greengrocer.models import (
    User, Category, Product, Cart, CartItem, Order, OrderItem, OrderStatusHistory, Favorite,
    derive_product_status
)
from greengrocer.repositories.base import Repository, utcnow

_TABLES = (
    "users",
    "categories",
    "products",
    "orders",
    "order_items",
    "order_status_history",
    "carts",
    "cart_items",
    "favorites",
)


def _column_defaults(model) -> Dict[str, Any]:
    defaults = {}
    for column in model.__table__.columns:
        if column.default is not None and column.default.is_scalar:
            defaults[column.key] = column.default.arg
    return defaults


def _copy(record, **changes):
    values = {column.key: getattr(record, column.key) for column in record.__table__.columns}
    values.update(changes)
    return type(record)(**values)


class MemoryRepository(Repository):
    """Dict-backed repository; all state lives in process memory"""

    def __init__(self, seed_categories: bool = True):
        self._lock = threading.RLock()
        self._tables: Dict[str, Dict[int, Any]] = {name: {} for name in _TABLES}
        self._next_ids: Dict[str, int] = {name: 1 for name in _TABLES}

        if seed_categories:
            self.seed_default_categories()

    @contextmanager
    def transaction(self):
        with self._lock:
            # Id counters are not restored, so ids stay unique across rollbacks
            tables = {name: dict(rows) for name, rows in self._tables.items()}
            try:
                yield self
            except Exception:
                self._tables = tables
                raise

    # Helpers

    def _rows(self, table: str) -> List[Any]:
        return list(self._tables[table].values())

    def _insert(self, table: str, model, data: Dict[str, Any]):
        with self._lock:
            record_id = self._next_ids[table]
            self._next_ids[table] += 1
            values = _column_defaults(model)
            values.update(data)
            values["id"] = record_id
            record = model(**values)
            self._tables[table][record_id] = record
            return record

    def _update(self, table: str, record_id: int, data: Dict[str, Any]):
        with self._lock:
            record = self._tables[table].get(record_id)
            if record is None:
                return None
            data = {k: v for k, v in data.items() if k != "id"}
            updated = _copy(record, **data)
            self._tables[table][record_id] = updated
            return updated

    def _delete(self, table: str, record_id: int) -> bool:
        with self._lock:
            return self._tables[table].pop(record_id, None) is not None

    def _touch_cart(self, cart_id: int) -> None:
        self._update("carts", cart_id, {"updated_at": utcnow()})

    # Users

    def get_all_users(self) -> List[User]:
        return self._rows("users")

    def get_user(self, user_id: int) -> Optional[User]:
        return self._tables["users"].get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._rows("users") if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._rows("users") if u.email == email), None)

    def create_user(self, user_data: Dict[str, Any]) -> User:
        return self._insert("users", User, {**user_data, "created_at": utcnow()})

    def update_user(self, user_id: int, user_data: Dict[str, Any]) -> Optional[User]:
        return self._update("users", user_id, user_data)

    # Categories

    def get_all_categories(self) -> List[Category]:
        return self._rows("categories")

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._tables["categories"].get(category_id)

    def create_category(self, category_data: Dict[str, Any]) -> Category:
        return self._insert("categories", Category, category_data)

    def update_category(self, category_id: int, category_data: Dict[str, Any]) -> Optional[Category]:
        return self._update("categories", category_id, category_data)

    def delete_category(self, category_id: int) -> bool:
        return self._delete("categories", category_id)

    # Products

    def get_all_products(self) -> List[Product]:
        return self._rows("products")

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._tables["products"].get(product_id)

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        return next((p for p in self._rows("products") if p.sku == sku), None)

    def get_products_by_category_id(self, category_id: int) -> List[Product]:
        return [p for p in self._rows("products") if p.category_id == category_id]

    def create_product(self, product_data: Dict[str, Any]) -> Product:
        now = utcnow()
        return self._insert("products", Product, {**product_data, "created_at": now, "updated_at": now})

    def update_product(self, product_id: int, product_data: Dict[str, Any]) -> Optional[Product]:
        return self._update("products", product_id, {**product_data, "updated_at": utcnow()})

    def delete_product(self, product_id: int) -> bool:
        return self._delete("products", product_id)

    def decrement_stock(self, product_id: int, quantity: float) -> Optional[Product]:
        with self._lock:
            product = self.get_product(product_id)
            if product is None or product.stock < quantity:
                return None
            new_stock = product.stock - quantity
            return self.update_product(product_id, {
                "stock": new_stock,
                "status": derive_product_status(new_stock),
            })

    # Orders

    def get_all_orders(self) -> List[Order]:
        return self._rows("orders")

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._tables["orders"].get(order_id)

    def get_orders_by_user_id(self, user_id: int) -> List[Order]:
        return [o for o in self._rows("orders") if o.user_id == user_id]

    def create_order(self, order_data: Dict[str, Any]) -> Order:
        with self._lock:
            now = utcnow()
            order = self._insert("orders", Order, {**order_data, "created_at": now, "updated_at": now})
            self._insert("order_status_history", OrderStatusHistory, {
                "order_id": order.id,
                "status": order.status,
                "timestamp": now,
                "notes": "Order created",
            })
            return order

    def update_order_status(self, order_id: int, status: str, notes: Optional[str] = None) -> Optional[Order]:
        with self._lock:
            now = utcnow()
            order = self._update("orders", order_id, {"status": status, "updated_at": now})
            if order is None:
                return None
            self._insert("order_status_history", OrderStatusHistory, {
                "order_id": order_id,
                "status": status,
                "timestamp": now,
                "notes": notes,
            })
            return order

    def get_order_status_history(self, order_id: int) -> List[OrderStatusHistory]:
        return [h for h in self._rows("order_status_history") if h.order_id == order_id]

    # Order items

    def get_order_items(self, order_id: int) -> List[OrderItem]:
        return [i for i in self._rows("order_items") if i.order_id == order_id]

    def add_order_item(self, item_data: Dict[str, Any]) -> OrderItem:
        return self._insert("order_items", OrderItem, item_data)

    # Cart

    def get_cart(self, user_id: int) -> Optional[Cart]:
        return next((c for c in self._rows("carts") if c.user_id == user_id), None)

    def create_cart(self, user_id: int) -> Cart:
        return self._insert("carts", Cart, {"user_id": user_id, "updated_at": utcnow()})

    def get_cart_items(self, cart_id: int) -> List[CartItem]:
        return [i for i in self._rows("cart_items") if i.cart_id == cart_id]

    def get_cart_item(self, item_id: int) -> Optional[CartItem]:
        return self._tables["cart_items"].get(item_id)

    def add_cart_item(self, item_data: Dict[str, Any]) -> CartItem:
        with self._lock:
            existing = next(
                (i for i in self._rows("cart_items")
                 if i.cart_id == item_data["cart_id"] and i.product_id == item_data["product_id"]),
                None
            )
            if existing is not None:
                return self.update_cart_item(existing.id, existing.quantity + item_data["quantity"])

            item = self._insert("cart_items", CartItem, item_data)
            self._touch_cart(item.cart_id)
            return item

    def update_cart_item(self, item_id: int, quantity: float) -> Optional[CartItem]:
        with self._lock:
            item = self.get_cart_item(item_id)
            if item is None:
                return None
            if quantity <= 0:
                self.remove_cart_item(item_id)
                return None
            updated = self._update("cart_items", item_id, {"quantity": quantity})
            self._touch_cart(item.cart_id)
            return updated

    def remove_cart_item(self, item_id: int) -> bool:
        with self._lock:
            item = self.get_cart_item(item_id)
            if item is not None:
                self._touch_cart(item.cart_id)
            return self._delete("cart_items", item_id)

    def clear_cart(self, cart_id: int) -> bool:
        with self._lock:
            for item in self.get_cart_items(cart_id):
                self._delete("cart_items", item.id)
            self._touch_cart(cart_id)
            return True

    # Favorites

    def get_user_favorites(self, user_id: int) -> List[Favorite]:
        return [f for f in self._rows("favorites") if f.user_id == user_id]

    def get_favorite(self, favorite_id: int) -> Optional[Favorite]:
        return self._tables["favorites"].get(favorite_id)

    def add_favorite(self, favorite_data: Dict[str, Any]) -> Favorite:
        with self._lock:
            existing = next(
                (f for f in self._rows("favorites")
                 if f.user_id == favorite_data["user_id"] and f.product_id == favorite_data["product_id"]),
                None
            )
            if existing is not None:
                return existing
            return self._insert("favorites", Favorite, {**favorite_data, "created_at": utcnow()})

    def remove_favorite(self, favorite_id: int) -> bool:
        return self._delete("favorites", favorite_id)
