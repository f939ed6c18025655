"""
SQLAlchemy repository - Data Access Layer
"""
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from greengrocer.models import (
    User, Category, Product, Cart, CartItem, Order, OrderItem, OrderStatusHistory, Favorite,
    derive_product_status
)
from greengrocer.repositories.base import Repository, utcnow


class SQLRepository(Repository):
    """Repository for all entities over one SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db
        self._transaction_depth = 0

    @contextmanager
    def transaction(self):
        if self._transaction_depth:
            yield self
            return

        self._transaction_depth += 1
        try:
            yield self
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._transaction_depth -= 1

    def _save(self, *instances) -> None:
        """Commit immediately, or only flush while a transaction is open"""
        for instance in instances:
            self.db.add(instance)
        if self._transaction_depth:
            self.db.flush()
            return
        self.db.commit()
        for instance in instances:
            self.db.refresh(instance)

    def _remove(self, instance) -> None:
        self.db.delete(instance)
        if self._transaction_depth:
            self.db.flush()
        else:
            self.db.commit()

    def _apply(self, instance, data: Dict[str, Any]):
        for field, value in data.items():
            if field != "id":
                setattr(instance, field, value)
        self._save(instance)
        return instance

    def _touch_cart(self, cart_id: int) -> None:
        cart = self.db.get(Cart, cart_id)
        if cart is not None:
            cart.updated_at = utcnow()

    # Users

    def get_all_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, user_data: Dict[str, Any]) -> User:
        user = User(**user_data, created_at=utcnow())
        self._save(user)
        return user

    def update_user(self, user_id: int, user_data: Dict[str, Any]) -> Optional[User]:
        user = self.get_user(user_id)
        if not user:
            return None
        return self._apply(user, user_data)

    # Categories

    def get_all_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.id).all()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def create_category(self, category_data: Dict[str, Any]) -> Category:
        category = Category(**category_data)
        self._save(category)
        return category

    def update_category(self, category_id: int, category_data: Dict[str, Any]) -> Optional[Category]:
        category = self.get_category(category_id)
        if not category:
            return None
        return self._apply(category, category_data)

    def delete_category(self, category_id: int) -> bool:
        category = self.get_category(category_id)
        if not category:
            return False
        self._remove(category)
        return True

    # Products

    def get_all_products(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.sku == sku).first()

    def get_products_by_category_id(self, category_id: int) -> List[Product]:
        return self.db.query(Product).filter(
            Product.category_id == category_id
        ).order_by(Product.id).all()

    def create_product(self, product_data: Dict[str, Any]) -> Product:
        now = utcnow()
        product = Product(**product_data, created_at=now, updated_at=now)
        self._save(product)
        return product

    def update_product(self, product_id: int, product_data: Dict[str, Any]) -> Optional[Product]:
        product = self.get_product(product_id)
        if not product:
            return None
        return self._apply(product, {**product_data, "updated_at": utcnow()})

    def delete_product(self, product_id: int) -> bool:
        product = self.get_product(product_id)
        if not product:
            return False
        self._remove(product)
        return True

    def decrement_stock(self, product_id: int, quantity: float) -> Optional[Product]:
        # Conditional update: a concurrent checkout that drained the stock
        # makes this match zero rows instead of driving stock negative
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .where(Product.stock >= quantity)
            .values(stock=Product.stock - quantity, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = self.db.execute(stmt)
        if result.rowcount == 0:
            return None

        product = self.get_product(product_id)
        product.status = derive_product_status(product.stock)
        self._save(product)
        return product

    # Orders

    def get_all_orders(self) -> List[Order]:
        return self.db.query(Order).order_by(Order.id).all()

    def get_order(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_orders_by_user_id(self, user_id: int) -> List[Order]:
        return self.db.query(Order).filter(Order.user_id == user_id).order_by(Order.id).all()

    def create_order(self, order_data: Dict[str, Any]) -> Order:
        now = utcnow()
        order = Order(**order_data, created_at=now, updated_at=now)
        self.db.add(order)
        self.db.flush()

        history = OrderStatusHistory(
            order_id=order.id,
            status=order.status,
            timestamp=now,
            notes="Order created"
        )
        self._save(order, history)
        return order

    def update_order_status(self, order_id: int, status: str, notes: Optional[str] = None) -> Optional[Order]:
        order = self.get_order(order_id)
        if not order:
            return None

        now = utcnow()
        order.status = status
        order.updated_at = now
        history = OrderStatusHistory(order_id=order_id, status=status, timestamp=now, notes=notes)
        self._save(order, history)
        return order

    def get_order_status_history(self, order_id: int) -> List[OrderStatusHistory]:
        return self.db.query(OrderStatusHistory).filter(
            OrderStatusHistory.order_id == order_id
        ).order_by(OrderStatusHistory.timestamp, OrderStatusHistory.id).all()

    # Order items

    def get_order_items(self, order_id: int) -> List[OrderItem]:
        return self.db.query(OrderItem).filter(OrderItem.order_id == order_id).order_by(OrderItem.id).all()

    def add_order_item(self, item_data: Dict[str, Any]) -> OrderItem:
        item = OrderItem(**item_data)
        self._save(item)
        return item

    # Cart

    def get_cart(self, user_id: int) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.user_id == user_id).first()

    def create_cart(self, user_id: int) -> Cart:
        cart = Cart(user_id=user_id, updated_at=utcnow())
        self._save(cart)
        return cart

    def get_cart_items(self, cart_id: int) -> List[CartItem]:
        return self.db.query(CartItem).filter(CartItem.cart_id == cart_id).order_by(CartItem.id).all()

    def get_cart_item(self, item_id: int) -> Optional[CartItem]:
        return self.db.query(CartItem).filter(CartItem.id == item_id).first()

    def add_cart_item(self, item_data: Dict[str, Any]) -> CartItem:
        existing = self.db.query(CartItem).filter(
            CartItem.cart_id == item_data["cart_id"],
            CartItem.product_id == item_data["product_id"]
        ).first()
        if existing:
            return self.update_cart_item(existing.id, existing.quantity + item_data["quantity"])

        item = CartItem(**item_data)
        self._touch_cart(item.cart_id)
        self._save(item)
        return item

    def update_cart_item(self, item_id: int, quantity: float) -> Optional[CartItem]:
        if quantity <= 0:
            self.remove_cart_item(item_id)
            return None

        item = self.get_cart_item(item_id)
        if not item:
            return None

        item.quantity = quantity
        self._touch_cart(item.cart_id)
        self._save(item)
        return item

    def remove_cart_item(self, item_id: int) -> bool:
        item = self.get_cart_item(item_id)
        if not item:
            return False
        self._touch_cart(item.cart_id)
        self._remove(item)
        return True

    def clear_cart(self, cart_id: int) -> bool:
        self.db.query(CartItem).filter(CartItem.cart_id == cart_id).delete()
        self._touch_cart(cart_id)
        if self._transaction_depth:
            self.db.flush()
        else:
            self.db.commit()
        return True

    # Favorites

    def get_user_favorites(self, user_id: int) -> List[Favorite]:
        return self.db.query(Favorite).filter(Favorite.user_id == user_id).order_by(Favorite.id).all()

    def get_favorite(self, favorite_id: int) -> Optional[Favorite]:
        return self.db.query(Favorite).filter(Favorite.id == favorite_id).first()

    def add_favorite(self, favorite_data: Dict[str, Any]) -> Favorite:
        existing = self.db.query(Favorite).filter(
            Favorite.user_id == favorite_data["user_id"],
            Favorite.product_id == favorite_data["product_id"]
        ).first()
        if existing:
            return existing

        favorite = Favorite(**favorite_data, created_at=utcnow())
        self._save(favorite)
        return favorite

    def remove_favorite(self, favorite_id: int) -> bool:
        favorite = self.get_favorite(favorite_id)
        if not favorite:
            return False
        self._remove(favorite)
        return True
