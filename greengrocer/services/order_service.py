"""
Order Service - Business Logic Layer
"""
import logging
from typing import List, Optional

from greengrocer.config import settings
from greengrocer.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ProductUnavailableError,
    ValidationError
)
from greengrocer.models import Order, OrderStatus, User
from greengrocer.repositories import Repository
from greengrocer.schemas.catalog import ProductResponse
from greengrocer.schemas.order import (
    OrderCreate,
    OrderItemResponse,
    OrderResponse,
    OrderStatusHistoryResponse,
    OrderStatusOptionsResponse
)

logger = logging.getLogger(__name__)

ORDER_STATUSES = [s.value for s in OrderStatus]
TERMINAL_STATUSES = (OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value)


def allowed_transitions(current: str) -> List[str]:
    """
    Statuses an order may move to from current
    
    Terminal orders stay where they are. Otherwise the order may stay put,
    advance up to two steps along the lifecycle, or be cancelled.
    """
    if current in TERMINAL_STATUSES:
        return [current]
    if current not in ORDER_STATUSES:
        return list(ORDER_STATUSES)
    
    index = ORDER_STATUSES.index(current)
    return [
        status for i, status in enumerate(ORDER_STATUSES)
        if status == OrderStatus.CANCELLED.value or index <= i <= index + 2
    ]


class OrderService:
    """Service layer for order business logic"""
    
    def __init__(self, repository: Repository, enforce_transitions: Optional[bool] = None):
        self.repository = repository
        if enforce_transitions is None:
            enforce_transitions = settings.ENFORCE_STATUS_TRANSITIONS
        self.enforce_transitions = enforce_transitions
    
    def build_order_response(self, order: Order) -> OrderResponse:
        """Order with its lines, each joined to the current product"""
        items = []
        for item in self.repository.get_order_items(order.id):
            item_response = OrderItemResponse.model_validate(item)
            product = self.repository.get_product(item.product_id)
            item_response.product = ProductResponse.model_validate(product) if product else None
            items.append(item_response)
        
        response = OrderResponse.model_validate(order)
        response.items = items
        return response
    
    def _get_visible_order(self, user: User, order_id: int) -> Order:
        order = self.repository.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        if not user.is_admin and order.user_id != user.id:
            raise PermissionDeniedError("Not authorized to view this order")
        return order
    
    def get_orders(self, user: User) -> List[OrderResponse]:
        """All orders for admins, the caller's own orders otherwise"""
        if user.is_admin:
            orders = self.repository.get_all_orders()
        else:
            orders = self.repository.get_orders_by_user_id(user.id)
        return [self.build_order_response(o) for o in orders]
    
    def get_order(self, user: User, order_id: int) -> OrderResponse:
        """
        Get one order
        
        Raises:
            NotFoundError: If the order does not exist
            PermissionDeniedError: If a customer asks for another user's order
        """
        return self.build_order_response(self._get_visible_order(user, order_id))
    
    def get_status_history(self, user: User, order_id: int) -> List[OrderStatusHistoryResponse]:
        """Status audit trail, oldest first; same visibility as get_order"""
        order = self._get_visible_order(user, order_id)
        return [
            OrderStatusHistoryResponse.model_validate(h)
            for h in self.repository.get_order_status_history(order.id)
        ]
    
    def place_order(self, user_id: int, order_data: OrderCreate) -> OrderResponse:
        """
        Turn the user's cart into an order
        
        Steps:
        1. Load the cart; reject an empty one
        2. Re-fetch every product and check its stock
        3. Compute subtotal, tax and total
        4. Create the order (with its first history row)
        5. Create the order lines with the current unit price, decrement stock
        6. Clear the cart (the cart row is kept)
        
        Steps 2-6 run in one repository transaction: if anything fails, no
        order, order line or stock change is kept and the cart is untouched.
        
        Raises:
            EmptyCartError: If the cart has no items
            ProductUnavailableError: If a cart item's product is gone
            InsufficientStockError: If a product has less stock than requested
        """
        cart = self.repository.get_cart(user_id)
        if not cart:
            raise EmptyCartError("Cart is empty")
        cart_items = self.repository.get_cart_items(cart.id)
        if not cart_items:
            raise EmptyCartError("Cart is empty")
        
        with self.repository.transaction():
            lines = []
            subtotal = 0.0
            for cart_item in cart_items:
                product = self.repository.get_product(cart_item.product_id)
                if not product:
                    raise ProductUnavailableError(f"Product with ID {cart_item.product_id} not found")
                if product.stock < cart_item.quantity:
                    raise InsufficientStockError(product.name, product.stock)
                subtotal += product.price * cart_item.quantity
                lines.append((cart_item, product))
            
            tax = subtotal * settings.TAX_RATE
            total = subtotal + tax + order_data.delivery_fee
            
            order = self.repository.create_order({
                **order_data.model_dump(),
                "user_id": user_id,
                "status": OrderStatus.PENDING.value,
                "subtotal": subtotal,
                "tax": tax,
                "total": total,
            })
            
            for cart_item, product in lines:
                unit_price = product.price
                self.repository.add_order_item({
                    "order_id": order.id,
                    "product_id": product.id,
                    "quantity": cart_item.quantity,
                    "unit_price": unit_price,
                    "total_price": unit_price * cart_item.quantity,
                })
                # Stock may have moved since the check above
                if self.repository.decrement_stock(product.id, cart_item.quantity) is None:
                    current = self.repository.get_product(product.id)
                    raise InsufficientStockError(product.name, current.stock if current else 0)
            
            self.repository.clear_cart(cart.id)
        
        logger.info(
            "Order %s placed by user %s: %d item(s), total %.2f",
            order.id, user_id, len(lines), total
        )
        return self.build_order_response(self.repository.get_order(order.id))
    
    def update_order_status(self, order_id: int, new_status: str, notes: Optional[str] = None) -> OrderResponse:
        """
        Update order status and append a history row
        
        Raises:
            ValidationError: If new_status is not an order status
            NotFoundError: If the order does not exist
            InvalidStatusTransitionError: If transitions are enforced and the move is not allowed
        """
        if new_status not in ORDER_STATUSES:
            raise ValidationError("Invalid order status")
        
        order = self.repository.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        
        if self.enforce_transitions and new_status not in allowed_transitions(order.status):
            raise InvalidStatusTransitionError(order.status, new_status)
        
        old_status = order.status
        order = self.repository.update_order_status(order_id, new_status, notes)
        logger.info("Order %s status changed: %s -> %s", order_id, old_status, new_status)
        return self.build_order_response(order)
    
    def get_status_options(self, order_id: int) -> OrderStatusOptionsResponse:
        """
        Raises:
            NotFoundError: If the order does not exist
        """
        order = self.repository.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return OrderStatusOptionsResponse(
            order_id=order.id,
            current_status=order.status,
            available_statuses=allowed_transitions(order.status),
            enforced=self.enforce_transitions
        )
