"""
Order API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, status

from greengrocer.api.deps import get_current_user, get_repository, require_admin
from greengrocer.api.errors import http_error
from greengrocer.exceptions import GreenGrocerError
from greengrocer.models import User
from greengrocer.repositories import Repository
from greengrocer.schemas.order import (
    OrderCreate,
    OrderResponse,
    OrderStatusHistoryResponse,
    OrderStatusOptionsResponse,
    OrderStatusUpdate
)
from greengrocer.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_order_service(repository: Repository = Depends(get_repository)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(repository)


@router.get("", response_model=List[OrderResponse], summary="Get orders")
def get_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Admins get every order, customers only their own"""
    return service.get_orders(user)


@router.get("/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order with its items
    
    Customers may only view their own orders.
    """
    try:
        return service.get_order(user, order_id)
    except GreenGrocerError as e:
        raise http_error(e)


@router.get("/{order_id}/history", response_model=List[OrderStatusHistoryResponse], summary="Get status history")
def get_order_history(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    try:
        return service.get_status_history(user, order_id)
    except GreenGrocerError as e:
        raise http_error(e)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Place order")
def create_order(
    order_data: OrderCreate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Place an order from the current cart
    
    Process:
    1. Check the cart is not empty
    2. Check every product still exists and has enough stock
    3. Compute subtotal, 10% tax and total (with **deliveryFee**)
    4. Save order, items and stock changes, then clear the cart
    
    Nothing is saved if any step fails.
    
    - **address**, **city**, **state**, **zipCode**: Shipping address
    - **contactEmail**, **contactPhone**: Contact details
    - **deliveryInstructions**, **estimatedDelivery**: optional
    - **deliveryFee**: non-negative
    """
    try:
        return service.place_order(user.id, order_data)
    except GreenGrocerError as e:
        raise http_error(e)


@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status",
    dependencies=[Depends(require_admin)]
)
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status (admin)
    
    - **status**: pending, confirmed, processing, packed, in_transit, delivered or cancelled
    - **notes**: optional note stored in the status history
    """
    try:
        return service.update_order_status(order_id, status_data.status, status_data.notes)
    except GreenGrocerError as e:
        raise http_error(e)


@router.get(
    "/{order_id}/status-options",
    response_model=OrderStatusOptionsResponse,
    summary="Get next allowed statuses",
    dependencies=[Depends(require_admin)]
)
def get_status_options(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    try:
        return service.get_status_options(order_id)
    except GreenGrocerError as e:
        raise http_error(e)
