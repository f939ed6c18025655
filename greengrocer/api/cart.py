"""
Cart API endpoints
"""
from fastapi import APIRouter, Depends, Response, status

from greengrocer.api.deps import get_current_user, get_repository
from greengrocer.api.errors import http_error
from greengrocer.exceptions import GreenGrocerError
from greengrocer.models import User
from greengrocer.repositories import Repository
from greengrocer.schemas.cart import CartItemAdd, CartItemResponse, CartItemUpdate, CartResponse
from greengrocer.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_cart_service(repository: Repository = Depends(get_repository)) -> CartService:
    """Dependency to get CartService instance"""
    return CartService(repository)


@router.get("", response_model=CartResponse, summary="Get cart")
def get_cart(
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Current user's cart with product details; created on first access"""
    return service.get_cart(user.id)


@router.post("/items", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED, summary="Add item")
def add_item(
    item_data: CartItemAdd,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """
    Add a product to the cart
    
    - **productId**: Product ID
    - **quantity**: Positive quantity; added to the existing line for the product
    """
    try:
        return service.add_item(user.id, item_data)
    except GreenGrocerError as e:
        raise http_error(e)


@router.put("/items/{item_id}", response_model=CartItemResponse, summary="Set item quantity")
def update_item(
    item_id: int,
    item_data: CartItemUpdate,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """
    Set a line's quantity
    
    A quantity of 0 removes the line and answers 204.
    """
    try:
        item = service.update_item(user.id, item_id, item_data.quantity)
    except GreenGrocerError as e:
        raise http_error(e)
    if item is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove item")
def remove_item(
    item_id: int,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    try:
        service.remove_item(user.id, item_id)
    except GreenGrocerError as e:
        raise http_error(e)
    return None


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="Clear cart")
def clear_cart(
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    service.clear_cart(user.id)
    return None
