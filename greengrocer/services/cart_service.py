"""
Cart Service - Business Logic Layer
"""
from typing import Optional

from greengrocer.exceptions import NotFoundError
from greengrocer.models import Cart, CartItem
from greengrocer.repositories import Repository
from greengrocer.schemas.cart import CartItemAdd, CartItemResponse, CartResponse
from greengrocer.schemas.catalog import ProductResponse


class CartService:
    """Service layer for the caller's cart"""
    
    def __init__(self, repository: Repository):
        self.repository = repository
    
    def _get_or_create_cart(self, user_id: int) -> Cart:
        cart = self.repository.get_cart(user_id)
        if not cart:
            cart = self.repository.create_cart(user_id)
        return cart
    
    def _item_response(self, item: CartItem) -> CartItemResponse:
        response = CartItemResponse.model_validate(item)
        product = self.repository.get_product(item.product_id)
        response.product = ProductResponse.model_validate(product) if product else None
        return response
    
    def _owned_item(self, user_id: int, item_id: int) -> CartItem:
        cart = self.repository.get_cart(user_id)
        item = self.repository.get_cart_item(item_id)
        if not cart or not item or item.cart_id != cart.id:
            raise NotFoundError("Cart item not found")
        return item
    
    def get_cart(self, user_id: int) -> CartResponse:
        """Get the user's cart with product details, creating it on first access"""
        cart = self._get_or_create_cart(user_id)
        items = [self._item_response(i) for i in self.repository.get_cart_items(cart.id)]
        
        response = CartResponse.model_validate(self.repository.get_cart(user_id))
        response.items = items
        return response
    
    def add_item(self, user_id: int, item_data: CartItemAdd) -> CartItemResponse:
        """
        Add a product to the cart
        
        Adding a product already in the cart increases that line's quantity.
        
        Raises:
            NotFoundError: If the product does not exist
        """
        if not self.repository.get_product(item_data.product_id):
            raise NotFoundError("Product not found")
        
        cart = self._get_or_create_cart(user_id)
        item = self.repository.add_cart_item({
            "cart_id": cart.id,
            "product_id": item_data.product_id,
            "quantity": item_data.quantity,
        })
        return self._item_response(item)
    
    def update_item(self, user_id: int, item_id: int, quantity: float) -> Optional[CartItemResponse]:
        """
        Set a line's quantity
        
        Returns:
            Updated line, or None when quantity 0 removed it
        
        Raises:
            NotFoundError: If the line is not in the user's cart
        """
        self._owned_item(user_id, item_id)
        item = self.repository.update_cart_item(item_id, quantity)
        if item is None:
            return None
        return self._item_response(item)
    
    def remove_item(self, user_id: int, item_id: int) -> bool:
        """Remove one line from the user's cart"""
        self._owned_item(user_id, item_id)
        return self.repository.remove_cart_item(item_id)
    
    def clear_cart(self, user_id: int) -> None:
        """Remove every line; the cart itself is kept"""
        cart = self.repository.get_cart(user_id)
        if cart:
            self.repository.clear_cart(cart.id)
