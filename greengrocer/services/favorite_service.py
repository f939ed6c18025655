"""
Favorite Service - Business Logic Layer
"""
from typing import List

from greengrocer.exceptions import NotFoundError
from greengrocer.models import Favorite
from greengrocer.repositories import Repository
from greengrocer.schemas.catalog import ProductResponse
from greengrocer.schemas.favorite import FavoriteResponse


class FavoriteService:
    """Service layer for product bookmarks"""
    
    def __init__(self, repository: Repository):
        self.repository = repository
    
    def _favorite_response(self, favorite: Favorite) -> FavoriteResponse:
        response = FavoriteResponse.model_validate(favorite)
        product = self.repository.get_product(favorite.product_id)
        response.product = ProductResponse.model_validate(product) if product else None
        return response
    
    def get_favorites(self, user_id: int) -> List[FavoriteResponse]:
        """Get the user's favorites with product details"""
        return [self._favorite_response(f) for f in self.repository.get_user_favorites(user_id)]
    
    def add_favorite(self, user_id: int, product_id: int) -> FavoriteResponse:
        """
        Favorite a product; favoriting it again returns the existing favorite
        
        Raises:
            NotFoundError: If the product does not exist
        """
        if not self.repository.get_product(product_id):
            raise NotFoundError("Product not found")
        favorite = self.repository.add_favorite({"user_id": user_id, "product_id": product_id})
        return self._favorite_response(favorite)
    
    def remove_favorite(self, user_id: int, favorite_id: int) -> None:
        """
        Raises:
            NotFoundError: If the favorite does not exist or belongs to someone else
        """
        favorite = self.repository.get_favorite(favorite_id)
        if not favorite or favorite.user_id != user_id:
            raise NotFoundError("Favorite not found")
        self.repository.remove_favorite(favorite_id)
