"""
Favorite API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, status

from greengrocer.api.deps import get_current_user, get_repository
from greengrocer.api.errors import http_error
from greengrocer.exceptions import GreenGrocerError
from greengrocer.models import User
from greengrocer.repositories import Repository
from greengrocer.schemas.favorite import FavoriteCreate, FavoriteResponse
from greengrocer.services.favorite_service import FavoriteService

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


def get_favorite_service(repository: Repository = Depends(get_repository)) -> FavoriteService:
    """Dependency to get FavoriteService instance"""
    return FavoriteService(repository)


@router.get("", response_model=List[FavoriteResponse], summary="Get favorites")
def get_favorites(
    user: User = Depends(get_current_user),
    service: FavoriteService = Depends(get_favorite_service)
):
    return service.get_favorites(user.id)


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED, summary="Add favorite")
def add_favorite(
    favorite_data: FavoriteCreate,
    user: User = Depends(get_current_user),
    service: FavoriteService = Depends(get_favorite_service)
):
    """
    Favorite a product
    
    Favoriting an already favorited product returns the existing favorite.
    """
    try:
        return service.add_favorite(user.id, favorite_data.product_id)
    except GreenGrocerError as e:
        raise http_error(e)


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove favorite")
def remove_favorite(
    favorite_id: int,
    user: User = Depends(get_current_user),
    service: FavoriteService = Depends(get_favorite_service)
):
    try:
        service.remove_favorite(user.id, favorite_id)
    except GreenGrocerError as e:
        raise http_error(e)
    return None
