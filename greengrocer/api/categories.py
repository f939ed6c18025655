"""
Category API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends

from greengrocer.api.deps import get_repository
from greengrocer.repositories import Repository
from greengrocer.schemas.catalog import CategoryResponse
from greengrocer.services.product_service import ProductService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse], summary="Get all categories")
def get_categories(repository: Repository = Depends(get_repository)):
    return ProductService(repository).get_all_categories()
