"""
Product API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from greengrocer.api.deps import get_repository, require_admin
from greengrocer.api.errors import http_error
from greengrocer.exceptions import GreenGrocerError
from greengrocer.repositories import Repository
from greengrocer.schemas.catalog import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductCreatedResponse
)
from greengrocer.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_service(repository: Repository = Depends(get_repository)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(repository)


@router.get("", response_model=List[ProductResponse], summary="Get all products")
def get_products(
    category_id: Optional[str] = Query(None, alias="categoryId", description="Only products of this category"),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve all products
    
    - **categoryId**: Category filter; a non-numeric value is ignored
    """
    try:
        category = int(category_id) if category_id is not None else None
    except ValueError:
        category = None
    return service.get_all_products(category_id=category)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    product = service.get_product_by_id(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return product


@router.post(
    "",
    response_model=ProductCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    dependencies=[Depends(require_admin)]
)
def create_product(
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product (admin)
    
    - **name**, **description**, **unit**, **sku**: required
    - **price**: non-negative
    - **stock**: non-negative; the status label is derived from it
    - **image**: optional, a default image is used when missing
    """
    try:
        return service.create_product(product_data)
    except GreenGrocerError as e:
        raise http_error(e)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update product",
    dependencies=[Depends(require_admin)]
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product (admin)
    
    All fields are optional. Only provided fields will be updated.
    """
    try:
        return service.update_product(product_id, product_data)
    except GreenGrocerError as e:
        raise http_error(e)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product",
    dependencies=[Depends(require_admin)]
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    success = service.delete_product(product_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return None
