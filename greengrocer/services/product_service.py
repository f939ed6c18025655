"""
Product Service - Business Logic Layer
"""
import logging
from typing import List, Optional

from greengrocer.config import settings
from greengrocer.exceptions import DuplicateError, NotFoundError
from greengrocer.models import derive_product_status
from greengrocer.repositories import Repository
from greengrocer.schemas.catalog import (
    CategoryResponse,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductCreatedResponse
)

logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = ("image", "category_id")


class ProductService:
    """Service layer for catalog business logic"""
    
    def __init__(self, repository: Repository):
        self.repository = repository
    
    def get_all_categories(self) -> List[CategoryResponse]:
        """Get all categories"""
        return [CategoryResponse.model_validate(c) for c in self.repository.get_all_categories()]
    
    def get_all_products(self, category_id: Optional[int] = None) -> List[ProductResponse]:
        """Get all products, optionally only those of one category"""
        if category_id is not None:
            products = self.repository.get_products_by_category_id(category_id)
        else:
            products = self.repository.get_all_products()
        return [ProductResponse.model_validate(p) for p in products]
    
    def get_product_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get product by ID"""
        product = self.repository.get_product(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)
    
    def create_product(self, product_data: ProductCreate) -> ProductCreatedResponse:
        """
        Create new product
        
        A missing image falls back to the default image URL and the status
        label is derived from the initial stock.
        
        Raises:
            DuplicateError: If the SKU is already used
        """
        if self.repository.get_product_by_sku(product_data.sku):
            raise DuplicateError(f"Product with SKU {product_data.sku} already exists")
        
        data = product_data.model_dump()
        if not data.get("image"):
            data["image"] = settings.DEFAULT_PRODUCT_IMAGE
        data["status"] = derive_product_status(data["stock"])
        
        product = self.repository.create_product(data)
        logger.info("Created product %s (id=%s, sku=%s)", product.name, product.id, product.sku)
        return ProductCreatedResponse(product=ProductResponse.model_validate(product))
    
    def update_product(self, product_id: int, product_data: ProductUpdate) -> ProductResponse:
        """
        Update existing product; only provided fields change
        
        Raises:
            NotFoundError: If the product does not exist
            DuplicateError: If the new SKU belongs to another product
        """
        data = product_data.model_dump(exclude_unset=True)
        data = {k: v for k, v in data.items() if v is not None or k in _NULLABLE_FIELDS}
        
        if "sku" in data:
            other = self.repository.get_product_by_sku(data["sku"])
            if other and other.id != product_id:
                raise DuplicateError(f"Product with SKU {data['sku']} already exists")
        if "stock" in data:
            data["status"] = derive_product_status(data["stock"])
        
        product = self.repository.update_product(product_id, data)
        if not product:
            raise NotFoundError("Product not found")
        return ProductResponse.model_validate(product)
    
    def delete_product(self, product_id: int) -> bool:
        """Delete product"""
        return self.repository.delete_product(product_id)
