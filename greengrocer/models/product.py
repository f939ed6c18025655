"""
SQLAlchemy Product model
"""
import enum

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.sql import func

from greengrocer.config import settings
from greengrocer.database import Base


class ProductStatus(str, enum.Enum):
    ACTIVE = "active"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


def derive_product_status(stock: float, low_stock_threshold: float = None) -> str:
    """Status label for a stock level; never stored independently of stock"""
    if low_stock_threshold is None:
        low_stock_threshold = settings.LOW_STOCK_THRESHOLD
    if stock <= 0:
        return ProductStatus.OUT_OF_STOCK.value
    if stock < low_stock_threshold:
        return ProductStatus.LOW_STOCK.value
    return ProductStatus.ACTIVE.value


class Product(Base):
    """Product database model"""
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)  # e.g. "lb", "kg", "bunch"
    stock = Column(Float, nullable=False, default=0)
    image = Column(String(500), nullable=True)
    is_organic = Column(Boolean, nullable=False, default=False)
    rating = Column(Float, nullable=False, default=0)
    # No FK cascade: deleting a category leaves this dangling
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    sku = Column(String(100), unique=True, nullable=False)
    status = Column(String(20), nullable=False, default=ProductStatus.ACTIVE.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )
    
    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, stock={self.stock})>"
