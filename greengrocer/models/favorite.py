"""
SQLAlchemy Favorite model
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from greengrocer.database import Base


class Favorite(Base):
    """Favorite database model"""
    
    __tablename__ = "favorites"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_user_favorite_product"),
    )
    
    def __repr__(self):
        return f"<Favorite(id={self.id}, user_id={self.user_id}, product_id={self.product_id})>"
