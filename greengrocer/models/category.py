"""
SQLAlchemy Category model
"""
from sqlalchemy import Column, Integer, String

from greengrocer.database import Base


class Category(Base):
    """Category database model (flat, no hierarchy)"""
    
    __tablename__ = "categories"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    icon = Column(String(100), nullable=False)
    
    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
