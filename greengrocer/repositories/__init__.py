"""
Repositories package
"""
from greengrocer.repositories.base import Repository, DEFAULT_CATEGORIES
from greengrocer.repositories.memory_repository import MemoryRepository
from greengrocer.repositories.sql_repository import SQLRepository

__all__ = ["Repository", "MemoryRepository", "SQLRepository", "DEFAULT_CATEGORIES"]
