"""
Repositories package for the clause-tree engine.

Contains the cache repository interface and implementations.
"""

from .syntax_cache_repository import SyntaxCacheRepository
from .memory_syntax_cache_repository import MemorySyntaxCacheRepository

__all__ = ["SyntaxCacheRepository", "MemorySyntaxCacheRepository"]
