"""
Abstract repository interface for cached clause trees.

This interface defines the contract for the cache collaborator, allowing
different implementations (in-memory, document store, Redis, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional

from clausetree.domain.syntax_tree import ClauseTree


class SyntaxCacheRepository(ABC):
    """
    Abstract interface for clause tree caching.

    Trees are keyed by (subject reference, language). Implementations must
    return reconstructions identical to what was stored.
    """

    @abstractmethod
    async def get_cached(self, subject_key: str, language: str) -> Optional[ClauseTree]:
        """
        Retrieve a cached tree.

        Args:
            subject_key: Passage reference
            language: Language of the descriptions

        Returns:
            The cached tree if found, None otherwise
        """
        pass

    @abstractmethod
    async def put(self, tree: ClauseTree, language: str) -> None:
        """
        Store a validated tree.

        Args:
            tree: The tree to store
            language: Language of the descriptions
        """
        pass

    @staticmethod
    def make_key(subject_key: str, language: str) -> str:
        """Build the storage key for a subject and language."""
        return f"{subject_key.strip()}::{language.strip().lower()}"
