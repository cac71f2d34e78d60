"""
In-memory implementation of the clause tree cache.

Trees are stored serialized, so a cached tree cannot be altered through
an object the caller still holds. Suitable for development and
single-instance deployments.

Note: The cache is lost when the process restarts.
"""

import json
from threading import Lock
from typing import Dict, List, Optional

from clausetree.domain.syntax_tree import ClauseTree
from clausetree.logging_config import get_logger
from .syntax_cache_repository import SyntaxCacheRepository

logger = get_logger('memory_cache')


class MemorySyntaxCacheRepository(SyntaxCacheRepository):
    """
    Thread-safe in-memory tree storage.

    Uses a dictionary with a lock for safe access from concurrent requests.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._entries: Dict[str, str] = {}
        self._lock = Lock()

    async def get_cached(self, subject_key: str, language: str) -> Optional[ClauseTree]:
        """Retrieve a cached tree."""
        key = self.make_key(subject_key, language)
        with self._lock:
            payload = self._entries.get(key)
        if payload is None:
            return None
        return ClauseTree.from_dict(json.loads(payload))

    async def put(self, tree: ClauseTree, language: str) -> None:
        """Store a validated tree."""
        key = self.make_key(tree.subject_reference, language)
        payload = json.dumps(tree.to_dict(), ensure_ascii=False)
        with self._lock:
            self._entries[key] = payload
        logger.debug(f"Cached syntax analysis '{key}'")

    def delete(self, subject_key: str, language: str) -> bool:
        """
        Remove a cached tree.

        Returns:
            True if deleted, False if not found
        """
        key = self.make_key(subject_key, language)
        with self._lock:
            if key in self._entries:
                del self._entries[key]
                return True
            return False

    def keys(self) -> List[str]:
        """List all cache keys."""
        with self._lock:
            return list(self._entries.keys())

    def count(self) -> int:
        """Count cached trees."""
        with self._lock:
            return len(self._entries)

    def clear(self) -> int:
        """
        Remove every cached tree (e.g. after prompt changes).

        Returns:
            Number of entries cleared
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"🗑️  Cleared syntax cache ({count} entries removed)")
        return count
