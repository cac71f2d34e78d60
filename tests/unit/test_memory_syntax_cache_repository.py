"""
Unit tests for MemorySyntaxCacheRepository.
"""

import asyncio

import pytest

from clausetree.domain.clause import Clause, ClauseKind
from clausetree.domain.syntax_tree import ClauseTree
from clausetree.repositories import MemorySyntaxCacheRepository, SyntaxCacheRepository


@pytest.fixture
def repo():
    return MemorySyntaxCacheRepository()


@pytest.fixture
def tree():
    return ClauseTree(
        subject_reference="Rom 12:1",
        clauses=(Clause(id="clause_1", kind=ClauseKind.MAIN, token_indices=(0, 1, 2)),),
        root_id="clause_1",
        summary="Single main clause",
    )


class TestMemorySyntaxCacheRepository:
    """Tests for the in-memory cache."""

    def test_get_missing_returns_none(self, repo):
        assert asyncio.run(repo.get_cached("Rom 12:1", "English")) is None

    def test_put_then_get_returns_equal_tree(self, repo, tree):
        asyncio.run(repo.put(tree, "English"))
        cached = asyncio.run(repo.get_cached("Rom 12:1", "english"))
        assert cached == tree
        assert cached is not tree

    def test_language_is_part_of_key(self, repo, tree):
        asyncio.run(repo.put(tree, "English"))
        assert asyncio.run(repo.get_cached("Rom 12:1", "Spanish")) is None

    def test_delete_count_and_clear(self, repo, tree):
        asyncio.run(repo.put(tree, "English"))
        asyncio.run(repo.put(tree, "Spanish"))
        assert repo.count() == 2
        assert repo.keys() == ["Rom 12:1::english", "Rom 12:1::spanish"]

        assert repo.delete("Rom 12:1", "Spanish") is True
        assert repo.delete("Rom 12:1", "Spanish") is False
        assert repo.clear() == 1
        assert repo.count() == 0

    def test_make_key_normalizes(self):
        assert SyntaxCacheRepository.make_key(" Rom 12:1 ", " Spanish ") == "Rom 12:1::spanish"
