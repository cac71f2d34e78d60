"""
Unit tests for SyntaxAnalysisOrchestrator.

Uses in-test fakes for the generator and cache collaborators.
"""

import asyncio

import pytest

from clausetree.config import AppConfig, CacheConfig
from clausetree.errors import IndexOutOfRangeError, TruncatedResponseError
from clausetree.orchestrators import AnalysisState, SyntaxAnalysisOrchestrator
from clausetree.repositories import MemorySyntaxCacheRepository, SyntaxCacheRepository


class FakeGenerator:
    """Returns a canned response after a short delay."""

    def __init__(self, response, delay=0.01):
        self.response = response
        self.delay = delay
        self.prompts = []

    @property
    def calls(self):
        return len(self.prompts)

    async def generate_syntax_analysis(self, prompt):
        self.prompts.append(prompt)
        await asyncio.sleep(self.delay)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class BrokenCache(SyntaxCacheRepository):
    """Cache whose reads and/or writes fail."""

    def __init__(self, fail_reads=False):
        self.fail_reads = fail_reads
        self.put_attempts = 0

    async def get_cached(self, subject_key, language):
        if self.fail_reads:
            raise ConnectionError("cache unavailable")
        return None

    async def put(self, tree, language):
        self.put_attempts += 1
        raise ConnectionError("cache unavailable")


class SlowCache(MemorySyntaxCacheRepository):
    """Memory cache whose writes take a while."""

    def __init__(self, delay):
        super().__init__()
        self.delay = delay
        self.written = False

    async def put(self, tree, language):
        await asyncio.sleep(self.delay)
        await super().put(tree, language)
        self.written = True


def _run(coro):
    return asyncio.run(coro)


class TestCacheThenGenerate:
    """Tests for the cache-then-generate flow."""

    def test_miss_generates_and_caches(self, passage, valid_response):
        generator = FakeGenerator(valid_response)
        cache = MemorySyntaxCacheRepository()
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=cache, config=AppConfig())

        async def scenario():
            outcome = await orchestrator.execute(passage)
            await orchestrator.wait_for_pending_writes()
            return outcome

        outcome = _run(scenario())

        assert generator.calls == 1
        assert not outcome.from_cache
        assert outcome.states == (
            AnalysisState.CACHE_LOOKUP,
            AnalysisState.GENERATE,
            AnalysisState.SANITIZE,
            AnalysisState.TRUNCATION_CHECK,
            AnalysisState.DECODE,
            AnalysisState.STRUCTURE_CHECK,
            AnalysisState.TREE_BUILD,
            AnalysisState.COVERAGE_CHECK,
            AnalysisState.CACHE_WRITE,
            AnalysisState.DONE,
        )
        assert cache.count() == 1
        assert "[3] ἵνα" in generator.prompts[0]

    def test_hit_returns_cached_tree_without_generating(self, passage, valid_response):
        generator = FakeGenerator(valid_response)
        cache = MemorySyntaxCacheRepository()
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=cache, config=AppConfig())

        async def scenario():
            first = await orchestrator.execute(passage, "Spanish")
            await orchestrator.wait_for_pending_writes()
            second = await orchestrator.execute(passage, "Spanish")
            return first, second

        first, second = _run(scenario())

        assert generator.calls == 1
        assert second.from_cache
        assert second.tree == first.tree
        assert second.diagnostics == ()
        assert second.states == (AnalysisState.CACHE_LOOKUP, AnalysisState.DONE)

    def test_cache_is_keyed_by_language(self, passage, valid_response):
        generator = FakeGenerator(valid_response)
        cache = MemorySyntaxCacheRepository()
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=cache, config=AppConfig())

        async def scenario():
            await orchestrator.execute(passage, "English")
            await orchestrator.wait_for_pending_writes()
            await orchestrator.execute(passage, "Spanish")

        _run(scenario())

        assert generator.calls == 2

    def test_write_failure_is_not_surfaced(self, passage, valid_response):
        generator = FakeGenerator(valid_response)
        cache = BrokenCache()
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=cache, config=AppConfig())

        async def scenario():
            outcome = await orchestrator.execute(passage)
            await orchestrator.wait_for_pending_writes()
            return outcome

        outcome = _run(scenario())

        assert outcome.tree.root_id == "clause_1"
        assert cache.put_attempts == 1

    def test_caller_does_not_wait_for_cache_write(self, passage, valid_response):
        cache = SlowCache(delay=0.5)
        orchestrator = SyntaxAnalysisOrchestrator(
            FakeGenerator(valid_response, delay=0), cache=cache, config=AppConfig()
        )

        async def scenario():
            outcome = await orchestrator.execute(passage)
            written_on_return = cache.written
            await orchestrator.wait_for_pending_writes()
            return outcome, written_on_return

        outcome, written_on_return = _run(scenario())

        assert outcome.tree.root_id == "clause_1"
        assert written_on_return is False
        assert cache.written is True

    def test_lookup_failure_is_treated_as_miss(self, passage, valid_response):
        generator = FakeGenerator(valid_response)
        orchestrator = SyntaxAnalysisOrchestrator(
            generator, cache=BrokenCache(fail_reads=True), config=AppConfig()
        )

        async def scenario():
            outcome = await orchestrator.execute(passage)
            await orchestrator.wait_for_pending_writes()
            return outcome

        assert _run(scenario()).tree.clause_count == 2
        assert generator.calls == 1

    def test_disabled_cache_always_generates(self, passage, valid_response):
        generator = FakeGenerator(valid_response)
        cache = MemorySyntaxCacheRepository()
        config = AppConfig(cache=CacheConfig(enabled=False))
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=cache, config=config)

        async def scenario():
            await orchestrator.execute(passage)
            await orchestrator.execute(passage)

        _run(scenario())

        assert generator.calls == 2
        assert cache.count() == 0


class TestFailures:
    """Tests for failure propagation."""

    def test_validation_error_propagates_and_nothing_is_cached(self, passage, make_response, main_clause, purpose_clause):
        purpose_clause["wordIndices"] = [3, 7]
        generator = FakeGenerator(make_response([main_clause, purpose_clause]))
        cache = MemorySyntaxCacheRepository()
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=cache, config=AppConfig())

        with pytest.raises(IndexOutOfRangeError) as exc_info:
            _run(orchestrator.execute(passage))

        assert cache.count() == 0
        assert exc_info.value.states[-2:] == (AnalysisState.TREE_BUILD, AnalysisState.FAILED)

    def test_truncated_response_fails_before_decode(self, passage):
        generator = FakeGenerator('{"clauses": [], "rootClauseId": "clause_1",')
        orchestrator = SyntaxAnalysisOrchestrator(generator, config=AppConfig())

        with pytest.raises(TruncatedResponseError) as exc_info:
            _run(orchestrator.execute(passage))

        states = exc_info.value.states
        assert states[-1] == AnalysisState.FAILED
        assert states[-2] == AnalysisState.TRUNCATION_CHECK
        assert AnalysisState.DECODE not in states

    def test_generator_error_propagates_untouched(self, passage):
        error = TimeoutError("generator timed out")
        orchestrator = SyntaxAnalysisOrchestrator(FakeGenerator(error), config=AppConfig())

        with pytest.raises(TimeoutError) as exc_info:
            _run(orchestrator.execute(passage))

        assert exc_info.value is error


class TestSingleFlight:
    """Tests for sharing one generation between concurrent requests."""

    def test_concurrent_requests_share_one_generation(self, passage, valid_response):
        generator = FakeGenerator(valid_response, delay=0.05)
        orchestrator = SyntaxAnalysisOrchestrator(
            generator, cache=MemorySyntaxCacheRepository(), config=AppConfig()
        )

        async def scenario():
            results = await asyncio.gather(
                orchestrator.execute(passage), orchestrator.execute(passage)
            )
            await orchestrator.wait_for_pending_writes()
            return results

        first, second = _run(scenario())

        assert generator.calls == 1
        assert first.tree is second.tree

    def test_without_single_flight_both_generate(self, passage, valid_response):
        generator = FakeGenerator(valid_response, delay=0.05)
        config = AppConfig(cache=CacheConfig(single_flight=False))
        orchestrator = SyntaxAnalysisOrchestrator(
            generator, cache=MemorySyntaxCacheRepository(), config=config
        )

        async def scenario():
            results = await asyncio.gather(
                orchestrator.execute(passage), orchestrator.execute(passage)
            )
            await orchestrator.wait_for_pending_writes()
            return results

        _run(scenario())

        assert generator.calls == 2

    def test_analyze_returns_tree(self, passage, valid_response):
        orchestrator = SyntaxAnalysisOrchestrator(FakeGenerator(valid_response), config=AppConfig())
        tree = _run(orchestrator.analyze(passage))
        assert tree.root_id == "clause_1"
