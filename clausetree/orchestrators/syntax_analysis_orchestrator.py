"""
Syntax analysis orchestrator.

Wraps the synchronous validation pipeline with the cache-then-generate
strategy:

    CacheLookup -> Generate -> [validation steps] -> (CacheWrite) -> Done

A cache hit returns the cached tree unchanged. Any validation failure is
terminal: the request ends in FAILED, the states reached are attached to
the raised error as ``states``, and the error propagates to the caller.
Nothing is retried here. The cache write is fire-and-forget: the caller
gets the validated tree without waiting for it, and a failed write is
only logged.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Set, Tuple

from clausetree.config import AppConfig, load_config
from clausetree.domain.analysis_state import AnalysisState
from clausetree.domain.diagnostics import Diagnostic
from clausetree.domain.passage import Passage
from clausetree.domain.syntax_tree import ClauseTree
from clausetree.errors import SyntaxAnalysisError
from clausetree.logging_config import get_logger
from clausetree.prompts import SyntaxAnalysisPrompt
from clausetree.repositories import SyntaxCacheRepository
from clausetree.services.interfaces import ITextGenerator
from clausetree.services.syntax_validation_pipeline import SyntaxValidationPipeline
from clausetree.utils.timing import PhaseTimer

logger = get_logger("orchestrator")


@dataclass(frozen=True)
class SyntaxAnalysisOutcome:
    """
    Result handed back to the caller.

    Attributes:
        tree: The validated (or cached) clause tree
        diagnostics: Non-fatal findings; empty for cache hits
        from_cache: True if the tree came from the cache
        states: States the request passed through
    """
    tree: ClauseTree
    diagnostics: Tuple[Diagnostic, ...] = ()
    from_cache: bool = False
    states: Tuple[AnalysisState, ...] = field(default=())


class SyntaxAnalysisOrchestrator:
    """
    Coordinates cache, generator and validation for one passage at a time.

    Concurrent requests for the same (subject, language) share a single
    generation when ``single_flight`` is enabled; otherwise both may miss
    the cache and both call the generator.

    Example usage:
        orchestrator = SyntaxAnalysisOrchestrator(generator, cache=MemorySyntaxCacheRepository())
        outcome = await orchestrator.execute(passage, "Spanish")
    """

    def __init__(
        self,
        generator: ITextGenerator,
        cache: Optional[SyntaxCacheRepository] = None,
        config: Optional[AppConfig] = None,
        pipeline: Optional[SyntaxValidationPipeline] = None,
        prompt_builder: Optional[Callable[[Passage, str], str]] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            generator: Text generation collaborator
            cache: Optional cache repository; without one every request generates
            config: Application configuration (defaults if None)
            pipeline: Validation pipeline (built from config if None)
            prompt_builder: Builds the prompt for a passage and language
        """
        self.config = config or load_config()
        self._generator = generator
        self._cache = cache if self.config.cache.enabled else None
        self._pipeline = pipeline or SyntaxValidationPipeline(self.config)
        self._prompt_builder = prompt_builder or self._default_prompt
        self._in_flight: Dict[str, asyncio.Task] = {}
        self._pending_writes: Set[asyncio.Task] = set()

    async def execute(self, passage: Passage, language: Optional[str] = None) -> SyntaxAnalysisOutcome:
        """
        Analyze a passage, using the cache when possible.

        Args:
            passage: Passage to analyze
            language: Language of descriptions (default from config)

        Returns:
            SyntaxAnalysisOutcome with the tree and diagnostics

        Raises:
            SyntaxAnalysisError: Any fatal validation error
            Exception: Generator failures propagate untouched
        """
        language = language or self.config.prompt.default_language
        if language not in self.config.prompt.supported_languages:
            logger.warning(f"Unsupported language '{language}', prompt will use English")

        if not self.config.cache.single_flight:
            return await self._run(passage, language)

        key = SyntaxCacheRepository.make_key(passage.reference, language)
        task = self._in_flight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(self._run(passage, language))
            self._in_flight[key] = task
            task.add_done_callback(lambda t, k=key: self._forget_in_flight(k, t))
        else:
            logger.info(f"Joining in-flight analysis for '{key}'")
        return await asyncio.shield(task)

    async def analyze(self, passage: Passage, language: Optional[str] = None) -> ClauseTree:
        """Analyze a passage and return only the tree."""
        outcome = await self.execute(passage, language)
        return outcome.tree

    async def wait_for_pending_writes(self) -> None:
        """Wait for scheduled cache writes (e.g. before shutdown)."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def _run(self, passage: Passage, language: str) -> SyntaxAnalysisOutcome:
        states = [AnalysisState.CACHE_LOOKUP]
        timer = PhaseTimer(f"Syntax analysis {passage.reference}")

        cached = await self._lookup(passage, language)
        timer.checkpoint("Cache lookup")
        if cached is not None:
            logger.info(f"Using cached syntax analysis for {passage.reference}")
            states.append(AnalysisState.DONE)
            timer.finish()
            return SyntaxAnalysisOutcome(tree=cached, from_cache=True, states=tuple(states))

        logger.info(f"Cache MISS for {passage.reference} - generating new analysis")
        states.append(AnalysisState.GENERATE)
        prompt = self._prompt_builder(passage, language)
        raw_response = await self._generator.generate_syntax_analysis(prompt)
        timer.checkpoint("Generate")

        try:
            result = self._pipeline.validate(raw_response, passage, language, states=states)
        except SyntaxAnalysisError as e:
            states.append(AnalysisState.FAILED)
            e.states = tuple(states)
            logger.error(
                f"❌ Syntax analysis FAILED for {passage.reference} ({e.code}) "
                f"after {states[-2].value}: {e.user_message}"
            )
            logger.debug(f"Raw response: {raw_response}")
            raise
        timer.checkpoint("Validate")

        if self._cache is not None:
            states.append(AnalysisState.CACHE_WRITE)
            self._schedule_write(result.tree, language)

        states.append(AnalysisState.DONE)
        timer.finish()
        return SyntaxAnalysisOutcome(
            tree=result.tree,
            diagnostics=tuple(result.diagnostics),
            from_cache=False,
            states=tuple(states),
        )

    async def _lookup(self, passage: Passage, language: str) -> Optional[ClauseTree]:
        if self._cache is None:
            return None
        try:
            return await self._cache.get_cached(passage.reference, language)
        except Exception as e:
            logger.warning(f"Cache lookup failed for {passage.reference}, treating as miss: {e}")
            return None

    def _schedule_write(self, tree: ClauseTree, language: str) -> None:
        task = asyncio.ensure_future(self._write(tree, language))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write(self, tree: ClauseTree, language: str) -> None:
        try:
            await self._cache.put(tree, language)
        except Exception as e:
            logger.warning(f"Failed to cache analysis for {tree.subject_reference} (non-critical): {e}")

    def _forget_in_flight(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    def _default_prompt(self, passage: Passage, language: str) -> str:
        return SyntaxAnalysisPrompt.build_text(
            passage, language, max_chars=self.config.prompt.max_passage_chars
        )
