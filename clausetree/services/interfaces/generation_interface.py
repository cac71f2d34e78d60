# clausetree/services/interfaces/generation_interface.py
"""
Protocol interfaces for the engine's collaborators.

These interfaces define the contracts collaborators must implement,
enabling dependency injection and easy faking in tests.

Example usage:
    async def analyze(generator: ITextGenerator) -> str:
        return await generator.generate_syntax_analysis(prompt)
"""

from typing import Protocol, runtime_checkable

from ...domain.diagnostics import Diagnostic


@runtime_checkable
class ITextGenerator(Protocol):
    """
    Protocol for the text generation service.

    Returns the raw, possibly malformed response text. Failures of the
    underlying network call are not translated; they propagate to the
    orchestrator's caller.

    Implementations:
    - LLMSyntaxGenerator: OpenAI-style chat client or plain callable
    """

    async def generate_syntax_analysis(self, prompt: str) -> str:
        """
        Generate a syntax analysis for the given prompt.

        Args:
            prompt: Complete analysis prompt

        Returns:
            Raw response text
        """
        ...


@runtime_checkable
class IDiagnosticSink(Protocol):
    """
    Protocol for receivers of non-fatal diagnostics.

    Implementations:
    - DiagnosticLog: collects diagnostics and logs them at WARNING
    """

    def record(self, diagnostic: Diagnostic) -> None:
        """Receive one diagnostic."""
        ...
