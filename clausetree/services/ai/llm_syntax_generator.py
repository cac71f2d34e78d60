# clausetree/services/ai/llm_syntax_generator.py
"""
Text generation collaborator backed by an LLM client.

Supports:
- OpenAI-style clients (client.chat.completions.create)
- Plain callables taking a prompt and returning text (sync or async)

No retries happen here; a failed call propagates to the caller.
"""
import asyncio
import inspect
from typing import Any, Optional

from ...config import GenerationConfig
from ...logging_config import get_logger

logger = get_logger('llm_syntax_generator')


class LLMSyntaxGenerator:
    """
    Adapts an LLM client to the ITextGenerator protocol.

    Blocking clients are run in a worker thread so the orchestrator's
    event loop is never blocked.
    """

    def __init__(self, client: Any = None, config: Optional[GenerationConfig] = None):
        """
        Initialize the generator.

        Args:
            client: LLM client (e.g., OpenAI client) or a callable(prompt) -> str
            config: Model name and temperature
        """
        self.client = client
        self.config = config or GenerationConfig()

    @property
    def is_available(self) -> bool:
        """Check if a client is configured."""
        return self.client is not None

    async def generate_syntax_analysis(self, prompt: str) -> str:
        """
        Send the prompt and return the raw response text.

        Raises:
            ValueError: If no client is configured or the client type is unsupported
        """
        if self.client is None:
            raise ValueError("No LLM client configured")

        logger.info(f"Analyzing syntax with {self.config.model_name}...")

        if hasattr(self.client, 'chat') and hasattr(self.client.chat, 'completions'):
            text = await asyncio.to_thread(self._call_chat_completion, prompt)
        elif callable(self.client):
            result = self.client(prompt)
            if inspect.isawaitable(result):
                result = await result
            text = result
        else:
            raise ValueError("Unsupported LLM client type")

        text = text or ""
        logger.info(f"Syntax analysis complete. Response length: {len(text)}")
        return text

    def _call_chat_completion(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.config.model_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.config.temperature
        )
        return response.choices[0].message.content
