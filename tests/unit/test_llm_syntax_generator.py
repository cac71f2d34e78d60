"""
Unit tests for LLMSyntaxGenerator.
"""

import asyncio
from types import SimpleNamespace

import pytest

from clausetree.config import GenerationConfig
from clausetree.services.ai import LLMSyntaxGenerator
from clausetree.services.interfaces import ITextGenerator


class FakeCompletions:
    """Mimics client.chat.completions of an OpenAI-style client."""

    def __init__(self, content):
        self.content = content
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestLLMSyntaxGenerator:
    """Tests for the generator adapter."""

    def test_satisfies_protocol(self):
        assert isinstance(LLMSyntaxGenerator(), ITextGenerator)

    def test_chat_completion_client(self):
        completions = FakeCompletions('{"clauses": []}')
        client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
        generator = LLMSyntaxGenerator(client, GenerationConfig(model_name="test-model", temperature=0.1))

        text = asyncio.run(generator.generate_syntax_analysis("analyze"))

        assert text == '{"clauses": []}'
        request = completions.requests[0]
        assert request["model"] == "test-model"
        assert request["temperature"] == 0.1
        assert request["messages"] == [{"role": "user", "content": "analyze"}]

    def test_sync_callable_client(self):
        generator = LLMSyntaxGenerator(lambda prompt: f"echo:{prompt}")
        assert asyncio.run(generator.generate_syntax_analysis("x")) == "echo:x"

    def test_async_callable_client(self):
        async def client(prompt):
            return "async:" + prompt

        generator = LLMSyntaxGenerator(client)
        assert asyncio.run(generator.generate_syntax_analysis("x")) == "async:x"

    def test_none_content_becomes_empty_text(self):
        generator = LLMSyntaxGenerator(lambda prompt: None)
        assert asyncio.run(generator.generate_syntax_analysis("x")) == ""

    def test_no_client_raises(self):
        generator = LLMSyntaxGenerator()
        assert not generator.is_available
        with pytest.raises(ValueError):
            asyncio.run(generator.generate_syntax_analysis("x"))

    def test_unsupported_client_raises(self):
        with pytest.raises(ValueError):
            asyncio.run(LLMSyntaxGenerator(object()).generate_syntax_analysis("x"))

    def test_client_errors_propagate(self):
        def failing(prompt):
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            asyncio.run(LLMSyntaxGenerator(failing).generate_syntax_analysis("x"))
