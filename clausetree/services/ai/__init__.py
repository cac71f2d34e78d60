# Generator-backed collaborators
from .llm_syntax_generator import LLMSyntaxGenerator

__all__ = [
    'LLMSyntaxGenerator'
]
