"""
Prompt templates for generator-based analysis.

This module contains the structured prompt for:
- Syntax analysis: Which clauses does a passage contain, and how do they nest?
"""

from .syntax_prompt import SyntaxAnalysisPrompt

__all__ = [
    'SyntaxAnalysisPrompt'
]
