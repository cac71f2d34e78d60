"""
Orchestrators for the clause-tree engine.

Orchestrators coordinate the collaborators and services needed for one
analysis request.
"""

from .syntax_analysis_orchestrator import (
    AnalysisState,
    SyntaxAnalysisOrchestrator,
    SyntaxAnalysisOutcome,
)

__all__ = ["AnalysisState", "SyntaxAnalysisOrchestrator", "SyntaxAnalysisOutcome"]
