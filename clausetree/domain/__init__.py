# Domain models for the clause-tree engine
from .passage import Token, Passage
from .clause import Clause, ClauseKind
from .syntax_tree import ClauseTree
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticLog
from .raw_response import RawClauseRecord, SyntaxResponse
from .analysis_state import AnalysisState

__all__ = [
    'Token',
    'Passage',
    'Clause',
    'ClauseKind',
    'ClauseTree',
    'Diagnostic',
    'DiagnosticCode',
    'DiagnosticLog',
    'RawClauseRecord',
    'SyntaxResponse',
    'AnalysisState'
]
