# clausetree/domain/diagnostics.py
"""
Non-fatal findings produced while validating a generated response.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class DiagnosticCode(Enum):
    """Kinds of non-fatal findings."""
    FUZZY_TYPE_MATCH = "FUZZY_TYPE_MATCH"            # Type resolved after prefix strip
    UNKNOWN_TYPE_FALLBACK = "UNKNOWN_TYPE_FALLBACK"  # Type unresolvable, fell back
    DUPLICATE_CLAIM = "DUPLICATE_CLAIM"              # Token declared by two clauses
    MAIN_TOKEN_OUTSIDE_CLAUSE = "MAIN_TOKEN_OUTSIDE_CLAUSE"
    EMPTY_CLAUSE = "EMPTY_CLAUSE"
    UNKNOWN_ROOT = "UNKNOWN_ROOT"
    UNKNOWN_PARENT = "UNKNOWN_PARENT"
    PARENT_CYCLE = "PARENT_CYCLE"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single non-fatal finding.

    Attributes:
        code: Kind of finding
        message: Human-readable description
        clause_id: Clause the finding concerns, if any
        token_index: Token the finding concerns, if any
        details: Extra structured data (e.g., the raw type string)
    """
    code: DiagnosticCode
    message: str
    clause_id: Optional[str] = None
    token_index: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'message': self.message,
            'clauseId': self.clause_id,
            'tokenIndex': self.token_index,
            'details': dict(self.details),
        }


class DiagnosticLog:
    """
    Collects diagnostics for one validation run.

    Every recorded diagnostic is also logged at WARNING on the given logger.
    """

    def __init__(self, logger=None) -> None:
        self._items: List[Diagnostic] = []
        self._logger = logger

    def record(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)
        if self._logger is not None:
            self._logger.warning(f"[{diagnostic.code.value}] {diagnostic.message}")

    @property
    def items(self) -> List[Diagnostic]:
        return list(self._items)

    def of_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        """Return the diagnostics with the given code."""
        return [d for d in self._items if d.code == code]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)
