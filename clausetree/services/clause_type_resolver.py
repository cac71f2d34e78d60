# clausetree/services/clause_type_resolver.py
"""
Maps free-form clause type strings to the closed ClauseKind set.

Resolution order:
1. Exact alias lookup on the uppercased, trimmed input
2. Alias lookup after stripping a known prefix (SUBORDINATE_, CLAUSE_);
   a hit here records a FUZZY_TYPE_MATCH diagnostic
3. Fallback to RELATIVE with an UNKNOWN_TYPE_FALLBACK diagnostic

The resolver never raises.
"""
from typing import Any, Optional

from ..config import ClauseTypeConfig
from ..domain.clause import ClauseKind
from ..domain.diagnostics import Diagnostic, DiagnosticCode
from .interfaces import IDiagnosticSink


class ClauseTypeResolver:
    """Resolves generator type strings using the configured alias table."""

    def __init__(self, config: Optional[ClauseTypeConfig] = None):
        self.config = config or ClauseTypeConfig()

    def resolve(
        self,
        raw_type: Any,
        diagnostics: Optional[IDiagnosticSink] = None,
        clause_id: Optional[str] = None
    ) -> ClauseKind:
        """
        Resolve a type string to a ClauseKind.

        Args:
            raw_type: Type value from the response (normally a string)
            diagnostics: Optional sink for fuzzy-match and fallback notices
            clause_id: Clause being resolved, for diagnostic context

        Returns:
            The canonical ClauseKind
        """
        normalized = self.normalize(raw_type)

        kind = self.config.aliases.get(normalized)
        if kind is not None:
            return kind

        stripped = self._strip_prefix(normalized)
        if stripped is not None:
            kind = self.config.aliases.get(stripped)
            if kind is not None:
                self._record(diagnostics, Diagnostic(
                    code=DiagnosticCode.FUZZY_TYPE_MATCH,
                    message=f"Clause type '{raw_type}' matched {kind.value} via '{stripped}'",
                    clause_id=clause_id,
                    details={'rawType': raw_type, 'matchedAlias': stripped, 'kind': kind.value},
                ))
                return kind

        fallback = self.config.fallback_kind
        self._record(diagnostics, Diagnostic(
            code=DiagnosticCode.UNKNOWN_TYPE_FALLBACK,
            message=f"Unknown clause type '{raw_type}', using {fallback.value}",
            clause_id=clause_id,
            details={'rawType': raw_type, 'kind': fallback.value},
        ))
        return fallback

    @staticmethod
    def normalize(raw_type: Any) -> str:
        """Uppercase and trim a raw type value."""
        if raw_type is None:
            return ""
        return str(raw_type).strip().upper()

    def _strip_prefix(self, normalized: str) -> Optional[str]:
        for prefix in self.config.strippable_prefixes:
            if normalized.startswith(prefix) and len(normalized) > len(prefix):
                return normalized[len(prefix):]
        return None

    @staticmethod
    def _record(diagnostics: Optional[IDiagnosticSink], diagnostic: Diagnostic) -> None:
        if diagnostics is not None:
            diagnostics.record(diagnostic)


_default_resolver = ClauseTypeResolver()


def resolve_clause_type(raw_type: Any, diagnostics: Optional[IDiagnosticSink] = None) -> ClauseKind:
    """Resolve a type string with the default alias table."""
    return _default_resolver.resolve(raw_type, diagnostics)
