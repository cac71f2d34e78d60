# clausetree/services/clause_tree_builder.py
"""
Turns raw clause records into Clause entities with parent/child links.
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from ..config import ValidationConfig
from ..domain.clause import Clause
from ..domain.diagnostics import Diagnostic, DiagnosticCode
from ..domain.raw_response import RawClauseRecord
from ..errors import ReferenceIntegrityError, StructureError
from ..logging_config import get_logger
from .clause_type_resolver import ClauseTypeResolver
from .interfaces import IDiagnosticSink

logger = get_logger('clause_tree_builder')


class ClauseTreeBuilder:
    """
    Materializes clauses from the response's clause objects.

    child_ids are derived in a single grouping pass (parent id -> child ids)
    rather than by scanning every pair of records. Parent existence is not
    checked while building; see :meth:`check_references`.
    """

    def __init__(
        self,
        resolver: Optional[ClauseTypeResolver] = None,
        config: Optional[ValidationConfig] = None
    ):
        self.resolver = resolver or ClauseTypeResolver()
        self.config = config or ValidationConfig()

    def build(
        self,
        raw_clauses: Sequence[Any],
        diagnostics: IDiagnosticSink
    ) -> List[Clause]:
        """
        Parse and build clauses in response order.

        Raises:
            StructureError: For malformed clause objects, duplicate ids, or
                empty clauses when those are configured as fatal
        """
        return self.build_from_records(self.parse_records(raw_clauses), diagnostics)

    @staticmethod
    def parse_records(raw_clauses: Sequence[Any]) -> List[RawClauseRecord]:
        """
        Shape-check the response's "clauses" array.

        Raises:
            StructureError: For the first malformed clause object
        """
        return [RawClauseRecord.from_dict(data, i) for i, data in enumerate(raw_clauses)]

    def build_from_records(
        self,
        records: Sequence[RawClauseRecord],
        diagnostics: IDiagnosticSink
    ) -> List[Clause]:
        """
        Build clauses from parsed records, in response order.

        Args:
            records: Shape-checked clause records
            diagnostics: Sink for non-fatal findings

        Returns:
            Clauses with resolved kinds and derived child_ids

        Raises:
            StructureError: For duplicate ids, or empty clauses when those
                are configured as fatal
        """
        self._check_unique_ids(records)

        children: Dict[str, List[str]] = defaultdict(list)
        for record in records:
            if record.parent_clause_id and record.parent_clause_id != record.id:
                children[record.parent_clause_id].append(record.id)

        clauses = []
        for record in records:
            self._check_tokens(record, diagnostics)
            clauses.append(Clause(
                id=record.id,
                kind=self.resolver.resolve(record.type, diagnostics, clause_id=record.id),
                token_indices=record.word_indices,
                main_token_index=record.main_verb_index,
                parent_id=record.parent_clause_id,
                child_ids=tuple(children.get(record.id, ())),
                connective=record.conjunction,
                text=record.text,
                role_description=record.syntactic_function,
                translation=record.translation,
            ))

        logger.debug(f"Built {len(clauses)} clauses")
        return clauses

    def check_references(
        self,
        clauses: Sequence[Clause],
        root_id: str,
        diagnostics: IDiagnosticSink
    ) -> None:
        """
        Check that root and parent ids resolve and parent chains are acyclic.

        Problems are recorded as diagnostics, or raised as
        ReferenceIntegrityError when ``strict_references`` is enabled.
        """
        by_id = {c.id: c for c in clauses}

        if root_id not in by_id:
            self._report(diagnostics, Diagnostic(
                code=DiagnosticCode.UNKNOWN_ROOT,
                message=f"Root clause {root_id} not found in clauses",
                clause_id=root_id,
            ), reference=root_id)

        for clause in clauses:
            if clause.parent_id is not None and clause.parent_id not in by_id:
                self._report(diagnostics, Diagnostic(
                    code=DiagnosticCode.UNKNOWN_PARENT,
                    message=f"Clause {clause.id} names unknown parent {clause.parent_id}",
                    clause_id=clause.id,
                    details={'parentId': clause.parent_id},
                ), reference=clause.parent_id)

        reported = set()
        for clause in clauses:
            cycle = self._find_cycle(clause, by_id)
            if cycle and frozenset(cycle) not in reported:
                reported.add(frozenset(cycle))
                self._report(diagnostics, Diagnostic(
                    code=DiagnosticCode.PARENT_CYCLE,
                    message=f"Parent chain forms a cycle: {' -> '.join(cycle + [cycle[0]])}",
                    clause_id=cycle[0],
                    details={'cycle': list(cycle)},
                ), reference=cycle[0])

    @staticmethod
    def _find_cycle(start: Clause, by_id: Dict[str, Clause]) -> Optional[List[str]]:
        """Return the ids forming a cycle reachable from ``start``, if any."""
        path: List[str] = []
        positions: Dict[str, int] = {}
        current: Optional[Clause] = start
        while current is not None:
            if current.id in positions:
                return path[positions[current.id]:]
            positions[current.id] = len(path)
            path.append(current.id)
            current = by_id.get(current.parent_id) if current.parent_id else None
        return None

    def _report(self, diagnostics: IDiagnosticSink, diagnostic: Diagnostic, reference: str) -> None:
        if self.config.strict_references:
            raise ReferenceIntegrityError(diagnostic.clause_id, reference, diagnostic.message)
        diagnostics.record(diagnostic)

    @staticmethod
    def _check_unique_ids(records: Sequence[RawClauseRecord]) -> None:
        seen = set()
        for record in records:
            if record.id in seen:
                raise StructureError("id", "duplicated", clause_id=record.id)
            seen.add(record.id)

    def _check_tokens(self, record: RawClauseRecord, diagnostics: IDiagnosticSink) -> None:
        if not record.word_indices:
            if self.config.require_non_empty_clauses:
                raise StructureError("wordIndices", "empty", clause_id=record.id)
            diagnostics.record(Diagnostic(
                code=DiagnosticCode.EMPTY_CLAUSE,
                message=f"Clause {record.id} contains no words",
                clause_id=record.id,
            ))

        main = record.main_verb_index
        if main is not None and main not in record.word_indices:
            diagnostics.record(Diagnostic(
                code=DiagnosticCode.MAIN_TOKEN_OUTSIDE_CLAUSE,
                message=f"Main verb index {main} of clause {record.id} is not among its words",
                clause_id=record.id,
                token_index=main,
            ))
