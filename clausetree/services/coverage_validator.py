# clausetree/services/coverage_validator.py
"""
Guarantees every token is owned by exactly one clause.
"""
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from ..domain.clause import Clause
from ..domain.diagnostics import Diagnostic, DiagnosticCode
from ..domain.passage import Passage
from ..errors import IncompleteCoverageError, IndexOutOfRangeError
from ..logging_config import get_logger
from .interfaces import IDiagnosticSink

logger = get_logger('coverage_validator')


@dataclass
class CoverageResult:
    """
    Outcome of a successful coverage check.

    Attributes:
        ownership: Token index -> id of the owning clause
        duplicate_claims: Number of declarations ignored because the token
            was already owned
    """
    ownership: Dict[int, str]
    duplicate_claims: int = 0

    def indices_owned_by(self, clause_id: str) -> List[int]:
        return sorted(i for i, owner in self.ownership.items() if owner == clause_id)


class CoverageValidator:
    """
    Walks clauses in response order and assigns token ownership.

    First occurrence wins: a token declared by two clauses belongs to the
    one that appears first, and the later declaration is reported as a
    DUPLICATE_CLAIM diagnostic. Out-of-range indices fail immediately;
    unclaimed tokens fail after the walk.
    """

    @staticmethod
    def check_ranges(claims: Iterable[Tuple[str, Sequence[int]]], token_count: int) -> None:
        """
        Fail on the first index outside [0, N), in response order.

        Args:
            claims: (clause id, declared indices) pairs
            token_count: N

        Raises:
            IndexOutOfRangeError: For the first out-of-range index
        """
        for clause_id, indices in claims:
            for index in indices:
                if index < 0 or index >= token_count:
                    raise IndexOutOfRangeError(clause_id, index, token_count)

    def validate(
        self,
        clauses: Sequence[Clause],
        passage: Passage,
        diagnostics: IDiagnosticSink
    ) -> CoverageResult:
        """
        Check coverage of ``passage`` by ``clauses``.

        Args:
            clauses: Built clauses, in response order
            passage: The analyzed passage (N = passage.token_count)
            diagnostics: Sink for duplicate-claim notices

        Returns:
            CoverageResult with the effective ownership map

        Raises:
            IndexOutOfRangeError: On the first index outside [0, N)
            IncompleteCoverageError: If fewer than N indices were claimed
        """
        token_count = passage.token_count
        self.check_ranges(((c.id, c.token_indices) for c in clauses), token_count)

        ownership: Dict[int, str] = {}
        duplicates = 0

        for clause in clauses:
            for index in clause.token_indices:
                owner = ownership.get(index)
                if owner is None:
                    ownership[index] = clause.id
                    continue

                duplicates += 1
                text = passage.token_text(index)
                if owner == clause.id:
                    message = f"Clause {clause.id} lists word {index} ({text}) more than once"
                else:
                    message = (
                        f"Word at index {index} ({text}) appears in clauses {owner} and {clause.id}; "
                        f"keeping {owner}"
                    )
                diagnostics.record(Diagnostic(
                    code=DiagnosticCode.DUPLICATE_CLAIM,
                    message=message,
                    clause_id=clause.id,
                    token_index=index,
                    details={'owner': owner, 'claimant': clause.id, 'text': text},
                ))

        if len(ownership) < token_count:
            missing = [
                (i, passage.token_text(i)) for i in range(token_count) if i not in ownership
            ]
            raise IncompleteCoverageError(missing)

        logger.info(
            f"✅ Coverage passed: {len(clauses)} clauses covering {token_count} words"
            + (f" ({duplicates} duplicate claim(s) ignored)" if duplicates else "")
        )
        return CoverageResult(ownership=ownership, duplicate_claims=duplicates)

    @staticmethod
    def prune_to_ownership(clauses: Sequence[Clause], result: CoverageResult) -> List[Clause]:
        """
        Drop from each clause the indices it does not own.

        The declared list is preserved on ``declared_token_indices``.
        """
        pruned = []
        for clause in clauses:
            owned = []
            for index in clause.token_indices:
                if result.ownership.get(index) == clause.id and index not in owned:
                    owned.append(index)
            if len(owned) == len(clause.token_indices):
                pruned.append(clause)
            else:
                pruned.append(replace(
                    clause,
                    token_indices=tuple(owned),
                    declared_token_indices=clause.declared_token_indices,
                ))
        return pruned
