# clausetree/errors.py
"""
Fatal errors raised while turning a generated response into a clause tree.

Each error carries the structured detail needed to render an actionable
message without re-inspecting the raw response. ``user_message`` is meant
to be shown to the user verbatim.
"""
from typing import List, Optional, Sequence, Tuple


class SyntaxAnalysisError(Exception):
    """Base class for all fatal analysis errors."""

    code = "SYNTAX_ANALYSIS_ERROR"

    def __init__(self, user_message: str):
        super().__init__(user_message)
        self.user_message = user_message
        # Analysis states reached before the failure; set by the orchestrator
        self.states: tuple = ()

    @property
    def details(self) -> dict:
        """Structured detail for API responses."""
        return {}


class TruncatedResponseError(SyntaxAnalysisError):
    """Raised when the response looks cut off before the JSON is complete."""

    code = "TRUNCATED_RESPONSE"

    def __init__(self, response_length: int, reason: str):
        self.response_length = response_length
        self.reason = reason
        super().__init__(
            f"The analysis response was cut off ({reason}, {response_length} characters received). "
            f"Try a shorter passage."
        )

    @property
    def details(self) -> dict:
        return {'responseLength': self.response_length, 'reason': self.reason}


class ParseError(SyntaxAnalysisError):
    """Raised when the sanitized response is not a JSON object."""

    code = "PARSE_ERROR"

    def __init__(self, detail: str, position: Optional[int] = None):
        self.detail = detail
        self.position = position
        location = f" at character {position}" if position is not None else ""
        super().__init__(f"Failed to parse syntax analysis response{location}: {detail}")

    @property
    def details(self) -> dict:
        return {'detail': self.detail, 'position': self.position}


class StructureError(SyntaxAnalysisError):
    """Raised when a required field is missing or has the wrong shape."""

    code = "STRUCTURE_ERROR"

    def __init__(self, field: str, problem: str = "missing", clause_id: Optional[str] = None):
        self.field = field
        self.problem = problem
        self.clause_id = clause_id
        where = f" in clause {clause_id}" if clause_id else ""
        super().__init__(f'Response field "{field}"{where} is {problem}')

    @property
    def details(self) -> dict:
        return {'field': self.field, 'problem': self.problem, 'clauseId': self.clause_id}


class IndexOutOfRangeError(SyntaxAnalysisError):
    """Raised when a clause references a token index outside [0, N)."""

    code = "INDEX_OUT_OF_RANGE"

    def __init__(self, clause_id: str, index: int, token_count: int):
        self.clause_id = clause_id
        self.index = index
        self.token_count = token_count
        if token_count > 0:
            where = f"Valid range is {self.valid_range}"
        else:
            where = "The passage has no words"
        super().__init__(f"Clause {clause_id} contains invalid word index {index}. {where}")

    @property
    def valid_range(self) -> Optional[str]:
        """Inclusive index range as "0-{N-1}", or None for an empty passage."""
        if self.token_count <= 0:
            return None
        return f"0-{self.token_count - 1}"

    @property
    def details(self) -> dict:
        return {
            'clauseId': self.clause_id,
            'index': self.index,
            'validRange': self.valid_range,
        }


class IncompleteCoverageError(SyntaxAnalysisError):
    """Raised when some token indices are not claimed by any clause."""

    code = "INCOMPLETE_COVERAGE"

    def __init__(self, missing: Sequence[Tuple[int, str]]):
        self.missing: List[Tuple[int, str]] = list(missing)
        words = ", ".join(text for _, text in self.missing)
        indices = ", ".join(str(index) for index, _ in self.missing)
        super().__init__(
            f"Analysis is incomplete. The following words are not assigned to any clause: "
            f"{words} (indices: {indices})"
        )

    @property
    def missing_indices(self) -> List[int]:
        return [index for index, _ in self.missing]

    @property
    def details(self) -> dict:
        return {'missing': [{'index': i, 'text': t} for i, t in self.missing]}


class ReferenceIntegrityError(SyntaxAnalysisError):
    """Raised in strict mode when a clause reference does not resolve."""

    code = "REFERENCE_INTEGRITY"

    def __init__(self, clause_id: Optional[str], reference: str, problem: str):
        self.clause_id = clause_id
        self.reference = reference
        self.problem = problem
        super().__init__(problem)

    @property
    def details(self) -> dict:
        return {'clauseId': self.clause_id, 'reference': self.reference}
