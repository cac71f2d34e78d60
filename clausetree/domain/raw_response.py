# clausetree/domain/raw_response.py
"""
Records decoded from the text generator's JSON, before validation.

Field names follow the generator's response schema:

{
  "clauses": [
    {"id": "...", "type": "...", "wordIndices": [...], "mainVerbIndex": 0,
     "parentClauseId": null, "conjunction": "...", "greekText": "...",
     "syntacticFunction": "..."}
  ],
  "rootClauseId": "...",
  "structureDescription": "..."
}

Shape rules are enforced with Pydantic; any violation is reported as a
StructureError naming the offending field.
"""
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import StructureError


# =============================================================================
# Helpers
# =============================================================================

def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_index(value: Any) -> Optional[int]:
    """Coerce a JSON number to an int index; None if it is not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _problem(error: dict) -> str:
    """Short description of a Pydantic error for StructureError."""
    kind = error.get('type')
    if kind == 'missing':
        return "missing"
    if kind == 'value_error':
        return str(error.get('ctx', {}).get('error', error['msg']))
    if kind in ('list_type', 'tuple_type'):
        return "not an array"
    if kind in ('model_type', 'dict_type', 'model_attributes_type'):
        return "not an object"
    return error['msg']


# =============================================================================
# Pydantic Models for Validation
# =============================================================================

class RawClauseRecord(BaseModel):
    """
    One clause object from the response, shape-checked but not validated.

    ``type`` is kept verbatim; it is resolved to a ClauseKind later.
    Index ranges are checked against the passage elsewhere.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    id: str
    type: str = ""
    word_indices: Tuple[int, ...] = Field(alias='wordIndices')
    parent_clause_id: Optional[str] = Field(default=None, alias='parentClauseId')
    main_verb_index: Optional[int] = Field(default=None, alias='mainVerbIndex')
    conjunction: Optional[str] = None
    text: str = Field(default="", alias='greekText')
    syntactic_function: Optional[str] = Field(default=None, alias='syntacticFunction')
    translation: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def require_id(cls, v):
        text = _optional_text(v)
        if text is None:
            raise ValueError("missing")
        return text

    @field_validator('type', mode='before')
    @classmethod
    def keep_type_verbatim(cls, v):
        return "" if v is None else str(v)

    @field_validator('word_indices', mode='before')
    @classmethod
    def require_integer_indices(cls, v):
        if not isinstance(v, list):
            raise ValueError("missing or not a list")
        indices = []
        for value in v:
            index = _as_index(value)
            if index is None:
                raise ValueError(f"not a list of integers (found {value!r})")
            indices.append(index)
        return tuple(indices)

    @field_validator('main_verb_index', mode='before')
    @classmethod
    def require_integer_main_verb(cls, v):
        if v is None:
            return None
        index = _as_index(v)
        if index is None:
            raise ValueError(f"not an integer (found {v!r})")
        return index

    @field_validator('parent_clause_id', 'conjunction', 'syntactic_function', 'translation', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        return _optional_text(v)

    @field_validator('text', mode='before')
    @classmethod
    def text_or_empty(cls, v):
        return str(v or "")

    @classmethod
    def from_dict(cls, data: Any, position: int) -> 'RawClauseRecord':
        """
        Build a record from a decoded clause object.

        Args:
            data: Decoded JSON value for one entry of "clauses"
            position: Position of the entry, used in error messages

        Raises:
            StructureError: If the entry is not an object, has no id, or its
                word indices are not a list of integers
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            loc = error['loc']
            if not loc:
                raise StructureError(f"clauses[{position}]", "not an object") from e
            field = str(loc[0])
            if field == 'id':
                raise StructureError(f"clauses[{position}].id", _problem(error)) from e
            clause_id = _optional_text(data.get('id')) if isinstance(data, dict) else None
            raise StructureError(field, _problem(error), clause_id=clause_id) from e


class SyntaxResponse(BaseModel):
    """Top-level fields of a structurally valid response."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    clauses: List[Any]
    root_clause_id: str = Field(alias='rootClauseId')
    structure_description: str = Field(alias='structureDescription')

    @field_validator('root_clause_id', 'structure_description', mode='before')
    @classmethod
    def require_text(cls, v):
        if v is None:
            raise ValueError("missing")
        text = str(v).strip()
        if not text:
            raise ValueError("empty")
        return text

    @classmethod
    def from_document(cls, document: Any) -> 'SyntaxResponse':
        """
        Validate the decoded response object.

        Raises:
            StructureError: Naming the first missing or malformed field
        """
        try:
            return cls.model_validate(document)
        except ValidationError as e:
            error = e.errors()[0]
            loc = error['loc']
            raise StructureError(str(loc[0]) if loc else "response", _problem(error)) from e
