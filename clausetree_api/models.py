"""
Pydantic models for request validation and response serialization.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ValidateSyntaxRequest(BaseModel):
    """A raw generator response to validate against a passage."""

    reference: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Passage reference (e.g. 'Romans 12:1-2')"
    )

    tokens: List[str] = Field(
        ...,
        min_length=1,
        description="Words of the passage, in order; index = position"
    )

    raw_response: str = Field(
        ...,
        description="Response text exactly as returned by the generator"
    )

    language: Optional[str] = Field(
        default=None,
        description="Language of the descriptions (default from config)"
    )

    @field_validator("tokens")
    @classmethod
    def tokens_not_blank(cls, v: List[str]) -> List[str]:
        """Reject blank words; every index must map to real text."""
        for i, word in enumerate(v):
            if not word or not word.strip():
                raise ValueError(f"Token {i} is blank")
        return v


class ClauseResponse(BaseModel):
    """A validated clause."""
    id: str
    kind: str
    token_indices: List[int]
    declared_token_indices: List[int]
    main_token_index: Optional[int] = None
    parent_id: Optional[str] = None
    child_ids: List[str] = []
    connective: Optional[str] = None
    text: str = ""
    role_description: Optional[str] = None
    translation: Optional[str] = None


class DiagnosticResponse(BaseModel):
    """A non-fatal finding."""
    code: str
    message: str
    clause_id: Optional[str] = None
    token_index: Optional[int] = None
    details: Dict[str, Any] = {}


class ClauseTreeResponse(BaseModel):
    """A validated clause tree with its diagnostics."""
    subject_reference: str
    root_id: str
    summary: str
    language: str
    analyzed_at: str
    clauses: List[ClauseResponse]
    diagnostics: List[DiagnosticResponse] = []


class AnalysisErrorResponse(BaseModel):
    """Body returned for a fatal analysis error."""
    error: str
    message: str
    details: Dict[str, Any] = {}
