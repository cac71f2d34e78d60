"""
Syntax validation endpoint.

Validates a generator response the caller already holds; no generation
or caching happens behind this route.
"""

from fastapi import APIRouter

from clausetree.config import load_config
from clausetree.domain.passage import Passage
from clausetree.logging_config import get_logger
from clausetree.services.syntax_validation_pipeline import SyntaxValidationPipeline, ValidationResult
from clausetree.settings import get_settings
from clausetree_api.models import (
    AnalysisErrorResponse,
    ClauseResponse,
    ClauseTreeResponse,
    DiagnosticResponse,
    ValidateSyntaxRequest,
)

router = APIRouter(tags=["Syntax"])
logger = get_logger("api.syntax")
settings = get_settings()
pipeline = SyntaxValidationPipeline(load_config(settings.config_path))


def _to_response(result: ValidationResult) -> ClauseTreeResponse:
    tree = result.tree
    return ClauseTreeResponse(
        subject_reference=tree.subject_reference,
        root_id=tree.root_id,
        summary=tree.summary,
        language=tree.language,
        analyzed_at=tree.analyzed_at.isoformat(),
        clauses=[
            ClauseResponse(
                id=c.id,
                kind=c.kind.value,
                token_indices=list(c.token_indices),
                declared_token_indices=list(c.declared_token_indices),
                main_token_index=c.main_token_index,
                parent_id=c.parent_id,
                child_ids=list(c.child_ids),
                connective=c.connective,
                text=c.text,
                role_description=c.role_description,
                translation=c.translation,
            )
            for c in tree.clauses
        ],
        diagnostics=[
            DiagnosticResponse(
                code=d.code.value,
                message=d.message,
                clause_id=d.clause_id,
                token_index=d.token_index,
                details=d.details,
            )
            for d in result.diagnostics
        ],
    )


@router.post(
    "/syntax/validate",
    response_model=ClauseTreeResponse,
    responses={422: {"model": AnalysisErrorResponse}},
)
async def validate_syntax(request: ValidateSyntaxRequest) -> ClauseTreeResponse:
    """
    Validate a raw syntax analysis response against a passage.

    Fatal analysis errors are turned into 422 responses by the
    application's exception handler.
    """
    passage = Passage.from_words(request.reference, request.tokens)
    result = pipeline.validate(
        request.raw_response,
        passage,
        request.language or settings.default_language,
    )
    return _to_response(result)
