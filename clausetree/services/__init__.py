# Services module for the clause-tree engine
from .response_sanitizer import ResponseSanitizer
from .truncation_detector import TruncationDetector
from .response_decoder import decode_response
from .structure_validator import StructureValidator
from .clause_type_resolver import ClauseTypeResolver, resolve_clause_type
from .clause_tree_builder import ClauseTreeBuilder
from .coverage_validator import CoverageValidator, CoverageResult
from .syntax_validation_pipeline import SyntaxValidationPipeline, ValidationResult

__all__ = [
    'ResponseSanitizer',
    'TruncationDetector',
    'decode_response',
    'StructureValidator',
    'ClauseTypeResolver',
    'resolve_clause_type',
    'ClauseTreeBuilder',
    'CoverageValidator',
    'CoverageResult',
    'SyntaxValidationPipeline',
    'ValidationResult'
]
