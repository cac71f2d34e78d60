# clausetree/services/syntax_validation_pipeline.py
"""
Synchronous chain that turns one raw response into a validated ClauseTree.

Steps (each failure is terminal):
    Sanitize -> TruncationCheck -> Decode -> StructureCheck
    -> TreeBuild (range scan, type resolve, references) -> CoverageCheck

Pure computation over immutable inputs, with no I/O and no shared mutable
state.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import AppConfig, load_config
from ..domain.analysis_state import AnalysisState
from ..domain.diagnostics import Diagnostic, DiagnosticLog
from ..domain.passage import Passage
from ..domain.syntax_tree import ClauseTree
from ..errors import TruncatedResponseError
from ..logging_config import get_logger
from ..utils.timing import Timer
from .clause_tree_builder import ClauseTreeBuilder
from .clause_type_resolver import ClauseTypeResolver
from .coverage_validator import CoverageValidator
from .response_decoder import decode_response
from .response_sanitizer import ResponseSanitizer
from .structure_validator import StructureValidator
from .truncation_detector import TruncationDetector

logger = get_logger('validation_pipeline')


@dataclass
class ValidationResult:
    """
    A validated tree plus everything noticed along the way.

    Attributes:
        tree: The validated clause tree
        diagnostics: Non-fatal findings, in the order they were recorded
        ownership: Token index -> id of the owning clause
    """
    tree: ClauseTree
    diagnostics: List[Diagnostic] = field(default_factory=list)
    ownership: Dict[int, str] = field(default_factory=dict)

    @property
    def has_diagnostics(self) -> bool:
        return bool(self.diagnostics)


class SyntaxValidationPipeline:
    """
    Coordinates the validation services for a single response.

    Example usage:
        pipeline = SyntaxValidationPipeline()
        result = pipeline.validate(raw_text, passage)
        tree = result.tree
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        sanitizer: Optional[ResponseSanitizer] = None,
        truncation_detector: Optional[TruncationDetector] = None,
        structure_validator: Optional[StructureValidator] = None,
        tree_builder: Optional[ClauseTreeBuilder] = None,
        coverage_validator: Optional[CoverageValidator] = None,
    ) -> None:
        self.config = config or load_config()
        self.sanitizer = sanitizer or ResponseSanitizer()
        self.truncation_detector = truncation_detector or TruncationDetector()
        self.structure_validator = structure_validator or StructureValidator()
        self.tree_builder = tree_builder or ClauseTreeBuilder(
            resolver=ClauseTypeResolver(self.config.clause_types),
            config=self.config.validation,
        )
        self.coverage_validator = coverage_validator or CoverageValidator()

    def validate(
        self,
        raw_response: str,
        passage: Passage,
        language: Optional[str] = None,
        states: Optional[List[AnalysisState]] = None
    ) -> ValidationResult:
        """
        Validate a raw generator response against a passage.

        Args:
            raw_response: Text exactly as returned by the generator
            passage: The passage the response claims to analyze
            language: Language of the descriptions (default from config)
            states: Optional list the steps are appended to as they start

        Returns:
            ValidationResult with the tree and diagnostics

        Raises:
            TruncatedResponseError: Response looks cut off; never decoded
            ParseError: Sanitized text is not a JSON object
            StructureError: Required field missing or malformed
            IndexOutOfRangeError: A clause references a token outside the passage
            IncompleteCoverageError: Some token is not owned by any clause
            ReferenceIntegrityError: Only with strict_references enabled
        """
        diagnostics = DiagnosticLog(logger)
        trace = states if states is not None else []

        with Timer(f"Validate syntax response for {passage.reference}", log_level="DEBUG"):
            trace.append(AnalysisState.SANITIZE)
            text = self.sanitizer.sanitize(raw_response)

            trace.append(AnalysisState.TRUNCATION_CHECK)
            reason = self.truncation_detector.detect(text)
            if reason is not None:
                logger.error(f"❌ Truncated response for {passage.reference}: {reason}")
                raise TruncatedResponseError(len(text), reason)

            trace.append(AnalysisState.DECODE)
            document = decode_response(text)

            trace.append(AnalysisState.STRUCTURE_CHECK)
            response = self.structure_validator.validate(document)
            records = self.tree_builder.parse_records(response.clauses)

            trace.append(AnalysisState.TREE_BUILD)
            # Out-of-range indices are reported before any other clause-level error
            self.coverage_validator.check_ranges(
                ((r.id, r.word_indices) for r in records), passage.token_count
            )
            clauses = self.tree_builder.build_from_records(records, diagnostics)
            self.tree_builder.check_references(clauses, response.root_clause_id, diagnostics)

            trace.append(AnalysisState.COVERAGE_CHECK)
            coverage = self.coverage_validator.validate(clauses, passage, diagnostics)
            if self.config.validation.prune_duplicate_claims and coverage.duplicate_claims:
                clauses = self.coverage_validator.prune_to_ownership(clauses, coverage)

            tree = ClauseTree(
                subject_reference=passage.reference,
                clauses=tuple(clauses),
                root_id=response.root_clause_id,
                summary=response.structure_description,
                language=language or self.config.prompt.default_language,
            )

        logger.info(
            f"Validation passed for {passage.reference}: {tree.clause_count} clauses, "
            f"{passage.token_count} words, {len(diagnostics)} diagnostic(s)"
        )
        return ValidationResult(
            tree=tree,
            diagnostics=diagnostics.items,
            ownership=dict(coverage.ownership),
        )
