# clausetree/domain/analysis_state.py
"""
States an analysis request passes through.

    CacheLookup -> Generate -> Sanitize -> TruncationCheck -> Decode
    -> StructureCheck -> TreeBuild -> CoverageCheck -> (CacheWrite) -> Done

A cache hit goes straight from CACHE_LOOKUP to DONE. Any fatal error ends
in FAILED.
"""
from enum import Enum


class AnalysisState(str, Enum):
    """States of one analysis request."""
    CACHE_LOOKUP = "cache_lookup"
    GENERATE = "generate"
    SANITIZE = "sanitize"
    TRUNCATION_CHECK = "truncation_check"
    DECODE = "decode"
    STRUCTURE_CHECK = "structure_check"
    TREE_BUILD = "tree_build"
    COVERAGE_CHECK = "coverage_check"
    CACHE_WRITE = "cache_write"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AnalysisState.DONE, AnalysisState.FAILED)
