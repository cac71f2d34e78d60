# clausetree/config.py
"""
Central configuration for the clause-tree engine.
Uses dataclasses for type-safe configuration management.
"""
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Dict, List, Optional
import json

from .domain.clause import ClauseKind


@dataclass
class ClauseTypeConfig:
    """Configuration for resolving free-form clause type strings."""
    # Synonym -> canonical kind. Keys are uppercase.
    aliases: Dict[str, ClauseKind] = field(default_factory=lambda: {
        'MAIN': ClauseKind.MAIN,
        'INDEPENDENT': ClauseKind.MAIN,
        'PRINCIPAL': ClauseKind.MAIN,

        'SUBORDINATE_PURPOSE': ClauseKind.SUBORDINATE_PURPOSE,
        'PURPOSE': ClauseKind.SUBORDINATE_PURPOSE,
        'FINAL': ClauseKind.SUBORDINATE_PURPOSE,

        'SUBORDINATE_RESULT': ClauseKind.SUBORDINATE_RESULT,
        'RESULT': ClauseKind.SUBORDINATE_RESULT,
        'CONSECUTIVE': ClauseKind.SUBORDINATE_RESULT,

        'SUBORDINATE_CAUSAL': ClauseKind.SUBORDINATE_CAUSAL,
        'CAUSAL': ClauseKind.SUBORDINATE_CAUSAL,
        'REASON': ClauseKind.SUBORDINATE_CAUSAL,

        'SUBORDINATE_CONDITIONAL': ClauseKind.SUBORDINATE_CONDITIONAL,
        'CONDITIONAL': ClauseKind.SUBORDINATE_CONDITIONAL,

        'SUBORDINATE_TEMPORAL': ClauseKind.SUBORDINATE_TEMPORAL,
        'TEMPORAL': ClauseKind.SUBORDINATE_TEMPORAL,
        'TIME': ClauseKind.SUBORDINATE_TEMPORAL,

        'SUBORDINATE_INDIRECT_QUESTION': ClauseKind.SUBORDINATE_INDIRECT_QUESTION,
        'INDIRECT_QUESTION': ClauseKind.SUBORDINATE_INDIRECT_QUESTION,
        'QUESTION': ClauseKind.SUBORDINATE_INDIRECT_QUESTION,
        'INTERROGATIVE': ClauseKind.SUBORDINATE_INDIRECT_QUESTION,

        'PARTICIPIAL': ClauseKind.PARTICIPIAL,
        'PARTICIPLE': ClauseKind.PARTICIPIAL,

        'INFINITIVAL': ClauseKind.INFINITIVAL,
        'INFINITIVE': ClauseKind.INFINITIVAL,

        'RELATIVE': ClauseKind.RELATIVE,
        'RELATIVE_CLAUSE': ClauseKind.RELATIVE,
    })

    # Prefixes stripped before the second lookup, tried in order
    strippable_prefixes: List[str] = field(default_factory=lambda: [
        'SUBORDINATE_', 'CLAUSE_'
    ])

    fallback_kind: ClauseKind = ClauseKind.RELATIVE


@dataclass
class ValidationConfig:
    """Configuration for tree and coverage validation."""
    # Remove indices owned by an earlier clause from later clauses
    prune_duplicate_claims: bool = True

    # Raise instead of recording diagnostics for unknown root/parent ids and cycles
    strict_references: bool = False

    # Raise instead of recording a diagnostic for clauses without words
    require_non_empty_clauses: bool = False


@dataclass
class PromptConfig:
    """Configuration for the analysis prompt."""
    default_language: str = "English"
    supported_languages: List[str] = field(default_factory=lambda: [
        'English', 'Spanish'
    ])
    max_passage_chars: int = 6000


@dataclass
class GenerationConfig:
    """Configuration for the text generation collaborator."""
    model_name: str = "gemini-2.0-flash"
    # Low temperature for more deterministic syntax analysis
    temperature: float = 0.3


@dataclass
class CacheConfig:
    """Configuration for the cache-then-generate strategy."""
    enabled: bool = True
    # Share one generation between concurrent requests for the same key
    single_flight: bool = True


@dataclass
class AppConfig:
    """Main configuration combining all sub-configs."""
    clause_types: ClauseTypeConfig = field(default_factory=ClauseTypeConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    app_title: str = "Clause Tree Engine"
    app_version: str = "1.0.0"


def _apply_overrides(section, overrides: dict) -> None:
    """Set scalar fields of a config section from a dict of overrides."""
    known = {f.name for f in fields(section)}
    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown config key '{key}' for {type(section).__name__}")
        current = getattr(section, key)
        if is_dataclass(current) and isinstance(value, dict):
            _apply_overrides(current, value)
        elif isinstance(current, ClauseKind):
            setattr(section, key, ClauseKind(value))
        elif key == 'aliases':
            setattr(section, key, {
                str(alias).strip().upper(): ClauseKind(kind) for alias, kind in value.items()
            })
        else:
            setattr(section, key, value)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or return defaults.

    The file is JSON with one optional object per section, e.g.
    {"validation": {"strict_references": true}}.

    Args:
        config_path: Optional path to JSON config file

    Returns:
        AppConfig instance with loaded or default values
    """
    config = AppConfig()
    if config_path:
        with open(config_path, encoding='utf-8') as handle:
            _apply_overrides(config, json.load(handle))
    return config
