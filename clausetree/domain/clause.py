# clausetree/domain/clause.py
"""
Domain model for a syntactic clause and the closed set of clause kinds.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ClauseKind(Enum):
    """Canonical clause kinds. The set is closed: every clause gets one."""
    MAIN = "MAIN"
    SUBORDINATE_PURPOSE = "SUBORDINATE_PURPOSE"
    SUBORDINATE_RESULT = "SUBORDINATE_RESULT"
    SUBORDINATE_CAUSAL = "SUBORDINATE_CAUSAL"
    SUBORDINATE_CONDITIONAL = "SUBORDINATE_CONDITIONAL"
    SUBORDINATE_TEMPORAL = "SUBORDINATE_TEMPORAL"
    SUBORDINATE_INDIRECT_QUESTION = "SUBORDINATE_INDIRECT_QUESTION"
    PARTICIPIAL = "PARTICIPIAL"
    INFINITIVAL = "INFINITIVAL"
    RELATIVE = "RELATIVE"

    @property
    def is_subordinate(self) -> bool:
        """True for the SUBORDINATE_* kinds."""
        return self.value.startswith("SUBORDINATE_")


@dataclass(frozen=True)
class Clause:
    """
    A syntactic unit bound to a subset of the passage's tokens.

    Attributes:
        id: Unique identifier within the tree (e.g., "clause_1")
        kind: Canonical clause kind
        token_indices: Indices this clause owns, in declared order
        declared_token_indices: Indices exactly as the generator declared them
            (differs from token_indices only when duplicate claims were pruned)
        main_token_index: Index of the clause's main verb, if any
        parent_id: Id of the governing clause (None for the root)
        child_ids: Ids of clauses whose parent_id is this clause
        connective: Conjunction introducing the clause (e.g., "ἵνα")
        text: Text of the clause as returned by the generator
        role_description: Short description of the clause's function
        translation: Optional translation of the clause
    """
    id: str
    kind: ClauseKind
    token_indices: Tuple[int, ...]
    text: str = ""
    main_token_index: Optional[int] = None
    parent_id: Optional[str] = None
    child_ids: Tuple[str, ...] = ()
    connective: Optional[str] = None
    role_description: Optional[str] = None
    translation: Optional[str] = None
    declared_token_indices: Tuple[int, ...] = field(default=())

    def __post_init__(self):
        if not self.id:
            raise ValueError("Clause id cannot be empty")
        if not self.declared_token_indices:
            object.__setattr__(self, 'declared_token_indices', tuple(self.token_indices))

    @property
    def is_root(self) -> bool:
        """True when the clause has no parent."""
        return self.parent_id is None

    @property
    def was_pruned(self) -> bool:
        """True when duplicate claims were removed from this clause."""
        return tuple(self.token_indices) != tuple(self.declared_token_indices)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            'id': self.id,
            'kind': self.kind.value,
            'tokenIndices': list(self.token_indices),
            'declaredTokenIndices': list(self.declared_token_indices),
            'mainTokenIndex': self.main_token_index,
            'parentId': self.parent_id,
            'childIds': list(self.child_ids),
            'connective': self.connective,
            'text': self.text,
            'roleDescription': self.role_description,
            'translation': self.translation,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Clause':
        """Rebuild a clause from :meth:`to_dict` output."""
        return cls(
            id=data['id'],
            kind=ClauseKind(data['kind']),
            token_indices=tuple(data['tokenIndices']),
            declared_token_indices=tuple(data.get('declaredTokenIndices') or data['tokenIndices']),
            main_token_index=data.get('mainTokenIndex'),
            parent_id=data.get('parentId'),
            child_ids=tuple(data.get('childIds') or ()),
            connective=data.get('connective'),
            text=data.get('text', ''),
            role_description=data.get('roleDescription'),
            translation=data.get('translation'),
        )
