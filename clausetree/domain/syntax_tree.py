# clausetree/domain/syntax_tree.py
"""
Aggregate root for the clause analysis of one passage.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional, Tuple

from .clause import Clause


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ClauseTree:
    """
    Validated clause tree over a passage's tokens.

    Constructed once per analysis request and never mutated afterwards.

    Attributes:
        subject_reference: Reference of the analyzed passage
        clauses: All clauses, in the order the generator returned them
        root_id: Id of the primary main clause
        summary: Human-readable description of the overall structure
        language: Language of the descriptions
        analyzed_at: When the analysis was validated
    """
    subject_reference: str
    clauses: Tuple[Clause, ...]
    root_id: str
    summary: str
    language: str = "English"
    analyzed_at: datetime = field(default_factory=_utcnow)

    def clause_by_id(self, clause_id: str) -> Optional[Clause]:
        """Look up a clause by id."""
        for clause in self.clauses:
            if clause.id == clause_id:
                return clause
        return None

    @property
    def root(self) -> Optional[Clause]:
        """The root clause, or None if root_id references no clause."""
        return self.clause_by_id(self.root_id)

    @property
    def clause_count(self) -> int:
        return len(self.clauses)

    def children_of(self, clause_id: str) -> List[Clause]:
        """Return the child clauses of ``clause_id`` in tree order."""
        parent = self.clause_by_id(clause_id)
        if parent is None:
            return []
        by_id = {c.id: c for c in self.clauses}
        return [by_id[cid] for cid in parent.child_ids if cid in by_id]

    def ownership(self) -> Dict[int, str]:
        """
        Map every token index to the id of the clause that owns it.

        The first clause (in tree order) listing an index owns it.
        """
        owners: Dict[int, str] = {}
        for clause in self.clauses:
            for index in clause.token_indices:
                owners.setdefault(index, clause.id)
        return owners

    def owner_of(self, index: int) -> Optional[str]:
        """Id of the clause owning token ``index``."""
        return self.ownership().get(index)

    def iter_depth_first(self) -> Iterator[Tuple[int, Clause]]:
        """
        Walk the tree from the root, yielding (depth, clause).

        Clauses unreachable from the root are not visited. Each clause is
        visited at most once, so parent cycles cannot loop forever.
        """
        root = self.root
        if root is None:
            return
        by_id = {c.id: c for c in self.clauses}
        seen = set()
        stack = [(0, root)]
        while stack:
            depth, clause = stack.pop()
            if clause.id in seen:
                continue
            seen.add(clause.id)
            yield depth, clause
            for child_id in reversed(clause.child_ids):
                child = by_id.get(child_id)
                if child is not None:
                    stack.append((depth + 1, child))

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            'subjectReference': self.subject_reference,
            'clauses': [c.to_dict() for c in self.clauses],
            'rootId': self.root_id,
            'summary': self.summary,
            'language': self.language,
            'analyzedAt': self.analyzed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ClauseTree':
        """Rebuild a tree from :meth:`to_dict` output."""
        return cls(
            subject_reference=data['subjectReference'],
            clauses=tuple(Clause.from_dict(c) for c in data['clauses']),
            root_id=data['rootId'],
            summary=data['summary'],
            language=data.get('language', 'English'),
            analyzed_at=datetime.fromisoformat(data['analyzedAt']),
        )
