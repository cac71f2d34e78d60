# clausetree/domain/passage.py
"""
Domain model for the token sequence a clause tree is built over.
"""
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Token:
    """
    One indexed unit (a word) of the analyzed passage.

    Attributes:
        index: 0-based position in the passage
        text: Surface form of the word
    """
    index: int
    text: str

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Token index cannot be negative: {self.index}")


@dataclass(frozen=True)
class Passage:
    """
    A passage to analyze: a reference plus its contiguous token sequence.

    Attributes:
        reference: Subject key of the passage (e.g., "Romans 12:1-2")
        tokens: Tokens with indices 0..N-1, in order
    """
    reference: str
    tokens: Tuple[Token, ...]

    def __post_init__(self):
        if not self.reference:
            raise ValueError("Passage reference cannot be empty")
        for position, token in enumerate(self.tokens):
            if token.index != position:
                raise ValueError(
                    f"Token indices must be contiguous from 0; "
                    f"found {token.index} at position {position}"
                )

    @classmethod
    def from_words(cls, reference: str, words: Iterable[str]) -> 'Passage':
        """Create a passage from plain words, numbering them from 0."""
        return cls(
            reference=reference,
            tokens=tuple(Token(index=i, text=w) for i, w in enumerate(words))
        )

    @property
    def token_count(self) -> int:
        """Number of tokens (N)."""
        return len(self.tokens)

    @property
    def text(self) -> str:
        """Passage text reconstructed from its tokens."""
        return " ".join(t.text for t in self.tokens)

    def token_text(self, index: int) -> str:
        """Return the text of the token at ``index``."""
        return self.tokens[index].text
