# clausetree/services/truncation_detector.py
"""
Cheap structural check for JSON documents cut off mid-stream.

Runs before decoding so a truncated response can be reported with an
actionable message instead of a generic parse error. This is a heuristic,
not a parser: it never repairs anything, and a miss still surfaces later
as a ParseError.
"""
import re
from dataclasses import dataclass
from typing import Optional

from ..logging_config import get_logger

logger = get_logger('truncation_detector')


@dataclass
class _ScanState:
    open_braces: int = 0
    close_braces: int = 0
    open_brackets: int = 0
    close_brackets: int = 0
    in_string: bool = False


class TruncationDetector:
    """
    Flags sanitized responses that look incomplete.

    Checks, in order:
    1. ``{``/``}`` and ``[``/``]`` counts differ
    2. The text ends with a comma, a colon, or inside an open string
    3. The document's closing run of braces and brackets starts right
       after a comma (``[0, 1, ]}``)

    Characters inside string literals are not counted, so clause text
    containing braces does not trigger a false positive.
    """

    TRAILING_COMMA_CLOSE = re.compile(r',\s*[}\]][\s}\]]*$')

    def detect(self, text: str) -> Optional[str]:
        """
        Return the reason the text looks truncated, or None.

        Args:
            text: Sanitized response text
        """
        state = self._scan(text)

        if state.open_braces != state.close_braces:
            return f"unbalanced braces ({state.open_braces} open, {state.close_braces} closed)"
        if state.open_brackets != state.close_brackets:
            return f"unbalanced brackets ({state.open_brackets} open, {state.close_brackets} closed)"

        tail = text.rstrip()
        if state.in_string:
            return "ends inside an open string"
        if tail.endswith(','):
            return "ends with a comma"
        if tail.endswith(':'):
            return "ends with a colon"
        if self.TRAILING_COMMA_CLOSE.search(tail):
            return "trailing comma before a closing bracket"
        return None

    def is_truncated(self, text: str) -> bool:
        """True if the text looks like an incomplete JSON document."""
        reason = self.detect(text)
        if reason:
            logger.warning(f"Response looks truncated: {reason} (length {len(text)})")
        return reason is not None

    def _scan(self, text: str) -> _ScanState:
        state = _ScanState()
        escaped = False

        for char in text:
            if state.in_string:
                if escaped:
                    escaped = False
                elif char == '\\':
                    escaped = True
                elif char == '"':
                    state.in_string = False
                continue

            if char == '"':
                state.in_string = True
            elif char == '{':
                state.open_braces += 1
            elif char == '}':
                state.close_braces += 1
            elif char == '[':
                state.open_brackets += 1
            elif char == ']':
                state.close_brackets += 1

        return state
