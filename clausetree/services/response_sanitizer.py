# clausetree/services/response_sanitizer.py
"""
Best-effort normalization of raw generator output into JSON candidate text.
"""
import re

from ..logging_config import get_logger

logger = get_logger('response_sanitizer')


class ResponseSanitizer:
    """
    Strips markdown fencing and repairs non-JSON literals.

    Applied in order:
    1. Remove ```json / ``` code fences
    2. Trim surrounding whitespace
    3. Replace ``undefined`` in value position (``: undefined,`` or
       ``: undefined}``) with ``null``

    Never fails; the output may still be invalid JSON.
    """

    FENCE_OPEN = re.compile(r'```json\n?', re.IGNORECASE)
    FENCE = re.compile(r'```\n?')
    UNDEFINED_VALUE = re.compile(r':\s*undefined\s*([,}])')

    def sanitize(self, raw_response: str) -> str:
        """
        Normalize a raw response.

        Args:
            raw_response: Text as returned by the generator

        Returns:
            Text that is a syntactic candidate for JSON parsing
        """
        if not raw_response:
            return ""

        cleaned = self.FENCE_OPEN.sub('', raw_response)
        cleaned = self.FENCE.sub('', cleaned)
        cleaned = cleaned.strip()

        cleaned, replaced = self.UNDEFINED_VALUE.subn(r': null\1', cleaned)
        if replaced:
            logger.debug(f"Replaced {replaced} 'undefined' literal(s) with null")

        return cleaned
