# clausetree/services/structure_validator.py
"""
Shallow check of the decoded response's required top-level fields.
"""
from typing import Any, Dict

from ..domain.raw_response import SyntaxResponse


class StructureValidator:
    """
    Verifies that ``clauses``, ``rootClauseId`` and ``structureDescription``
    are present and usable.

    Individual clause objects are not inspected here; that happens when
    the tree is built.
    """

    def validate(self, document: Dict[str, Any]) -> SyntaxResponse:
        """
        Validate the top-level structure.

        Args:
            document: Decoded response object

        Returns:
            SyntaxResponse with the raw clause list and top-level strings

        Raises:
            StructureError: Naming the first missing or malformed field
        """
        return SyntaxResponse.from_document(document)
