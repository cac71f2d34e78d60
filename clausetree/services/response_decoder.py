# clausetree/services/response_decoder.py
"""
JSON decoding of the sanitized response.
"""
import json
from typing import Any, Dict

from ..errors import ParseError


def decode_response(text: str) -> Dict[str, Any]:
    """
    Decode sanitized response text into a JSON object.

    Args:
        text: Sanitized response text

    Returns:
        The decoded top-level object

    Raises:
        ParseError: If the text is not valid JSON or not an object
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, position=e.pos) from e

    if not isinstance(document, dict):
        raise ParseError(f"expected a JSON object, got {type(document).__name__}")
    return document
