"""
Parser for pasted save documents.

A save document is arbitrary JSON. Item ownership is encoded as objects
carrying a numeric `data` field, at any nesting depth:

    {"decos": [{"data": 18000001, "cnt": 1}], "obstacles": [{"data": 8000012}]}

Every number found under `data` is extracted, known or not. Matching
against the catalogs happens during classification.
"""

import json
import logging
from typing import Any

from decotracker.config import settings
from decotracker.models.failure import InputEmptyError, InputParseError

logger = logging.getLogger(__name__)

# Marker field name (case-sensitive)
CODE_FIELD = "data"


def parse_save_text(text: str) -> Any:
    """
    Parse pasted save text into a JSON value.

    Raises:
        InputEmptyError: If text is empty or whitespace only
        InputParseError: If text is not valid JSON
    """
    if not text or not text.strip():
        raise InputEmptyError()

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InputParseError(detail=f"line {e.lineno} column {e.colno}: {e.msg}") from e
    except RecursionError as e:
        raise InputParseError(detail="Document is nested too deeply") from e


def _is_code(value: Any) -> bool:
    # bool is an int subclass but JSON true/false is not a code
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _collect(node: Any, codes: set[float], depth: int, max_depth: int) -> bool:
    """Walk one node. Returns True if any branch was cut at max_depth."""
    if depth > max_depth:
        return True

    truncated = False

    if isinstance(node, list):
        for item in node:
            if isinstance(item, (dict, list)):
                truncated = _collect(item, codes, depth + 1, max_depth) or truncated
    elif isinstance(node, dict):
        value = node.get(CODE_FIELD)
        if _is_code(value):
            codes.add(value)

        for child in node.values():
            if isinstance(child, (dict, list)):
                truncated = _collect(child, codes, depth + 1, max_depth) or truncated

    return truncated


def extract_codes(document: Any, max_depth: int | None = None) -> frozenset[float]:
    """
    Extract every number stored under a `data` field anywhere in a document.

    Args:
        document: Parsed JSON value (dict, list, or scalar)
        max_depth: Deepest container level visited. Defaults to
            settings.max_extraction_depth. Deeper branches are skipped and
            the codes found so far are returned.

    Returns:
        Deduplicated set of codes. Floats are kept as-is; they only match a
        catalog entry whose code compares equal.
    """
    if max_depth is None:
        max_depth = settings.max_extraction_depth

    codes: set[float] = set()
    truncated = _collect(document, codes, 0, max_depth)

    if truncated:
        logger.warning(
            "Save document exceeds max depth %d; deeper branches ignored",
            max_depth,
        )

    logger.debug("Extracted %d distinct codes", len(codes))
    return frozenset(codes)


def parse_and_extract(text: str, max_depth: int | None = None) -> frozenset[float]:
    """Parse save text and extract its codes in one step."""
    return extract_codes(parse_save_text(text), max_depth=max_depth)
