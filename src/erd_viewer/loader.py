from __future__ import annotations

import json
import logging
import os

from .types import RawSchema

logger = logging.getLogger(__name__)

# ============================================================================
# Schema document loading
#
# Reads the raw schema JSON and checks its top-level shape. Syntax errors are
# reported with a numbered excerpt of the surrounding lines and a caret under
# the offending column.
# ============================================================================

REQUIRED_KEYS = ("tables", "relationship_index")

# Lines of context shown before and after the offending line
SNIPPET_CONTEXT_LINES = 2


class SchemaLoadError(ValueError):
    """The schema document is empty, malformed, or missing required keys."""


def load_schema(text: str) -> RawSchema:
    """Parse and validate a raw schema document."""
    if not text or not text.strip():
        raise SchemaLoadError("File is empty or could not be read.")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        message = f"Error parsing file: {err.msg}"
        message += "\n\n" + format_error_snippet(text, err.lineno, err.colno)
        raise SchemaLoadError(message) from err

    if not isinstance(data, dict) or any(key not in data for key in REQUIRED_KEYS):
        raise SchemaLoadError(
            'Invalid JSON format. Missing "tables" or "relationship_index" key.'
        )

    logger.debug(
        "Loaded schema with %d table(s) and %d relationship(s)",
        len(data["tables"] or []),
        len(data["relationship_index"] or []),
    )
    return data  # type: ignore[return-value]


def load_schema_file(path: str | os.PathLike[str]) -> RawSchema:
    with open(path, encoding="utf-8") as fh:
        return load_schema(fh.read())


def format_error_snippet(text: str, line: int, column: int) -> str:
    """Numbered excerpt around ``line`` (1-based) with a caret under ``column``.

    Example for an error on line 3, column 5::

        [File Content Near Error (line 3, column 5)]
        1 | {
        2 |   "tables": [],
        3 |   oops
          |     ^
    """
    lines = text.split("\n")
    error_index = line - 1
    start = max(0, error_index - SNIPPET_CONTEXT_LINES)
    end = min(len(lines), error_index + SNIPPET_CONTEXT_LINES + 1)
    pad = len(str(end))

    snippet = [
        f"{str(start + i + 1).rjust(pad)} | {content}"
        for i, content in enumerate(lines[start:end])
    ]
    pointer = f"{' ' * pad} | {' ' * (column - 1)}^"
    snippet.insert(error_index - start + 1, pointer)

    header = f"[File Content Near Error (line {line}, column {column})]"
    return header + "\n" + "\n".join(snippet)
