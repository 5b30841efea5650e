from __future__ import annotations

"""
JSONPath Extractor.

Applies a path expression to a parsed document using jsonpath-ng's extended
grammar. An expression that matches nothing is an error, which keeps a
mistyped path distinguishable from a path that selects an empty object.
"""

import logging
from functools import lru_cache
from typing import Any, List

from jsonpath_ng.jsonpath import JSONPath
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse

from json_env.domain.constants import DEFAULT_PATH_EXPRESSION
from json_env.domain.errors import PathError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def compile_expression(expression: str) -> JSONPath:
    """
    Parse a JSONPath expression once per process.

    Raises:
        PathError: If the expression is syntactically invalid.
    """
    try:
        return parse(expression)
    except JSONPathError as e:
        raise PathError(f"Invalid path expression: {e}", expression=expression) from e


def extract(document: Any, expression: str, *, file_path: str = "") -> List[Any]:
    """
    Select the nodes matched by expression.

    Args:
        document: Parsed JSON document.
        expression: JSONPath expression ('$' selects the whole document).
        file_path: Origin of the document, used in error messages.

    Returns:
        List[Any]: Matched values in document order (at least one).

    Raises:
        PathError: If the expression is invalid or matches nothing.
    """
    expr = (expression or "").strip() or DEFAULT_PATH_EXPRESSION
    if expr == DEFAULT_PATH_EXPRESSION:
        return [document]

    try:
        matches = [m.value for m in compile_expression(expr).find(document)]
    except PathError as e:
        e.file_path = file_path or None
        raise

    if not matches:
        raise PathError(
            "Path expression matched nothing.",
            file_path=file_path or None,
            expression=expr,
        )

    logger.debug(f"Extractor: '{expr}' matched {len(matches)} node(s) in '{file_path}'")
    return matches
