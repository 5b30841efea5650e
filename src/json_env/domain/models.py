from __future__ import annotations

"""
Resolution Domain Data Models.

Defines the immutable records exchanged between the resolution services
(locator, loader, extractor, merger) and the interface layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from json_env.domain.constants import DEFAULT_PATH_EXPRESSION
from json_env.domain.errors import UsageError

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigSource:
    """
    One JSON document plus the sub-selection applied to it.

    Attributes:
        file_path: Path to the JSON file (absolute once built by the CLI).
        path_expression: JSONPath expression selecting object nodes.
    """
    file_path: str
    path_expression: str = DEFAULT_PATH_EXPRESSION

    def describe(self) -> str:
        return f"{self.file_path} [{self.path_expression}]"


@dataclass(frozen=True)
class EnvEntry:
    """
    A single resolved variable together with its origin.

    Attributes:
        key: Variable name (never empty).
        raw_value: JSON value as found in the document.
        string_value: Coerced (and possibly expanded) value.
        source: The source that contributed this entry.
    """
    key: str
    raw_value: Any
    string_value: str
    source: ConfigSource


class TrustResult(str, Enum):
    """Outcome of a trust operation."""
    ADDED = "added"
    ALREADY_TRUSTED = "already_trusted"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of a full resolution run.

    Attributes:
        environment: Final key -> string mapping.
        entries: Every entry in merge order, overridden ones included.
        sources: Sources that were processed.
    """
    environment: Dict[str, str]
    entries: List[EnvEntry] = field(default_factory=list)
    sources: List[ConfigSource] = field(default_factory=list)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def build_sources(
        files: Sequence[str],
        expressions: Optional[Sequence[str]] = None,
        *,
        default_expression: str = DEFAULT_PATH_EXPRESSION,
) -> List[ConfigSource]:
    """
    Pair files with path expressions into an ordered source list.

    Pairing rules:
    - No expressions: every file uses the default expression.
    - One expression: applied to every file.
    - One file, many expressions: one source per expression.
    - Same count: paired positionally.

    Args:
        files: Config file paths in precedence order (last wins).
        expressions: Path expressions supplied by the user.
        default_expression: Expression used when none is supplied.

    Returns:
        List[ConfigSource]: Sources in precedence order.

    Raises:
        UsageError: If the counts cannot be paired.
    """
    exprs = list(expressions or [])
    if not files:
        raise UsageError("No config file given and none could be located.")

    if not exprs:
        return [ConfigSource(f, default_expression) for f in files]
    if len(exprs) == 1:
        return [ConfigSource(f, exprs[0]) for f in files]
    if len(files) == 1:
        return [ConfigSource(files[0], e) for e in exprs]
    if len(files) == len(exprs):
        return [ConfigSource(f, e) for f, e in zip(files, exprs)]

    raise UsageError(
        f"Cannot pair {len(files)} files with {len(exprs)} path expressions. "
        "Give one expression, one per file, or a single file."
    )
