from __future__ import annotations

"""
Merge Engine.

Flattens the object nodes extracted from each source into env entries and
combines them into a single mapping. Sources are applied in list order, so a
later source overrides an earlier one on identical keys.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from json_env.core.services.coercer import coerce
from json_env.core.services.expansion import expand as expand_value
from json_env.domain.errors import PathError
from json_env.domain.models import ConfigSource, EnvEntry

logger = logging.getLogger(__name__)

Extraction = Tuple[ConfigSource, Sequence[Any]]


def collect_entries(
        extractions: Iterable[Extraction],
        *,
        expand: bool = False,
        env: Optional[Mapping[str, str]] = None,
) -> List[EnvEntry]:
    """
    Turn extracted nodes into env entries, in precedence order.

    Args:
        extractions: (source, matched nodes) pairs in source order.
        expand: Whether '$NAME' references are substituted.
        env: Environment snapshot for expansion.

    Returns:
        List[EnvEntry]: Every entry, including ones later overridden.

    Raises:
        PathError: If a source's matches contain no object node.
    """
    snapshot = env or {}
    entries: List[EnvEntry] = []

    for source, nodes in extractions:
        objects = [n for n in nodes if isinstance(n, dict)]
        skipped = len(nodes) - len(objects)
        if skipped:
            logger.debug(f"Merger: ignored {skipped} non-object node(s) from {source.describe()}")
        if not objects:
            raise PathError(
                "Path expression did not select any JSON object.",
                file_path=source.file_path,
                expression=source.path_expression,
            )

        for node in objects:
            for key, raw in node.items():
                if not key:
                    logger.warning(f"Skipping entry with an empty name in {source.describe()}")
                    continue
                text = coerce(raw)
                if expand:
                    text = expand_value(text, snapshot)
                entries.append(EnvEntry(key=key, raw_value=raw, string_value=text, source=source))

    return entries


def merge_entries(entries: Iterable[EnvEntry]) -> Dict[str, str]:
    """Fold entries into a mapping; the last entry for a key wins."""
    merged: Dict[str, str] = {}
    for entry in entries:
        if entry.key in merged and merged[entry.key] != entry.string_value:
            logger.debug(f"Merger: '{entry.key}' overridden by {entry.source.describe()}")
        merged[entry.key] = entry.string_value
    return merged


def merge(
        extractions: Iterable[Extraction],
        *,
        expand: bool = False,
        env: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Combine extracted nodes from all sources into one environment mapping.

    Args:
        extractions: (source, matched nodes) pairs in source order.
        expand: Whether '$NAME' references are substituted.
        env: Environment snapshot for expansion.

    Returns:
        Dict[str, str]: Final variable mapping.
    """
    return merge_entries(collect_entries(extractions, expand=expand, env=env))
