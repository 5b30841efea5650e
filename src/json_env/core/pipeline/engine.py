from __future__ import annotations

"""
Resolution Pipeline Engine.

Runs the full resolution for an ordered list of sources:
load -> extract -> coerce/expand -> merge. The environment snapshot is an
explicit argument, so the engine never reads or mutates os.environ and any
failure aborts the run before a partial mapping can escape.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from json_env.core.services.extractor import extract
from json_env.core.services.loader import load_document
from json_env.core.services.merger import collect_entries, merge_entries
from json_env.domain.models import ConfigSource, ResolutionResult

logger = logging.getLogger(__name__)


def resolve_environment(
        sources: Sequence[ConfigSource],
        env: Mapping[str, str],
        *,
        expand: bool = False,
) -> ResolutionResult:
    """
    Resolve the environment mapping described by sources.

    Each file is parsed once even when several sources reference it.

    Args:
        sources: Ordered sources; later ones override earlier ones.
        env: Snapshot of the current process environment.
        expand: Whether '$NAME' references are substituted from env.

    Returns:
        ResolutionResult: The final mapping plus per-entry provenance.

    Raises:
        ConfigIOError: A file cannot be read.
        ConfigParseError: A file is not valid JSON.
        PathError: An expression matches nothing or selects no object.
    """
    documents: Dict[str, Any] = {}
    extractions: List[Tuple[ConfigSource, List[Any]]] = []

    for source in sources:
        if source.file_path not in documents:
            documents[source.file_path] = load_document(source.file_path)
        nodes = extract(
            documents[source.file_path],
            source.path_expression,
            file_path=source.file_path,
        )
        extractions.append((source, nodes))

    entries = collect_entries(extractions, expand=expand, env=env)
    environment = merge_entries(entries)

    logger.info(
        f"Resolved {len(environment)} variable(s) from {len(sources)} source(s)"
        + (" with expansion" if expand else "")
    )
    return ResolutionResult(environment=environment, entries=entries, sources=list(sources))
