from __future__ import annotations

"""
Config File Locator.

Walks from a starting directory up to the filesystem root looking for the
config file. The nearest directory wins, so a project-level file shadows
one placed higher in the tree.
"""

import logging
import os
from typing import Iterator, Optional

from json_env.domain.constants import DEFAULT_CONFIG_FILE_NAME

logger = logging.getLogger(__name__)


def iter_ancestors(start_dir: str) -> Iterator[str]:
    """
    Yield start_dir and each of its parents, ending with the filesystem root.

    Args:
        start_dir: Directory to start from (made absolute).

    Yields:
        str: Absolute directory paths, child to root.
    """
    current = os.path.abspath(start_dir)
    while True:
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def locate(start_dir: str, file_name: str = DEFAULT_CONFIG_FILE_NAME) -> Optional[str]:
    """
    Find the nearest config file at or above start_dir.

    Only the directories themselves are inspected; subdirectories are never
    searched.

    Args:
        start_dir: Directory where the search begins.
        file_name: Name of the config file.

    Returns:
        Optional[str]: Absolute path of the closest match, or None.
    """
    for directory in iter_ancestors(start_dir):
        candidate = os.path.join(directory, file_name)
        if os.path.isfile(candidate):
            logger.debug(f"Locator: found '{candidate}'")
            return candidate

    logger.debug(f"Locator: no '{file_name}' found above '{start_dir}'")
    return None
