from __future__ import annotations

import logging
from typing import Any, Dict, List

from json_env.domain.constants import CURRENT_TRUST_STORE_VERSION

logger = logging.getLogger(__name__)


def migrate_trust_store(data: Any) -> Dict[str, Any]:
    """
    Normalize any known trust store layout into the current versioned shape.

    Known layouts:
        ["/a/.env.json", ...]                    (bare list, unversioned)
        {"items": ["/a/.env.json", ...]}         (wrapped, unversioned)
        {"version": 1, "items": [...]}           (current)

    Args:
        data: The raw value loaded from trusted.json.

    Returns:
        Dict[str, Any]: {"version": CURRENT_TRUST_STORE_VERSION, "items": [...]}

    Raises:
        ValueError: If the layout is not recognized or holds non-string items.
    """
    # 1. Migration: bare list -> wrapped object
    if isinstance(data, list):
        logger.info("Migrations: Detected bare-list trust store. Upgrading to v1...")
        data = {"items": data}

    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ValueError("Unrecognized trust store layout.")

    # 2. Migration: unversioned wrapped object -> v1
    version = data.get("version")
    if version is None:
        logger.info("Migrations: Stamping unversioned trust store as v1.")
    elif version != CURRENT_TRUST_STORE_VERSION:
        raise ValueError(f"Unsupported trust store version: {version!r}.")

    items: List[str] = []
    for i, item in enumerate(data["items"]):
        if not isinstance(item, str):
            raise ValueError(f"Invalid trust store item at index {i}: expected str.")
        items.append(item)

    return {"version": CURRENT_TRUST_STORE_VERSION, "items": items}
