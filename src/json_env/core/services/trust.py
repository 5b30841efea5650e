from __future__ import annotations

"""
Trust Store Service.

Persists the whitelist of config files whose variables may be exported
without an interactive confirmation (the shell hook path). The store is
append-only: a path moves from untrusted to trusted and never back.

Entries are compared by canonical absolute path, so the same file reached
from different working directories or through a symlink still matches.
No file locking is performed; concurrent writers may lose an entry.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from json_env.domain.constants import TRUST_STORE_FILE_NAME
from json_env.domain.errors import TrustStoreError
from json_env.domain.migrations import migrate_trust_store
from json_env.domain.models import TrustResult
from json_env.infra.fs import canonical_path, get_user_config_dir, safe_mkdir, write_json_atomic

logger = logging.getLogger(__name__)


class TrustStore:
    """
    Whitelist of trusted config file paths backed by a JSON file.

    The file is read on every query, created lazily on the first trust
    operation, and rewritten in full whenever an entry is added.
    """

    def __init__(self, store_path: Optional[str] = None) -> None:
        """
        Args:
            store_path: Explicit store file. Defaults to
                <user config dir>/trusted.json.
        """
        self._path = store_path or os.path.join(get_user_config_dir(), TRUST_STORE_FILE_NAME)

    @property
    def path(self) -> str:
        return self._path

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def entries(self) -> List[str]:
        """
        Return the trusted paths in insertion order.

        Returns:
            List[str]: Empty when the store file does not exist yet.

        Raises:
            TrustStoreError: If the store exists but cannot be read or parsed.
        """
        return list(self._load()["items"])

    def is_trusted(self, path: str) -> bool:
        """
        Check whether a config file was explicitly trusted.

        Args:
            path: Config file path (any form, canonicalized before lookup).

        Returns:
            bool: False for unknown paths and when no store exists.
        """
        if not os.path.exists(self._path):
            return False
        key = canonical_path(path)
        return key in {canonical_path(p) for p in self.entries()}

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def trust(self, path: str) -> TrustResult:
        """
        Add a config file to the whitelist.

        Idempotent: an already trusted path is reported and nothing is written.

        Args:
            path: Config file to trust.

        Returns:
            TrustResult: ADDED or ALREADY_TRUSTED.

        Raises:
            TrustStoreError: If the store cannot be read, created or written.
        """
        key = canonical_path(path)
        state = self._load()

        if key in {canonical_path(p) for p in state["items"]}:
            logger.info(f"TrustStore: '{key}' is already trusted.")
            return TrustResult.ALREADY_TRUSTED

        state["items"].append(key)
        self._save(state)
        logger.info(f"TrustStore: trusted '{key}'.")
        return TrustResult.ADDED

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self._path):
            return migrate_trust_store([])

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as e:
            raise TrustStoreError(f"Could not read trust store: {e.strerror or e}.", file_path=self._path) from e
        except json.JSONDecodeError as e:
            raise TrustStoreError(f"Trust store is corrupted: {e.msg}.", file_path=self._path) from e

        try:
            return migrate_trust_store(raw)
        except ValueError as e:
            raise TrustStoreError(str(e), file_path=self._path) from e

    def _save(self, state: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self._path))
        ok, err = safe_mkdir(directory)
        if not ok:
            raise TrustStoreError(f"Could not create config directory: {err}", file_path=directory)

        try:
            write_json_atomic(self._path, state)
        except OSError as e:
            raise TrustStoreError(f"Could not write trust store: {e.strerror or e}.", file_path=self._path) from e
        logger.debug(f"TrustStore: saved {len(state['items'])} item(s) to {self._path}")
