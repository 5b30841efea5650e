from __future__ import annotations

"""
Config Source Loader.

Reads one config file and parses it as a JSON document. Read failures and
malformed content are reported as distinct errors, both naming the file.
"""

import json
import logging
from typing import Any

from json_env.domain.errors import ConfigIOError, ConfigParseError

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def load_document(path: str) -> Any:
    """
    Load and parse a JSON config file.

    Args:
        path: File to read (UTF-8).

    Returns:
        Any: The parsed document.

    Raises:
        ConfigIOError: If the file is missing, unreadable or not UTF-8.
        ConfigParseError: If the content is not well-formed JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read()
    except FileNotFoundError:
        raise ConfigIOError("Config file does not exist.", file_path=path) from None
    except UnicodeDecodeError as e:
        raise ConfigIOError(f"Config file is not valid UTF-8: {e.reason}.", file_path=path) from e
    except OSError as e:
        raise ConfigIOError(f"Could not read config file: {e.strerror or e}.", file_path=path) from e

    try:
        document = json.loads(contents, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ConfigParseError(
            f"Could not parse JSON: {e.msg} (line {e.lineno}, column {e.colno}).",
            file_path=path,
        ) from e
    except ValueError as e:
        raise ConfigParseError(f"Could not parse JSON: {e}.", file_path=path) from e

    logger.debug(f"Loader: parsed '{path}' ({len(contents)} bytes)")
    return document
