from __future__ import annotations

"""
Domain Constants.

Provides centralized access to application-wide constants: file names,
default path expressions, trust store schema versioning and the marker used
to detect an already installed shell hook.
"""

APP_NAME = "json_env"
APP_VERSION = "0.4.0"

DEFAULT_CONFIG_FILE_NAME = ".env.json"
DEFAULT_PATH_EXPRESSION = "$"

# -----------------------------------------------------------------------------
# USER DATA FILES
# -----------------------------------------------------------------------------
SETTINGS_FILE_NAME = "settings.json"
TRUST_STORE_FILE_NAME = "trusted.json"
CURRENT_TRUST_STORE_VERSION = 1
CURRENT_SETTINGS_VERSION = "1.0.0"

# Environment override for the per-user configuration directory
CONFIG_DIR_ENV_VAR = "JSON_ENV_CONFIG_DIR"

# -----------------------------------------------------------------------------
# SHELL HOOK
# -----------------------------------------------------------------------------
HOOK_MARKER = "# >>> json_env hook >>>"
HOOK_END_MARKER = "# <<< json_env hook <<<"
