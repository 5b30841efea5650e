from __future__ import annotations

from json_env.domain.constants import APP_VERSION as __version__

__all__ = ["__version__"]
