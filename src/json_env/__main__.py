from __future__ import annotations

import sys

from json_env.main import main

sys.exit(main())
