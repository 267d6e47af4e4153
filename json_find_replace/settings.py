from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = 'JSON_FIND_REPLACE_LOG_LEVEL'


def resolve_log_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as 'debug' to its logging constant, or `default`."""
    if not name:
        return default
    level = getattr(logging, name.strip().upper(), None)
    return level if isinstance(level, int) else default


def log_level_from_env() -> int:
    return resolve_log_level(os.environ.get(LOG_LEVEL_ENV))
