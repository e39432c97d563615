"""Configuration management.

Settings come from a YAML file (``HOVERGRID_CONFIG_PATH`` or
``~/.hovergrid/hovergrid.yml``) loaded on demand via
:func:`load_hovergrid_config`. A ``.env`` file in the working directory is
loaded at import so its variables can feed ``${VAR}`` expansion. A missing
file means defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from hovergrid.config.loader import load_hovergrid_config
from hovergrid.config.schema import GridSettings, HighlightSettings, HovergridConfig, TrailSettings

# Allow override for tests
_env_path = os.getenv("HOVERGRID_ENV_PATH")
load_dotenv(Path(_env_path).expanduser() if _env_path else Path.cwd() / ".env")

__all__ = [
    "GridSettings",
    "HighlightSettings",
    "HovergridConfig",
    "TrailSettings",
    "load_hovergrid_config",
]
