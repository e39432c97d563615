import logging
import os
import re
from pathlib import Path
from typing import Optional, Type, TypeVar

import yaml
from pydantic import BaseModel

from hovergrid.config.schema import HovergridConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_CONFIG_PATH = Path("~/.hovergrid/hovergrid.yml")


def expand_env_vars(raw: object) -> object:
    """Recursively replace ${VAR} patterns with environment variable values.

    Unknown variables are left as-is.
    """
    if isinstance(raw, dict):
        return {k: expand_env_vars(v) for k, v in raw.items()}
    if isinstance(raw, list):
        return [expand_env_vars(item) for item in raw]
    if isinstance(raw, str):

        def replace_env_var(match: re.Match[str]) -> str:
            return os.getenv(match.group(1), match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, raw)
    return raw


def _warn_unknown_keys(model: BaseModel, path: str, config_path: Path) -> None:
    """Recursively warn about unknown keys in a model and its nested models."""
    if model.model_extra:
        logger.warning("Unknown keys in %s at %s: %s", path, config_path, list(model.model_extra.keys()))

    for field_name, field_value in model.__dict__.items():
        if isinstance(field_value, BaseModel):
            _warn_unknown_keys(field_value, f"{path}.{field_name}", config_path)


def load_config(path: Path, model_class: Type[T]) -> T:
    """Load and validate configuration from a YAML file.

    A missing or unreadable file yields the model defaults. Values that fail
    validation raise pydantic's ValidationError.
    """
    if not path.exists():
        return model_class()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return model_class()

    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: expected a mapping, got %s", path, type(raw).__name__)
        return model_class()

    model = model_class.model_validate(expand_env_vars(raw))
    _warn_unknown_keys(model, "root", path)
    return model


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Explicit path, else HOVERGRID_CONFIG_PATH, else ~/.hovergrid/hovergrid.yml."""
    if path is None:
        env_path = os.getenv("HOVERGRID_CONFIG_PATH")
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    return path.expanduser()


def load_hovergrid_config(path: Optional[Path] = None) -> HovergridConfig:
    """Load the grid configuration."""
    return load_config(resolve_config_path(path), HovergridConfig)
