# stickyboard — configuration
# Override the store path and layout via stickyboard.yaml, env, or CLI args.

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, fields
from typing import Optional

CONFIG_PATH = Path("stickyboard.yaml")
STORE_ENV = "STICKYBOARD_STORE"

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Runtime configuration for the board."""

    # Persistence
    store_path: str = "saves/todos.json"

    # Text layout (character cells)
    column_width: int = 28
    column_gap: int = 3

    # Logging
    log_level: str = "INFO"

    def resolve_paths(self):
        """Apply the environment override and expand ~."""
        env = os.environ.get(STORE_ENV)
        if env:
            self.store_path = env
        self.store_path = str(Path(self.store_path).expanduser())

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML file, falling back to defaults."""
        cfg_path = Path(path) if path else CONFIG_PATH
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**_coerce(data, cfg_path))
            except (OSError, ValueError, yaml.YAMLError, AttributeError, TypeError) as e:
                logger.warning(f"Ignoring unreadable config {cfg_path}: {e}")
                cfg = cls()
        else:
            cfg = cls()
        cfg.resolve_paths()
        return cfg


def _coerce(data: dict, cfg_path: Path) -> dict:
    """Keep known keys, converted to each field's default type; drop bad values."""
    if not isinstance(data, dict):
        raise TypeError(f"expected a mapping, got {type(data).__name__}")
    values = {}
    for f in fields(Config):
        if data.get(f.name) is None:
            continue
        kind = type(f.default)
        raw = data[f.name]
        try:
            if kind is int and isinstance(raw, bool):
                raise ValueError("not an integer")
            values[f.name] = kind(raw)
        except (TypeError, ValueError):
            logger.warning(
                f"{cfg_path}: {f.name}={raw!r} is not a valid {kind.__name__}, "
                f"using {f.default!r}"
            )
    return values
