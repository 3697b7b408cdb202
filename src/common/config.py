"""Locating and loading configs/<name>.yaml, plus the process-wide config holder."""

import os
from pathlib import Path
from typing import Callable, Generic, TypeVar

import yaml

T = TypeVar("T")

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"
DEFAULT_CONFIG = "prod"


def find_config_path(config_name: str | None, config_dir: Path = CONFIG_DIR) -> Path:
    """Path of configs/<name>.yaml; `None` means CONFIG_ENV, then "prod".

    Raises:
        FileNotFoundError: No such config file.
    """
    name = config_name or os.environ.get("CONFIG_ENV", DEFAULT_CONFIG)
    path = config_dir / f"{name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    return path


def load_yaml(path: Path) -> dict:
    with path.open() as f:
        return yaml.safe_load(f) or {}


class LazyConfig(Generic[T]):
    """Loads the config on first `get()`; `set()` pins one (tests, API startup)."""

    def __init__(self, loader: Callable[[], T]):
        self._loader = loader
        self._value: T | None = None

    def get(self) -> T:
        if self._value is None:
            self._value = self._loader()
        return self._value

    def set(self, value: T) -> None:
        self._value = value

    def reset(self) -> None:
        self._value = None
