from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel


def _asdict(model: BaseModel) -> Dict[str, Any]:
    """Return model data as a plain ``dict``."""
    return model.model_dump()


class AppConfig(BaseModel):
    """Typed configuration loaded from YAML or environment."""

    LOG_LEVEL: str = "INFO"

    # Lot size offered to callers that have no instrument metadata. The
    # engine itself always takes the lot size from ``EvaluationConfig``.
    DEFAULT_LOT_SIZE: int = 50

    # Price grid -------------------------------------------------------
    PRICE_POINTS: int = 300
    DEFAULT_WINDOW: float = 1000.0
    MIN_BASE_RANGE: float = 100.0
    BASE_RANGE_FRACTION: float = 0.2
    RANGE_PADDING: float = 0.5

    # Reference bands drawn around spot
    ASSUMED_ANNUAL_VOL: float = 0.20
    ASSUMED_DAYS_TO_EXPIRY: int = 30

    # Margin approximation --------------------------------------------
    NAKED_PUT_MARGIN_FRACTION: float = 0.5

    # Zoom controls
    ZOOM_MIN: float = 0.5
    ZOOM_MAX: float = 5.0
    ZOOM_STEP: float = 1.5

    EVALUATION_CACHE_SIZE: int = 128


_BASE_DIR = Path(__file__).resolve().parent.parent


def _load_env(path: Path) -> Dict[str, Any]:
    """Parse simple KEY=VALUE lines from an .env file."""
    data: Dict[str, Any] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, val = line.split("=", 1)
            data[key.strip()] = val.strip()
    return data


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
    return content or {}


def load_config() -> AppConfig:
    """Load configuration from .env or YAML file."""
    config_path = os.environ.get("OPTSIM_CONFIG")
    if config_path:
        path: Path | None = Path(config_path)
    else:
        candidates = [
            _BASE_DIR / "config.yaml",
            _BASE_DIR / "config.yml",
            _BASE_DIR / ".env",
        ]
        path = next((p for p in candidates if p.exists()), None)

    data: Dict[str, Any] = {}
    if path and path.exists():
        if path.suffix in {".yaml", ".yml"}:
            try:
                data = _load_yaml(path)
            except yaml.YAMLError:
                data = {}
        else:
            data = _load_env(path)

    known = set(AppConfig.model_fields)
    cfg = {**_asdict(AppConfig()), **{k: v for k, v in data.items() if k in known}}
    return AppConfig(**cfg)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    """Persist configuration to a YAML file."""
    if path is None:
        env_path = os.environ.get("OPTSIM_CONFIG")
        path = Path(env_path) if env_path else _BASE_DIR / "config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(_asdict(config), f)


CONFIG = load_config()
LOCK = threading.Lock()


def get(name: str, default: Any | None = None) -> Any:
    """Return configuration value for name with optional fallback.

    Both reads and writes are synchronized using ``LOCK`` so concurrent
    access from multiple threads is safe.
    """
    with LOCK:
        return getattr(CONFIG, name, default)


def reload() -> None:
    """Reload configuration from disk into the global CONFIG object."""
    global CONFIG
    with LOCK:
        CONFIG = load_config()


def update(values: Dict[str, Any], *, persist: bool = True) -> None:
    """Update global configuration with provided key/value pairs.

    The new values are written back to disk unless ``persist`` is false.
    """
    with LOCK:
        for key, val in values.items():
            if hasattr(CONFIG, key):
                setattr(CONFIG, key, val)
        if persist:
            save_config(CONFIG)
