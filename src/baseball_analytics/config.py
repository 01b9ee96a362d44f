from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from baseball_analytics.exceptions import BaseballAnalyticsException

if TYPE_CHECKING:
    from collections.abc import Mapping


class ConfigError(BaseballAnalyticsException):
    """Raised when a configuration value is missing or malformed."""


_DEFAULTS: dict[str, object] = {
    "database": {
        "path": "~/.local/share/bae/retrosheet.db",
        "pool_size": 4,
    },
    "analytics": {
        "max_workers": 4,
        "windows": [5, 10, 20],
        "min_streak": 5,
        "min_sample_size": 10,
    },
}


@dataclass(frozen=True)
class AnalyticsConfig:
    db_path: str
    pool_size: int
    max_workers: int
    default_windows: tuple[int, ...]
    default_min_streak: int
    min_sample_size: int


def create_config(
    yaml_path: str = "bae.yaml",
    env_prefix: str = "BAE",
    defaults: dict[str, object] | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(dict(overrides)))

    return ConfigurationSet(*layers)


def _positive_int(cfg: ConfigurationSet, key: str) -> int:
    raw = cfg[key]
    try:
        value = int(str(raw))
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigError(f"{key} must be at least 1, got {value}")
    return value


def _window_sizes(cfg: ConfigurationSet, key: str) -> tuple[int, ...]:
    raw = cfg[key]
    # env vars arrive as comma-separated strings
    items = raw.split(",") if isinstance(raw, str) else list(raw)  # type: ignore[call-overload]
    try:
        sizes = tuple(int(str(item).strip()) for item in items if str(item).strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be a list of integers, got {raw!r}") from exc
    if not sizes or any(size < 1 for size in sizes):
        raise ConfigError(f"{key} must contain positive window sizes, got {raw!r}")
    return sizes


def load_config(cfg: ConfigurationSet | None = None) -> AnalyticsConfig:
    if cfg is None:
        cfg = create_config()
    try:
        db_path = str(cfg["database.path"])
    except KeyError as exc:
        raise ConfigError("database.path is not configured") from exc
    return AnalyticsConfig(
        db_path=db_path,
        pool_size=_positive_int(cfg, "database.pool_size"),
        max_workers=_positive_int(cfg, "analytics.max_workers"),
        default_windows=_window_sizes(cfg, "analytics.windows"),
        default_min_streak=_positive_int(cfg, "analytics.min_streak"),
        min_sample_size=_positive_int(cfg, "analytics.min_sample_size"),
    )
