"""Generator configuration and validation.

``MapConfig`` is the validated, immutable input of the engine. It can be built
directly or from the nested option mapping used by front ends::

    {
      "bounds": {"width": 28, "height": 31},
      "path": {"min": 300},
      "teleporter": {"min": 1, "max": 4},
      "builderPool": {"managerCount": {"min": 6, "max": 10}},
      "builder": {"turnDistance": {"min": 4, "max": 12}},
      "debug": False,
      "generationConstraints": {"maxAttempts": 50, "maxTimeMillis": 2000},
    }

Invalid input raises ``ConfigError`` before any generation work happens.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional


class ConfigError(ValueError):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code


@dataclass(frozen=True)
class MapConfig:
    width: int = 28
    height: int = 31
    path_min: Optional[int] = 300
    path_max: Optional[int] = None
    teleporter_min: int = 1
    teleporter_max: int = 4
    manager_min: int = 6
    manager_max: int = 10
    turn_min: int = 4
    turn_max: int = 12
    debug: bool = False
    max_attempts: Optional[int] = None
    max_time_ms: Optional[int] = None
    seed: Optional[int] = None

    @property
    def half_width(self) -> int:
        return self.width // 2

    @property
    def has_budget(self) -> bool:
        return bool(self.max_attempts) or bool(self.max_time_ms)

    def validate(self) -> "MapConfig":
        """Raise ConfigError on the first violated rule; return self otherwise."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "debug":
                if not isinstance(value, bool):
                    raise ConfigError("debug", "expected bool", "type")
                continue
            if value is None and f.name in _OPTIONAL_INTS:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f.name, "expected int", "type")

        w, h = self.width, self.height
        if w < 12:
            raise ConfigError("width", "must be at least 12", "min")
        if h < 12:
            raise ConfigError("height", "must be at least 12", "min")
        if w % 2 != 0:
            raise ConfigError("width", "Width must be an even number", "parity")
        if h % 2 != 1:
            raise ConfigError("height", "Height must be an odd number", "parity")

        half_cells = (w * h) / 2
        if self.path_min is not None:
            if self.path_min < 0:
                raise ConfigError("path_min", "must be >= 0", "min")
            if self.path_min >= half_cells:
                raise ConfigError("path_min", "Min total path blocks must be less than half the total blocks", "max")
        if self.path_max is not None:
            if self.path_max < 1:
                raise ConfigError("path_max", "must be >= 1", "min")
            if self.path_max >= half_cells:
                raise ConfigError("path_max", "Max total path blocks must be less than half the total blocks", "max")
        if self.path_min is not None and self.path_max is not None and not self.path_min < self.path_max:
            raise ConfigError("path_min", "Min path count must be less than max path count", "range")

        if self.teleporter_min < 0:
            raise ConfigError("teleporter_min", "must be >= 0", "min")
        if self.teleporter_max < 1:
            raise ConfigError("teleporter_max", "must be >= 1", "min")
        if self.teleporter_min > self.teleporter_max:
            raise ConfigError("teleporter_min", "must not exceed teleporter_max", "range")
        if not self.teleporter_max < h / 2:
            raise ConfigError("teleporter_max", "Max teleporter count must be less than half the height", "max")

        for lo_name, hi_name in (("manager_min", "manager_max"), ("turn_min", "turn_max")):
            lo, hi = getattr(self, lo_name), getattr(self, hi_name)
            if lo < 1:
                raise ConfigError(lo_name, "must be >= 1", "min")
            if hi < 1:
                raise ConfigError(hi_name, "must be >= 1", "min")
            if lo > hi:
                raise ConfigError(lo_name, f"must not exceed {hi_name}", "range")

        if self.max_attempts is not None and self.max_attempts < 1:
            raise ConfigError("max_attempts", "must be >= 1", "min")
        if self.max_time_ms is not None and self.max_time_ms <= 0:
            raise ConfigError("max_time_ms", "must be > 0", "min")
        return self

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "MapConfig":
        """Build a validated config from the nested option mapping.

        Unknown keys are rejected so typos surface as errors instead of
        silently falling back to defaults.
        """
        if not isinstance(options, Mapping):
            raise ConfigError("__root__", "options must be a mapping", "type")
        for name in _REQUIRED_OPTIONS:
            if name not in options:
                raise ConfigError(name, "missing required option", "required")
        # An omitted path section means no path bounds at all
        kwargs: Dict[str, Any] = {"path_min": None, "path_max": None}
        _walk(options, _OPTION_TREE, "", kwargs)
        missing = sorted(set(_LEAF_FIELDS) - set(kwargs) - _DEFAULTED_FIELDS)
        if missing:
            raise ConfigError(_LEAF_FIELDS[missing[0]], "missing required option", "required")
        return cls(**kwargs).validate()

    def with_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> "MapConfig":
        """Return a copy with MAZEGEN_* environment values applied."""
        env = os.environ if environ is None else environ
        changes: Dict[str, Any] = {}
        for env_key, attr in _ENV_MAP.items():
            if env_key not in env:
                continue
            raw = env.get(env_key, "").strip()
            if attr == "debug":
                changes[attr] = raw.lower() not in {"0", "false", "no", ""}
                continue
            if raw == "":
                changes[attr] = None
                continue
            try:
                changes[attr] = int(raw)
            except ValueError:
                raise ConfigError(attr, f"{env_key} must be an integer", "type") from None
        if not changes:
            return self
        return replace(self, **changes).validate()


_OPTIONAL_INTS = {"path_min", "path_max", "max_attempts", "max_time_ms", "seed"}

# Nested option names -> MapConfig fields
_OPTION_TREE: Dict[str, Any] = {
    "bounds": {"width": "width", "height": "height"},
    "path": {"min": "path_min", "max": "path_max"},
    "teleporter": {"min": "teleporter_min", "max": "teleporter_max"},
    "builderPool": {"managerCount": {"min": "manager_min", "max": "manager_max"}},
    "builder": {"turnDistance": {"min": "turn_min", "max": "turn_max"}},
    "debug": "debug",
    "generationConstraints": {"maxAttempts": "max_attempts", "maxTimeMillis": "max_time_ms"},
    "seed": "seed",
}

_REQUIRED_OPTIONS = ("bounds", "teleporter", "builderPool", "builder")


def _leaf_paths(tree: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, target in tree.items():
        if isinstance(target, dict):
            out.update(_leaf_paths(target, f"{prefix}{key}."))
        else:
            out[target] = f"{prefix}{key}"
    return out


# field name -> dotted option path, for error messages
_LEAF_FIELDS = _leaf_paths(_OPTION_TREE)
_DEFAULTED_FIELDS = {"path_min", "path_max", "debug", "max_attempts", "max_time_ms", "seed"}

_ENV_MAP = {
    "MAZEGEN_SEED": "seed",
    "MAZEGEN_DEBUG": "debug",
    "MAZEGEN_MAX_ATTEMPTS": "max_attempts",
    "MAZEGEN_MAX_TIME_MS": "max_time_ms",
}


def _walk(options: Mapping[str, Any], tree: Dict[str, Any], prefix: str, out: Dict[str, Any]) -> None:
    for key, value in options.items():
        path = f"{prefix}{key}"
        if key not in tree:
            raise ConfigError(path, "unknown option", "unknown")
        target = tree[key]
        if isinstance(target, dict):
            if value is None:
                continue
            if not isinstance(value, Mapping):
                raise ConfigError(path, "expected an object", "type")
            _walk(value, target, f"{path}.", out)
        else:
            out[target] = value


__all__ = ["ConfigError", "MapConfig"]
