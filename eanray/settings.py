"""Application configuration read from a TOML or JSON file."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from eanray.vector import Vec3

_U32_MAX = 0xFFFF_FFFF


class ConfigError(Exception):
    """The configuration is missing or malformed."""


@dataclass(frozen=True, slots=True)
class CameraDefaults:
    """Camera settings used when a scene leaves them out."""

    center: Vec3
    focal_length: float
    samples_per_pixel: int
    antialiasing: bool
    max_depth: int


@dataclass(frozen=True, slots=True)
class SceneConfig:
    output_file: str
    camera_defaults: CameraDefaults


@dataclass(frozen=True, slots=True)
class AppConfig:
    name: str
    scene: SceneConfig


@dataclass(frozen=True, slots=True)
class Config:
    app: AppConfig

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Build a configuration from parsed data, ignoring unknown keys."""
        app = _table(data, "app", "configuration")
        scene = _table(app, "scene", "app")
        camera = _table(scene, "camera", "app.scene")
        defaults = _table(camera, "defaults", "app.scene.camera")
        where = "app.scene.camera.defaults"
        return cls(
            app=AppConfig(
                name=_field(app, "name", "app", _string),
                scene=SceneConfig(
                    output_file=_field(scene, "output_file", "app.scene", _string),
                    camera_defaults=CameraDefaults(
                        center=_field(defaults, "center", where, _point),
                        focal_length=_field(defaults, "focal_length", where, _real),
                        samples_per_pixel=_field(defaults, "samples_per_pixel", where, _u32),
                        antialiasing=_field(defaults, "antialiasing", where, _boolean),
                        max_depth=_field(defaults, "max_depth", where, _u32),
                    ),
                ),
            )
        )


def _table(data: Any, key: str, where: str) -> Mapping[str, Any]:
    value = _lookup(data, key, where)
    if not isinstance(value, Mapping):
        raise ConfigError(f"`{where}.{key}` must be a table")
    return value


def _lookup(data: Any, key: str, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError(f"`{where}` must be a table")
    try:
        return data[key]
    except KeyError:
        raise ConfigError(f"missing field `{key}` in `{where}`") from None


def _field(data: Mapping[str, Any], key: str, where: str, convert: Callable[[Any], Any]) -> Any:
    value = _lookup(data, key, where)
    try:
        return convert(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid `{where}.{key}`: {exc}") from None


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {value!r}")
    return value


def _real(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return float(value)


def _u32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{value} is out of range for an unsigned 32-bit integer")
    return value


def _boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return value


def _point(value: Any) -> Vec3:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"expected an array of three numbers, got {value!r}")
    if len(value) != 3:
        raise ValueError(f"expected three numbers, got {len(value)}")
    return Vec3(*(_real(c) for c in value))


def _read_toml(path: Path) -> Any:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


_READERS: dict[str, Callable[[Path], Any]] = {".toml": _read_toml, ".json": _read_json}


def _find(name: str | Path) -> Path:
    path = Path(name)
    if path.suffix in _READERS and path.is_file():
        return path
    for suffix in _READERS:
        candidate = path.with_name(path.name + suffix)
        if candidate.is_file():
            return candidate
    raise ConfigError(f'configuration file "{name}" not found')


def load_config(name: str | Path = "config") -> Config:
    """Load the configuration from ``name``, trying ``.toml`` then ``.json``."""
    path = _find(name)
    try:
        data = _READERS[path.suffix](path)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot parse {path}: {exc}") from None
    return Config.from_mapping(data)