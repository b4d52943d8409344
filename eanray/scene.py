"""Scene descriptions in JSON: a camera and a list of objects."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Union

from eanray.camera import Camera, Image, build_camera
from eanray.color import Color
from eanray.hit import HittableList
from eanray.materials import Dielectric, Lambertian, Metal
from eanray.settings import CameraDefaults
from eanray.sphere import Sphere
from eanray.vector import Vec3

_U32_MAX = 0xFFFF_FFFF


class SceneError(ValueError):
    """The scene description is malformed."""


def _divide(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


@dataclass(frozen=True, slots=True, kw_only=True)
class CameraSpec:
    """Camera settings from a scene; None means "use the configured default"."""

    aspect_ratio: tuple[float, float]
    image_width: int
    center: Vec3 | None = None
    focal_length: float | None = None
    samples_per_pixel: int | None = None
    antialiasing: bool | None = None
    max_depth: int | None = None

    def ideal_aspect_ratio(self) -> float:
        return _divide(self.aspect_ratio[0], self.aspect_ratio[1])

    def build(self, defaults: CameraDefaults) -> Camera:
        return build_camera(
            defaults,
            center=self.center,
            focal_length=self.focal_length,
            image=Image(self.image_width, self.ideal_aspect_ratio()),
            samples_per_pixel=self.samples_per_pixel,
            antialiasing=self.antialiasing,
            max_depth=self.max_depth,
        )


@dataclass(frozen=True, slots=True)
class LambertianSpec:
    albedo: Color

    def build(self) -> Lambertian:
        return Lambertian(self.albedo)


@dataclass(frozen=True, slots=True)
class MetalSpec:
    albedo: Color
    fuzz: float

    def build(self) -> Metal:
        return Metal(self.albedo, self.fuzz)


@dataclass(frozen=True, slots=True)
class DielectricSpec:
    refraction_index: float

    def build(self) -> Dielectric:
        return Dielectric(self.refraction_index)


MaterialSpec = Union[LambertianSpec, MetalSpec, DielectricSpec]


@dataclass(frozen=True, slots=True)
class SphereSpec:
    center: Vec3
    radius: float
    material: MaterialSpec

    def build(self) -> Sphere:
        return Sphere(self.center, self.radius, self.material.build())


@dataclass(frozen=True, slots=True)
class ObjectSpec:
    shape: SphereSpec
    description: str | None = None

    def build(self) -> Sphere:
        return self.shape.build()


@dataclass(frozen=True, slots=True)
class Scene:
    camera: CameraSpec
    objects: tuple[ObjectSpec, ...]

    def build(self, defaults: CameraDefaults) -> tuple[Camera, HittableList]:
        """Return the camera and the world of objects the scene describes."""
        camera = self.camera.build(defaults)
        world = HittableList(obj.build() for obj in self.objects)
        return camera, world


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SceneError(f"`{where}` must be an object")
    return value


def _deny_unknown(data: Mapping[str, Any], allowed: set[str], where: str) -> None:
    for key in data:
        if key not in allowed:
            expected = ", ".join(f"`{name}`" for name in sorted(allowed))
            raise SceneError(f"unknown field `{key}` in `{where}`, expected one of {expected}")


def _required(data: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise SceneError(f"missing field `{key}` in `{where}`") from None


def _real(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneError(f"`{where}` must be a number, got {value!r}")
    return float(value)


def _u32(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneError(f"`{where}` must be an unsigned integer, got {value!r}")
    if not 0 <= value <= _U32_MAX:
        raise SceneError(f"`{where}` is out of range: {value}")
    return value


def _boolean(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise SceneError(f"`{where}` must be a boolean, got {value!r}")
    return value


def _reals(value: Any, count: int, where: str) -> tuple[float, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise SceneError(f"`{where}` must be an array of {count} numbers")
    if len(value) != count:
        raise SceneError(f"`{where}` must have {count} elements, got {len(value)}")
    return tuple(_real(item, f"{where}[{n}]") for n, item in enumerate(value))


def _vec3(value: Any, where: str) -> Vec3:
    return Vec3(*_reals(value, 3, where))


def _color(value: Any, where: str) -> Color:
    return Color(*_reals(value, 3, where))


def _optional(
    data: Mapping[str, Any], key: str, where: str, convert: Callable[[Any, str], Any]
) -> Any:
    value = data.get(key)
    return None if value is None else convert(value, f"{where}.{key}")


def _tagged(
    data: Mapping[str, Any], tag: str, variants: Sequence[str], where: str
) -> tuple[str, dict[str, Any]]:
    name = _required(data, tag, where)
    if not isinstance(name, str) or name not in variants:
        expected = ", ".join(f"`{v}`" for v in variants)
        raise SceneError(f"unknown variant {name!r} in `{where}.{tag}`, expected one of {expected}")
    rest = {key: value for key, value in data.items() if key != tag}
    return name, rest


def _parse_camera(value: Any) -> CameraSpec:
    where = "camera"
    data = _mapping(value, where)
    _deny_unknown(
        data,
        {
            "center",
            "focal_length",
            "aspect_ratio",
            "image_width",
            "samples_per_pixel",
            "antialiasing",
            "max_depth",
        },
        where,
    )
    width, height = _reals(_required(data, "aspect_ratio", where), 2, f"{where}.aspect_ratio")
    return CameraSpec(
        aspect_ratio=(width, height),
        image_width=_u32(_required(data, "image_width", where), f"{where}.image_width"),
        center=_optional(data, "center", where, _vec3),
        focal_length=_optional(data, "focal_length", where, _real),
        samples_per_pixel=_optional(data, "samples_per_pixel", where, _u32),
        antialiasing=_optional(data, "antialiasing", where, _boolean),
        max_depth=_optional(data, "max_depth", where, _u32),
    )


def _parse_lambertian(data: Mapping[str, Any], where: str) -> LambertianSpec:
    _deny_unknown(data, {"albedo"}, where)
    return LambertianSpec(_color(_required(data, "albedo", where), f"{where}.albedo"))


def _parse_metal(data: Mapping[str, Any], where: str) -> MetalSpec:
    _deny_unknown(data, {"albedo", "fuzz"}, where)
    return MetalSpec(
        _color(_required(data, "albedo", where), f"{where}.albedo"),
        _real(_required(data, "fuzz", where), f"{where}.fuzz"),
    )


def _parse_dielectric(data: Mapping[str, Any], where: str) -> DielectricSpec:
    _deny_unknown(data, {"refraction_index"}, where)
    return DielectricSpec(
        _real(_required(data, "refraction_index", where), f"{where}.refraction_index")
    )


_MATERIALS: dict[str, Callable[[Mapping[str, Any], str], MaterialSpec]] = {
    "Lambertian": _parse_lambertian,
    "Metal": _parse_metal,
    "Dielectric": _parse_dielectric,
}


def _parse_material(value: Any, where: str) -> MaterialSpec:
    data = _mapping(value, where)
    name, rest = _tagged(data, "type", tuple(_MATERIALS), where)
    return _MATERIALS[name](rest, where)


def _parse_sphere(data: Mapping[str, Any], where: str) -> SphereSpec:
    _deny_unknown(data, {"center", "radius", "material"}, where)
    return SphereSpec(
        center=_vec3(_required(data, "center", where), f"{where}.center"),
        radius=_real(_required(data, "radius", where), f"{where}.radius"),
        material=_parse_material(_required(data, "material", where), f"{where}.material"),
    )


def _parse_object(value: Any, where: str) -> ObjectSpec:
    data = _mapping(value, where)
    description = data.get("description")
    if description is not None and not isinstance(description, str):
        raise SceneError(f"`{where}.description` must be a string")
    fields = {key: item for key, item in data.items() if key != "description"}
    _, rest = _tagged(fields, "shape", ("Sphere",), where)
    return ObjectSpec(shape=_parse_sphere(rest, where), description=description)


def parse_scene(data: Any) -> Scene:
    """Build a scene from already decoded JSON data."""
    root = _mapping(data, "scene")
    _deny_unknown(root, {"camera", "objects"}, "scene")
    camera = _parse_camera(_required(root, "camera", "scene"))
    raw_objects = _required(root, "objects", "scene")
    if isinstance(raw_objects, (str, bytes)) or not isinstance(raw_objects, Sequence):
        raise SceneError("`objects` must be an array")
    objects = tuple(
        _parse_object(item, f"objects[{n}]") for n, item in enumerate(raw_objects)
    )
    return Scene(camera=camera, objects=objects)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_scene(text: str) -> Scene:
    """Parse a scene from JSON text."""
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise SceneError(f"invalid scene JSON: {exc}") from None
    return parse_scene(data)