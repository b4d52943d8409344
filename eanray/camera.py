"""The camera: turns a world of hittable objects into a PPM image."""

from __future__ import annotations

import math
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from eanray.color import Color
from eanray.hit import Hittable
from eanray.interval import Interval
from eanray.ray import Ray
from eanray.settings import CameraDefaults
from eanray.vector import Vec3, normalize_to_01, random_real

_U32_MAX = 0xFFFF_FFFF
_HIT_RANGE = Interval(0.001, math.inf)
_SKY_BLUE = Color(0.5, 0.7, 1.0)
_VIEWPORT_HEIGHT = 2.0


def _saturating_u32(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


@dataclass(frozen=True, slots=True)
class Image:
    """Output image size: a width and the ideal aspect ratio (width / height)."""

    width: int
    aspect_ratio: float

    def height(self) -> int:
        """Height in pixels: truncated, and never less than one."""
        if self.aspect_ratio == 0:
            raw = math.inf if self.width else math.nan
        else:
            raw = self.width / self.aspect_ratio
        return max(1, _saturating_u32(raw))

    def actual_aspect_ratio(self) -> float:
        """The aspect ratio the whole-pixel height really gives."""
        return self.width / self.height()


@dataclass(frozen=True, slots=True)
class Viewport:
    """The rectangle in the scene that the image is projected onto."""

    height: float
    camera: Camera
    image: Image

    def width(self) -> float:
        return self.height * self.image.actual_aspect_ratio()

    def left_to_right(self) -> Vec3:
        return Vec3(self.width(), 0.0, 0.0)

    def bottom_to_top(self) -> Vec3:
        return Vec3(0.0, -self.height, 0.0)

    def pixel_delta_u(self) -> Vec3:
        return self.left_to_right() / self.image.width

    def pixel_delta_v(self) -> Vec3:
        return self.bottom_to_top() / self.image.height()

    def upper_left(self) -> Vec3:
        return (
            self.camera.center
            - Vec3(0.0, 0.0, self.camera.focal_length)
            - self.left_to_right() / 2.0
            - self.bottom_to_top() / 2.0
        )

    def pixel_00_loc(self) -> Vec3:
        """Centre of the upper-left pixel."""
        return self.upper_left() + (self.pixel_delta_u() + self.pixel_delta_v()) * 0.5


@dataclass(frozen=True, slots=True)
class Camera:
    """A pinhole camera looking down the negative z axis."""

    center: Vec3
    focal_length: float
    image: Image
    samples_per_pixel: int
    antialiasing: bool
    max_depth: int

    def viewport(self) -> Viewport:
        return Viewport(_VIEWPORT_HEIGHT, self, self.image)

    def get_ray(self, i: int, j: int, viewport: Viewport) -> Ray:
        """Return a ray towards a random point in the square around pixel (i, j)."""
        return self._sample_ray(
            i, j, viewport.pixel_00_loc(), viewport.pixel_delta_u(), viewport.pixel_delta_v()
        )

    def _sample_ray(self, i: int, j: int, pixel00: Vec3, du: Vec3, dv: Vec3) -> Ray:
        offset_x = random_real() - 0.5
        offset_y = random_real() - 0.5
        sample = pixel00 + du * (offset_x + i) + dv * (offset_y + j)
        return Ray(self.center, sample - self.center)

    def ray_color(self, ray: Ray, depth: int, world: Hittable) -> Color:
        """Trace ``ray`` through ``world`` for at most ``depth`` bounces."""
        attenuation = Color.white()
        for _ in range(depth):
            record = world.hit(ray, _HIT_RANGE)
            if record is None:
                a = normalize_to_01(ray.direction.unit().y)
                sky = Color.white() * (1.0 - a) + _SKY_BLUE * a
                return sky * attenuation
            scattered = record.material.scatter(ray, record)
            if scattered is None:
                return Color.black()
            ray, bounce_attenuation = scattered
            attenuation = attenuation * bounce_attenuation
        return Color.black()

    def _pixel_sample_scale(self) -> float:
        return 1.0 / self.samples_per_pixel if self.samples_per_pixel else math.inf

    def _rows(
        self, world: Hittable, before_row: Callable[[int], None] | None
    ) -> Iterator[list[Color]]:
        width = self.image.width
        height = self.image.height()
        if width == 0:
            for j in range(height):
                if before_row is not None:
                    before_row(j)
                yield []
            return

        viewport = self.viewport()
        pixel00 = viewport.pixel_00_loc()
        du = viewport.pixel_delta_u()
        dv = viewport.pixel_delta_v()
        scale = self._pixel_sample_scale()

        for j in range(height):
            if before_row is not None:
                before_row(j)
            row = []
            for i in range(width):
                if self.antialiasing:
                    total = sum(
                        (
                            self.ray_color(self._sample_ray(i, j, pixel00, du, dv), self.max_depth, world)
                            for _ in range(self.samples_per_pixel)
                        ),
                        Color.black(),
                    )
                    row.append(total * scale)
                else:
                    pixel_center = pixel00 + du * i + dv * j
                    ray = Ray(self.center, pixel_center - self.center)
                    row.append(self.ray_color(ray, self.max_depth, world))
            yield row

    def pixel_colors(self, world: Hittable) -> Iterator[list[Color]]:
        """Yield the image's rows of colours, top to bottom."""
        return self._rows(world, None)

    def _write(
        self, world: Hittable, stream: TextIO, before_row: Callable[[int], None] | None
    ) -> None:
        stream.write(f"P3\n{self.image.width} {self.image.height()}\n255\n")
        for row in self._rows(world, before_row):
            for color in row:
                stream.write(f"{color.to_bytes_string()}\n")
        stream.write("\n")

    def write_ppm(self, world: Hittable, stream: TextIO) -> None:
        """Write the rendered image to ``stream`` as a plain-text PPM."""
        self._write(world, stream, None)

    def render(self, world: Hittable, output_file: str | Path) -> None:
        """Render to ``output_file``, reporting progress on standard output."""
        start = time.perf_counter()
        height = self.image.height()

        def report(j: int) -> None:
            print(f"Scanlines remaining: {height - j}", file=sys.stdout)

        with open(output_file, "w", encoding="ascii") as handle:
            self._write(world, handle, report)

        elapsed = time.perf_counter() - start
        print(f"Done. Running time: {elapsed:.6f}s", file=sys.stdout)


def build_camera(
    defaults: CameraDefaults,
    center: Vec3 | None = None,
    focal_length: float | None = None,
    image: Image | None = None,
    samples_per_pixel: int | None = None,
    antialiasing: bool | None = None,
    max_depth: int | None = None,
) -> Camera:
    """Build a camera, taking every setting left as None from ``defaults``."""
    return Camera(
        center=defaults.center if center is None else center,
        focal_length=defaults.focal_length if focal_length is None else focal_length,
        image=Image(100, 1.0) if image is None else image,
        samples_per_pixel=(
            defaults.samples_per_pixel if samples_per_pixel is None else samples_per_pixel
        ),
        antialiasing=defaults.antialiasing if antialiasing is None else antialiasing,
        max_depth=defaults.max_depth if max_depth is None else max_depth,
    )