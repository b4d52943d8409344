"""Spheres as hittable objects."""

from __future__ import annotations

import math

from eanray.hit import HitRecord, Hittable, face_normal
from eanray.interval import Interval
from eanray.materials import Material
from eanray.ray import Ray
from eanray.vector import Vec3


class Sphere(Hittable):
    """A sphere; a negative radius is treated as zero."""

    def __init__(self, center: Vec3, radius: float, material: Material) -> None:
        self.center = center
        self.radius = max(0.0, radius)
        self.material = material

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, material={self.material!r})"

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        if self.radius == 0.0:
            return None
        oc = self.center - ray.origin
        a = ray.direction.dot(ray.direction)
        if a == 0.0:
            return None
        b = -2.0 * ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return None

        sqrtd = math.sqrt(discriminant)
        root = (-b - sqrtd) / (2.0 * a)
        if not ray_t.surrounds(root):
            root = (-b + sqrtd) / (2.0 * a)
            if not ray_t.surrounds(root):
                return None

        p = ray.at(root)
        outward_normal = (p - self.center) / self.radius
        front_face, normal = face_normal(ray, outward_normal)
        return HitRecord(p=p, normal=normal, material=self.material, t=root, front_face=front_face)