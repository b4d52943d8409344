import json
import math

import pytest

from eanray.camera import Image
from eanray.color import Color
from eanray.hit import HittableList
from eanray.materials import Dielectric, Lambertian, Metal
from eanray.scene import (
    CameraSpec,
    DielectricSpec,
    LambertianSpec,
    MetalSpec,
    ObjectSpec,
    Scene,
    SceneError,
    SphereSpec,
    load_scene,
    parse_scene,
)
from eanray.settings import CameraDefaults
from eanray.vector import Vec3

DEFAULTS = CameraDefaults(
    center=Vec3(0.0, 0.0, 0.0),
    focal_length=1.0,
    samples_per_pixel=10,
    antialiasing=True,
    max_depth=10,
)


def scene_data():
    return {
        "camera": {"aspect_ratio": [16, 9], "image_width": 40},
        "objects": [
            {
                "description": "ground",
                "shape": "Sphere",
                "center": [0.0, -100.5, -1.0],
                "radius": 100,
                "material": {"type": "Lambertian", "albedo": [0.8, 0.8, 0.0]},
            },
            {
                "shape": "Sphere",
                "center": [1.0, 0.0, -1.0],
                "radius": 0.5,
                "material": {"type": "Metal", "albedo": [0.8, 0.6, 0.2], "fuzz": 0.3},
            },
            {
                "shape": "Sphere",
                "center": [-1.0, 0.0, -1.0],
                "radius": 0.5,
                "material": {"type": "Dielectric", "refraction_index": 1.5},
            },
        ],
    }


def test_parse_scene_fields():
    scene = parse_scene(scene_data())
    assert scene.camera == CameraSpec(aspect_ratio=(16.0, 9.0), image_width=40)
    assert len(scene.objects) == 3
    ground = scene.objects[0]
    assert ground.description == "ground"
    assert ground.shape == SphereSpec(
        Vec3(0.0, -100.5, -1.0), 100.0, LambertianSpec(Color(0.8, 0.8, 0.0))
    )
    assert scene.objects[1].shape.material == MetalSpec(Color(0.8, 0.6, 0.2), 0.3)
    assert scene.objects[2].shape.material == DielectricSpec(1.5)
    assert scene.objects[2].description is None


def test_load_scene_matches_parse_scene():
    assert load_scene(json.dumps(scene_data())) == parse_scene(scene_data())


def test_ideal_aspect_ratio():
    spec = CameraSpec(aspect_ratio=(16.0, 9.0), image_width=40)
    assert spec.ideal_aspect_ratio() == 16.0 / 9.0


def test_ideal_aspect_ratio_zero_height_is_infinite():
    spec = CameraSpec(aspect_ratio=(1.0, 0.0), image_width=40)
    assert spec.ideal_aspect_ratio() == math.inf
    assert spec.build(DEFAULTS).image.height() == 1


def test_camera_build_uses_defaults():
    camera = CameraSpec(aspect_ratio=(2.0, 1.0), image_width=10).build(DEFAULTS)
    assert camera.center == DEFAULTS.center
    assert camera.focal_length == DEFAULTS.focal_length
    assert camera.samples_per_pixel == DEFAULTS.samples_per_pixel
    assert camera.antialiasing == DEFAULTS.antialiasing
    assert camera.max_depth == DEFAULTS.max_depth
    assert camera.image == Image(10, 2.0)


def test_camera_build_overrides():
    data = scene_data()
    data["camera"].update(
        center=[1, 2, 3],
        focal_length=2,
        samples_per_pixel=5,
        antialiasing=False,
        max_depth=7,
    )
    camera = parse_scene(data).camera.build(DEFAULTS)
    assert camera.center == Vec3(1.0, 2.0, 3.0)
    assert camera.focal_length == 2.0
    assert camera.samples_per_pixel == 5
    assert camera.antialiasing is False
    assert camera.max_depth == 7


def test_null_optional_fields_mean_default():
    data = scene_data()
    data["camera"]["focal_length"] = None
    assert parse_scene(data).camera.focal_length is None


def test_material_builds():
    assert LambertianSpec(Color(0.1, 0.2, 0.3)).build() == Lambertian(Color(0.1, 0.2, 0.3))
    assert DielectricSpec(1.33).build() == Dielectric(1.33)
    metal = MetalSpec(Color(0.5, 0.5, 0.5), 3.0).build()
    assert metal == Metal(Color(0.5, 0.5, 0.5), 1.0)
    assert metal.fuzz == 1.0


def test_sphere_and_object_build():
    spec = SphereSpec(Vec3(1.0, 2.0, 3.0), 0.5, DielectricSpec(1.5))
    sphere = ObjectSpec(spec, "glass").build()
    assert sphere.center == Vec3(1.0, 2.0, 3.0)
    assert sphere.radius == 0.5
    assert sphere.material == Dielectric(1.5)


def test_scene_build_world():
    scene = parse_scene(scene_data())
    camera, world = scene.build(DEFAULTS)
    assert isinstance(world, HittableList)
    assert len(world) == len(scene.objects)
    assert camera.image == Image(40, 16.0 / 9.0)


def test_empty_scene_builds_empty_world():
    scene = Scene(camera=CameraSpec(aspect_ratio=(1.0, 1.0), image_width=3), objects=())
    _, world = scene.build(DEFAULTS)
    assert len(world) == 0


def _mutate(path, value=None, delete=False):
    data = scene_data()
    target = data
    for key in path[:-1]:
        target = target[key]
    if delete:
        del target[path[-1]]
    else:
        target[path[-1]] = value
    return data


@pytest.mark.parametrize(
    "data",
    [
        _mutate(["camera", "zoom"], 2),
        _mutate(["camera", "image_width"], delete=True),
        _mutate(["camera", "image_width"], 40.0),
        _mutate(["camera", "image_width"], -1),
        _mutate(["camera", "aspect_ratio"], [16, 9, 1]),
        _mutate(["camera", "antialiasing"], "yes"),
        _mutate(["camera", "focal_length"], True),
        _mutate(["objects", 0, "shape"], "Cube"),
        _mutate(["objects", 0, "shape"], delete=True),
        _mutate(["objects", 0, "colour"], "red"),
        _mutate(["objects", 0, "center"], [0, 0]),
        _mutate(["objects", 0, "description"], 5),
        _mutate(["objects", 0, "material", "type"], "Plastic"),
        _mutate(["objects", 0, "material", "fuzz"], 0.1),
        _mutate(["objects", 1, "material", "fuzz"], delete=True),
        _mutate(["objects"], "none"),
        _mutate(["lights"], []),
        _mutate(["camera"], delete=True),
    ],
)
def test_invalid_scenes_rejected(data):
    with pytest.raises(SceneError):
        parse_scene(data)


def test_non_object_scene_rejected():
    with pytest.raises(SceneError):
        parse_scene([1, 2, 3])


@pytest.mark.parametrize("text", ["{", "", '{"camera": NaN}', "[Infinity]"])
def test_load_scene_rejects_bad_json(text):
    with pytest.raises(SceneError):
        load_scene(text)