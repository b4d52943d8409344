import copy
import json

import pytest

from eanray.settings import Config, ConfigError, load_config
from eanray.vector import Vec3

VALID = {
    "app": {
        "name": "eanray",
        "scene": {
            "output_file": "image.ppm",
            "camera": {
                "defaults": {
                    "center": [0.0, 0.0, 0.0],
                    "focal_length": 1.0,
                    "samples_per_pixel": 100,
                    "antialiasing": True,
                    "max_depth": 50,
                }
            },
        },
    }
}

TOML_TEXT = """
[app]
name = "eanray"

[app.scene]
output_file = "image.ppm"

[app.scene.camera.defaults]
center = [1, 2, 3]
focal_length = 1.5
samples_per_pixel = 10
antialiasing = false
max_depth = 5
"""


def _modified(path, value):
    data = copy.deepcopy(VALID)
    target = data
    for key in path[:-1]:
        target = target[key]
    if value is None:
        del target[path[-1]]
    else:
        target[path[-1]] = value
    return data


def test_from_mapping_reads_all_fields():
    config = Config.from_mapping(VALID)
    assert config.app.name == "eanray"
    assert config.app.scene.output_file == "image.ppm"
    defaults = config.app.scene.camera_defaults
    assert defaults.center == Vec3(0.0, 0.0, 0.0)
    assert defaults.focal_length == 1.0
    assert defaults.samples_per_pixel == 100
    assert defaults.antialiasing is True
    assert defaults.max_depth == 50


def test_unknown_keys_ignored():
    data = _modified(["app", "extra"], {"anything": 1})
    assert Config.from_mapping(data) == Config.from_mapping(VALID)


def test_integer_real_accepted():
    data = _modified(["app", "scene", "camera", "defaults", "focal_length"], 2)
    assert Config.from_mapping(data).app.scene.camera_defaults.focal_length == 2.0


@pytest.mark.parametrize(
    "path",
    [
        ["app"],
        ["app", "name"],
        ["app", "scene", "output_file"],
        ["app", "scene", "camera"],
        ["app", "scene", "camera", "defaults", "max_depth"],
        ["app", "scene", "camera", "defaults", "center"],
    ],
)
def test_missing_field_raises(path):
    with pytest.raises(ConfigError, match=path[-1]):
        Config.from_mapping(_modified(path, None))


@pytest.mark.parametrize(
    "key, value",
    [
        ("samples_per_pixel", -1),
        ("samples_per_pixel", 2**32),
        ("max_depth", 1.5),
        ("antialiasing", "yes"),
        ("focal_length", "far"),
        ("focal_length", True),
        ("center", [1.0, 2.0]),
        ("center", "origin"),
    ],
)
def test_invalid_value_raises(key, value):
    data = _modified(["app", "scene", "camera", "defaults", key], value)
    with pytest.raises(ConfigError, match=key):
        Config.from_mapping(data)


def test_load_toml_by_stem(tmp_path):
    (tmp_path / "config.toml").write_text(TOML_TEXT, encoding="utf-8")
    config = load_config(tmp_path / "config")
    defaults = config.app.scene.camera_defaults
    assert defaults.center == Vec3(1.0, 2.0, 3.0)
    assert defaults.focal_length == 1.5
    assert defaults.antialiasing is False
    assert defaults.max_depth == 5


def test_load_json_by_full_name(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(VALID), encoding="utf-8")
    assert load_config(path) == Config.from_mapping(VALID)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "config")


def test_malformed_file_raises(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="cannot parse"):
        load_config(tmp_path / "config")