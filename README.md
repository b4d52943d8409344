# eanray

eanray is a small path-tracing renderer. It reads a scene description in
JSON from standard input, traces rays through it and writes the result as a
plain-text PPM (`P3`) image.

Scenes are made of spheres. Each sphere has one of three materials:

- **Lambertian**: a diffuse surface with an `albedo` colour.
- **Metal**: a reflective surface with an `albedo` colour and a `fuzz`
  factor (capped at 1.0).
- **Dielectric**: a transparent, refracting surface with a
  `refraction_index`.

Rays that hit nothing take the colour of a white-to-blue sky gradient.
Pixel colours are gamma-corrected (square root) before being written.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

The renderer reads a configuration file named `config` from the current
directory: `config.toml` is tried first, then `config.json`. It names the
output file and holds the camera defaults used when a scene leaves a camera
setting out. Every field shown here is required; unknown keys are ignored.

```toml
[app]
name = "eanray"

[app.scene]
output_file = "output.ppm"

[app.scene.camera.defaults]
center = [0.0, 0.0, 0.0]
focal_length = 1.0
samples_per_pixel = 100
antialiasing = true
max_depth = 50
```

## Describing a scene

A scene has a `camera` and a list of `objects`:

```json
{
  "camera": {
    "aspect_ratio": [16, 9],
    "image_width": 400,
    "samples_per_pixel": 50,
    "max_depth": 20
  },
  "objects": [
    {
      "description": "ground",
      "shape": "Sphere",
      "center": [0.0, -100.5, -1.0],
      "radius": 100.0,
      "material": { "type": "Lambertian", "albedo": [0.8, 0.8, 0.0] }
    },
    {
      "shape": "Sphere",
      "center": [0.0, 0.0, -1.2],
      "radius": 0.5,
      "material": { "type": "Lambertian", "albedo": [0.1, 0.2, 0.5] }
    },
    {
      "shape": "Sphere",
      "center": [-1.0, 0.0, -1.0],
      "radius": 0.5,
      "material": { "type": "Dielectric", "refraction_index": 1.5 }
    },
    {
      "shape": "Sphere",
      "center": [1.0, 0.0, -1.0],
      "radius": 0.5,
      "material": { "type": "Metal", "albedo": [0.8, 0.6, 0.2], "fuzz": 1.0 }
    }
  ]
}
```

Camera fields:

| field               | required | meaning                                         |
|---------------------|----------|-------------------------------------------------|
| `aspect_ratio`      | yes      | ideal width/height ratio as `[w, h]`            |
| `image_width`       | yes      | image width in pixels                           |
| `center`            | no       | camera position                                 |
| `focal_length`      | no       | distance from the camera to the viewport        |
| `samples_per_pixel` | no       | rays averaged per pixel when antialiasing is on |
| `antialiasing`      | no       | sample randomly within each pixel               |
| `max_depth`         | no       | maximum number of bounces per ray               |

The image height is the width divided by the aspect ratio, truncated, and is
never less than one pixel. Unknown fields in the scene, the camera, the
spheres and the materials are rejected. A sphere with a negative radius is
treated as having radius zero.

## Rendering

```
eanray < scene.json
```

For each scanline the command prints `Scanlines remaining: N`, and at the
end the total running time. The image is written to the `output_file` named
in the configuration. A missing or malformed configuration or scene, or a
file that cannot be written, is reported as `Error: ...` on standard error
with exit status 1.

## Using it as a library

```python
from eanray.scene import load_scene
from eanray.settings import load_config

config = load_config("config")
defaults = config.app.scene.camera_defaults

with open("scene.json") as fh:
    scene = load_scene(fh.read())

camera, world = scene.build(defaults)
camera.render(world, config.app.scene.output_file)
```

Other useful entry points:

- `eanray.scene.parse_scene(data)` builds a `Scene` from already decoded
  JSON data; both it and `load_scene` raise `SceneError` on bad input.
- `eanray.settings.Config.from_mapping(data)` builds a configuration from a
  mapping; `load_config` raises `ConfigError` when the file is missing or
  malformed.
- `Camera.write_ppm(world, stream)` writes the image to any text stream, and
  `Camera.pixel_colors(world)` yields the rows of `Color` values without
  writing anything.
- `eanray.camera.build_camera(defaults, ...)` builds a `Camera` directly,
  taking every setting left as `None` from the defaults.
- `eanray.sphere.Sphere`, `eanray.hit.HittableList` and the materials in
  `eanray.materials` (`Lambertian`, `Metal`, `Dielectric`) can be combined
  into a world in code.

## What it does not do

- Spheres are the only shape.
- Output is plain-text PPM only; the image is not displayed or converted
  to other formats.
- The configuration is read from TOML or JSON only, and always from a file
  named `config` in the working directory when run as a command.
- The camera always looks down the negative z axis; there is no field of
  view, look-at direction or depth of field setting.