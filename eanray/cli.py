"""Command line entry point: render a JSON scene from standard input."""

from __future__ import annotations

import argparse
import sys

from eanray.scene import SceneError, load_scene
from eanray.settings import ConfigError, load_config


def main(argv: list[str] | None = None) -> int:
    """Read ``config`` from the working directory and a scene from stdin, then render."""
    parser = argparse.ArgumentParser(
        prog="eanray",
        description=(
            "Render the JSON scene read from standard input to the PPM file named "
            "in the configuration file `config` (.toml or .json)."
        ),
    )
    parser.parse_args(argv)

    try:
        config = load_config("config")
        scene = load_scene(sys.stdin.read())
        camera, world = scene.build(config.app.scene.camera_defaults)
        camera.render(world, config.app.scene.output_file)
    except (ConfigError, SceneError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())