[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eanray"
version = "0.1.0"
description = "A small path-tracing ray tracer that renders JSON scene descriptions to PPM images"
requires-python = ">=3.11"
dependencies = []
keywords = ["ray tracing", "path tracing", "rendering", "ppm", "graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
eanray = "eanray.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["eanray"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
