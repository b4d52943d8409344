"""A small path-tracing renderer that turns JSON scene descriptions into PPM images."""

__version__ = "0.1.0"