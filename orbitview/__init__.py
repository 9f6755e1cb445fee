"""Orbital-camera viewer for plain-text triangle models with BMP textures."""

__version__ = "0.1.0"
__all__ = ["interaction", "model", "state", "viewer"]