"""Textured grid raycaster for .cub scene files: parsing, validation, rendering and a pygame window."""

__version__ = "0.1.0"