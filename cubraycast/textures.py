"""Wall textures: loading images and sampling their pixels."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Union

from PIL import Image

from cubraycast.scene import Face


class TextureError(Exception):
    """Raised when a texture image cannot be loaded."""


@dataclass(frozen=True)
class Texture:
    """An image stored row by row as packed ``0xRRGGBB`` integers."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match texture dimensions")

    def color_at(self, x: int, y: int) -> int:
        """Colour at ``(x, y)``, or 0 outside the image."""
        if not self.pixels or not (0 <= x < self.width and 0 <= y < self.height):
            return 0
        return self.pixels[y * self.width + x]


def load_texture(path: Union[str, Path]) -> Texture:
    """Load an image file as a Texture."""
    try:
        with Image.open(path) as image:
            rgb = image.convert("RGB")
    except (OSError, ValueError) as exc:
        raise TextureError(f"cannot load texture {path}: {exc}") from exc
    channels = iter(rgb.tobytes())
    pixels = tuple(
        (r << 16) | (g << 8) | b for r, g, b in zip(channels, channels, channels)
    )
    return Texture(rgb.width, rgb.height, pixels)


def load_textures(paths: Mapping[Face, Union[str, Path]]) -> dict[Face, Texture]:
    """Load one texture for every wall face."""
    textures: dict[Face, Texture] = {}
    for face in Face:
        if face not in paths:
            raise TextureError(f"no texture path for {face.name}")
        textures[face] = load_texture(paths[face])
    return textures