"""Drawing a frame: floor and ceiling fill, then one textured wall slice per column."""

from __future__ import annotations

import math
from array import array
from dataclasses import dataclass, field
from typing import Mapping

from cubraycast.player import Player
from cubraycast.raycast import Ray, Side, cast_ray
from cubraycast.scene import Face, Scene
from cubraycast.textures import Texture

WIN_W = 1024
WIN_H = 768

_PIXEL_MASK = 0xFFFFFFFF


@dataclass
class Frame:
    """An off-screen image of packed ``0xRRGGBB`` pixels, stored row by row."""

    width: int = WIN_W
    height: int = WIN_H
    pixels: array = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("frame dimensions must not be negative")
        self.pixels = array("I", [0]) * (self.width * self.height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the frame are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color & _PIXEL_MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Colour of one pixel; IndexError outside the frame."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return self.pixels[y * self.width + x]


def draw_floor_ceiling(frame: Frame, floor: int, ceiling: int) -> None:
    """Fill the upper half with the ceiling colour and the rest with the floor."""
    split = (frame.height // 2) * frame.width
    rest = len(frame.pixels) - split
    frame.pixels[:split] = array("I", [ceiling & _PIXEL_MASK]) * split
    frame.pixels[split:] = array("I", [floor & _PIXEL_MASK]) * rest


def texture_coordinates(
    ray: Ray, player: Player, texture: Texture, screen_height: int
) -> tuple[int, float, float]:
    """Return ``(tex_x, step, tex_pos)`` for the wall slice a ray hit.

    ``tex_x`` is the texture column, ``step`` how far to advance in the
    texture per screen row, and ``tex_pos`` the texture row at the top of
    the drawn slice.
    """
    if ray.side is Side.X:
        wall_x = player.y + ray.wall_dist * ray.dir_y
    else:
        wall_x = player.x + ray.wall_dist * ray.dir_x
    wall_x = wall_x - math.floor(wall_x) if math.isfinite(wall_x) else 0.0

    tex_x = max(int(wall_x * texture.width), 0)
    if tex_x >= texture.width:
        tex_x = texture.width - 1
    if (ray.side is Side.X and ray.dir_x > 0) or (ray.side is Side.Y and ray.dir_y < 0):
        tex_x = texture.width - tex_x - 1

    step = texture.height / ray.line_height if ray.line_height else 0.0
    tex_pos = (ray.draw_start - screen_height / 2 + ray.line_height / 2) * step
    return tex_x, step, tex_pos


def draw_wall_column(
    frame: Frame, ray: Ray, player: Player, texture: Texture, x: int
) -> None:
    """Draw the textured wall slice of screen column ``x``."""
    tex_x, step, tex_pos = texture_coordinates(ray, player, texture, frame.height)
    for y in range(ray.draw_start, ray.draw_end + 1):
        tex_y = int(tex_pos)
        if tex_y >= texture.height:
            tex_y = tex_y % texture.height if texture.height else 0
        elif tex_y < 0:
            tex_y = 0
        frame.put_pixel(x, y, texture.color_at(tex_x, tex_y))
        tex_pos += step


def render_frame(
    frame: Frame, scene: Scene, player: Player, textures: Mapping[Face, Texture]
) -> Frame:
    """Draw the whole view from the player's position into ``frame``."""
    floor = scene.floor_color if scene.floor_color is not None else 0
    ceiling = scene.ceiling_color if scene.ceiling_color is not None else 0
    draw_floor_ceiling(frame, floor, ceiling)
    for x in range(frame.width):
        ray = cast_ray(player, scene.grid, x, frame.width, frame.height)
        draw_wall_column(frame, ray, player, textures[ray.face()], x)
    return frame