"""Casting one ray per screen column through the map grid (DDA)."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence

from cubraycast.player import Player
from cubraycast.scene import Face

INFINITY = 1e30
_MAX_LINE_HEIGHT = 2**31 - 1


class Side(enum.IntEnum):
    """Which kind of grid line the ray crossed when it hit."""

    X = 0
    Y = 1


@dataclass
class Ray:
    """The result of casting one ray: where it hit and how tall the wall is."""

    camera_x: float
    dir_x: float
    dir_y: float
    map_x: int
    map_y: int
    step_x: int
    step_y: int
    side: Side
    wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int

    def face(self) -> Face:
        """The wall face the ray struck, which selects its texture."""
        if self.side is Side.X:
            return Face.EA if self.dir_x > 0 else Face.WE
        return Face.SO if self.dir_y > 0 else Face.NO


def _half(n: int) -> int:
    """Integer halving that truncates toward zero."""
    return n // 2 if n >= 0 else -((-n) // 2)


def _is_wall(grid: Sequence[str], x: int, y: int) -> bool:
    row = grid[y]
    return x < len(row) and row[x] == "1"


def cast_ray(
    player: Player,
    grid: Sequence[str],
    x: int,
    screen_width: int,
    screen_height: int,
) -> Ray:
    """Cast the ray for screen column ``x`` and return what it hit."""
    camera_x = 2 * x / float(screen_width) - 1
    dir_x = player.dir_x + player.plane_x * camera_x
    dir_y = player.dir_y + player.plane_y * camera_x
    map_x = int(player.x)
    map_y = int(player.y)
    delta_x = INFINITY if dir_x == 0 else abs(1 / dir_x)
    delta_y = INFINITY if dir_y == 0 else abs(1 / dir_y)

    if dir_x < 0:
        step_x, side_x = -1, (player.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.x) * delta_x
    if dir_y < 0:
        step_y, side_y = -1, (player.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.y) * delta_y

    height = len(grid)
    width = max((len(row) for row in grid), default=0)
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = Side.X
        else:
            side_y += delta_y
            map_y += step_y
            side = Side.Y
        if not (0 <= map_y < height and 0 <= map_x < width):
            break
        if _is_wall(grid, map_x, map_y):
            break

    if side is Side.X:
        numerator, direction = map_x - player.x + (1 - step_x) // 2, dir_x
    else:
        numerator, direction = map_y - player.y + (1 - step_y) // 2, dir_y
    wall_dist = numerator / direction if direction else INFINITY

    line_height = int(screen_height / wall_dist) if wall_dist else _MAX_LINE_HEIGHT
    draw_start = max(-_half(line_height) + screen_height // 2, 0)
    draw_end = min(_half(line_height) + screen_height // 2, screen_height - 1)

    return Ray(
        camera_x=camera_x,
        dir_x=dir_x,
        dir_y=dir_y,
        map_x=map_x,
        map_y=map_y,
        step_x=step_x,
        step_y=step_y,
        side=side,
        wall_dist=wall_dist,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
    )