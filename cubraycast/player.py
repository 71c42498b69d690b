"""The player's position, view direction and camera plane, and how they move."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from cubraycast.validation import is_walkable_cell

STEP_SIZE = 0.05
ROT_SPEED = 0.03
PLANE_LENGTH = 0.66

_STARTS = "NSEW"


def _cell(grid: Sequence[str], x: float, y: float) -> str:
    row, col = int(y), int(x)
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return " "


def _width(grid: Sequence[str]) -> int:
    return max((len(row) for row in grid), default=0)


@dataclass
class Player:
    """A point in the map with a unit view direction and a camera plane."""

    x: float
    y: float
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    @classmethod
    def from_grid(cls, grid: Sequence[str]) -> "Player":
        """Place the player at the first N/S/E/W cell, facing that way."""
        for i, row in enumerate(grid):
            for j, ch in enumerate(row):
                if ch in _STARTS:
                    return cls(
                        x=j + 0.5,
                        y=i + 0.5,
                        dir_x=float((ch == "E") - (ch == "W")),
                        dir_y=float((ch == "S") - (ch == "N")),
                        plane_x=(ch == "S") * -PLANE_LENGTH + (ch == "N") * PLANE_LENGTH,
                        plane_y=(ch == "E") * PLANE_LENGTH + (ch == "W") * -PLANE_LENGTH,
                    )
        raise ValueError("no player start position in map")

    def _try_move(self, grid: Sequence[str], dx: float, dy: float) -> bool:
        new_x = self.x + dx
        new_y = self.y + dy
        if (
            new_x >= 0
            and new_y >= 0
            and new_x < _width(grid)
            and new_y < len(grid)
            and is_walkable_cell(_cell(grid, new_x, new_y))
        ):
            self.x = new_x
            self.y = new_y
            return True
        return False

    def move_forward(self, grid: Sequence[str]) -> bool:
        """Step along the view direction unless that lands off the floor."""
        return self._try_move(grid, self.dir_x * STEP_SIZE, self.dir_y * STEP_SIZE)

    def move_backward(self, grid: Sequence[str]) -> bool:
        """Step against the view direction unless that lands off the floor."""
        return self._try_move(grid, -self.dir_x * STEP_SIZE, -self.dir_y * STEP_SIZE)

    def strafe_left(self, grid: Sequence[str]) -> bool:
        """Step sideways, perpendicular to the view direction."""
        return self._try_move(grid, -self.dir_y * STEP_SIZE, self.dir_x * STEP_SIZE)

    def strafe_right(self, grid: Sequence[str]) -> bool:
        """Step sideways, opposite to strafe_left."""
        return self._try_move(grid, self.dir_y * STEP_SIZE, -self.dir_x * STEP_SIZE)

    def _rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self) -> None:
        """Turn the view by ROT_SPEED radians to the left."""
        self._rotate(-ROT_SPEED)

    def rotate_right(self) -> None:
        """Turn the view by ROT_SPEED radians to the right."""
        self._rotate(ROT_SPEED)