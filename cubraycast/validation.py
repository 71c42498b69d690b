"""Checks that a parsed map is closed and holds exactly one player."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from cubraycast.scene import ParseError, Scene

_VALID = frozenset(" 01NSEW")
_WALKABLE = frozenset("0NSEW")
_PLAYERS = frozenset("NSEW")


@dataclass(frozen=True)
class Neighbors:
    """The four cells orthogonally next to a cell; off-grid cells read as ' '."""

    up: str
    down: str
    left: str
    right: str


def is_valid_cell(c: str) -> bool:
    """True for characters allowed inside the map."""
    return c in _VALID


def is_walkable_cell(c: str) -> bool:
    """True for floor cells and player start cells."""
    return c in _WALKABLE


def _cell(grid: Sequence[str], i: int, j: int) -> str:
    if 0 <= i < len(grid) and 0 <= j < len(grid[i]):
        return grid[i][j]
    return " "


def get_neighbors(grid: Sequence[str], i: int, j: int) -> Neighbors:
    """Return the cells above, below, left and right of ``grid[i][j]``."""
    return Neighbors(
        up=_cell(grid, i - 1, j),
        down=_cell(grid, i + 1, j),
        left=_cell(grid, i, j - 1),
        right=_cell(grid, i, j + 1),
    )


def _width(grid: Sequence[str]) -> int:
    return max((len(row) for row in grid), default=0)


def check_cell(grid: Sequence[str], i: int, j: int) -> bool:
    """True unless a walkable cell sits on the edge or touches a gap."""
    if not is_walkable_cell(_cell(grid, i, j)):
        return True
    if i == 0 or i == len(grid) - 1 or j == 0 or j == _width(grid) - 1:
        return False
    around = get_neighbors(grid, i, j)
    cells = (around.up, around.down, around.left, around.right)
    return all(c != " " and is_valid_cell(c) for c in cells)


def is_closed_map(grid: Sequence[str]) -> bool:
    """True if every walkable cell is enclosed by walls."""
    width = _width(grid)
    return all(
        check_cell(grid, i, j) for i in range(len(grid)) for j in range(width)
    )


def has_one_player(grid: Sequence[str]) -> bool:
    """True if exactly one player start cell is present."""
    return sum(ch in _PLAYERS for row in grid for ch in row) == 1


def is_valid_map(scene: Scene) -> bool:
    """True for a complete scene whose map is closed and has one player."""
    try:
        scene.check_complete()
    except ParseError:
        return False
    return is_closed_map(scene.grid) and has_one_player(scene.grid)