"""Reading ``.cub`` scene descriptions: textures, colours and the map grid."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

_BLANK = " \t\n"
_MAP_CHARS = frozenset(" 10NSEW\n\t")
_ATOI_RE = re.compile(r"[ \t\r\v\n\f]*([+-]?)([0-9]*)")
_LONG_MAX = 2**63 - 1


class ParseError(ValueError):
    """Raised when a scene description is malformed or incomplete."""


class Face(enum.IntEnum):
    """Wall faces, each drawn with its own texture."""

    EA = 0
    WE = 1
    SO = 2
    NO = 3


def is_empty_line(line: Optional[str]) -> bool:
    """True for a missing line or one made only of spaces, tabs and newlines."""
    if line is None:
        return True
    return all(ch in _BLANK for ch in line)


def is_map_line(line: str) -> bool:
    """True if every character of the line may appear in a map row."""
    return all(ch in _MAP_CHARS for ch in line)


def pad_line(line: str, width: int) -> str:
    """Pad a row on the right with wall cells up to ``width``."""
    return line.ljust(width, "1")


def _atoi(text: str) -> int:
    """Leading-integer conversion: skips blanks, stops at the first non-digit."""
    match = _ATOI_RE.match(text)
    sign = -1 if match.group(1) == "-" else 1
    value = int(match.group(2) or "0")
    if value > _LONG_MAX:
        return -1 if sign == 1 else 0
    result = value * sign
    return (result + 2**31) % 2**32 - 2**31


def parse_color(text: str) -> int:
    """Turn ``"R,G,B"`` into a packed ``0xRRGGBB`` integer.

    Empty fields between commas are skipped and fields past the third are
    ignored. A component outside 0..255 makes the whole colour 0.
    """
    parts = [part for part in text.split(",") if part]
    if len(parts) < 3:
        raise ParseError(f"expected three colour components in {text!r}")
    red, green, blue = (_atoi(part) for part in parts[:3])
    if not all(0 <= value <= 255 for value in (red, green, blue)):
        return 0
    return (red << 16) | (green << 8) | blue


@dataclass
class Scene:
    """Everything a scene file describes."""

    textures: dict[Face, str] = field(default_factory=dict)
    floor_color: Optional[int] = None
    ceiling_color: Optional[int] = None
    grid: list[str] = field(default_factory=list)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    @property
    def height(self) -> int:
        return len(self.grid)

    def add_texture(self, line: str) -> bool:
        """Record a ``NO/SO/WE/EA path`` line; False if it is not a new one."""
        for face in Face:
            if line.startswith(face.name + " "):
                if face in self.textures:
                    return False
                self.textures[face] = line[3:].strip(_BLANK)
                return True
        return False

    def add_color(self, line: str) -> bool:
        """Record an ``F r,g,b`` or ``C r,g,b`` line; False if it is not a new one."""
        trimmed = line.strip(_BLANK)
        if trimmed.startswith("F "):
            is_floor = True
        elif trimmed.startswith("C "):
            is_floor = False
        else:
            return False
        current = self.floor_color if is_floor else self.ceiling_color
        if current is not None:
            return False
        color = parse_color(trimmed[2:].strip(_BLANK))
        if is_floor:
            self.floor_color = color
        else:
            self.ceiling_color = color
        return True

    def add_map_line(self, line: str) -> None:
        """Append a map row, padding rows so the grid stays rectangular."""
        row = line.strip("\n")
        width = self.width
        if len(row) > width:
            self.grid = [pad_line(existing, len(row)) for existing in self.grid]
        else:
            row = pad_line(row, width)
        self.grid.append(row)

    def check_complete(self) -> None:
        """Raise ParseError unless every texture, both colours and a map are set."""
        for face in Face:
            if face not in self.textures:
                raise ParseError(f"missing {face.name} texture")
        if self.floor_color is None or self.ceiling_color is None:
            raise ParseError("missing floor or ceiling color")
        if not self.grid:
            raise ParseError("no map data found")

    def _consume_header(self, line: str) -> bool:
        return is_empty_line(line) or self.add_texture(line) or self.add_color(line)


def parse_scene(lines: Iterable[str]) -> Scene:
    """Build a complete Scene from the lines of a scene description."""
    scene = Scene()
    map_started = False
    for line in lines:
        if not map_started and scene._consume_header(line):
            continue
        if is_map_line(line):
            map_started = True
            scene.add_map_line(line)
        elif map_started and not is_empty_line(line):
            raise ParseError(f"unexpected line after map: {line.rstrip()!r}")
    scene.check_complete()
    return scene


def _split_lines(content: str) -> list[str]:
    parts = content.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path: Union[str, Path]) -> Scene:
    """Read and parse a scene file."""
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
        content = handle.read()
    return parse_scene(_split_lines(content))