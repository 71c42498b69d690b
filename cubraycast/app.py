"""The game: loading a scene, reacting to keys and the window loop."""

from __future__ import annotations

import enum
import sys
from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image

from cubraycast.player import Player
from cubraycast.render import Frame, render_frame
from cubraycast.scene import Face, ParseError, Scene, load_scene
from cubraycast.textures import Texture, TextureError, load_textures
from cubraycast.validation import is_valid_map

WINDOW_TITLE = "Cub3D"


class Key(enum.IntEnum):
    """Key codes the game reacts to."""

    W = 119
    A = 100
    S = 115
    D = 97
    LEFT = 65361
    RIGHT = 65363
    ESC = 65307


@dataclass
class Game:
    """A loaded scene with the player in it and the frame it is drawn into."""

    scene: Scene
    player: Player
    textures: dict[Face, Texture]
    frame: Frame = field(default_factory=Frame)
    running: bool = True

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Game":
        """Load, validate and prepare the scene in ``path``.

        Raises OSError if the file cannot be read, ParseError if the scene
        is malformed or its map invalid, and TextureError if a texture
        cannot be loaded.
        """
        scene = load_scene(path)
        if not is_valid_map(scene):
            raise ParseError("map is not closed or does not hold exactly one player")
        player = Player.from_grid(scene.grid)
        textures = load_textures(scene.textures)
        return cls(scene=scene, player=player, textures=textures)

    def handle_key(self, key: int) -> None:
        """Apply one key press; unknown keys are ignored."""
        try:
            key = Key(key)
        except ValueError:
            return
        grid = self.scene.grid
        if key is Key.ESC:
            self.running = False
        elif key is Key.W:
            self.player.move_forward(grid)
        elif key is Key.S:
            self.player.move_backward(grid)
        elif key is Key.A:
            self.player.strafe_left(grid)
        elif key is Key.D:
            self.player.strafe_right(grid)
        elif key is Key.LEFT:
            self.player.rotate_left()
        elif key is Key.RIGHT:
            self.player.rotate_right()

    def render(self) -> Frame:
        """Draw the current view into the game's frame and return it."""
        return render_frame(self.frame, self.scene, self.player, self.textures)


def check_input(argv: Sequence[str]) -> str:
    """Return the scene path from a full argument list, or raise ValueError."""
    if len(argv) != 2:
        program = argv[0] if argv else "cub3D"
        raise ValueError(f"Usage: {program} map.cub")
    path = argv[1]
    if not path.endswith(".cub"):
        raise ValueError("Error: Invalid file extension. Expected a .cub file.")
    return path


def _frame_to_rgb(frame: Frame) -> bytes:
    data = array("I", frame.pixels)
    if sys.byteorder == "big":
        data.byteswap()
    image = Image.frombytes("RGB", (frame.width, frame.height), data.tobytes(), "raw", "BGRX")
    return image.tobytes()


def _translate_key(pygame, code: int) -> Optional[Key]:
    special = {
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_ESCAPE: Key.ESC,
    }
    if code in special:
        return special[code]
    try:
        return Key(code)
    except ValueError:
        return None


def _run(game: Game) -> int:
    import pygame

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((game.frame.width, game.frame.height))
        except pygame.error:
            print("Error: Window initialization failed.")
            return 1
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.key.set_repeat(200, 16)
        size = (game.frame.width, game.frame.height)
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    key = _translate_key(pygame, event.key)
                    if key is not None:
                        game.handle_key(key)
            if not game.running:
                break
            rgb = _frame_to_rgb(game.render())
            surface = pygame.image.frombuffer(rgb, size, "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv if argv is None else argv)
    try:
        path = check_input(args)
    except ValueError as exc:
        print(exc)
        return 1
    try:
        game = Game.from_file(path)
    except TextureError:
        print("Error : Failed to load textures")
        return 1
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        print("Error: Initialization failed.")
        return 1
    except ValueError as exc:
        print(exc)
        print("Error: Initialization failed.")
        return 1
    return _run(game)


if __name__ == "__main__":
    sys.exit(main())