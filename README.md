# cubraycast

cubraycast reads a `.cub` scene file and draws the maze it describes in
first person, one wall column at a time, using grid raycasting (DDA). Each
wall face, east, west, south and north, gets its own texture. The floor and
the ceiling are flat colours.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycast path/to/level.cub
```

The program takes exactly one argument, and that argument must end in `.cub`.
It opens a 1024×768 window titled "Cub3D". If the file cannot be read, the
scene is incomplete, the map is invalid, a texture cannot be loaded or the
window cannot be opened, it prints an error and exits with status 1.

### Controls

| Key          | Action               |
|--------------|----------------------|
| W / S        | step forward / back  |
| A / D        | strafe sideways      |
| Left / Right | turn                 |
| Esc          | quit                 |

Held keys repeat. Closing the window also quits. A step that would land
outside the map or on a non-walkable cell is not taken.

## The `.cub` format

A scene file begins with six settings, in any order, and may have blank lines
between them:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA`, at the very start of the line and followed by a
  space, give the path of each wall texture. Any image format Pillow can
  open will do.
- `F` and `C` give the floor and ceiling colours as `R,G,B`. A colour with
  fewer than three components is an error; a component outside 0 to 255
  makes the colour black.
- If a setting is repeated, the first one is kept. Other lines before the map
  are ignored.

The map follows the settings and goes to the end of the file:

```
111111
100101
101001
1100N1
111111
```

- `1` is a wall and `0` is open floor.
- `N`, `S`, `E` or `W` marks where the player starts and which way they face.
  The map must contain exactly one of these.
- Spaces are void. Every walkable cell must be enclosed by walls: a walkable
  cell on the outer edge, or one next to void, makes the map invalid.
- Once the map has started, every following line must itself be made only of
  map characters, spaces and tabs; anything else is an error. Rows shorter
  than the widest row are padded with walls.

## Using it as a library

The parts of the program can be used on their own:

```python
from cubraycast.scene import load_scene
from cubraycast.validation import is_valid_map
from cubraycast.player import Player

scene = load_scene("level.cub")      # raises ParseError if malformed
if is_valid_map(scene):
    player = Player.from_grid(scene.grid)
    player.move_forward(scene.grid)  # True if the step was taken
    player.rotate_right()
```

- `cubraycast.scene`: `parse_scene`, `load_scene`, `Scene`, `Face`,
  `ParseError`, `parse_color`.
- `cubraycast.validation`: `is_valid_map`, `is_closed_map`, `has_one_player`,
  `check_cell`, `get_neighbors`.
- `cubraycast.player`: `Player` with `from_grid`, `move_forward`,
  `move_backward`, `strafe_left`, `strafe_right`, `rotate_left`,
  `rotate_right`.
- `cubraycast.textures`: `load_texture`, `load_textures`, `Texture.color_at`,
  `TextureError`.
- `cubraycast.raycast.cast_ray` casts a single screen column and returns a
  `Ray` describing the wall hit; `Ray.face()` tells which texture it uses.
- `cubraycast.render.render_frame` draws a whole view into a `Frame` of packed
  `0xRRGGBB` pixels, readable with `Frame.get_pixel`.
- `cubraycast.app.Game` ties these together: `Game.from_file(path)`,
  `handle_key(key)` with a `Key` code, and `render()`, which returns the
  frame without needing a window.