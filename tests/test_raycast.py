import pytest

from cubraycast.player import Player
from cubraycast.raycast import Ray, Side, cast_ray
from cubraycast.scene import Face

WIN_W = 1024
WIN_H = 768

GRID = [
    "111111",
    "100001",
    "10N001",
    "100001",
    "111111",
]


def _grid_with(ch):
    return [row.replace("N", ch) for row in GRID]


def _center(player, grid):
    return cast_ray(player, grid, WIN_W // 2, WIN_W, WIN_H)


def test_north_center_ray_hits_top_wall():
    player = Player.from_grid(GRID)
    ray = _center(player, GRID)
    assert ray.side is Side.Y
    assert ray.face() is Face.NO
    assert (ray.map_x, ray.map_y) == (2, 0)
    assert ray.wall_dist == pytest.approx(player.y - 1.0)
    assert ray.draw_start == WIN_H // 2 - ray.line_height // 2


@pytest.mark.parametrize(
    "ch, face, side",
    [("S", Face.SO, Side.Y), ("E", Face.EA, Side.X), ("W", Face.WE, Side.X)],
)
def test_faces_by_direction(ch, face, side):
    grid = _grid_with(ch)
    ray = _center(Player.from_grid(grid), grid)
    assert ray.face() is face
    assert ray.side is side
    assert grid[ray.map_y][ray.map_x] == "1"


def test_east_ray_hits_last_column():
    grid = _grid_with("E")
    ray = _center(Player.from_grid(grid), grid)
    assert ray.map_x == len(grid[0]) - 1
    assert ray.map_y == 2


def test_draw_range_within_screen_for_every_column():
    player = Player.from_grid(GRID)
    for x in range(0, WIN_W, 37):
        ray = cast_ray(player, GRID, x, WIN_W, WIN_H)
        assert 0 <= ray.draw_start <= ray.draw_end <= WIN_H - 1


def test_camera_x_spans_screen():
    player = Player.from_grid(GRID)
    assert cast_ray(player, GRID, 0, WIN_W, WIN_H).camera_x == -1.0
    assert cast_ray(player, GRID, WIN_W // 2, WIN_W, WIN_H).camera_x == 0.0


def test_nearer_wall_is_taller():
    far = Player.from_grid(GRID)
    near = Player.from_grid(GRID)
    near.y -= 1.0
    assert _center(near, GRID).line_height > _center(far, GRID).line_height


def test_ray_leaving_open_map_stops_outside():
    grid = ["0N0"]
    ray = _center(Player.from_grid(grid), grid)
    assert ray.map_y == -1
    assert ray.side is Side.Y


def test_zero_distance_fills_column():
    grid = ["11111", "11001", "11111"]
    player = Player(x=2.0, y=1.5, dir_x=-1.0, dir_y=0.0, plane_x=0.0, plane_y=-0.66)
    ray = _center(player, grid)
    assert ray.map_x == 1
    assert ray.draw_start == 0
    assert ray.draw_end == WIN_H - 1


def test_face_from_ray_fields():
    ray = Ray(
        camera_x=0.0, dir_x=-0.5, dir_y=0.5, map_x=0, map_y=0, step_x=-1,
        step_y=1, side=Side.Y, wall_dist=1.0, line_height=WIN_H,
        draw_start=0, draw_end=WIN_H - 1,
    )
    assert ray.face() is Face.SO
    ray.side = Side.X
    assert ray.face() is Face.WE