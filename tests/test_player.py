import math

import pytest

from cubraycast.player import PLANE_LENGTH, ROT_SPEED, STEP_SIZE, Player

GRID = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


def _grid_with(ch):
    return [row.replace("N", ch) for row in GRID]


def test_from_grid_north():
    player = Player.from_grid(GRID)
    assert (player.x, player.y) == (2.5, 2.5)
    assert (player.dir_x, player.dir_y) == (0.0, -1.0)
    assert player.plane_x == pytest.approx(PLANE_LENGTH)
    assert player.plane_y == pytest.approx(0.0)


@pytest.mark.parametrize(
    "ch, direction, plane",
    [
        ("S", (0.0, 1.0), (-PLANE_LENGTH, 0.0)),
        ("E", (1.0, 0.0), (0.0, PLANE_LENGTH)),
        ("W", (-1.0, 0.0), (0.0, -PLANE_LENGTH)),
    ],
)
def test_from_grid_directions(ch, direction, plane):
    player = Player.from_grid(_grid_with(ch))
    assert (player.dir_x, player.dir_y) == direction
    assert player.plane_x == pytest.approx(plane[0])
    assert player.plane_y == pytest.approx(plane[1])


def test_from_grid_without_player_raises():
    with pytest.raises(ValueError):
        Player.from_grid(_grid_with("0"))


def test_move_forward_steps_along_direction():
    player = Player.from_grid(GRID)
    assert player.move_forward(GRID)
    assert player.x == pytest.approx(2.5)
    assert player.y == pytest.approx(2.5 - STEP_SIZE)


def test_forward_then_backward_returns():
    player = Player.from_grid(GRID)
    player.move_forward(GRID)
    player.move_backward(GRID)
    assert player.x == pytest.approx(2.5)
    assert player.y == pytest.approx(2.5)


def test_move_into_wall_is_blocked():
    player = Player(x=2.5, y=1.02, dir_x=0.0, dir_y=-1.0, plane_x=PLANE_LENGTH)
    assert not player.move_forward(GRID)
    assert (player.x, player.y) == (2.5, 1.02)


def test_move_out_of_bounds_is_blocked():
    grid = ["N"]
    player = Player(x=0.5, y=0.02, dir_x=0.0, dir_y=-1.0)
    assert not player.move_forward(grid)
    assert player.y == 0.02


def test_strafe_is_perpendicular_and_reversible():
    player = Player.from_grid(GRID)
    player.strafe_left(GRID)
    dx, dy = player.x - 2.5, player.y - 2.5
    assert dx * player.dir_x + dy * player.dir_y == pytest.approx(0.0)
    assert math.hypot(dx, dy) == pytest.approx(STEP_SIZE)
    player.strafe_right(GRID)
    assert player.x == pytest.approx(2.5)
    assert player.y == pytest.approx(2.5)


def test_rotation_preserves_lengths_and_orthogonality():
    player = Player.from_grid(GRID)
    for _ in range(10):
        player.rotate_right()
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(PLANE_LENGTH)
    assert player.dir_x * player.plane_x + player.dir_y * player.plane_y == pytest.approx(0.0)


def test_rotate_left_undoes_rotate_right():
    player = Player.from_grid(GRID)
    player.rotate_right()
    player.rotate_left()
    assert player.dir_x == pytest.approx(0.0)
    assert player.dir_y == pytest.approx(-1.0)
    assert player.plane_x == pytest.approx(PLANE_LENGTH)


def test_rotate_right_angle():
    player = Player.from_grid(GRID)
    player.rotate_right()
    assert player.dir_x == pytest.approx(math.sin(ROT_SPEED))
    assert player.dir_y == pytest.approx(-math.cos(ROT_SPEED))