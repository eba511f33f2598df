import pytest

from solong import game
from solong.game import Canvas, Game, Key, animation_frame, move_digits, wall_sprite
from solong.mapcheck import check_map

WIN_MAP = "1111111\n1PC0E01\n1111111\n"
CLOSED_MAP = "1111111\n1PE0C01\n1111111\n"
ENEMY_MAP = "11111\n1PXC1\n1E001\n11111\n"


def make_game(text):
    canvas = Canvas()
    return Game(check_map(text), canvas), canvas


def test_wall_sprite_corners_and_edges():
    assert wall_sprite(0, 0, 3, 7) == game.WALL_NW
    assert wall_sprite(0, 6, 3, 7) == game.WALL_NE
    assert wall_sprite(0, 3, 3, 7) == game.WALL_N
    assert wall_sprite(2, 0, 3, 7) == game.WALL_SW
    assert wall_sprite(2, 6, 3, 7) == game.WALL_SE
    assert wall_sprite(2, 3, 3, 7) == game.WALL_S
    assert wall_sprite(1, 0, 3, 7) == game.WALL_EW
    assert wall_sprite(1, 6, 3, 7) == game.WALL_EW
    assert wall_sprite(1, 3, 3, 7) == game.WALL_T


def test_animation_frame_cycle():
    rate = 8
    frames = [animation_frame(n, rate) for n in range(0, rate * 4 + 1)]
    assert frames == sorted(frames)
    assert set(frames) == {1, 2, 3, 4}
    assert animation_frame(rate, rate) == 1
    assert animation_frame(rate + 1, rate) == 2
    assert animation_frame(rate * 4 + 1, rate) is None


def test_move_digits():
    assert move_digits(0) == (0, 0, 0)
    assert move_digits(123) == (1, 2, 3)
    assert move_digits(999) == (9, 9, 9)


@pytest.mark.parametrize("moves", [-1, 1000])
def test_move_digits_out_of_range(moves):
    with pytest.raises(ValueError):
        move_digits(moves)


def test_canvas_records_draws():
    canvas = Canvas()
    canvas.put(game.FLOOR, 3, 4)
    assert canvas.draws == [(game.FLOOR, 3, 4)]


def test_render_map_draws_every_tile_but_player():
    g, canvas = make_game(WIN_MAP)
    g.render_map()
    assert len(canvas.draws) == g.rows * g.cols - 1
    assert (game.WALL_NW, 0, 0) in canvas.draws
    assert (game.COLLECTIBLE, 2 * game.TILE, game.TILE) in canvas.draws
    assert (game.EXIT_CLOSED, 4 * game.TILE, game.TILE) in canvas.draws
    assert g.exit_pos == (1, 4)


def test_render_map_stocks_enemies():
    g, canvas = make_game(ENEMY_MAP)
    g.render_map()
    assert g.enemies == [(1, 2)]
    assert (game.ENEMY_RISE[0], 2 * game.TILE, game.TILE) in canvas.draws


def test_move_onto_floor(capsys):
    g, canvas = make_game(CLOSED_MAP)
    g.render_map()
    g.handle_key(Key.DOWN)
    assert g.player == (1, 1)
    assert g.moves == 0
    assert "Total moves : 0" in capsys.readouterr().out


def test_closed_exit_blocks_player():
    g, _ = make_game(CLOSED_MAP)
    g.render_map()
    g.handle_key(Key.RIGHT)
    assert g.player == (1, 1)
    assert g.moves == 0
    assert not g.won


def test_collect_then_win(capsys):
    g, canvas = make_game(WIN_MAP)
    g.render_map()
    g.handle_key(Key.D)
    assert g.player == (1, 2)
    assert g.collected == g.total_collectibles
    assert g.exit_open
    assert g.grid[1][2] == "0"
    assert (game.EXIT_OPEN, 4 * game.TILE, game.TILE) in canvas.draws
    assert (game.FLOOR, game.TILE, game.TILE) in canvas.draws
    g.handle_key(Key.RIGHT)
    g.handle_key(Key.RIGHT)
    assert g.won
    assert g.moves == 2
    assert canvas.draws[-1][0] == game.YOU_WON
    assert "YOU WON!" in capsys.readouterr().out
    g.handle_key(Key.LEFT)
    assert g.player == (1, 3)


def test_enemy_kills_player(capsys):
    g, canvas = make_game(ENEMY_MAP)
    g.render_map()
    g.handle_key(Key.RIGHT)
    assert g.dead
    assert g.player == (1, 1)
    assert canvas.draws[-1] == (game.DEATH, game.TILE, game.TILE)
    assert "GAME OVER..." in capsys.readouterr().out
    count = len(canvas.draws)
    g.tick()
    assert len(canvas.draws) == count


def test_left_key_faces_left():
    g, _ = make_game(WIN_MAP)
    g.handle_key(Key.A)
    assert g.facing_left
    assert g.player == (1, 1)


@pytest.mark.parametrize("key", [Key.ESCAPE, Key.QUIT])
def test_quit_keys_stop_game(key):
    g, _ = make_game(WIN_MAP)
    g.handle_key(key)
    assert g.running is False


def test_tick_draws_player_and_sleeping_enemies():
    g, canvas = make_game(ENEMY_MAP)
    g.render_map()
    canvas.draws.clear()
    g.tick()
    assert g.n_loops == 1
    assert canvas.draws == [
        (game.PLAYER_RIGHT[0], game.TILE, game.TILE),
        (game.ENEMY_RISE[0], 2 * game.TILE, game.TILE),
    ]


def test_tick_resets_animation_after_cycle():
    g, canvas = make_game(WIN_MAP)
    g.n_loops = g.RATE * 4
    g.tick()
    assert g.n_loops == 0
    assert canvas.draws[-1][0] == game.PLAYER_RIGHT[0]


def test_render_moves_draws_three_digits():
    g, canvas = make_game(WIN_MAP)
    g.moves = 123
    g.render_moves()
    sprites = [draw[0] for draw in canvas.draws]
    assert sprites == [game.DIGITS[1], game.DIGITS[2], game.DIGITS[3]]
    assert all(draw[2] == g.rows * game.TILE for draw in canvas.draws)
    xs = [draw[1] for draw in canvas.draws]
    assert xs == sorted(xs)