"""Game state, key handling and the drawing of a running map."""

from __future__ import annotations

import enum

from solong.mapcheck import GameMap

TILE = 64
RATE = 8

FLOOR = "floor"
WALL_N = "wall_n"
WALL_S = "wall_s"
WALL_EW = "wall_ew"
WALL_NE = "wall_ne"
WALL_NW = "wall_nw"
WALL_SE = "wall_se"
WALL_SW = "wall_sw"
WALL_T = "wall_t"
EXIT_OPEN = "exit_open"
EXIT_CLOSED = "exit_closed"
COLLECTIBLE = "collectible"
YOU_WON = "you_won"
DEATH = "death"
PLAYER_RIGHT = tuple(f"player_right_{n}" for n in range(1, 5))
PLAYER_LEFT = tuple(f"player_left_{n}" for n in range(1, 5))
ENEMY_RISE = tuple(f"enemy_rise_{n}" for n in range(1, 5))
ENEMY_IDLE = tuple(f"enemy_idle_{n}" for n in range(1, 5))
DIGITS = tuple(f"digit_{n}" for n in range(10))

SPRITE_NAMES = (
    FLOOR, WALL_N, WALL_S, WALL_EW, WALL_NE, WALL_NW, WALL_SE, WALL_SW, WALL_T,
    EXIT_OPEN, EXIT_CLOSED, COLLECTIBLE, YOU_WON, DEATH,
    *PLAYER_RIGHT, *PLAYER_LEFT, *ENEMY_RISE, *ENEMY_IDLE, *DIGITS,
)

_SCREEN_WIDTH = 1920
_SCREEN_HEIGHT = 1024
_ENEMY_WAKE_MOVES = 5


class Key(enum.Enum):
    """Keys the game reacts to."""

    ESCAPE = enum.auto()
    QUIT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    W = enum.auto()
    A = enum.auto()
    S = enum.auto()
    D = enum.auto()


class Canvas:
    """A drawing surface that records every sprite put on it."""

    def __init__(self) -> None:
        self.draws: list[tuple[str, int, int]] = []

    def put(self, sprite: str, x: int, y: int) -> None:
        """Draw ``sprite`` with its top left corner at pixel (x, y)."""
        self.draws.append((sprite, x, y))


def wall_sprite(x: int, y: int, rows: int, cols: int) -> str:
    """Return the wall sprite for the tile at row ``x``, column ``y``."""
    if x == 0:
        if y == 0:
            return WALL_NW
        if y == cols - 1:
            return WALL_NE
        return WALL_N
    if x == rows - 1:
        if y == 0:
            return WALL_SW
        if y == cols - 1:
            return WALL_SE
        return WALL_S
    if y == cols - 1 or y == 0:
        return WALL_EW
    return WALL_T


def animation_frame(n_loops: int, rate: int) -> int | None:
    """Return the frame (1 to 4) shown after ``n_loops`` loops, or None past the cycle."""
    for frame in range(1, 5):
        if n_loops <= rate * frame:
            return frame
    return None


def move_digits(moves: int) -> tuple[int, int, int]:
    """Split a move count into hundreds, tens and units."""
    if not 0 <= moves <= 999:
        raise ValueError(f"move count {moves} cannot be shown in three digits")
    return moves // 100, (moves % 100) // 10, moves % 10


class Game:
    """A map being played: the player, the enemies and what is on screen."""

    RATE = RATE

    def __init__(self, game_map: GameMap, canvas: Canvas) -> None:
        self.canvas = canvas
        self.grid = [list(row) for row in game_map.grid]
        self.rows = game_map.rows
        self.cols = game_map.cols
        self.total_collectibles = game_map.collectibles
        self.player = game_map.player
        self.collected = 0
        self.moves = 0
        self.exit_open = False
        self.exit_pos: tuple[int, int] = (0, 0)
        self.dead = False
        self.won = False
        self.facing_left = False
        self.n_loops = 0
        self.risen = False
        self.enemies: list[tuple[int, int]] = []
        self.running = True

    def _put_tile(self, sprite: str, pos: tuple[int, int]) -> None:
        row, col = pos
        self.canvas.put(sprite, col * TILE, row * TILE)

    def handle_key(self, key: Key) -> None:
        """React to a released key."""
        if key in (Key.ESCAPE, Key.QUIT):
            self.running = False
            return
        if self.dead or self.won:
            return
        row, col = self.player
        if key in (Key.UP, Key.W):
            self.update_player(row - 1, col)
        elif key in (Key.DOWN, Key.S):
            self.update_player(row + 1, col)
        elif key in (Key.LEFT, Key.A):
            self.facing_left = True
            self.update_player(row, col - 1)
        elif key in (Key.RIGHT, Key.D):
            self.facing_left = False
            self.update_player(row, col + 1)

    def update_player(self, x: int, y: int) -> None:
        """Try to move the player onto row ``x``, column ``y``."""
        if self.grid[x][y] == "C":
            self.collected += 1
            self.grid[x][y] = "0"
            if self.collected == self.total_collectibles:
                self.exit_open = True
                self._render_exit(self.exit_pos)
        tile = self.grid[x][y]
        if tile == "E" and self.exit_open:
            self._render_won()
            return
        if tile == "X":
            self._render_death()
            return
        if tile in ("0", "P"):
            self._player_move(x, y)
        print(f"Total moves : {self.moves}")
        self.render_moves()

    def _player_move(self, x: int, y: int) -> None:
        self._put_tile(FLOOR, self.player)
        self.player = (x, y)
        self.moves += 1

    def _render_death(self) -> None:
        self._put_tile(DEATH, self.player)
        self.dead = True
        print("GAME OVER...")

    def _render_won(self) -> None:
        x = -(_SCREEN_WIDTH // 2) + (self.cols // 2) * TILE
        y = -(_SCREEN_HEIGHT // 2) + (self.rows // 2) * TILE
        self.canvas.put(YOU_WON, x, y)
        self.won = True
        print("YOU WON!")

    def _render_exit(self, pos: tuple[int, int]) -> None:
        self.exit_pos = pos
        self._put_tile(EXIT_OPEN if self.exit_open else EXIT_CLOSED, pos)

    def tick(self) -> None:
        """Advance the animations by one loop and redraw the moving sprites."""
        self.n_loops += 1
        if not self.dead and not self.won:
            self._render_player()
            self._update_enemies()

    def _render_player(self) -> None:
        frames = PLAYER_LEFT if self.facing_left else PLAYER_RIGHT
        frame = animation_frame(self.n_loops, self.RATE)
        if frame is None:
            self.n_loops = 0
            frame = animation_frame(self.n_loops, self.RATE)
        self._put_tile(frames[frame - 1], self.player)

    def _update_enemies(self) -> None:
        if self.moves < _ENEMY_WAKE_MOVES:
            for pos in self.enemies:
                self._put_tile(ENEMY_RISE[0], pos)
        elif self.moves > _ENEMY_WAKE_MOVES:
            for pos in self.enemies:
                self._render_enemy_idle(pos)

    def _render_enemy_idle(self, pos: tuple[int, int]) -> None:
        if not self.risen:
            self._render_enemy_rise(pos)
        else:
            frame = animation_frame(self.n_loops, self.RATE)
            if frame is not None:
                self._put_tile(ENEMY_IDLE[frame - 1], pos)
        if self.n_loops > self.RATE * 4:
            self.n_loops = 0
            self._render_enemy_idle(pos)

    def _render_enemy_rise(self, pos: tuple[int, int]) -> None:
        frame = animation_frame(self.n_loops, self.RATE)
        if frame is not None:
            self._put_tile(ENEMY_RISE[frame - 1], pos)
        if self.n_loops >= self.RATE * 4:
            self.risen = True

    def render_map(self) -> None:
        """Draw every fixed tile and note where the enemies stand."""
        self.enemies = []
        for x, row in enumerate(self.grid[: self.rows]):
            for y, tile in enumerate(row[: self.cols]):
                if tile == "0":
                    self._put_tile(FLOOR, (x, y))
                elif tile == "1":
                    self._put_tile(wall_sprite(x, y, self.rows, self.cols), (x, y))
                elif tile == "E":
                    self._render_exit((x, y))
                elif tile == "C":
                    self._put_tile(COLLECTIBLE, (x, y))
                elif tile == "X":
                    self.enemies.append((x, y))
                    self._put_tile(ENEMY_RISE[0], (x, y))

    def render_moves(self) -> None:
        """Draw the move counter below the map."""
        digits = move_digits(min(self.moves, 999))
        centre = (self.cols // 2) * TILE
        y = self.rows * TILE
        for digit, offset in zip(digits, (-96, -32, 32)):
            self.canvas.put(DIGITS[digit], centre + offset, y)