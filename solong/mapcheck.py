"""Reading and validating ``.ber`` maps."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike

ALLOWED_TILES = "01CPEX\n"
MAX_COLS = 30
MAX_ROWS = 16


class MapError(Exception):
    """Raised when a map cannot be played; the message says why."""


@dataclass
class Layout:
    """Counts gathered while reading a map line by line."""

    rows: int = 0
    cols: int = 0
    exits: int = 0
    players: int = 0
    enemies: int = 0
    collectibles: int = 0
    floors: int = 0
    bad_row_lengths: int = 0
    bad_walls: int = 0
    bad_chars: int = 0


@dataclass
class GameMap:
    """A validated map: its tiles, its counts and where the player starts."""

    grid: list[list[str]]
    layout: Layout
    player: tuple[int, int]
    enemies: list[tuple[int, int]] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return self.layout.rows

    @property
    def cols(self) -> int:
        return self.layout.cols

    @property
    def collectibles(self) -> int:
        return self.layout.collectibles


def _at(line: str, index: int) -> str:
    return line[index] if 0 <= index < len(line) else ""


def _check_line(layout: Layout, line: str, last: bool) -> None:
    length = len(line)
    if not layout.cols:
        layout.cols = length - 1
        if line.count("1") != length - 1:
            layout.bad_walls += 1
    has_newline = "\n" in line
    if layout.cols and (
        (has_newline and layout.cols != length - 1)
        or (not has_newline and layout.cols != length)
    ):
        layout.bad_row_lengths += 1
    if (
        _at(line, 0) != "1"
        or _at(line, length - 2) != "1"
        or (last and line.count("1") != layout.cols)
    ):
        layout.bad_walls += 1
    layout.exits += line.count("E")
    layout.players += line.count("P")
    layout.enemies += line.count("X")
    layout.collectibles += line.count("C")
    layout.floors += line.count("0")
    layout.bad_chars += sum(1 for char in line if char not in ALLOWED_TILES)


def scan_layout(lines: Iterable[str]) -> Layout:
    """Count tiles and shape faults in ``lines``, each ending with its newline.

    The last line is examined a second time as the bottom wall.
    """
    layout = Layout()
    last: str | None = None
    for line in lines:
        _check_line(layout, line, last=False)
        last = line
        layout.rows += 1
    if not layout.cols or last is None:
        raise MapError("Map is empty or has only one column!")
    _check_line(layout, last, last=True)
    return layout


def validate_layout(layout: Layout) -> None:
    """Raise MapError for the first fault found in ``layout``."""
    if layout.bad_row_lengths:
        raise MapError("Map is not rectangular!")
    if layout.bad_walls:
        raise MapError("Map is not surrounded by walls")
    if layout.bad_chars:
        raise MapError("Unexpected character(s) in map!")
    if layout.players != 1:
        raise MapError("You cannot play if there is not one player!")
    if layout.collectibles < 1:
        raise MapError("There should be at least one collectible!")
    if layout.exits != 1:
        raise MapError("Invalid number of exits!")
    if layout.cols > MAX_COLS or layout.rows > MAX_ROWS:
        raise MapError("Invalid map size: 1920x1024 px or 30x16 lines max")


def find_player(grid: list[list[str]] | list[str]) -> tuple[int, int] | None:
    """Return (row, column) of the player, scanning column by column, or None."""
    found: tuple[int, int] | None = None
    cols = max((len(row) for row in grid), default=0)
    for y in range(cols):
        for x, row in enumerate(grid):
            if y < len(row) and row[y] == "P":
                found = (x, y)
    return found


def flood_fill(
    grid: list[list[str]] | list[str], start: tuple[int, int]
) -> set[tuple[int, int]]:
    """Return every (row, column) reachable from ``start`` without crossing walls."""
    reached: set[tuple[int, int]] = set()
    stack = [start]
    while stack:
        x, y = stack.pop()
        if (x, y) in reached:
            continue
        if not (0 <= x < len(grid) and 0 <= y < len(grid[x])):
            continue
        if grid[x][y] == "1":
            continue
        reached.add((x, y))
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    return reached


def _split_lines(text: str) -> Iterator[str]:
    parts = text.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


def check_map(text: str) -> GameMap:
    """Validate the map held in ``text`` and return it ready to play."""
    layout = scan_layout(_split_lines(text))
    validate_layout(layout)
    grid = [list(row) for row in text.split("\n") if row]
    player = find_player(grid)
    if player is None:
        raise MapError("You cannot play if there is not one player!")
    reached = flood_fill(grid, player)
    exits = sum(1 for x, y in reached if grid[x][y] == "E")
    collectibles = sum(1 for x, y in reached if grid[x][y] == "C")
    if exits != layout.exits:
        raise MapError("There is something wrong with your game path!")
    if collectibles != layout.collectibles:
        raise MapError("All collectibles must be accesible!")
    enemies = [
        (x, y)
        for x, row in enumerate(grid)
        for y, tile in enumerate(row)
        if tile == "X"
    ]
    return GameMap(grid=grid, layout=layout, player=player, enemies=enemies)


def load_map(path: str | PathLike[str]) -> GameMap:
    """Read and validate the ``.ber`` map file at ``path``."""
    try:
        handle = open(path, encoding="latin-1", newline="")
    except OSError as error:
        raise MapError("File not found!") from error
    with handle:
        if not str(path).endswith(".ber"):
            raise MapError("Your map has the wrong format!")
        text = handle.read()
    return check_map(text)