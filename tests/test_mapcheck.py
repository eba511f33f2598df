import pytest

from solong.mapcheck import (
    GameMap,
    Layout,
    MapError,
    check_map,
    find_player,
    flood_fill,
    load_map,
    scan_layout,
    validate_layout,
)

VALID = "1111111\n1P0C0E1\n1111111\n"


def test_valid_map_is_returned():
    game_map = check_map(VALID)
    assert isinstance(game_map, GameMap)
    assert game_map.grid == [list(row) for row in VALID.split("\n") if row]
    assert game_map.player == (1, 1)
    assert game_map.rows == 3
    assert game_map.cols == 7
    assert game_map.collectibles == 1


def test_map_without_final_newline_is_accepted():
    game_map = check_map(VALID.rstrip("\n"))
    assert game_map.rows == 3
    assert game_map.grid == check_map(VALID).grid


def test_enemies_are_listed_and_crossable():
    game_map = check_map("1111111\n1PXC0E1\n1111111\n")
    assert game_map.enemies == [(1, 2)]


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "Map is empty or has only one column!"),
        ("1\n1\n", "Map is empty or has only one column!"),
        ("1111111\n1P0C0E1\n111111\n", "Map is not rectangular!"),
        ("1111111\n0P0C0E1\n1111111\n", "Map is not surrounded by walls"),
        ("1111111\n1P0C0E0\n1111111\n", "Map is not surrounded by walls"),
        ("1111111\n1P0C0E1\n1110111\n", "Map is not surrounded by walls"),
        ("1111111\n1P0CZE1\n1111111\n", "Unexpected character(s) in map!"),
        ("1111111\n1PPC0E1\n1111111\n", "You cannot play if there is not one player!"),
        ("1111111\n100C0E1\n1111111\n", "You cannot play if there is not one player!"),
        ("1111111\n1P000E1\n1111111\n", "There should be at least one collectible!"),
        ("1111111\n1P0CEE1\n1111111\n", "Invalid number of exits!"),
        ("1111111\n1P0C001\n1111111\n", "Invalid number of exits!"),
        ("111111\n1PC1E1\n111111\n", "There is something wrong with your game path!"),
        ("111111\n1PE1C1\n111111\n", "All collectibles must be accesible!"),
    ],
)
def test_invalid_maps_raise(text, message):
    with pytest.raises(MapError) as info:
        check_map(text)
    assert str(info.value) == message


def test_too_wide_map_is_rejected():
    top = "1" * 31
    middle = "1PCE" + "0" * 26 + "1"
    with pytest.raises(MapError, match="Invalid map size"):
        check_map(f"{top}\n{middle}\n{top}\n")


def test_too_tall_map_is_rejected():
    rows = ["11111", "1PCE1"] + ["10001"] * 14 + ["11111"]
    assert len(rows) > 16
    with pytest.raises(MapError, match="Invalid map size"):
        check_map("\n".join(rows) + "\n")


def test_largest_allowed_map_is_accepted():
    top = "1" * 30
    middle = "1PCE" + "0" * 25 + "1"
    rows = [top, middle] + ["1" + "0" * 28 + "1"] * 13 + [top]
    game_map = check_map("\n".join(rows) + "\n")
    assert (game_map.rows, game_map.cols) == (16, 30)


def test_scan_layout_counts_tiles():
    layout = scan_layout(["1111111\n", "1P0C0E1\n", "1111111\n"])
    assert layout.rows == 3
    assert layout.cols == 7
    assert (layout.players, layout.exits, layout.collectibles) == (1, 1, 1)
    assert layout.bad_walls == layout.bad_chars == layout.bad_row_lengths == 0


def test_scan_layout_flags_bad_shape():
    layout = scan_layout(["11111\n", "1P1\n", "11111\n"])
    assert layout.bad_row_lengths > 0


def test_scan_layout_of_nothing_raises():
    with pytest.raises(MapError):
        scan_layout([])


def test_validate_layout_reports_row_length_first():
    layout = Layout(rows=3, cols=5, bad_row_lengths=1, bad_walls=1, bad_chars=1)
    with pytest.raises(MapError, match="not rectangular"):
        validate_layout(layout)


def test_validate_layout_accepts_good_counts():
    layout = Layout(rows=3, cols=7, exits=1, players=1, collectibles=2)
    validate_layout(layout)
    assert layout.collectibles == 2


def test_find_player():
    assert find_player(["111", "1P1", "111"]) == (1, 1)
    assert find_player(["111", "101", "111"]) is None


def test_flood_fill_stops_at_walls():
    grid = ["11111", "1P1E1", "11111"]
    reached = flood_fill(grid, (1, 1))
    assert reached == {(1, 1)}
    assert (1, 3) not in reached


def test_flood_fill_reaches_open_area():
    grid = ["11111", "1P0E1", "1C001", "11111"]
    reached = flood_fill(grid, (1, 1))
    assert {(1, 3), (2, 1)} <= reached
    assert all(grid[x][y] != "1" for x, y in reached)


def test_flood_fill_does_not_modify_grid():
    grid = [list("1111"), list("1P01"), list("1111")]
    before = [row[:] for row in grid]
    flood_fill(grid, (1, 1))
    assert grid == before


def test_load_map_reads_file(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text(VALID)
    game_map = load_map(path)
    assert game_map.player == (1, 1)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(MapError) as info:
        load_map(tmp_path / "missing.ber")
    assert str(info.value) == "File not found!"


def test_load_map_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(VALID)
    with pytest.raises(MapError) as info:
        load_map(path)
    assert str(info.value) == "Your map has the wrong format!"