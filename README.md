# solong

A small tile-based puzzle game. Walk the player around a map, pick up every
collectible, keep away from the enemies and step onto the exit once it opens.

## Installing

```
pip install .
```

## Playing

```
solong path/to/level.ber
```

Move with the arrow keys or `W`, `A`, `S`, `D`; a move happens when the key is
released. Press `Esc` or `Q`, or close the window, to quit.

- Stepping onto a collectible picks it up. Once all of them are collected the
  exit opens.
- Stepping onto the open exit wins the game; stepping onto an enemy ends it.
  After either, movement keys are ignored until you quit.
- The number of moves is printed to the terminal after each move and drawn
  below the map (three digits).

## Sprites

The package ships no images. Sprites are XPM files read from an `img/`
directory relative to where you run the game, and every one must be present.
`solong.app.sprite_files()` returns the full list of file names expected,
keyed by sprite name (for example `gr.xpm` for the floor, `w_t.xpm` for inner
walls, `d_0.xpm` to `d_9.xpm` for the move counter, `p_ir_1.xpm` to
`p_ir_4.xpm` for the player facing right). Tiles are 64 by 64 pixels.

## Map files

A map is a plain-text file whose name ends in `.ber`. Each line is one row of
tiles:

| Character | Meaning         |
|-----------|-----------------|
| `1`       | wall            |
| `0`       | floor           |
| `P`       | player start    |
| `C`       | collectible     |
| `E`       | exit            |
| `X`       | enemy           |

A map is accepted only if:

- it is rectangular and closed in by walls on every side;
- it uses no other characters;
- it holds exactly one player, at least one collectible and exactly one exit;
- it is at most 30 columns wide and 16 rows tall;
- the exit and every collectible can be reached from the player.

If the file cannot be opened, its name does not end in `.ber`, or any rule is
broken, the game prints `Error` and the reason, then stops without opening a
window.

Example:

```
1111111111
1P0C00X0E1
1111111111
```

## Using it as a library

- `solong.mapcheck.load_map(path)` reads and checks a map file and returns a
  `GameMap`; `solong.mapcheck.check_map(text)` does the same for map text.
  Both raise `MapError` with the reason on a bad map.
- `solong.game.Game` holds the state of a map being played. It draws onto any
  object with a `put(sprite, x, y)` method; `solong.game.Canvas` simply records
  the calls, which makes it easy to drive a game without a window.
- `solong.xpm.load_xpm(path)` reads an XPM file into a `solong.image.Image`;
  `solong.xpm.parse_xpm(lines)` does the same from the quoted lines of XPM
  data and raises `XpmError` on bad input.
- `solong.colors.lookup_color(name)` turns an X11 colour name into its RGB
  value (or `None`), and `solong.colors.parse_color` reads an XPM colour
  specification such as `#ff8800` or `red`.
- `solong.app.run(game_map, asset_dir)` opens a pygame window and plays a
  checked map with sprites from `asset_dir`.