"""Window, sprite loading and the main loop of the game."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from os import PathLike
from pathlib import Path

import pygame

from solong import game as g
from solong.game import Game, Key
from solong.image import Image
from solong.mapcheck import GameMap, MapError, load_map
from solong.xpm import load_xpm

TITLE = "This is SO LONG!"
COUNTER_HEIGHT = 64
FRAMES_PER_SECOND = 60
DEFAULT_ASSET_DIR = "img"

_ALPHA_INVERT = bytes(255 - value for value in range(256))


class PygameCanvas:
    """Draws named sprites onto a pygame surface."""

    def __init__(
        self, surface: pygame.Surface, sprites: Mapping[str, pygame.Surface]
    ) -> None:
        self.surface = surface
        self.sprites = sprites

    def put(self, sprite: str, x: int, y: int) -> None:
        """Blit ``sprite`` with its top left corner at pixel (x, y)."""
        self.surface.blit(self.sprites[sprite], (x, y))


def sprite_files() -> dict[str, str]:
    """Return the file name of every sprite, keyed by sprite name."""
    files = {
        g.WALL_T: "w_t.xpm",
        g.WALL_N: "w_ns1.xpm",
        g.WALL_S: "w_ns2.xpm",
        g.WALL_EW: "w_ew.xpm",
        g.WALL_NE: "w_ne.xpm",
        g.WALL_NW: "w_nw.xpm",
        g.WALL_SE: "w_se.xpm",
        g.WALL_SW: "w_sw.xpm",
        g.FLOOR: "gr.xpm",
        g.EXIT_OPEN: "e_yw.xpm",
        g.EXIT_CLOSED: "e_n.xpm",
        g.COLLECTIBLE: "c_1.xpm",
        g.YOU_WON: "sc_yw_1.xpm",
        g.DEATH: "die.xpm",
    }
    files.update({name: f"d_{n}.xpm" for n, name in enumerate(g.DIGITS)})
    files.update({name: f"p_ir_{n}.xpm" for n, name in enumerate(g.PLAYER_RIGHT, 1)})
    files.update({name: f"p_il_{n}.xpm" for n, name in enumerate(g.PLAYER_LEFT, 1)})
    files.update({name: f"x_r_{n}.xpm" for n, name in enumerate(g.ENEMY_RISE, 1)})
    files.update({name: f"x_i_{n}.xpm" for n, name in enumerate(g.ENEMY_IDLE, 1)})
    return files


def _rgba_bytes(image: Image) -> bytes:
    if image.bits_per_pixel == 32 and image.size_line == image.width * 4:
        data = bytes(image.data)
        if image.endian:
            top, red, green, blue = data[0::4], data[1::4], data[2::4], data[3::4]
        else:
            blue, green, red, top = data[0::4], data[1::4], data[2::4], data[3::4]
        rgba = bytearray(len(data))
        rgba[0::4] = red
        rgba[1::4] = green
        rgba[2::4] = blue
        rgba[3::4] = top.translate(_ALPHA_INVERT)
        return bytes(rgba)
    out = bytearray()
    for y in range(image.height):
        for x in range(image.width):
            value = image.get_pixel(x, y)
            out += bytes(
                (
                    (value >> 16) & 0xFF,
                    (value >> 8) & 0xFF,
                    value & 0xFF,
                    255 - ((value >> 24) & 0xFF),
                )
            )
    return bytes(out)


def image_to_surface(image: Image) -> pygame.Surface:
    """Convert an image to a pygame surface.

    The top byte of a pixel is read as transparency: 0 is opaque, 0xFF clear.
    """
    buffer = _rgba_bytes(image)
    surface = pygame.image.frombuffer(buffer, (image.width, image.height), "RGBA")
    return surface.copy()


def load_sprites(asset_dir: str | PathLike[str]) -> dict[str, pygame.Surface]:
    """Load every sprite from the XPM files in ``asset_dir``."""
    base = Path(asset_dir)
    return {
        name: image_to_surface(load_xpm(base / filename))
        for name, filename in sprite_files().items()
    }


def _key_bindings() -> dict[int, Key]:
    return {
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_q: Key.QUIT,
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_w: Key.W,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
    }


def run(game_map: GameMap, asset_dir: str | PathLike[str]) -> None:
    """Open the window and play ``game_map`` until the player quits."""
    pygame.init()
    try:
        size = (game_map.cols * g.TILE, game_map.rows * g.TILE + COUNTER_HEIGHT)
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(TITLE)
        canvas = PygameCanvas(screen, load_sprites(asset_dir))
        game = Game(game_map, canvas)
        game.render_map()
        game.render_moves()
        bindings = _key_bindings()
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYUP and event.key in bindings:
                    game.handle_key(bindings[event.key])
            if not game.running:
                break
            game.tick()
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the map named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 1:
            raise MapError("Invalid number of arguments!")
        game_map = load_map(args[0])
    except MapError as error:
        print(f"Error\n{error}\n")
        return 0
    run(game_map, DEFAULT_ASSET_DIR)
    return 0


if __name__ == "__main__":
    sys.exit(main())