import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from solong import game as g  # noqa: E402
from solong.app import (  # noqa: E402
    PygameCanvas,
    image_to_surface,
    load_sprites,
    main,
    sprite_files,
)
from solong.image import Image  # noqa: E402

RED_XPM = '/* XPM */\nstatic char *x[] = {\n"1 1 1 1",\n"a c #FF0000",\n"a"\n};\n'


def test_sprite_files_cover_every_sprite():
    assert set(sprite_files()) == set(g.SPRITE_NAMES)


def test_sprite_files_names_from_source():
    files = sprite_files()
    assert files[g.FLOOR] == "gr.xpm"
    assert files[g.WALL_N] == "w_ns1.xpm"
    assert files[g.DIGITS[7]] == "d_7.xpm"
    assert files[g.PLAYER_LEFT[0]] == "p_il_1.xpm"


def test_sprite_files_are_distinct_xpm():
    files = list(sprite_files().values())
    assert len(set(files)) == len(files)
    assert all(name.endswith(".xpm") for name in files)


@pytest.mark.parametrize("endian", [0, 1])
def test_image_to_surface_colours_and_transparency(endian):
    image = Image(2, 1, endian=endian)
    image.put_pixel(0, 0, 0x123456)
    image.put_pixel(1, 0, 0xFF000000)
    surface = image_to_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (0x12, 0x34, 0x56, 255)
    assert surface.get_at((1, 0)).a == 0


def test_load_sprites_reads_every_file(tmp_path):
    for filename in sprite_files().values():
        (tmp_path / filename).write_text(RED_XPM)
    sprites = load_sprites(tmp_path)
    assert set(sprites) == set(g.SPRITE_NAMES)
    floor = sprites[g.FLOOR]
    assert floor.get_size() == (1, 1)
    assert tuple(floor.get_at((0, 0))) == (255, 0, 0, 255)


def test_load_sprites_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_sprites(tmp_path)


def test_canvas_blits_sprite():
    target = pygame.Surface((4, 4))
    target.fill((0, 0, 0))
    sprite = pygame.Surface((1, 1))
    sprite.fill((255, 0, 0))
    canvas = PygameCanvas(target, {g.FLOOR: sprite})
    canvas.put(g.FLOOR, 2, 1)
    assert tuple(target.get_at((2, 1)))[:3] == (255, 0, 0)
    assert tuple(target.get_at((0, 0)))[:3] == (0, 0, 0)


def test_canvas_unknown_sprite():
    canvas = PygameCanvas(pygame.Surface((2, 2)), {})
    with pytest.raises(KeyError):
        canvas.put(g.FLOOR, 0, 0)


def test_main_wrong_argument_count(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "Error\nInvalid number of arguments!\n\n"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ber")]) == 0
    assert "File not found!" in capsys.readouterr().out


def test_main_wrong_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text("111\n1P1\n111\n")
    assert main([str(path)]) == 0
    assert "Your map has the wrong format!" in capsys.readouterr().out


def test_main_invalid_map(tmp_path, capsys):
    path = tmp_path / "map.ber"
    path.write_text("1111\n111\n")
    assert main([str(path)]) == 0
    assert "Map is not rectangular!" in capsys.readouterr().out