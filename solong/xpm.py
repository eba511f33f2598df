"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from os import PathLike

from solong.colors import parse_color
from solong.image import Image

_TRANSPARENT = 0xFF000000
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def find(text: str, needle: str) -> int:
    """Return the index of the first ``needle`` in ``text``, or -1."""
    if len(needle) > len(text):
        return -1
    return text.find(needle)


def find_unquoted(text: str, needle: str) -> int:
    """Return the index of the first ``needle`` outside double quotes, or -1."""
    size = len(needle)
    if size > len(text):
        return -1
    quoted = False
    for pos in range(len(text) - size + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def _blank(chars: list[str], start: int, count: int) -> None:
    end = min(len(chars), start + max(count, 0))
    chars[start:end] = " " * (end - start)


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings with spaces.

    The result has the same length as ``text``; a line comment is blanked
    together with the newline that ends it.
    """
    chars = list(text)
    while (begin := find_unquoted("".join(chars), "/*")) != -1:
        end = find("".join(chars[begin + 2 :]), "*/")
        _blank(chars, begin, end + 4)
    while (begin := find_unquoted("".join(chars), "//")) != -1:
        end = find("".join(chars[begin + 2 :]), "\n")
        _blank(chars, begin, end + 3)
    return "".join(chars)


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in ``text``."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1 : closing]
        pos = closing + 1


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError(f"missing {what}")
    return line


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM lines: header, colour table, then pixel rows."""
    it = iter(lines)
    header = split_words(_next_line(it, "header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"invalid header values {header[:4]}")

    # Short keys index a direct table where later entries overwrite earlier
    # ones; longer keys are searched and the first entry read wins.
    later_wins = cpp <= 2
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(it, "colour entry")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour entry without a 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour entry without a colour: {line!r}")
        end = words[index + 1] if index + 1 < len(words) else None
        value = parse_color(words[index], end)
        key = line[:cpp]
        if later_wins:
            colors[key] = value
        else:
            colors.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = _next_line(it, "pixel row")
        for x in range(width):
            color = colors.get(line[cpp * x : cpp * (x + 1)], 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def load_xpm(path: str | PathLike[str]) -> Image:
    """Read an XPM file and return its image."""
    with open(path, encoding="latin-1") as handle:
        text = handle.read()
    return parse_xpm(quoted_lines(strip_comments(text)))