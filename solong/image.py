"""In-memory pixel images and colour conversion for the display depth."""

from __future__ import annotations

from collections.abc import Sequence


class Image:
    """A packed pixel buffer: rows of ``size_line`` bytes, 32-bit aligned.

    ``endian`` is 0 for little-endian pixel storage and 1 for big-endian.
    """

    def __init__(
        self, width: int, height: int, bits_per_pixel: int = 32, endian: int = 0
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        if bits_per_pixel <= 0 or bits_per_pixel % 8:
            raise ValueError(f"unsupported pixel depth {bits_per_pixel}")
        if endian not in (0, 1):
            raise ValueError(f"endian must be 0 or 1, not {endian}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.endian = endian
        self.size_line = ((width * bits_per_pixel + 31) // 32) * 4
        self.data = bytearray(self.size_line * height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def _byteorder(self) -> str:
        return "big" if self.endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), keeping only the bytes that fit a pixel."""
        opp = self.bytes_per_pixel
        start = self._offset(x, y)
        value = color & ((1 << (8 * opp)) - 1)
        self.data[start : start + opp] = value.to_bytes(opp, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the unsigned pixel value stored at (x, y)."""
        opp = self.bytes_per_pixel
        start = self._offset(x, y)
        return int.from_bytes(self.data[start : start + opp], self._byteorder)


def rgb_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (shift, width) for the red, green and blue masks, as six ints."""
    result: list[int] = []
    for mask in (red_mask, green_mask, blue_mask):
        if mask <= 0:
            raise ValueError(f"colour mask must be a positive bit field, not {mask}")
        shift = 0
        while not mask & 1:
            mask >>= 1
            shift += 1
        width = 0
        while mask & 1:
            mask >>= 1
            width += 1
        result.extend((shift, width))
    return tuple(result)


def good_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a display of ``depth`` bits."""
    if depth >= 24:
        return color
    if len(shifts) != 6:
        raise ValueError("shifts must hold six values")
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )