"""Drawing city markers and names directly onto radar images."""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from PIL import Image

from .cities import cities_in_bbox
from .radar import BBox

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
OUTLINE: Color = (0, 0, 0, 200)

GLYPH_WIDTH = 5
GLYPH_HEIGHT = 7
# On large images a doubled glyph stays readable.
SCALE = 2
DOT_RADIUS = 3

_NEIGHBOURS = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)

# 5x7 bitmap font: each glyph is 7 rows of 5 bits, most significant bit leftmost.
BITMAP_FONT: dict[str, tuple[int, ...]] = {
    " ": (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00),
    ".": (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x04),
    ",": (0x00, 0x00, 0x00, 0x00, 0x00, 0x04, 0x08),
    "-": (0x00, 0x00, 0x00, 0x0E, 0x00, 0x00, 0x00),
    "'": (0x04, 0x04, 0x00, 0x00, 0x00, 0x00, 0x00),
    "A": (0x04, 0x0A, 0x11, 0x11, 0x1F, 0x11, 0x11),
    "B": (0x1E, 0x11, 0x11, 0x1E, 0x11, 0x11, 0x1E),
    "C": (0x0E, 0x11, 0x10, 0x10, 0x10, 0x11, 0x0E),
    "D": (0x1E, 0x11, 0x11, 0x11, 0x11, 0x11, 0x1E),
    "E": (0x1F, 0x10, 0x10, 0x1E, 0x10, 0x10, 0x1F),
    "F": (0x1F, 0x10, 0x10, 0x1E, 0x10, 0x10, 0x10),
    "G": (0x0E, 0x11, 0x10, 0x17, 0x11, 0x11, 0x0F),
    "H": (0x11, 0x11, 0x11, 0x1F, 0x11, 0x11, 0x11),
    "I": (0x0E, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0E),
    "J": (0x07, 0x02, 0x02, 0x02, 0x02, 0x12, 0x0C),
    "K": (0x11, 0x12, 0x14, 0x18, 0x14, 0x12, 0x11),
    "L": (0x10, 0x10, 0x10, 0x10, 0x10, 0x10, 0x1F),
    "M": (0x11, 0x1B, 0x15, 0x15, 0x11, 0x11, 0x11),
    "N": (0x11, 0x19, 0x15, 0x13, 0x11, 0x11, 0x11),
    "O": (0x0E, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E),
    "P": (0x1E, 0x11, 0x11, 0x1E, 0x10, 0x10, 0x10),
    "Q": (0x0E, 0x11, 0x11, 0x11, 0x15, 0x12, 0x0D),
    "R": (0x1E, 0x11, 0x11, 0x1E, 0x14, 0x12, 0x11),
    "S": (0x0E, 0x11, 0x10, 0x0E, 0x01, 0x11, 0x0E),
    "T": (0x1F, 0x04, 0x04, 0x04, 0x04, 0x04, 0x04),
    "U": (0x11, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E),
    "V": (0x11, 0x11, 0x11, 0x11, 0x0A, 0x0A, 0x04),
    "W": (0x11, 0x11, 0x11, 0x15, 0x15, 0x1B, 0x11),
    "X": (0x11, 0x11, 0x0A, 0x04, 0x0A, 0x11, 0x11),
    "Y": (0x11, 0x11, 0x0A, 0x04, 0x04, 0x04, 0x04),
    "Z": (0x1F, 0x01, 0x02, 0x04, 0x08, 0x10, 0x1F),
    "a": (0x00, 0x00, 0x0E, 0x01, 0x0F, 0x11, 0x0F),
    "b": (0x10, 0x10, 0x1E, 0x11, 0x11, 0x11, 0x1E),
    "c": (0x00, 0x00, 0x0E, 0x11, 0x10, 0x11, 0x0E),
    "d": (0x01, 0x01, 0x0F, 0x11, 0x11, 0x11, 0x0F),
    "e": (0x00, 0x00, 0x0E, 0x11, 0x1F, 0x10, 0x0E),
    "f": (0x06, 0x08, 0x1E, 0x08, 0x08, 0x08, 0x08),
    "g": (0x00, 0x00, 0x0F, 0x11, 0x0F, 0x01, 0x0E),
    "h": (0x10, 0x10, 0x1E, 0x11, 0x11, 0x11, 0x11),
    "i": (0x04, 0x00, 0x0C, 0x04, 0x04, 0x04, 0x0E),
    "j": (0x02, 0x00, 0x06, 0x02, 0x02, 0x12, 0x0C),
    "k": (0x10, 0x10, 0x12, 0x14, 0x18, 0x14, 0x12),
    "l": (0x0C, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0E),
    "m": (0x00, 0x00, 0x1A, 0x15, 0x15, 0x11, 0x11),
    "n": (0x00, 0x00, 0x1E, 0x11, 0x11, 0x11, 0x11),
    "o": (0x00, 0x00, 0x0E, 0x11, 0x11, 0x11, 0x0E),
    "p": (0x00, 0x00, 0x1E, 0x11, 0x1E, 0x10, 0x10),
    "q": (0x00, 0x00, 0x0F, 0x11, 0x0F, 0x01, 0x01),
    "r": (0x00, 0x00, 0x16, 0x19, 0x10, 0x10, 0x10),
    "s": (0x00, 0x00, 0x0F, 0x10, 0x0E, 0x01, 0x1E),
    "t": (0x08, 0x08, 0x1E, 0x08, 0x08, 0x08, 0x06),
    "u": (0x00, 0x00, 0x11, 0x11, 0x11, 0x11, 0x0F),
    "v": (0x00, 0x00, 0x11, 0x11, 0x0A, 0x0A, 0x04),
    "w": (0x00, 0x00, 0x11, 0x11, 0x15, 0x15, 0x0A),
    "x": (0x00, 0x00, 0x11, 0x0A, 0x04, 0x0A, 0x11),
    "y": (0x00, 0x00, 0x11, 0x11, 0x0F, 0x01, 0x0E),
    "z": (0x00, 0x00, 0x1F, 0x02, 0x04, 0x08, 0x1F),
    "0": (0x0E, 0x11, 0x13, 0x15, 0x19, 0x11, 0x0E),
    "1": (0x04, 0x0C, 0x04, 0x04, 0x04, 0x04, 0x0E),
    "2": (0x0E, 0x11, 0x01, 0x06, 0x08, 0x10, 0x1F),
    "3": (0x0E, 0x11, 0x01, 0x06, 0x01, 0x11, 0x0E),
    "4": (0x02, 0x06, 0x0A, 0x12, 0x1F, 0x02, 0x02),
    "5": (0x1F, 0x10, 0x1E, 0x01, 0x01, 0x11, 0x0E),
    "6": (0x06, 0x08, 0x10, 0x1E, 0x11, 0x11, 0x0E),
    "7": (0x1F, 0x01, 0x02, 0x04, 0x08, 0x08, 0x08),
    "8": (0x0E, 0x11, 0x11, 0x0E, 0x11, 0x11, 0x0E),
    "9": (0x0E, 0x11, 0x11, 0x0F, 0x01, 0x02, 0x0C),
    "?": (0x0E, 0x11, 0x01, 0x02, 0x04, 0x00, 0x04),
    "!": (0x04, 0x04, 0x04, 0x04, 0x04, 0x00, 0x04),
}


def has_glyph(ch: str) -> bool:
    """Return True if the bitmap font has a glyph for ``ch``."""
    return ch in BITMAP_FONT


def _setter(image: Image.Image) -> Callable[[int, int, Color], None]:
    pixels = image.load()
    width, height = image.size

    def put(x: int, y: int, color: Color) -> None:
        if 0 <= x < width and 0 <= y < height:
            pixels[x, y] = color

    return put


def _lit_cells(glyph: tuple[int, ...]) -> Iterator[tuple[int, int]]:
    for row, bits in enumerate(glyph):
        for col in range(GLYPH_WIDTH):
            if bits & (1 << (GLYPH_WIDTH - 1 - col)):
                yield col, row


def _fill_block(put: Callable[[int, int, Color], None], x: int, y: int, color: Color) -> None:
    for sy in range(SCALE):
        for sx in range(SCALE):
            put(x + sx, y + sy, color)


def draw_dot(
    image: Image.Image, cx: int, cy: int, radius: int, fill: Color, border: Color
) -> None:
    """Draw a filled circle with a one-pixel border at (cx, cy) on an RGBA image."""
    put = _setter(image)
    inner = radius * radius
    outer = (radius + 1) * (radius + 1)
    for dy in range(-radius - 1, radius + 2):
        for dx in range(-radius - 1, radius + 2):
            d2 = dx * dx + dy * dy
            if d2 <= inner:
                put(cx + dx, cy + dy, fill)
            elif d2 <= outer:
                put(cx + dx, cy + dy, border)


def draw_bitmap_text(
    image: Image.Image, x: int, y: int, text: str, fg: Color, outline: Color
) -> None:
    """Render ``text`` with the built-in bitmap font onto an RGBA image.

    Each lit pixel gets a dark outline so the text reads on any background.
    Characters without a glyph are drawn as '?'.
    """
    put = _setter(image)
    cx = x
    for ch in text:
        cells = list(_lit_cells(BITMAP_FONT.get(ch, BITMAP_FONT["?"])))
        for col, row in cells:
            for odx, ody in _NEIGHBOURS:
                _fill_block(put, cx + (col + odx) * SCALE, y + (row + ody) * SCALE, outline)
        for col, row in cells:
            _fill_block(put, cx + col * SCALE, y + row * SCALE, fg)
        cx += (GLYPH_WIDTH + 1) * SCALE


def draw_city_labels(image: Image.Image, bbox: Optional[BBox]) -> Image.Image:
    """Return a copy of ``image`` with city markers and names drawn on it.

    The original image is returned unchanged when there is no extent or no
    city falls inside it.
    """
    if bbox is None:
        return image
    cities = cities_in_bbox(bbox)
    if not cities:
        return image

    lon_span = bbox.max_lon - bbox.min_lon
    lat_span = bbox.max_lat - bbox.min_lat
    if lon_span == 0 or lat_span == 0:
        return image

    dst = image.convert("RGBA")
    width, height = dst.size
    for city in cities:
        px = int((city.lon - bbox.min_lon) / lon_span * width)
        py = int((bbox.max_lat - city.lat) / lat_span * height)
        if not (0 <= px < width and 0 <= py < height):
            continue
        draw_dot(dst, px, py, DOT_RADIUS, WHITE, OUTLINE)
        draw_bitmap_text(dst, px + 6, py - 4, city.name, WHITE, OUTLINE)
    return dst