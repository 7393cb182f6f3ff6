"""Drawing radar frames in the terminal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, TextIO

from PIL import Image

from .imgtext import draw_city_labels
from .inline import render_inline_image
from .labels import build_label_index, layout_labels
from .radar import Frame, Product
from .terminal import TermCapability

HEADER_LINES = 2  # location + product line, then a separator
FOOTER_LINES = 1  # timestamp line below the image
MIN_IMAGE_SIZE = 10
CLEAR_EOL = "\x1b[K"

_PRODUCT_LABELS = {
    Product.COMPOSITE_REFLECTIVITY: "Composite Reflectivity",
    Product.BASE_REFLECTIVITY: "Base Reflectivity",
    Product.STORM_RELATIVE_VELOCITY: "Storm Rel. Velocity",
    Product.ECHO_TOPS: "Echo Tops",
}

_PRODUCT_COLORS = {
    Product.BASE_REFLECTIVITY: "51",  # cyan: single tilt, lower atmosphere
    Product.STORM_RELATIVE_VELOCITY: "201",  # magenta: storm-relative motion
    Product.ECHO_TOPS: "208",  # orange: cloud top heights
}
_DEFAULT_PRODUCT_COLOR = "226"  # yellow: composite, full column


@dataclass(frozen=True)
class RenderOptions:
    """How a radar frame is drawn in the terminal."""

    term_width: int
    term_height: int
    mode: TermCapability = TermCapability.HALF_BLOCK


class TerminalTooSmallError(ValueError):
    """Raised when the terminal has no room for a radar image."""


def _style(text: str, color: str, bold: bool = False) -> str:
    prefix = "1;" if bold else ""
    return f"\x1b[{prefix}38;5;{color}m{text}\x1b[0m"


def product_label(product: Product | str) -> str:
    """Return a human-readable name for a radar product."""
    return _PRODUCT_LABELS.get(product, str(product))


def product_color(product: Product | str) -> str:
    """Return the 256-colour palette index used for the product badge."""
    return _PRODUCT_COLORS.get(product, _DEFAULT_PRODUCT_COLOR)


def _opaque(pixel: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
    r, g, b, a = pixel
    if a == 0:
        return (0, 0, 0, 255)
    return (r * a // 255, g * a // 255, b * a // 255, 255)


def scale_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale ``image`` to ``width`` x ``height`` by nearest neighbour.

    The result is opaque RGBA: transparent source pixels become black.
    """
    src = image.convert("RGBA")
    src_w, src_h = src.size
    pixels = src.load()
    dst = Image.new("RGBA", (width, height))
    dst.putdata(
        [
            _opaque(pixels[dx * src_w // width, dy * src_h // height])
            for dy in range(height)
            for dx in range(width)
        ]
    )
    return dst


def _clamp_byte(value: int, minimum: int) -> int:
    return max(minimum, min(value, 255))


def _format_timestamp(moment: datetime) -> str:
    local = moment.astimezone()
    hour = local.hour % 12 or 12
    zone = local.tzname() or ""
    return f"{local:%a %b} {local.day}, {hour}:{local:%M %p} {zone}".rstrip()


def _write_header(out: TextIO, location_name: str, frame: Frame, width: int) -> None:
    badge = "● " + product_label(frame.product)
    gap = max(width - len(location_name) - len(badge), 2)
    out.write(
        _style(location_name, "255", bold=True)
        + " " * gap
        + _style(badge, product_color(frame.product), bold=True)
        + CLEAR_EOL
        + "\n"
    )
    out.write(_style("─" * width, "244") + CLEAR_EOL + "\n")


def _write_footer(out: TextIO, frame: Frame, width: int) -> None:
    stamp = _format_timestamp(frame.valid_time)
    pad = max((width - len(stamp)) // 2, 0)
    out.write(" " * pad + _style(stamp, "244") + CLEAR_EOL + "\n")


def _render_half_block(out: TextIO, frame: Frame, width: int, height: int) -> None:
    scaled = scale_image(frame.image, width, height)
    pixels = scaled.load()
    index = build_label_index(layout_labels(frame.bbox, width, height // 2))

    for y in range(0, height - 1, 2):
        row = y // 2
        cells = []
        for x in range(width):
            bottom = pixels[x, y + 1]
            ch = index.at(row, x)
            if ch is not None:
                # Bright label text on a darkened version of the radar pixel.
                r, g, b = (_clamp_byte(c // 4, 20) for c in bottom[:3])
                cells.append(
                    f"\x1b[1;38;2;255;255;255m\x1b[48;2;{r};{g};{b}m{ch}"
                )
            else:
                top = pixels[x, y]
                cells.append(
                    f"\x1b[38;2;{top[0]};{top[1]};{top[2]}m"
                    f"\x1b[48;2;{bottom[0]};{bottom[1]};{bottom[2]}m▀"
                )
        out.write("".join(cells) + "\x1b[0m" + CLEAR_EOL + "\n")


def render_frame(
    out: Optional[TextIO], frame: Frame, location_name: str, options: RenderOptions
) -> None:
    """Write a radar frame with header and timestamp footer to ``out``.

    Inline-image terminals get the full image with city labels drawn on it;
    otherwise the image is downscaled to half-block characters with city
    labels overlaid. Raises TerminalTooSmallError when there is no room.
    """
    image_rows = options.term_height - HEADER_LINES - FOOTER_LINES
    image_width = options.term_width
    image_height = image_rows * 2
    if image_width < MIN_IMAGE_SIZE or image_height < MIN_IMAGE_SIZE:
        raise TerminalTooSmallError(
            "terminal too small for radar display (need at least "
            f"{MIN_IMAGE_SIZE}×{MIN_IMAGE_SIZE + HEADER_LINES + FOOTER_LINES})"
        )

    _write_header(out, location_name, frame, options.term_width)

    if options.mode in (TermCapability.ITERM2, TermCapability.KITTY):
        labeled = draw_city_labels(frame.image, frame.bbox)
        try:
            render_inline_image(out, labeled, image_width, image_rows, options.mode)
        except (ValueError, OSError):
            _render_half_block(out, frame, image_width, image_height)
    else:
        _render_half_block(out, frame, image_width, image_height)

    _write_footer(out, frame, options.term_width)