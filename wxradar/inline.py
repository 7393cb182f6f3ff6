"""Sending images to terminals through inline image protocols."""

from __future__ import annotations

import base64
import io
from typing import TextIO

from PIL import Image

from .terminal import TermCapability

KITTY_CHUNK_SIZE = 4096


def render_iterm2(out: TextIO, b64: str, cols: int, rows: int) -> None:
    """Write an iTerm2 inline image escape sequence for base64 PNG data."""
    # BEL terminator is more portable than ST.
    out.write(
        f"\x1b]1337;File=inline=1;width={cols};height={rows};"
        f"preserveAspectRatio=0:{b64}\a\n"
    )


def render_kitty(out: TextIO, b64: str, cols: int, rows: int) -> None:
    """Write base64 PNG data as a chunked Kitty graphics protocol transmission."""
    for start in range(0, len(b64), KITTY_CHUNK_SIZE):
        end = start + KITTY_CHUNK_SIZE
        chunk = b64[start:end]
        more = 1 if end < len(b64) else 0
        if start == 0:
            # The first chunk carries the full control payload.
            out.write(f"\x1b_Ga=T,f=100,c={cols},r={rows},m={more};{chunk}\x1b\\")
        else:
            out.write(f"\x1b_Gm={more};{chunk}\x1b\\")
    out.write("\n")


def render_inline_image(
    out: TextIO, image: Image.Image, cols: int, rows: int, mode: TermCapability
) -> None:
    """Encode ``image`` as PNG and send it with the protocol for ``mode``.

    ``cols`` and ``rows`` give the display area in character cells. Raises
    ValueError for modes that have no inline image protocol.
    """
    if mode not in (TermCapability.ITERM2, TermCapability.KITTY):
        raise ValueError("unsupported inline image mode")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    b64 = base64.b64encode(buffer.getvalue()).decode("ascii")

    if mode == TermCapability.ITERM2:
        render_iterm2(out, b64, cols, rows)
    else:
        render_kitty(out, b64, cols, rows)