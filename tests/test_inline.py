import base64
import io

import pytest
from PIL import Image

from wxradar.inline import render_inline_image, render_iterm2, render_kitty
from wxradar.terminal import TermCapability


def solid_image(width=4, height=4):
    return Image.new("RGBA", (width, height), (0, 200, 0, 255))


def test_render_inline_image_iterm2():
    out = io.StringIO()
    render_inline_image(out, solid_image(), 80, 20, TermCapability.ITERM2)
    text = out.getvalue()
    assert "\x1b]1337;File=" in text
    assert "inline=1" in text
    assert "width=80;height=20" in text


def test_render_inline_image_iterm2_round_trip():
    out = io.StringIO()
    render_inline_image(out, solid_image(), 80, 20, TermCapability.ITERM2)
    text = out.getvalue()
    payload = text.split(":", 1)[1].split("\a", 1)[0]
    decoded = Image.open(io.BytesIO(base64.b64decode(payload)))
    assert decoded.size == (4, 4)
    assert decoded.convert("RGBA").getpixel((1, 1)) == (0, 200, 0, 255)


def test_render_inline_image_kitty():
    out = io.StringIO()
    render_inline_image(out, solid_image(), 80, 20, TermCapability.KITTY)
    text = out.getvalue()
    assert "\x1b_Ga=T,f=100" in text
    assert "c=80,r=20,m=0;" in text
    assert text.endswith("\x1b\\\n")


def test_render_inline_image_unsupported_mode():
    out = io.StringIO()
    with pytest.raises(ValueError):
        render_inline_image(out, solid_image(), 80, 20, TermCapability.HALF_BLOCK)
    assert out.getvalue() == ""


def test_render_iterm2_exact():
    out = io.StringIO()
    render_iterm2(out, "QUJD", 10, 5)
    assert out.getvalue() == (
        "\x1b]1337;File=inline=1;width=10;height=5;preserveAspectRatio=0:QUJD\a\n"
    )


def test_render_kitty_single_chunk():
    out = io.StringIO()
    render_kitty(out, "QUJD", 10, 5)
    assert out.getvalue() == "\x1b_Ga=T,f=100,c=10,r=5,m=0;QUJD\x1b\\\n"


def test_render_kitty_multiple_chunks():
    data = "A" * 4096 + "B" * 10
    out = io.StringIO()
    render_kitty(out, data, 10, 5)
    assert out.getvalue() == (
        "\x1b_Ga=T,f=100,c=10,r=5,m=1;" + "A" * 4096 + "\x1b\\"
        "\x1b_Gm=0;" + "B" * 10 + "\x1b\\\n"
    )


def test_render_kitty_exact_chunk_boundary():
    data = "C" * 4096
    out = io.StringIO()
    render_kitty(out, data, 1, 1)
    assert out.getvalue() == "\x1b_Ga=T,f=100,c=1,r=1,m=0;" + data + "\x1b\\\n"


def test_render_kitty_empty_payload():
    out = io.StringIO()
    render_kitty(out, "", 1, 1)
    assert out.getvalue() == "\n"