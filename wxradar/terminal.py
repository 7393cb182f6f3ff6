"""Detection of the terminal's inline image capability."""

from __future__ import annotations

import os
from enum import IntEnum
from typing import Mapping, Optional


class TermCapability(IntEnum):
    """The best image rendering protocol a terminal supports."""

    HALF_BLOCK = 0  # Unicode half-block characters with truecolor
    ITERM2 = 1  # iTerm2 inline image protocol
    KITTY = 2  # Kitty graphics protocol


def detect_terminal(environ: Optional[Mapping[str, str]] = None) -> TermCapability:
    """Return the best rendering protocol the terminal described by ``environ`` supports.

    Reads ``os.environ`` when no mapping is given; unknown terminals fall back
    to half-block rendering.
    """
    env = os.environ if environ is None else environ

    if env.get("TERM", "") == "xterm-kitty" or env.get("KITTY_PID", ""):
        return TermCapability.KITTY

    program = env.get("TERM_PROGRAM", "")
    if program == "ghostty":
        return TermCapability.KITTY
    if program in ("iTerm.app", "WezTerm"):
        return TermCapability.ITERM2

    return TermCapability.HALF_BLOCK