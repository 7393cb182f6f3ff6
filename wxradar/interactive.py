"""Interactive radar viewer state machine: messages, commands, update and view."""

from __future__ import annotations

import copy
import io
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Union

from .radar import Frame, Options, Product
from .render import RenderOptions, TerminalTooSmallError, product_label, render_frame
from .terminal import TermCapability

RADIUS_PRESETS: tuple[float, ...] = (50, 100, 150, 200, 300, 500)

PRODUCTS: tuple[Product, ...] = (
    Product.COMPOSITE_REFLECTIVITY,
    Product.BASE_REFLECTIVITY,
    Product.STORM_RELATIVE_VELOCITY,
    Product.ECHO_TOPS,
)

TICK_INTERVAL = 0.6  # seconds between loop frames
DEFAULT_LOOP_FRAMES = 6
CLEAR_EOL = "\x1b[K"


def next_radius(current: float, delta: int) -> float:
    """Step ``delta`` presets away from the preset closest to ``current``."""
    closest = min(RADIUS_PRESETS, key=lambda r: abs(r - current))
    index = RADIUS_PRESETS.index(closest) + delta
    return RADIUS_PRESETS[max(0, min(index, len(RADIUS_PRESETS) - 1))]


def next_product(current: Product | str) -> Product:
    """Return the product after ``current`` in the cycle, wrapping around."""
    if current in PRODUCTS:
        return PRODUCTS[(PRODUCTS.index(current) + 1) % len(PRODUCTS)]
    return PRODUCTS[0]


# ── Messages ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KeyPress:
    """A key pressed by the user, e.g. "q", "ctrl+c", "left", " "."""

    key: str


@dataclass(frozen=True)
class WindowSize:
    """The terminal was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class FrameLoaded:
    """A single current frame arrived."""

    frame: Frame


@dataclass(frozen=True)
class FramesLoaded:
    """Loop frames arrived, in chronological order."""

    frames: Sequence[Frame]


@dataclass(frozen=True)
class FetchFailed:
    """Fetching radar data failed."""

    error: Exception


@dataclass(frozen=True)
class Tick:
    """Time to advance the loop animation."""


@dataclass(frozen=True)
class Quit:
    """Asks the program loop to stop."""


Message = Union[KeyPress, WindowSize, FrameLoaded, FramesLoaded, FetchFailed, Tick, Quit]
Command = Callable[[], Message]


def _quit() -> Quit:
    return Quit()


def _style(text: str, color: str, bold: bool = False) -> str:
    prefix = "1;" if bold else ""
    return f"\x1b[{prefix}38;5;{color}m{text}\x1b[0m"


# ── Model ────────────────────────────────────────────────────────────────────


@dataclass
class InteractiveConfig:
    """Initial parameters for the interactive radar viewer."""

    loc: Any = None
    provider: Any = None
    cache: Any = None
    product: Product | str = Product.COMPOSITE_REFLECTIVITY
    radius_km: float = 200.0
    term_mode: TermCapability = TermCapability.HALF_BLOCK
    num_frames: int = DEFAULT_LOOP_FRAMES


@dataclass
class InteractiveModel:
    """State of the interactive radar viewer.

    ``update`` never changes the model it is called on; it returns a new
    model together with an optional command to run.
    """

    config: InteractiveConfig
    product: Product | str = field(init=False)
    radius: float = field(init=False)
    loop_mode: bool = field(init=False, default=False)
    paused: bool = field(init=False, default=False)
    frame: Optional[Frame] = field(init=False, default=None)
    frames: list[Frame] = field(init=False, default_factory=list)
    frame_index: int = field(init=False, default=0)
    width: int = field(init=False, default=0)
    height: int = field(init=False, default=0)
    loading: bool = field(init=False, default=False)
    status: str = field(init=False, default="")
    error: Optional[Exception] = field(init=False, default=None)
    quitting: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.product = self.config.product
        self.radius = self.config.radius_km

    def init(self) -> Command:
        """Return the first command: fetch the current frame."""
        return self.fetch_current()

    # ── Update ───────────────────────────────────────────────────────────────

    def update(self, msg: Message) -> tuple[InteractiveModel, Optional[Command]]:
        """Apply ``msg`` and return the new model and the next command, if any."""
        m = copy.copy(self)
        if isinstance(msg, WindowSize):
            m.width, m.height = msg.width, msg.height
            return m, None
        if isinstance(msg, KeyPress):
            return m, m._on_key(msg.key)
        if isinstance(msg, FrameLoaded):
            m.frame = msg.frame
            m.loading, m.status, m.error = False, "", None
            return m, None
        if isinstance(msg, FramesLoaded):
            m.frames = list(msg.frames)
            m.frame_index = 0
            m.loading, m.status, m.error = False, "", None
            return m, m.tick()
        if isinstance(msg, FetchFailed):
            m.error = msg.error
            m.loading, m.status = False, ""
            return m, None
        if isinstance(msg, Tick):
            if not m.loop_mode or not m.frames:
                return m, None
            if not m.paused:
                m.frame_index = (m.frame_index + 1) % len(m.frames)
            return m, m.tick()
        return m, None

    def _fetch(self) -> Command:
        return self.fetch_loop() if self.loop_mode else self.fetch_current()

    def _reload(self, status: str) -> Command:
        self.frames = []
        self.frame = None
        self.loading = True
        self.status = status
        return self._fetch()

    def _on_key(self, key: str) -> Optional[Command]:
        if key in ("q", "ctrl+c"):
            self.quitting = True
            return _quit
        if key == "p":
            self.product = next_product(self.product)
            return self._reload("Switching product…")
        if key in ("+", "="):
            self.radius = next_radius(self.radius, -1)  # smaller radius: zoom in
            return self._reload(f"Zooming in ({self.radius:.0f} km)…")
        if key == "-":
            self.radius = next_radius(self.radius, 1)  # larger radius: zoom out
            return self._reload(f"Zooming out ({self.radius:.0f} km)…")
        if key == "l":
            self.loop_mode = not self.loop_mode
            if self.loop_mode:
                self.loading = True
                self.status = "Fetching loop frames…"
                return self.fetch_loop()
            self.frames = []
            self.frame_index = 0
            if self.frame is None:
                self.loading = True
                self.status = "Fetching current frame…"
                return self.fetch_current()
            return None
        if key == " ":
            if self.loop_mode:
                self.paused = not self.paused
            return None
        if key == "r":
            self.loading = True
            self.status = "Refreshing…"
            return self._fetch()
        if key in ("left", "h", "["):
            if self.loop_mode and self.frames:
                self.frame_index = (self.frame_index - 1) % len(self.frames)
            return None
        if key in ("right", "]"):
            if self.loop_mode and self.frames:
                self.frame_index = (self.frame_index + 1) % len(self.frames)
            return None
        return None

    # ── View ─────────────────────────────────────────────────────────────────

    def view(self) -> str:
        """Return the full screen contents for the current state."""
        if self.quitting:
            return ""
        if not self.width or not self.height:
            return "Initializing…"

        out = io.StringIO()
        render_height = self.height - 1  # one line for the help bar

        if self.loop_mode and self.frames:
            active = self.frames[self.frame_index]
        else:
            active = self.frame

        if self.loading or active is None:
            message = self.status or "Loading…"
            pad_y = render_height // 2
            pad_x = max((self.width - len(message)) // 2, 0)
            out.write("\n" * pad_y)
            out.write(" " * pad_x + message + "\n")
            out.write("\n" * max(render_height - pad_y - 1, 0))
        else:
            options = RenderOptions(
                term_width=self.width,
                term_height=render_height,
                mode=self.config.term_mode,
            )
            name = getattr(self.config.loc, "display_name", "") or ""
            try:
                render_frame(out, active, name, options)
            except TerminalTooSmallError:
                pass

        if self.error is not None:
            out.write(_style(f"Error: {self.error}", "196", bold=True))

        out.write(self.help_bar())
        return out.getvalue()

    def help_bar(self) -> str:
        """Return the one-line key help with current settings."""

        def dim(text: str) -> str:
            return _style(text, "240")

        def key(text: str) -> str:
            return _style(text, "255", bold=True)

        def val(text: str) -> str:
            return _style(text, "244")

        parts = [
            key("p") + dim(":") + val(product_label(self.product)),
            key("+/-") + dim(":") + val(f"{self.radius:.0f}km"),
        ]

        loop_label = "off"
        if self.loop_mode:
            loop_label = (
                f"{self.frame_index + 1}/{len(self.frames)}" if self.frames else "on"
            )
        parts.append(key("l") + dim(":loop ") + val(loop_label))

        if self.loop_mode:
            parts.append(key("←→") + dim(":step"))
            parts.append(key("space") + dim(":play" if self.paused else ":pause"))

        parts.append(key("r") + dim(":refresh"))
        parts.append(key("q") + dim(":quit"))

        return dim("  │  ").join(parts) + CLEAR_EOL

    # ── Commands ─────────────────────────────────────────────────────────────

    def fetch_current(self) -> Command:
        """Return a command fetching the current frame for the present settings."""
        config = self.config
        options = Options(product=self.product, radius_km=self.radius)

        def fetch() -> Message:
            try:
                frame = config.provider.current_frame(config.loc, options, config.cache)
            except Exception as exc:  # shown to the user in the view
                return FetchFailed(exc)
            return FrameLoaded(frame)

        return fetch

    def fetch_loop(self) -> Command:
        """Return a command fetching the loop frames for the present settings."""
        config = self.config
        options = Options(product=self.product, radius_km=self.radius)
        count = config.num_frames if config.num_frames >= 1 else DEFAULT_LOOP_FRAMES

        def fetch() -> Message:
            try:
                frames = config.provider.recent_frames(
                    config.loc, options, count, config.cache
                )
            except Exception as exc:  # shown to the user in the view
                return FetchFailed(exc)
            return FramesLoaded(frames)

        return fetch

    def tick(self) -> Command:
        """Return a command that waits one animation interval and yields Tick."""

        def wait() -> Tick:
            time.sleep(TICK_INTERVAL)
            return Tick()

        return wait