from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from PIL import Image

from wxradar.interactive import (
    FetchFailed,
    FrameLoaded,
    FramesLoaded,
    InteractiveConfig,
    InteractiveModel,
    KeyPress,
    Quit,
    Tick,
    WindowSize,
    next_product,
    next_radius,
)
from wxradar.radar import Frame, Product


def _frame(minutes=0):
    return Frame(
        image=Image.new("RGBA", (40, 40), (0, 200, 0, 255)),
        valid_time=datetime(2026, 3, 22, 18, 0, tzinfo=timezone.utc)
        + timedelta(minutes=minutes),
        product=Product.COMPOSITE_REFLECTIVITY,
    )


class FakeProvider:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def current_frame(self, loc, options, cache):
        self.calls.append(("current", options))
        if self.fail:
            raise RuntimeError("boom")
        return _frame()

    def recent_frames(self, loc, options, count, cache):
        self.calls.append(("recent", options, count))
        return [_frame(5 * i) for i in range(count)]


def _model(provider=None, num_frames=6):
    config = InteractiveConfig(
        loc=SimpleNamespace(display_name="Kansas City, MO", country_code="US"),
        provider=provider or FakeProvider(),
        product=Product.COMPOSITE_REFLECTIVITY,
        radius_km=200,
        num_frames=num_frames,
    )
    model, _ = InteractiveModel(config).update(WindowSize(80, 24))
    return model


def _press(model, key):
    return model.update(KeyPress(key))


def test_init_state():
    m = InteractiveModel(InteractiveConfig(product=Product.COMPOSITE_REFLECTIVITY, radius_km=200, num_frames=6))
    assert m.product == Product.COMPOSITE_REFLECTIVITY
    assert m.radius == 200


def test_init_command_fetches_current_frame():
    provider = FakeProvider()
    m = _model(provider)
    msg = m.init()()
    assert isinstance(msg, FrameLoaded)
    assert provider.calls[0][0] == "current"
    assert provider.calls[0][1].radius_km == 200


def test_product_cycle():
    m2, cmd = _press(_model(), "p")
    assert m2.product == Product.BASE_REFLECTIVITY
    assert m2.loading is True
    assert m2.status == "Switching product…"


def test_product_cycle_fetches_new_product():
    provider = FakeProvider()
    m2, cmd = _press(_model(provider), "p")
    cmd()
    assert provider.calls[-1][1].product == Product.BASE_REFLECTIVITY


def test_update_does_not_change_original():
    m = _model()
    _press(m, "p")
    assert m.product == Product.COMPOSITE_REFLECTIVITY


def test_radius_zoom():
    m2, _ = _press(_model(), "+")
    assert m2.radius < 200
    assert m2.status == "Zooming in (150 km)…"
    m3, _ = _press(m2, "-")
    assert m3.radius > m2.radius
    assert m3.status == "Zooming out (200 km)…"


def test_loop_toggle():
    m = _model()
    assert m.loop_mode is False
    m2, _ = _press(m, "l")
    assert m2.loop_mode is True
    m3, _ = _press(m2, "l")
    assert m3.loop_mode is False


def test_loop_command_requests_frames():
    provider = FakeProvider()
    m2, cmd = _press(_model(provider, num_frames=0), "l")
    msg = cmd()
    assert isinstance(msg, FramesLoaded)
    assert provider.calls[-1][2] == 6


def test_quit():
    m2, cmd = _press(_model(), "q")
    assert m2.quitting is True
    assert isinstance(cmd(), Quit)
    assert m2.view() == ""


def test_pause_resume():
    m2, _ = _press(_model(), "l")
    assert m2.loop_mode is True
    assert m2.paused is False
    m3, _ = _press(m2, " ")
    assert m3.paused is True
    m4, _ = _press(m3, " ")
    assert m4.paused is False


def test_space_no_op_outside_loop():
    m2, cmd = _press(_model(), " ")
    assert m2.paused is False
    assert cmd is None


def test_frames_loaded_and_tick_advance():
    m, _ = _press(_model(), "l")
    m, cmd = m.update(FramesLoaded([_frame(0), _frame(5), _frame(10)]))
    assert m.frame_index == 0
    assert m.loading is False
    assert cmd is not None and callable(cmd)
    m, _ = m.update(Tick())
    assert m.frame_index == 1
    m, _ = _press(m, " ")
    m, _ = m.update(Tick())
    assert m.frame_index == 1


def test_step_keys_wrap():
    m, _ = _press(_model(), "l")
    m, _ = m.update(FramesLoaded([_frame(0), _frame(5), _frame(10)]))
    m, _ = _press(m, "left")
    assert m.frame_index == 2
    m, _ = _press(m, "]")
    assert m.frame_index == 0


def test_tick_ignored_outside_loop():
    m, cmd = _model().update(Tick())
    assert cmd is None
    assert m.frame_index == 0


def test_fetch_failure_shown_in_view():
    m = _model(FakeProvider(fail=True))
    msg = m.init()()
    assert isinstance(msg, FetchFailed)
    m2, _ = m.update(msg)
    assert "Error: boom" in m2.view()
    assert m2.loading is False


def test_view_initializing_without_size():
    m = InteractiveModel(InteractiveConfig())
    assert m.view() == "Initializing…"


def test_view_loading_message():
    m2, _ = _press(_model(), "p")
    view = m2.view()
    assert "Switching product…" in view
    assert "▀" not in view


def test_view_with_frame():
    m, _ = _model().update(FrameLoaded(_frame()))
    view = m.view()
    assert "Kansas City, MO" in view
    assert "▀" in view
    assert "refresh" in view


def test_help_bar_contents():
    m = _model()
    bar = m.help_bar()
    assert "Composite Reflectivity" in bar
    assert "200km" in bar
    assert "off" in bar
    assert bar.endswith("\x1b[K")


def test_help_bar_loop_position():
    m, _ = _press(_model(), "l")
    m, _ = m.update(FramesLoaded([_frame(0), _frame(5), _frame(10)]))
    m, _ = m.update(Tick())
    bar = m.help_bar()
    assert "2/3" in bar
    assert ":pause" in bar


@pytest.mark.parametrize(
    "current,delta,expected",
    [(200, -1, 150), (200, 1, 300), (50, -1, 50), (500, 1, 500)],
)
def test_next_radius(current, delta, expected):
    assert next_radius(current, delta) == expected


@pytest.mark.parametrize(
    "current,expected",
    [
        (Product.COMPOSITE_REFLECTIVITY, Product.BASE_REFLECTIVITY),
        (Product.BASE_REFLECTIVITY, Product.STORM_RELATIVE_VELOCITY),
        (Product.STORM_RELATIVE_VELOCITY, Product.ECHO_TOPS),
        (Product.ECHO_TOPS, Product.COMPOSITE_REFLECTIVITY),
        ("unknown", Product.COMPOSITE_REFLECTIVITY),
    ],
)
def test_next_product(current, expected):
    assert next_product(current) == expected