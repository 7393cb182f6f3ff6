import pytest

from wxradar.nws.forecast import fahrenheit_to_celsius, mph_to_kph, parse_wind_kph


@pytest.mark.parametrize(
    "text, want_mph",
    [
        ("10 mph", 10),
        ("5 to 15 mph", 15),
        ("0 mph", 0),
        ("Calm", 0),
        ("calm", 0),
        ("", 0),
        ("25 mph", 25),
        ("10 to 20 mph", 20),
    ],
)
def test_parse_wind_kph(text, want_mph):
    assert parse_wind_kph(text) == pytest.approx(mph_to_kph(want_mph), abs=0.01)


def test_parse_wind_kph_pinned_value():
    assert parse_wind_kph("10 mph") == pytest.approx(16.0934, abs=0.01)


def test_parse_wind_kph_unparsable():
    assert parse_wind_kph("gusty") == 0.0


@pytest.mark.parametrize(
    "f, want_c",
    [(32, 0), (212, 100), (98.6, 37), (-40, -40)],
)
def test_fahrenheit_to_celsius(f, want_c):
    assert fahrenheit_to_celsius(f) == pytest.approx(want_c, abs=0.01)


@pytest.mark.parametrize(
    "mph, want_kph",
    [(0, 0), (1, 1.60934), (60, 96.5604), (100, 160.934)],
)
def test_mph_to_kph(mph, want_kph):
    assert mph_to_kph(mph) == pytest.approx(want_kph, abs=0.01)