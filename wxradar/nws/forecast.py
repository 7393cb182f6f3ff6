"""Unit handling for NWS forecast periods."""

from __future__ import annotations

KPH_PER_MPH = 1.60934
_UNIT_SUFFIXES = (" mph", " km/h", " knots")


def mph_to_kph(mph: float) -> float:
    """Convert miles per hour to kilometres per hour."""
    return mph * KPH_PER_MPH


def fahrenheit_to_celsius(f: float) -> float:
    """Convert degrees Fahrenheit to degrees Celsius."""
    return (f - 32) * 5 / 9


def parse_wind_kph(text: str) -> float:
    """Return the wind speed in km/h from an NWS string such as "5 to 15 mph".

    Ranges give their upper bound; "Calm", empty and unparsable strings give 0.
    The number is treated as miles per hour.
    """
    s = text.strip().lower()
    if s in ("", "calm"):
        return 0.0
    for suffix in _UNIT_SUFFIXES:
        if s.endswith(suffix):
            s = s[: -len(suffix)]
    _, sep, upper = s.partition(" to ")
    if sep:
        s = upper
    try:
        value = float(s.strip())
    except ValueError:
        return 0.0
    return mph_to_kph(value)