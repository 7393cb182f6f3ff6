"""Condition codes derived from NWS observation icon URLs."""

from __future__ import annotations

from urllib.parse import urlparse

_CODES: dict[str, str] = {
    **dict.fromkeys(("bkn", "ovc"), "cloudy"),
    **dict.fromkeys(
        ("wind_skc", "wind_few", "wind_sct", "wind_bkn", "wind_ovc"), "wind"
    ),
    **dict.fromkeys(("snow", "blizzard"), "snow"),
    **dict.fromkeys(
        (
            "rain_snow",
            "rain_sleet",
            "snow_sleet",
            "fzra",
            "rain_fzra",
            "snow_fzra",
            "sleet",
        ),
        "sleet",
    ),
    **dict.fromkeys(("rain", "rain_showers", "rain_showers_hi"), "rain"),
    **dict.fromkeys(("tsra", "tsra_sct", "tsra_hi", "tornado"), "thunder"),
    **dict.fromkeys(("dust", "smoke", "haze", "fog"), "fog"),
}

_CLEAR = frozenset({"skc", "hot", "cold"})
_PARTLY_CLOUDY = frozenset({"few", "sct"})


def map_icon_code(code: str, time_of_day: str) -> str:
    """Map an NWS icon code to a normalized condition code, or "" if unknown."""
    suffix = "night" if time_of_day == "night" else "day"
    if code in _CLEAR:
        return f"clear-{suffix}"
    if code in _PARTLY_CLOUDY:
        return f"partly-cloudy-{suffix}"
    return _CODES.get(code, "")


def parse_condition_code(icon_url: str) -> str:
    """Extract a normalized condition code from an NWS icon URL.

    The URL path looks like /icons/land/{day|night}/{code}[,{pct}]; anything
    else gives "".
    """
    try:
        path = urlparse(icon_url).path
    except ValueError:
        return ""
    if not path:
        return ""
    parts = path.strip("/").split("/")
    if len(parts) < 4:
        return ""
    time_of_day, code_field = parts[2], parts[3]
    # Strip the probability suffix: "tsra,40" -> "tsra".
    code = code_field.split(",", 1)[0]
    return map_icon_code(code, time_of_day)