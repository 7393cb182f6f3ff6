# wxradar

A library for fetching US weather radar imagery and drawing it straight into
a terminal, with a few helpers for National Weather Service data.

wxradar knows the CONUS NEXRAD sites and a set of major US cities, picks the
nearest radar site for single-station products, and renders frames either
with Unicode half-block characters in 24-bit colour or, where the terminal
supports it, as a full-resolution inline image (iTerm2 or Kitty protocol).
City names are overlaid on the map in both modes.

## Radar products

`wxradar.radar.Product` lists the products:

| Product value               | `product_label`          | Source                      |
|-----------------------------|--------------------------|-----------------------------|
| `composite-reflectivity`    | Composite Reflectivity   | national mosaic             |
| `base-reflectivity`         | Base Reflectivity        | nearest NEXRAD station      |
| `storm-relative-velocity`   | Storm Rel. Velocity      | nearest NEXRAD station      |
| `echo-tops`                 | Echo Tops                | MRMS echo-tops mosaic       |

```python
from wxradar.radar import Product, default_options, is_station_product
from wxradar.render import product_label

product = Product("base-reflectivity")
product_label(product)        # "Base Reflectivity"
is_station_product(product)   # True
default_options()             # Options(product=COMPOSITE_REFLECTIVITY, radius_km=200.0)
```

## Nearest radar site and cities

```python
from wxradar.radar import BBox
from wxradar.stations import nearest_station, haversine
from wxradar.cities import cities_in_bbox

station = nearest_station(39.1, -94.6)   # KEAX
distance_km = haversine(39.1, -94.6, station.lat, station.lon)

cities_in_bbox(BBox(min_lat=37.3, min_lon=-96.8, max_lat=40.9, max_lon=-92.4))
```

## Terminal detection and rendering

`detect_terminal` inspects an environment mapping (or `os.environ` when none
is given) and returns a `TermCapability`: `KITTY` for Kitty and Ghostty,
`ITERM2` for iTerm2 and WezTerm, `HALF_BLOCK` everywhere else.

```python
import os
import sys
from datetime import datetime, timezone

from PIL import Image

from wxradar.radar import Frame, Product
from wxradar.render import RenderOptions, render_frame
from wxradar.terminal import detect_terminal

frame = Frame(
    image=Image.new("RGBA", (400, 400), (0, 120, 0, 255)),
    valid_time=datetime.now(timezone.utc),
    product=Product.COMPOSITE_REFLECTIVITY,
)
options = RenderOptions(term_width=80, term_height=24, mode=detect_terminal(os.environ))
render_frame(sys.stdout, frame, "Kansas City, MO", options)
```

`render_frame` writes a header line with the location and product badge, the
radar image, and a footer with the frame's valid time in local time. When the
frame has a `bbox`, major cities inside it are labelled. It raises
`TerminalTooSmallError` when the terminal cannot hold a usable image. If the
inline image cannot be sent, it falls back to half-block output.

Lower-level pieces are also available: `scale_image`, `layout_labels` and
`build_label_index` in `wxradar.labels`, `draw_city_labels` in
`wxradar.imgtext`, and `render_inline_image` in `wxradar.inline`.

## Fetching radar frames

`wxradar.nws.radar.RadarProvider` fetches frames for US locations. A location
is any object with `lat`, `lon` and `country_code` attributes (and
`display_name` for the interactive viewer). Importing `wxradar.nws.radar`
registers a provider, after which `wxradar.radar.for_location(loc)` returns it
for US locations and raises `NoProviderError` otherwise.

- `current_frame(loc, options, cache)` returns the latest frame.
- `recent_frames(loc, options, count, cache)` returns up to `count` frames at
  five-minute steps, oldest first, skipping frames that fail to load.
- `lookup_station(station_id, cache)` fetches a NEXRAD site's metadata and
  raises `StationNotFoundError` for unknown sites.

Failures raise `RadarError`. Decoded frames are kept in memory by the
provider. The `cache` argument may be `None`, or any object with
`get(key)` and `set(key, value, ttl)` methods; frames are stored there as
base64 PNG data in plain dictionaries.

## Interactive viewer state

`wxradar.interactive.InteractiveModel` holds the state of an event-driven
radar viewer. Build it from an `InteractiveConfig`, feed it `KeyPress`,
`WindowSize`, `FrameLoaded`, `FramesLoaded`, `FetchFailed` and `Tick`
messages through `update`, which returns a new model and an optional command
(a callable returning the next message, or `Quit`), and draw `view()`. Keys:

- `p` — cycle the radar product
- `+` / `=` and `-` — zoom in or out through 50, 100, 150, 200, 300 and 500 km
- `l` — toggle loop mode
- space — pause or resume the loop
- `left` / `h` / `[` and `right` / `]` — step through loop frames
- `r` — refresh
- `q` / `ctrl+c` — quit

## NWS helpers

```python
from wxradar.nws.forecast import parse_wind_kph, fahrenheit_to_celsius, mph_to_kph
from wxradar.nws.observe import parse_condition_code

parse_wind_kph("5 to 15 mph")   # upper bound, in km/h
fahrenheit_to_celsius(212)      # 100.0
parse_condition_code("https://example.com/icons/land/night/skc")  # "clear-night"
```

`wxradar.nws.client.NWSClient.get(url)` performs a JSON GET request and
raises `NWSError` on transport failures, undecodable bodies and non-200
responses; the error carries the HTTP `status` and the API's problem detail
when one is given.

## What this package does not do

- There is no command-line program; the interactive viewer is a state model
  with no terminal event loop attached.
- No cache store is included; pass your own object or `None`.
- Current conditions, forecasts and alerts are not fetched; only the unit,
  wind and icon-code helpers above are provided.
- Place names and postal codes are not resolved to coordinates; callers
  supply latitude, longitude and country code.