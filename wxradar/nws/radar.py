"""Radar imagery from the IEM radmap service and the NWS MRMS WMS."""

from __future__ import annotations

import base64
import io
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional, Protocol

import requests
from PIL import Image, UnidentifiedImageError

from ..radar import BBox, Frame, Options, Product, Station, is_station_product, register
from ..stations import nearest_station

RADAR_WMS_BASE = "https://opengeo.ncep.noaa.gov/geoserver/conus/ows"
# IEM radmap has a clean timestamp API, used for current and loop frames.
IEM_RADMAP_BASE = "https://mesonet.agron.iastate.edu/GIS/radmap.php"
# Used for NEXRAD station metadata lookups.
NWS_API_BASE = "https://api.weather.gov"

USER_AGENT = "wxradar/1.0"
IMAGE_SIZE = "1600"
DEFAULT_TIMEOUT = 30.0
MAX_CONCURRENT_FETCHES = 3

# MRMS update cadence (about 2 minutes, rounded up).
FRAME_INTERVAL = timedelta(minutes=5)
# How long the most recent frame stays cached.
CURRENT_FRAME_TTL = 5 * 60.0
# Past frames never change, so they are kept much longer.
HISTORICAL_FRAME_TTL = 24 * 60 * 60.0
STATION_TTL = 24 * 60 * 60.0

# Product -> NWS MRMS WMS layer name.
NWS_WMS_LAYERS: dict[Product, str] = {
    Product.COMPOSITE_REFLECTIVITY: "conus_cref_qcd",
    Product.BASE_REFLECTIVITY: "conus_bref_qcd",
    Product.ECHO_TOPS: "conus_neet_v18",
}

# Product -> IEM radmap product code. Echo tops is listed only so the
# product validates; its data comes from the WMS.
IEM_PRODUCTS: dict[Product, str] = {
    Product.COMPOSITE_REFLECTIVITY: "N0Q",
    Product.BASE_REFLECTIVITY: "N0B",
    Product.STORM_RELATIVE_VELOCITY: "N0S",
    Product.ECHO_TOPS: "NET",
}

_OVERLAY_LAYERS = ("usstates", "uscounties", "places", "interstates")


class RadarError(Exception):
    """Raised when radar imagery or station metadata cannot be fetched."""


class StationNotFoundError(RadarError, LookupError):
    """Raised when the NWS does not know a radar station."""


class _Cache(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any, ttl: float) -> None: ...


def bounding_box(lat: float, lon: float, radius_km: float) -> BBox:
    """Return the box extending ``radius_km`` km around (lat, lon)."""
    d_lat = radius_km / 111.0
    d_lon = radius_km / (111.0 * math.cos(math.radians(lat)))
    return BBox(
        min_lat=lat - d_lat,
        min_lon=lon - d_lon,
        max_lat=lat + d_lat,
        max_lon=lon + d_lon,
    )


def ridge_station_code(station_id: str) -> str:
    """Convert a 4-letter NEXRAD id such as "KEAX" to the 3-letter RIDGE code."""
    if len(station_id) == 4 and station_id[0] in "KPT":
        return station_id[1:]
    return station_id


def composite_over(background: Image.Image, foreground: Image.Image) -> Image.Image:
    """Alpha-composite ``foreground`` over ``background``, keeping the background's size."""
    bg = background.convert("RGBA")
    fg = foreground.convert("RGBA")
    if fg.size != bg.size:
        canvas = Image.new("RGBA", bg.size, (0, 0, 0, 0))
        canvas.paste(fg, (0, 0))
        fg = canvas
    return Image.alpha_composite(bg, fg)


def _is_wms_composite(product: Product | str) -> bool:
    return product == Product.ECHO_TOPS


def _now_slot() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(minute=now.minute - now.minute % 5, second=0, microsecond=0)


def _rfc3339(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _iem_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y%m%d%H%M")


def _as_product(value: str) -> Product | str:
    try:
        return Product(value)
    except ValueError:
        return value


def _cache_get(cache: Optional[_Cache], key: str) -> Any:
    if cache is None:
        return None
    return cache.get(key)


def _cache_set(cache: Optional[_Cache], key: str, value: Any, ttl: float) -> None:
    if cache is None:
        return
    try:
        cache.set(key, value, ttl)
    except (OSError, TypeError, ValueError):
        pass  # best effort: a miss next time is harmless


@dataclass
class _Entry:
    frame: Frame
    expires_at: Optional[float]


class RadarProvider:
    """Radar provider for US locations backed by IEM radmap and the NWS WMS.

    Frames are cached in process (decoded) and in the given cache (as PNG).
    """

    def __init__(
        self,
        wms_base: str = RADAR_WMS_BASE,
        iem_base: str = IEM_RADMAP_BASE,
        nws_api_base: str = NWS_API_BASE,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.wms_base = wms_base
        self.iem_base = iem_base
        self.nws_api_base = nws_api_base
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self._lock = threading.Lock()
        self._frames: dict[str, _Entry] = {}

    def name(self) -> str:
        """Return the provider's short identifier."""
        return "nws-radar"

    def supports(self, loc: Any) -> bool:
        """Return True for US locations."""
        return getattr(loc, "country_code", "") == "US"

    # ── in-process cache ────────────────────────────────────────────────────

    def _memory_get(self, key: str) -> Optional[Frame]:
        with self._lock:
            entry = self._frames.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and time.monotonic() > entry.expires_at:
            return None
        return entry.frame

    def _memory_set(self, key: str, frame: Frame, ttl: float) -> None:
        expires = time.monotonic() + ttl if ttl > 0 else None
        with self._lock:
            self._frames[key] = _Entry(frame, expires)

    # ── persistent cache ────────────────────────────────────────────────────

    @staticmethod
    def _disk_get(cache: Optional[_Cache], key: str) -> Optional[Frame]:
        stored = _cache_get(cache, key)
        if not isinstance(stored, dict):
            return None
        try:
            image = Image.open(io.BytesIO(base64.b64decode(stored["png"])))
            image.load()
            valid_time = datetime.fromisoformat(stored["valid_time"])
            product = _as_product(stored["product"])
        except (KeyError, TypeError, ValueError, OSError, UnidentifiedImageError):
            return None
        corners = [float(stored.get(k, 0.0)) for k in ("min_lat", "min_lon", "max_lat", "max_lon")]
        bbox = BBox(*corners) if any(corners) else None
        return Frame(image=image, valid_time=valid_time, product=product, bbox=bbox)

    @staticmethod
    def _disk_set(cache: Optional[_Cache], key: str, frame: Frame, ttl: float) -> None:
        if cache is None:
            return
        buffer = io.BytesIO()
        try:
            frame.image.save(buffer, format="PNG")
        except (OSError, ValueError):
            return
        stored: dict[str, Any] = {
            "png": base64.b64encode(buffer.getvalue()).decode("ascii"),
            "valid_time": frame.valid_time.isoformat(),
            "product": str(frame.product),
        }
        if frame.bbox is not None:
            stored.update(
                min_lat=frame.bbox.min_lat,
                min_lon=frame.bbox.min_lon,
                max_lat=frame.bbox.max_lat,
                max_lon=frame.bbox.max_lon,
            )
        _cache_set(cache, key, stored, ttl)

    # ── request building ────────────────────────────────────────────────────

    @staticmethod
    def _radmap_params(loc: Any, options: Options, bbox: BBox, ts: datetime) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if _is_wms_composite(options.product):
            pass  # radar data comes from the WMS; radmap gives only the map
        elif is_station_product(options.product):
            station = nearest_station(loc.lat, loc.lon)
            params += [
                ("layers[]", "ridge"),
                ("ridge_radar", ridge_station_code(station.id)),
                ("ridge_product", IEM_PRODUCTS[options.product]),
            ]
        else:
            params.append(("layers[]", "nexrad"))
        params += [("layers[]", layer) for layer in _OVERLAY_LAYERS]
        params += [
            ("width", IMAGE_SIZE),
            ("height", IMAGE_SIZE),
            ("bbox", f"{bbox.min_lon:.6f},{bbox.min_lat:.6f},{bbox.max_lon:.6f},{bbox.max_lat:.6f}"),
            ("fmt", "png"),
            ("ts", _iem_timestamp(ts)),
        ]
        return params

    def _fetch_image(self, url: str, params: Any) -> tuple[Image.Image, Optional[datetime]]:
        try:
            response = self.session.get(
                url, params=params, headers={"User-Agent": USER_AGENT}, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise RadarError(str(exc)) from exc
        with response:
            if response.status_code != 200:
                raise RadarError(f"HTTP {response.status_code}")
            try:
                image = Image.open(io.BytesIO(response.content))
                image.load()
            except (OSError, UnidentifiedImageError) as exc:
                raise RadarError(f"decode image: {exc}") from exc
            valid_time = None
            last_modified = response.headers.get("Last-Modified")
            if last_modified:
                try:
                    valid_time = parsedate_to_datetime(last_modified)
                except (TypeError, ValueError):
                    valid_time = None
        return image, valid_time

    def _fetch_wms(self, layer: str, bbox: BBox, time_str: str) -> tuple[Image.Image, datetime]:
        params = {
            "SERVICE": "WMS",
            "VERSION": "1.3.0",
            "REQUEST": "GetMap",
            "FORMAT": "image/png",
            "TRANSPARENT": "TRUE",
            "LAYERS": layer,
            "CRS": "EPSG:4326",
            "STYLES": "",
            "WIDTH": IMAGE_SIZE,
            "HEIGHT": IMAGE_SIZE,
            # WMS 1.3.0 with EPSG:4326 orders axes lat,lon.
            "BBOX": f"{bbox.min_lat:.6f},{bbox.min_lon:.6f},{bbox.max_lat:.6f},{bbox.max_lon:.6f}",
        }
        if time_str:
            params["TIME"] = time_str
        try:
            image, valid_time = self._fetch_image(self.wms_base, params)
        except RadarError as exc:
            raise RadarError(f"nws radar WMS: {exc}") from exc
        if valid_time is None and time_str:
            try:
                valid_time = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
            except ValueError:
                valid_time = None
        if valid_time is None:
            valid_time = _now_slot()
        return image, valid_time

    def _build_frame(
        self, loc: Any, options: Options, bbox: BBox, ts: datetime, wms_time: str
    ) -> Frame:
        image, _ = self._fetch_image(self.iem_base, self._radmap_params(loc, options, bbox, ts))
        if _is_wms_composite(options.product):
            layer = NWS_WMS_LAYERS.get(options.product)
            if layer is not None:
                try:
                    radar_image, _ = self._fetch_wms(layer, bbox, wms_time)
                except RadarError:
                    pass  # show the base map alone
                else:
                    image = composite_over(image, radar_image)
        return Frame(image=image, valid_time=ts, product=options.product, bbox=bbox)

    # ── frames ──────────────────────────────────────────────────────────────

    def current_frame(self, loc: Any, options: Options, cache: Optional[_Cache]) -> Frame:
        """Fetch the most recent radar frame around ``loc``."""
        if options.product not in IEM_PRODUCTS:
            raise RadarError(f'nws radar: unsupported product "{options.product}"')

        bbox = bounding_box(loc.lat, loc.lon, options.radius_km)
        key = (
            f"nws:radar:cur:v3:{options.product}:{loc.lat:.4f},{loc.lon:.4f}:"
            f"{options.radius_km:.0f}"
        )
        frame = self._memory_get(key)
        if frame is not None:
            return frame
        frame = self._disk_get(cache, key)
        if frame is not None:
            self._memory_set(key, frame, CURRENT_FRAME_TTL)
            return frame

        try:
            frame = self._build_frame(loc, options, bbox, _now_slot(), "")
        except RadarError as exc:
            raise RadarError(f"nws radar current: {exc}") from exc
        self._disk_set(cache, key, frame, CURRENT_FRAME_TTL)
        self._memory_set(key, frame, CURRENT_FRAME_TTL)
        return frame

    def _historical_frame(
        self, loc: Any, bbox: BBox, options: Options, ts: datetime, cache: Optional[_Cache]
    ) -> Frame:
        key = (
            f"nws:radar:iem:v3:{options.product}:"
            f"{(bbox.min_lat + bbox.max_lat) / 2:.4f},{(bbox.min_lon + bbox.max_lon) / 2:.4f}:"
            f"{options.radius_km:.0f}:{_rfc3339(ts)}"
        )
        frame = self._memory_get(key)
        if frame is not None:
            return frame
        frame = self._disk_get(cache, key)
        if frame is not None:
            self._memory_set(key, frame, 0)
            return frame

        try:
            frame = self._build_frame(loc, options, bbox, ts, _rfc3339(ts))
        except RadarError as exc:
            raise RadarError(f"iem radar: {exc}") from exc
        self._disk_set(cache, key, frame, HISTORICAL_FRAME_TTL)
        self._memory_set(key, frame, 0)
        return frame

    def recent_frames(
        self, loc: Any, options: Options, count: int, cache: Optional[_Cache]
    ) -> list[Frame]:
        """Fetch up to ``count`` frames at 5-minute steps ending now, oldest first.

        Frames that fail to load are skipped; RadarError is raised if none load.
        """
        if options.product not in IEM_PRODUCTS:
            raise RadarError(f'nws radar: unsupported product "{options.product}" for loop')

        bbox = bounding_box(loc.lat, loc.lon, options.radius_km)
        now = _now_slot()
        stamps = [now - FRAME_INTERVAL * (count - 1 - i) for i in range(max(count, 0))]

        def fetch(ts: datetime) -> Optional[Frame]:
            try:
                return self._historical_frame(loc, bbox, options, ts, cache)
            except RadarError:
                return None

        with ThreadPoolExecutor(max_workers=MAX_CONCURRENT_FETCHES) as pool:
            results = list(pool.map(fetch, stamps))

        frames = [frame for frame in results if frame is not None]
        if not frames:
            raise RadarError("nws radar: no frames available for loop")
        return frames

    # ── stations ────────────────────────────────────────────────────────────

    def lookup_station(self, station_id: str, cache: Optional[_Cache]) -> Station:
        """Fetch metadata for a NEXRAD station id such as "KIWX"."""
        sid = station_id.strip().upper()
        if not sid:
            raise RadarError("nws radar: empty station ID")
        key = f"nws:radar:station:{sid}"

        stored = _cache_get(cache, key)
        if isinstance(stored, dict):
            try:
                return Station(
                    id=stored["id"],
                    name=stored["name"],
                    lat=float(stored["lat"]),
                    lon=float(stored["lon"]),
                )
            except (KeyError, TypeError, ValueError):
                pass

        headers = {"User-Agent": USER_AGENT, "Accept": "application/geo+json"}
        try:
            response = self.session.get(
                f"{self.nws_api_base}/radar/stations/{sid}",
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RadarError(f"nws radar station {sid}: {exc}") from exc

        with response:
            if response.status_code == 404:
                raise StationNotFoundError(f'nws radar: station "{sid}" not found')
            if response.status_code != 200:
                raise RadarError(f"nws radar station {sid}: HTTP {response.status_code}")
            try:
                feature = response.json()
            except ValueError as exc:
                raise RadarError(f"nws radar station {sid}: decode: {exc}") from exc

        if not isinstance(feature, dict):
            raise RadarError(f"nws radar station {sid}: decode: unexpected body")
        properties = feature.get("properties") or {}
        coords = list((feature.get("geometry") or {}).get("coordinates") or [])
        coords += [0.0] * (3 - len(coords))
        try:
            lon, lat = float(coords[0]), float(coords[1])
        except (TypeError, ValueError) as exc:
            raise RadarError(f"nws radar station {sid}: decode: {exc}") from exc

        station = Station(id=sid, name=properties.get("name") or sid, lat=lat, lon=lon)
        _cache_set(
            cache,
            key,
            {"id": station.id, "name": station.name, "lat": station.lat, "lon": station.lon},
            STATION_TTL,
        )
        return station


register(RadarProvider())