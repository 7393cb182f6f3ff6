"""Core radar types, product metadata and the radar provider registry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Protocol

from PIL import Image


class Product(str, Enum):
    """The kind of radar imagery to fetch."""

    # Maximum reflectivity from all elevation scans (national mosaic).
    COMPOSITE_REFLECTIVITY = "composite-reflectivity"
    # Lowest tilt only, from the nearest single NEXRAD station.
    BASE_REFLECTIVITY = "base-reflectivity"
    # Velocity adjusted for storm motion, from a single station.
    STORM_RELATIVE_VELOCITY = "storm-relative-velocity"
    # Maximum echo height (national MRMS mosaic).
    ECHO_TOPS = "echo-tops"

    def __str__(self) -> str:
        return self.value


_STATION_PRODUCTS = frozenset(
    {Product.BASE_REFLECTIVITY, Product.STORM_RELATIVE_VELOCITY}
)


def is_station_product(product: Product | str) -> bool:
    """Return True if the product needs single-station data rather than a mosaic."""
    return product in _STATION_PRODUCTS


@dataclass(frozen=True)
class Options:
    """What radar data to fetch."""

    product: Product | str = Product.COMPOSITE_REFLECTIVITY
    radius_km: float = 200.0


def default_options() -> Options:
    """Return the default fetch options: composite reflectivity, 200 km."""
    return Options(product=Product.COMPOSITE_REFLECTIVITY, radius_km=200.0)


@dataclass(frozen=True)
class BBox:
    """Geographic extent of a radar image, in degrees."""

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float


@dataclass
class Frame:
    """A single decoded radar image with its metadata."""

    image: Image.Image
    valid_time: datetime
    product: Product | str
    bbox: Optional[BBox] = None


@dataclass(frozen=True)
class Station:
    """A NEXRAD radar station."""

    id: str
    name: str
    lat: float
    lon: float


class NoProviderError(LookupError):
    """Raised when no registered radar provider serves a location."""


class _Provider(Protocol):
    def name(self) -> str: ...

    def supports(self, loc: Any) -> bool: ...


_registry: list[_Provider] = []


def register(provider: _Provider) -> None:
    """Add a radar provider to the global registry."""
    _registry.append(provider)


def for_location(loc: Any) -> _Provider:
    """Return the first registered provider that supports ``loc``."""
    for provider in _registry:
        if provider.supports(loc):
            return provider
    country = getattr(loc, "country_code", "")
    raise NoProviderError(
        f'no radar provider available for location (country: "{country}") '
        "— only US locations are currently supported"
    )