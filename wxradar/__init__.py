"""Terminal weather radar: NEXRAD products, city overlays and terminal rendering."""

__version__ = "0.1.0"