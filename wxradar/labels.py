"""Placement of city labels on the terminal grid for half-block rendering."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .cities import cities_in_bbox
from .radar import BBox

MARKER = "● "
MIN_TERM_WIDTH = 20
MIN_TERM_ROWS = 5
# Smallest room worth using: the marker plus one letter.
MIN_LABEL_COLS = 4


@dataclass(frozen=True)
class PlacedLabel:
    """A city label projected into terminal coordinates."""

    col: int  # starting terminal column
    row: int  # terminal row (half-block row, not pixel row)
    text: str  # marker followed by the city name


def _candidates(bbox: BBox, term_width: int, term_rows: int) -> Iterator[PlacedLabel]:
    lon_span = bbox.max_lon - bbox.min_lon
    lat_span = bbox.max_lat - bbox.min_lat
    for city in cities_in_bbox(bbox):
        col = int((city.lon - bbox.min_lon) / lon_span * term_width)
        row = int((bbox.max_lat - city.lat) / lat_span * term_rows)
        if not (0 <= col < term_width and 0 <= row < term_rows):
            continue
        # Clip to the right edge, leaving a one-column margin.
        max_cols = term_width - col - 1
        if max_cols < MIN_LABEL_COLS:
            continue
        yield PlacedLabel(col=col, row=row, text=(MARKER + city.name)[:max_cols])


def layout_labels(
    bbox: Optional[BBox], term_width: int, term_rows: int
) -> list[PlacedLabel]:
    """Project visible cities onto the terminal grid, dropping overlapping labels.

    Cities earlier in the priority list win when labels collide on a row.
    """
    if bbox is None or term_width < MIN_TERM_WIDTH or term_rows < MIN_TERM_ROWS:
        return []
    if bbox.max_lon == bbox.min_lon or bbox.max_lat == bbox.min_lat:
        return []

    occupied: dict[int, list[tuple[int, int]]] = defaultdict(list)
    placed: list[PlacedLabel] = []
    for label in _candidates(bbox, term_width, term_rows):
        lo = label.col
        hi = label.col + len(label.text)
        if any(lo < s_hi and hi > s_lo for s_lo, s_hi in occupied[label.row]):
            continue
        occupied[label.row].append((lo, hi))
        placed.append(label)
    return placed


@dataclass
class LabelIndex:
    """Lookup from terminal (row, col) to the label character drawn there."""

    chars: dict[tuple[int, int], str] = field(default_factory=dict)

    def at(self, row: int, col: int) -> Optional[str]:
        """Return the label character at (row, col), or None if there is none."""
        return self.chars.get((row, col))


def build_label_index(labels: Iterable[PlacedLabel]) -> LabelIndex:
    """Build a per-cell index of the characters of the given labels."""
    return LabelIndex(
        {
            (label.row, label.col + offset): ch
            for label in labels
            for offset, ch in enumerate(label.text)
        }
    )