from wxradar.labels import PlacedLabel, build_label_index, layout_labels
from wxradar.radar import BBox


def test_layout_labels_nil_bbox():
    assert layout_labels(None, 80, 20) == []


def test_layout_labels_terminal_too_small():
    bb = BBox(min_lat=38.5, min_lon=-95.5, max_lat=39.7, max_lon=-93.5)
    assert layout_labels(bb, 19, 20) == []
    assert layout_labels(bb, 80, 4) == []


def test_layout_labels_zero_span():
    bb = BBox(min_lat=39.0997, min_lon=-95.5, max_lat=39.0997, max_lon=-93.5)
    assert layout_labels(bb, 80, 20) == []


def test_layout_labels_ocean_is_empty():
    bb = BBox(min_lat=10, min_lon=-160, max_lat=12, max_lon=-158)
    assert layout_labels(bb, 80, 20) == []


def test_layout_labels_placement():
    bb = BBox(min_lat=38.5, min_lon=-95.5, max_lat=39.7, max_lon=-93.5)
    labels = layout_labels(bb, 80, 20)
    assert len(labels) >= 1
    label = labels[0]
    assert 0 <= label.col < 80
    assert 0 <= label.row < 20
    assert len(label.text) >= 3
    assert label.text == "● Kansas City"


def test_layout_labels_overlap_removal():
    bb = BBox(min_lat=38.0, min_lon=-98.0, max_lat=40.0, max_lon=-93.0)
    labels = layout_labels(bb, 30, 10)
    for label in labels:
        assert label.col + len(label.text) <= 30
    for i, a in enumerate(labels):
        for b in labels[i + 1 :]:
            if a.row == b.row:
                a_hi = a.col + len(a.text)
                b_hi = b.col + len(b.text)
                assert not (a.col < b_hi and a_hi > b.col)


def test_layout_labels_clip_leaves_margin():
    bb = BBox(min_lat=30.0, min_lon=-125.0, max_lat=48.0, max_lon=-67.0)
    labels = layout_labels(bb, 40, 12)
    assert labels
    for label in labels:
        assert label.text.startswith("●")
        assert len(label.text) <= 40 - label.col - 1


def test_layout_labels_priority_first():
    # New York is first in priority; a bbox around it places it first.
    bb = BBox(min_lat=39.0, min_lon=-76.0, max_lat=42.0, max_lon=-72.0)
    labels = layout_labels(bb, 80, 20)
    assert labels[0].text == "● New York"


def test_build_label_index():
    idx = build_label_index([PlacedLabel(col=5, row=3, text="● KC")])
    assert idx.at(3, 5) == "●"
    assert idx.at(3, 7) == "K"
    assert idx.at(3, 8) == "C"
    assert idx.at(3, 20) is None
    assert idx.at(0, 5) is None


def test_build_label_index_empty():
    idx = build_label_index([])
    assert idx.chars == {}
    assert idx.at(0, 0) is None