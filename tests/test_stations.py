import pytest

from wxradar.stations import NEXRAD_STATIONS, haversine, nearest_station


@pytest.mark.parametrize(
    "lat, lon, want_id",
    [
        (39.1, -94.6, "KEAX"),
        (41.88, -87.63, "KLOT"),
        (25.76, -80.19, "KAMX"),
        (47.6, -122.3, "KATX"),
        (39.74, -104.99, "KFTG"),
    ],
    ids=["Kansas City", "Chicago", "Miami", "Seattle", "Denver"],
)
def test_nearest_station(lat, lon, want_id):
    assert nearest_station(lat, lon).id == want_id


@pytest.mark.parametrize("station", NEXRAD_STATIONS, ids=lambda s: s.id)
def test_station_is_nearest_to_itself(station):
    assert nearest_station(station.lat, station.lon) == station


def test_haversine_zero_for_same_point():
    assert haversine(39.1, -94.6, 39.1, -94.6) == 0


def test_haversine_symmetric():
    a = haversine(39.1, -94.6, 41.88, -87.63)
    b = haversine(41.88, -87.63, 39.1, -94.6)
    assert a == pytest.approx(b)
    assert a > 0


def test_haversine_one_degree_latitude():
    assert haversine(0, 0, 1, 0) == pytest.approx(111.19, rel=1e-3)


def test_haversine_triangle_inequality():
    kc = (39.1, -94.6)
    chi = (41.88, -87.63)
    den = (39.74, -104.99)
    direct = haversine(*den, *chi)
    via = haversine(*den, *kc) + haversine(*kc, *chi)
    assert direct <= via


def test_every_station_reachable_by_nearest_lookup():
    found = {nearest_station(s.lat, s.lon).id for s in NEXRAD_STATIONS}
    assert len(found) == len(NEXRAD_STATIONS)