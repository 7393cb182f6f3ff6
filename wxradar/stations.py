"""CONUS NEXRAD WSR-88D stations and nearest-station lookup."""

from __future__ import annotations

import math

from .radar import Station

EARTH_RADIUS_KM = 6371.0

NEXRAD_STATIONS: tuple[Station, ...] = tuple(
    Station(sid, name, lat, lon)
    for sid, name, lat, lon in (
        ("KABR", "Aberdeen", 45.4558, -98.4131),
        ("KABX", "Albuquerque", 35.1497, -106.8239),
        ("KAKQ", "Wakefield", 36.9839, -77.0078),
        ("KAMA", "Amarillo", 35.2333, -101.7092),
        ("KAMX", "Miami", 25.6111, -80.4128),
        ("KAPX", "Gaylord", 44.9072, -84.7197),
        ("KARX", "La Crosse", 43.8228, -91.1911),
        ("KATX", "Seattle", 48.1944, -122.4958),
        ("KBBX", "Beale AFB", 39.4961, -121.6317),
        ("KBGM", "Binghamton", 42.1997, -75.9847),
        ("KBHX", "Eureka", 40.4986, -124.2919),
        ("KBIS", "Bismarck", 46.7708, -100.7606),
        ("KBLX", "Billings", 45.8536, -108.6069),
        ("KBMX", "Birmingham", 33.1722, -86.7697),
        ("KBOX", "Boston", 41.9558, -71.1369),
        ("KBRO", "Brownsville", 25.9161, -97.4189),
        ("KBUF", "Buffalo", 42.9489, -78.7369),
        ("KBYX", "Key West", 24.5975, -81.7031),
        ("KCAE", "Columbia SC", 33.9486, -81.1186),
        ("KCBW", "Caribou", 46.0392, -67.8067),
        ("KCBX", "Boise", 43.4908, -116.2356),
        ("KCCX", "State College", 40.9228, -78.0039),
        ("KCLE", "Cleveland", 41.4131, -81.8597),
        ("KCLX", "Charleston SC", 32.6556, -81.0422),
        ("KCRP", "Corpus Christi", 27.7842, -97.5111),
        ("KCXX", "Burlington", 44.5111, -73.1667),
        ("KCYS", "Cheyenne", 41.1519, -104.8061),
        ("KDAX", "Sacramento", 38.5011, -121.6778),
        ("KDDC", "Dodge City", 37.7608, -99.9686),
        ("KDFX", "Laughlin AFB", 29.2725, -100.2803),
        ("KDGX", "Jackson MS", 32.2797, -89.9844),
        ("KDIX", "Philadelphia", 39.9469, -74.4108),
        ("KDLH", "Duluth", 46.8369, -92.2097),
        ("KDMX", "Des Moines", 41.7311, -93.7228),
        ("KDOX", "Dover AFB", 38.8256, -75.4400),
        ("KDTX", "Detroit", 42.6997, -83.4719),
        ("KDVN", "Quad Cities", 41.6117, -90.5811),
        ("KDYX", "Dyess AFB", 32.5386, -99.2542),
        ("KEAX", "Kansas City", 38.8103, -94.2644),
        ("KEMX", "Tucson", 31.8936, -110.6303),
        ("KENX", "Albany", 42.5864, -74.0639),
        ("KEOX", "Fort Rucker", 31.4606, -85.4594),
        ("KEPZ", "El Paso", 31.8731, -106.6981),
        ("KESX", "Las Vegas", 35.7011, -114.8917),
        ("KEVX", "Pensacola", 30.5644, -85.9214),
        ("KEWX", "Austin/San Antonio", 29.7039, -98.0286),
        ("KEYX", "Edwards AFB", 35.0978, -117.5608),
        ("KFCX", "Roanoke", 37.0242, -80.2739),
        ("KFDR", "Frederick", 34.3622, -98.9764),
        ("KFDX", "Cannon AFB", 34.6353, -103.6297),
        ("KFFC", "Atlanta", 33.3636, -84.5658),
        ("KFSD", "Sioux Falls", 43.5878, -96.7292),
        ("KFSX", "Flagstaff", 34.5744, -111.1983),
        ("KFTG", "Denver", 39.7867, -104.5458),
        ("KFWS", "Dallas/Ft Worth", 32.5731, -97.3031),
        ("KGGW", "Glasgow", 48.2064, -106.6253),
        ("KGJX", "Grand Junction", 39.0622, -108.2139),
        ("KGLD", "Goodland", 39.3667, -101.7004),
        ("KGRB", "Green Bay", 44.4986, -88.1111),
        ("KGRK", "Fort Hood", 30.7219, -97.3831),
        ("KGRR", "Grand Rapids", 42.8939, -85.5447),
        ("KGSP", "Greenville/Spartanburg", 34.8833, -82.2200),
        ("KGWX", "Columbus AFB", 33.8967, -88.3289),
        ("KGYX", "Portland ME", 43.8914, -70.2564),
        ("KHDX", "Holloman AFB", 33.0764, -106.1200),
        ("KHGX", "Houston", 29.4719, -95.0792),
        ("KHNX", "Hanford", 36.3142, -119.6319),
        ("KHPX", "Fort Campbell", 36.7369, -87.2847),
        ("KHTX", "Huntsville", 34.9306, -86.0833),
        ("KICT", "Wichita", 37.6547, -97.4428),
        ("KICX", "Cedar City", 37.5908, -112.8622),
        ("KILN", "Wilmington OH", 39.4203, -83.8217),
        ("KILX", "Lincoln IL", 40.1506, -89.3369),
        ("KIND", "Indianapolis", 39.7075, -86.2803),
        ("KINX", "Tulsa", 36.1750, -95.5644),
        ("KIWA", "Phoenix", 33.2892, -111.6700),
        ("KIWX", "North Webster", 41.3586, -85.7000),
        ("KJAX", "Jacksonville", 30.4847, -81.7019),
        ("KJGX", "Robins AFB", 32.6753, -83.3511),
        ("KJKL", "Jackson KY", 37.5908, -83.3131),
        ("KLBB", "Lubbock", 33.6542, -101.8142),
        ("KLCH", "Lake Charles", 30.1253, -93.2158),
        ("KLIX", "New Orleans", 30.3367, -89.8256),
        ("KLNX", "North Platte", 41.9578, -100.5761),
        ("KLOT", "Chicago", 41.6044, -88.0847),
        ("KLRX", "Elko", 40.7397, -116.8025),
        ("KLSX", "St Louis", 38.6989, -90.6828),
        ("KLTX", "Wilmington NC", 33.9892, -78.4292),
        ("KLVX", "Louisville", 37.9753, -85.9439),
        ("KLWX", "Sterling VA", 38.9753, -77.4778),
        ("KLZK", "Little Rock", 34.8364, -92.2622),
        ("KMAF", "Midland/Odessa", 31.9433, -102.1892),
        ("KMAX", "Medford", 42.0811, -122.7172),
        ("KMBX", "Minot AFB", 48.3928, -100.8644),
        ("KMHX", "Morehead City", 34.7761, -76.8764),
        ("KMKX", "Milwaukee", 42.9678, -88.5506),
        ("KMLB", "Melbourne FL", 28.1133, -80.6542),
        ("KMOB", "Mobile", 30.6794, -88.2397),
        ("KMPX", "Minneapolis", 44.8489, -93.5653),
        ("KMQT", "Marquette", 46.5314, -87.5486),
        ("KMRX", "Knoxville", 36.1686, -83.4017),
        ("KMSX", "Missoula", 47.0411, -113.9864),
        ("KMTX", "Salt Lake City", 41.2628, -112.4478),
        ("KMUX", "San Francisco", 37.1553, -121.8983),
        ("KMVX", "Fargo", 47.5281, -97.3256),
        ("KMXX", "Maxwell AFB", 32.5367, -85.7897),
        ("KNKX", "San Diego", 32.9189, -117.0419),
        ("KNQA", "Memphis", 35.3447, -89.8733),
        ("KOAX", "Omaha", 41.3203, -96.3667),
        ("KOHX", "Nashville", 36.2472, -86.5625),
        ("KOKX", "New York City", 40.8656, -72.8639),
        ("KOTX", "Spokane", 47.6806, -117.6267),
        ("KPAH", "Paducah", 37.0683, -88.7719),
        ("KPBZ", "Pittsburgh", 40.5317, -80.2181),
        ("KPDT", "Pendleton", 45.6906, -118.8531),
        ("KPOE", "Fort Polk", 31.1556, -92.9758),
        ("KPUX", "Pueblo", 38.4597, -104.1811),
        ("KRAX", "Raleigh", 35.6656, -78.4903),
        ("KRGX", "Reno", 39.7542, -119.4622),
        ("KRIW", "Riverton", 43.0661, -108.4772),
        ("KRLX", "Charleston WV", 38.3111, -81.7231),
        ("KRMX", "Griffiss AFB", 43.4681, -75.4586),
        ("KRNK", "Blacksburg", 37.2061, -80.4097),
        ("KRTX", "Portland OR", 45.7150, -122.9656),
        ("KSFX", "Pocatello", 43.1058, -112.6861),
        ("KSGF", "Springfield MO", 37.2353, -93.4006),
        ("KSHV", "Shreveport", 32.4508, -93.8414),
        ("KSJT", "San Angelo", 31.3714, -100.4925),
        ("KSOX", "Santa Ana Mtns", 33.8178, -117.6358),
        ("KSRX", "Fort Smith", 35.2906, -94.3619),
        ("KTBW", "Tampa Bay", 27.7056, -82.4017),
        ("KTFX", "Great Falls", 47.4597, -111.3856),
        ("KTLH", "Tallahassee", 30.3975, -84.3289),
        ("KTLX", "Oklahoma City", 35.3333, -97.2778),
        ("KTWX", "Topeka", 38.9969, -96.2325),
        ("KTYX", "Montague", 43.7556, -75.6800),
        ("KUDX", "Rapid City", 44.1247, -102.8297),
        ("KUEX", "Hastings", 40.3211, -98.4419),
        ("KVAX", "Moody AFB", 30.8903, -83.0019),
        ("KVBX", "Vandenberg AFB", 34.8383, -120.3975),
        ("KVNX", "Vance AFB", 36.7408, -98.1275),
        ("KVTX", "Los Angeles", 34.4117, -119.1792),
        ("KVWX", "Evansville", 38.2603, -87.7247),
        ("KYUX", "Yuma", 32.4953, -114.6567),
    )
)


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in km between two points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def nearest_station(lat: float, lon: float) -> Station:
    """Return the NEXRAD station closest to the given coordinates."""
    return min(NEXRAD_STATIONS, key=lambda s: haversine(lat, lon, s.lat, s.lon))