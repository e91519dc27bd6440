import pytest
from pathlib import Path
from datetime import datetime

from imagecat.metadata.dates import DatePattern, DateResolver
from conftest import FakeExtractor


@pytest.mark.parametrize(
    "name,expected",
    [
        ("IMG-20210510", datetime(2021, 5, 10)),
        ("IMG-20210510-WA0001", datetime(2021, 5, 10)),
        ("PANO_20200101_235959", datetime(2020, 1, 1, 23, 59, 59)),
        ("IMG_20210510_140000", datetime(2021, 5, 10, 14, 0, 0)),
        ("20190704_081500", datetime(2019, 7, 4, 8, 15, 0)),
        ("VID-20180228", datetime(2018, 2, 28)),
        ("VID-20180228-WA0003", datetime(2018, 2, 28)),
        ("20170615", datetime(2017, 6, 15)),
        ("Screenshot 20170615", datetime(2017, 6, 15)),
    ],
)
def test_filename_patterns(name, expected):
    resolver = DateResolver(extractor=FakeExtractor())
    assert resolver.resolve(Path(f"/src/{name}.jpg"), name) == expected


@pytest.mark.parametrize(
    "name",
    [
        "photo1",
        "IMG-2021051",           # too short
        "IMG-20211345",          # month 13
        "IMG_20210230_120000",   # Feb 30
        "DSC_0001",
        "x20210510",             # glued to a word character
        "202105101",
        "",
    ],
)
def test_no_date_for_unmatched_names(name):
    resolver = DateResolver(extractor=FakeExtractor())
    assert resolver.resolve(Path(f"/src/{name}.jpg"), name) is None


def test_metadata_wins_over_filename():
    extractor = FakeExtractor({"IMG_20210510_140000.jpg": "2019:01:02 03:04:05"})
    resolver = DateResolver(extractor=extractor)

    dt = resolver.resolve(Path("/src/IMG_20210510_140000.jpg"), "IMG_20210510_140000")
    assert dt == datetime(2019, 1, 2, 3, 4, 5)


@pytest.mark.parametrize("raw", ["", "2019-01-02 03:04:05", "0000:00:00 00:00:00", "2019:01:02", "garbage"])
def test_malformed_metadata_falls_back_to_filename(raw):
    extractor = FakeExtractor({"IMG-20210510.jpg": raw})
    resolver = DateResolver(extractor=extractor)

    assert resolver.resolve(Path("/src/IMG-20210510.jpg"), "IMG-20210510") == datetime(2021, 5, 10)


def test_metadata_with_timezone_suffix_is_accepted():
    extractor = FakeExtractor({"a.mov": "2021:05:10 14:00:00+02:00"})
    resolver = DateResolver(extractor=extractor)

    assert resolver.resolve(Path("/src/a.mov"), "a") == datetime(2021, 5, 10, 14, 0, 0)


def test_specific_pattern_is_tried_before_loose_one():
    # Same name, two candidate patterns: the timestamped one must win.
    resolver = DateResolver(extractor=FakeExtractor())
    dt = resolver.resolve(Path("/src/20190704_081500.jpg"), "20190704_081500")
    assert (dt.hour, dt.minute) == (8, 15)

    # A name matched by two patterns resolves through whichever comes first.
    name = "20200101 IMG-20210510"
    loose_first = DateResolver(extractor=FakeExtractor(), filename_formats=["%Y%m%d", "IMG-%Y%m%d"])
    specific_first = DateResolver(extractor=FakeExtractor(), filename_formats=["IMG-%Y%m%d", "%Y%m%d"])
    assert loose_first.resolve(Path("/src/x.jpg"), name) == datetime(2020, 1, 1)
    assert specific_first.resolve(Path("/src/x.jpg"), name) == datetime(2021, 5, 10)


def test_date_pattern_rejects_unknown_directive():
    with pytest.raises(ValueError):
        DatePattern("%Y-%j")


def test_date_pattern_only_considers_first_occurrence():
    pattern = DatePattern("%Y%m%d")
    assert pattern.parse("20211399 20210101") is None
