"""
Tests for tvdb_banners/utils.py: invariant number parsing
"""

import pytest

from tvdb_banners.config import BANNER_BASE_URL
from tvdb_banners.utils import banner_url, parse_float, parse_int, parse_resolution


@pytest.mark.parametrize(
    "raw, expected",
    [("12", 12), (" -3 ", -3), ("+7", 7), ("1_000", None), ("1.5", None), ("", None), (None, None), ("١٢", None)],
)
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("7.5000", 7.5), ("10", 10.0), (".5", 0.5), ("1e2", 100.0), ("2,500.25", 2500.25), ("nan", None), ("inf", None), ("7,5x", None), (None, None)],
)
def test_parse_float(raw, expected):
    assert parse_float(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("680x1000", (680, 1000)),
        ("1920x1080", (1920, 1080)),
        ("season", (None, None)),
        ("seasonwide", (None, None)),
        ("x", (None, None)),
        ("12x", (None, None)),
        ("1x2x3", (None, None)),
        ("680X1000", (None, None)),
        ("", (None, None)),
        (None, (None, None)),
    ],
)
def test_parse_resolution(raw, expected):
    assert parse_resolution(raw) == expected


def test_banner_url():
    assert banner_url("/a.jpg") == BANNER_BASE_URL + "/a.jpg"
