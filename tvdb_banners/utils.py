"""Helpers for locale-independent number parsing and URL building."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from .config import BANNER_BASE_URL

INT_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")
FLOAT_PATTERN = re.compile(r"^\s*[+-]?(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse an invariant-culture integer; ``None`` when it does not parse."""
    if value is None or not INT_PATTERN.match(value):
        return None
    return int(value)


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse an invariant-culture decimal, allowing ``,`` group separators."""
    if value is None or not FLOAT_PATTERN.match(value):
        return None
    return float(value.replace(",", ""))


def parse_resolution(value: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """Read ``<width>x<height>`` out of a ``BannerType2`` value.

    The feed overloads that element: it is usually a role hint such as
    ``season`` but sometimes carries the image size instead. Both halves must
    be integers, otherwise neither dimension is reported.
    """
    if not value:
        return None, None
    parts = value.split("x")
    if len(parts) != 2:
        return None, None
    width = parse_int(parts[0])
    height = parse_int(parts[1])
    if width is None or height is None:
        return None, None
    return width, height


def banner_url(path: str) -> str:
    return BANNER_BASE_URL + path
