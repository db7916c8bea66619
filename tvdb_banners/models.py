"""Data models used throughout the banner pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import PROVIDER_NAME


class ImageRole(Enum):
    """Functional category assigned to a season image."""

    PRIMARY = "Primary"
    BANNER = "Banner"
    BACKDROP = "Backdrop"


@dataclass
class RawBannerRecord:
    """One ``<Banner>`` element as read from the feed, before any filtering.

    ``banner_type2`` keeps the raw role hint; ``width`` and ``height`` are
    filled from the same string only when it encodes a resolution.
    ``language`` is ``None`` when the element is missing and ``""`` when it
    is present but blank.
    """

    banner_type: Optional[str] = None
    banner_type2: Optional[str] = None
    path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    season: Optional[int] = None
    language: Optional[str] = None
    rating: Optional[float] = None
    vote_count: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class RankedImageInfo:
    """Season image accepted for the caller, with an absolute URL."""

    url: str
    role: ImageRole
    thumbnail_url: Optional[str] = None
    language: Optional[str] = None
    rating: Optional[float] = None
    vote_count: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    provider_name: str = PROVIDER_NAME


@dataclass
class ImagePayload:
    """Downloaded and validated image bytes held in memory."""

    url: str
    data: bytes
    extension: str
    content_type: str
    width: Optional[int]
    height: Optional[int]
