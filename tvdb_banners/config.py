"""Configuration objects and constants for the banner provider."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet

PROVIDER_NAME = "TheTVDB"
BANNER_BASE_URL = "https://www.thetvdb.com/banners/"
BANNERS_FILENAME = "banners.xml"

# Order matters for callers that list what the provider can supply.
SUPPORTED_ROLES = ("Primary", "Banner", "Backdrop")

DEFAULT_TIMEOUT = 15.0
MIN_IMAGE_BYTES = 512
MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_IMAGE_TYPES = frozenset({"png", "jpg", "gif", "webp", "bmp", "tiff"})

_FALSE_VALUES = ("0", "", "false", "no", "off")


@dataclass
class FetchConfig:
    """Limits applied when downloading a ranked image."""

    timeout: float = DEFAULT_TIMEOUT
    min_bytes: int = MIN_IMAGE_BYTES
    max_bytes: int = MAX_IMAGE_BYTES
    allowed_types: FrozenSet[str] = field(default_factory=lambda: ALLOWED_IMAGE_TYPES)


@dataclass
class ProviderConfig:
    """Settings that control when the feed is considered stale."""

    enable_automatic_updates: bool = True

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        raw = os.getenv("TVDB_AUTOMATIC_UPDATES")
        if raw is None:
            return cls()
        return cls(enable_automatic_updates=raw.strip().lower() not in _FALSE_VALUES)
