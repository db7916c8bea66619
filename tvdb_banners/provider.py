"""Entry points that tie a series data directory to the extractor and ranker."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from .config import BANNERS_FILENAME, SUPPORTED_ROLES, ProviderConfig
from .extractor import extract_records
from .models import ImageRole, RankedImageInfo
from .ranker import rank_images

logger = logging.getLogger("tvdb_banners")

PathLike = Union[str, Path]


def supported_roles() -> List[ImageRole]:
    return [ImageRole(value) for value in SUPPORTED_ROLES]


def banners_path(series_data_path: PathLike) -> Path:
    return Path(series_data_path) / BANNERS_FILENAME


def get_season_images(
    series_data_path: Optional[PathLike],
    season_number: int,
    preferred_language: Optional[str],
    cancel_event: Optional[Any] = None,
) -> List[RankedImageInfo]:
    """Rank the season images listed in a series' downloaded ``banners.xml``.

    A series that has not been fetched yet has no data directory or no feed
    file; that is reported as an empty list rather than an error.
    """
    if not series_data_path:
        return []
    path = banners_path(series_data_path)
    try:
        handle = path.open("rb")
    except FileNotFoundError:
        logger.debug("No banner feed at %s yet", path)
        return []

    with handle:
        images = rank_images(
            extract_records(handle, cancel_event),
            season_number,
            preferred_language,
        )
    logger.info("Found %d images for season %d in %s", len(images), season_number, path)
    return images


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def has_changed(
    series_data_path: Optional[PathLike],
    last_refreshed: Optional[dt.datetime],
    config: Optional[ProviderConfig] = None,
) -> bool:
    """Whether the feed on disk is newer than the caller's last refresh.

    Naive ``last_refreshed`` values are taken to be UTC; ``None`` means the
    images were never refreshed.
    """
    config = config or ProviderConfig()
    if not config.enable_automatic_updates or not series_data_path:
        return False

    path = banners_path(series_data_path)
    try:
        modified = path.stat().st_mtime
    except FileNotFoundError:
        return False

    if last_refreshed is None:
        return True
    modified_at = dt.datetime.fromtimestamp(modified, tz=dt.timezone.utc)
    return modified_at > _as_utc(last_refreshed)
