"""Season filtering, role classification and ordering of banner records."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .models import ImageRole, RankedImageInfo, RawBannerRecord
from .utils import banner_url

logger = logging.getLogger("tvdb_banners")

_SEASON_ROLES = {
    "season": ImageRole.PRIMARY,
    "seasonwide": ImageRole.BANNER,
}


def _fold(value: Optional[str]) -> str:
    return (value or "").lower()


def classify_role(banner_type: Optional[str], banner_type2: Optional[str]) -> Optional[ImageRole]:
    """Map the feed's pair of type hints to a role; ``None`` means discard."""
    kind = _fold(banner_type)
    if kind == "season":
        return _SEASON_ROLES.get(_fold(banner_type2))
    if kind == "fanart":
        return ImageRole.BACKDROP
    return None


def language_score(language: Optional[str], preferred_language: Optional[str]) -> int:
    """Rank tier for how well an image's language suits the caller.

    3 for an exact match (or no language when English is wanted), 2 for an
    English or language-less fallback when another language is wanted,
    0 otherwise.
    """
    preferred = _fold(preferred_language)
    wants_english = preferred == "en"
    unlabelled = not language

    if language is not None and language.lower() == preferred:
        return 3
    if unlabelled and wants_english:
        return 3
    if not wants_english and _fold(language) == "en":
        return 2
    if unlabelled:
        return 2
    return 0


def rank_key(image: RankedImageInfo, preferred_language: Optional[str]) -> Tuple[int, float, int]:
    return (
        language_score(image.language, preferred_language),
        image.rating or 0.0,
        image.vote_count or 0,
    )


def to_image_info(record: RawBannerRecord, role: ImageRole) -> RankedImageInfo:
    """Convert an accepted record, prefixing paths with the banner host."""
    thumbnail_url = banner_url(record.thumbnail_path) if record.thumbnail_path else None
    return RankedImageInfo(
        url=banner_url(record.path or ""),
        role=role,
        thumbnail_url=thumbnail_url,
        language=record.language,
        rating=record.rating,
        vote_count=record.vote_count,
        width=record.width,
        height=record.height,
    )


def select_season_images(
    records: Iterable[RawBannerRecord],
    season_number: int,
) -> List[RankedImageInfo]:
    """Keep records for ``season_number`` that map to a known role, in feed order."""
    images: List[RankedImageInfo] = []
    for record in records:
        if not record.path or record.season is None or record.season != season_number:
            continue
        role = classify_role(record.banner_type, record.banner_type2)
        if role is None:
            logger.debug(
                "Dropping %s: unknown banner type %r/%r",
                record.path,
                record.banner_type,
                record.banner_type2,
            )
            continue
        images.append(to_image_info(record, role))
    return images


def rank_images(
    records: Iterable[RawBannerRecord],
    season_number: int,
    preferred_language: Optional[str],
) -> List[RankedImageInfo]:
    """Return the season's images, best language match and rating first.

    ``sorted`` stays stable with ``reverse=True``, so images with identical
    keys keep their feed order.
    """
    images = select_season_images(records, season_number)
    ranked = sorted(images, key=lambda image: rank_key(image, preferred_language), reverse=True)
    logger.debug(
        "Ranked %d images for season %d (language=%r)",
        len(ranked),
        season_number,
        preferred_language,
    )
    return ranked
