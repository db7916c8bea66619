"""Image downloading and validation for ranked season images."""

from __future__ import annotations

import io
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import requests
from filetype import guess
from PIL import Image, UnidentifiedImageError

from .config import FetchConfig
from .models import ImagePayload, RankedImageInfo

logger = logging.getLogger("tvdb_banners")

USER_AGENT = "tvdb-banners/0.1"


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def infer_image_extension(content_type: Optional[str], data: bytes) -> Optional[str]:
    """Guess an image file extension from HTTP metadata or file signature."""
    detected = detect_image_format(data)
    if detected:
        return detected
    if not content_type:
        return None
    parts = content_type.split(";")[0].split("/")
    if len(parts) == 2 and parts[0] == "image":
        ext = parts[1].strip().lower()
        if ext == "jpeg":
            ext = "jpg"
        return ext
    return None


def measure_image(data: bytes) -> Tuple[Optional[int], Optional[int]]:
    """Read pixel dimensions from the image header, if Pillow understands it."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError) as exc:
        logger.debug("Could not read image size: %s", exc)
        return None, None
    return width, height


def fetch_image(
    url: str,
    session: Optional[requests.Session] = None,
    config: Optional[FetchConfig] = None,
) -> Optional[ImagePayload]:
    """Download one image and check it is a reasonably sized picture."""
    config = config or FetchConfig()
    session = session or requests.Session()
    try:
        resp = session.get(url, timeout=config.timeout, headers={"User-Agent": USER_AGENT})
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Failed to fetch image %s: %s", url, exc)
        return None

    content_type = resp.headers.get("Content-Type", "")
    data = resp.content
    if len(data) < config.min_bytes:
        logger.warning("Skipping %s: response too small", url)
        return None
    if len(data) > config.max_bytes:
        logger.warning("Skipping %s: image larger than %s bytes", url, config.max_bytes)
        return None

    extension = infer_image_extension(content_type, data)
    if not extension or extension not in config.allowed_types:
        logger.warning(
            "Skipping %s: unsupported image type (Content-Type=%s)",
            url,
            content_type,
        )
        return None

    width, height = measure_image(data)
    return ImagePayload(
        url=url,
        data=data,
        extension=extension,
        content_type=content_type,
        width=width,
        height=height,
    )


def fetch_images(
    images: Iterable[RankedImageInfo],
    config: Optional[FetchConfig] = None,
    session: Optional[requests.Session] = None,
) -> List[ImagePayload]:
    """Download each ranked image once, keeping ranking order."""
    session = session or requests.Session()
    downloaded: Dict[str, Optional[ImagePayload]] = {}
    payloads: List[ImagePayload] = []

    for image in images:
        if image.url not in downloaded:
            downloaded[image.url] = fetch_image(image.url, session, config)
        payload = downloaded[image.url]
        if payload is not None:
            payloads.append(payload)
    return payloads
