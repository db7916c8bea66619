"""Streaming extraction of ``<Banner>`` records from a TheTVDB banner feed."""

from __future__ import annotations

import logging
from typing import IO, Any, Callable, Dict, Iterator, Optional, Union

from lxml import etree

from .errors import Cancelled, FeedParseError, MalformedSeasonField
from .models import RawBannerRecord
from .utils import parse_float, parse_int, parse_resolution

logger = logging.getLogger("tvdb_banners")

CHUNK_SIZE = 64 * 1024
RECORD_TAG = "Banner"

# Depth of the elements dispatched by name: children of the document element.
_RECORD_DEPTH = 2

FieldHandler = Callable[[RawBannerRecord, str, Any], None]


def _set_rating(record: RawBannerRecord, value: str, element: Any) -> None:
    rating = parse_float(value)
    if rating is not None:
        record.rating = rating


def _set_vote_count(record: RawBannerRecord, value: str, element: Any) -> None:
    vote_count = parse_int(value)
    if vote_count is not None:
        record.vote_count = vote_count


def _set_language(record: RawBannerRecord, value: str, element: Any) -> None:
    record.language = value


def _set_thumbnail_path(record: RawBannerRecord, value: str, element: Any) -> None:
    record.thumbnail_path = value


def _set_banner_type(record: RawBannerRecord, value: str, element: Any) -> None:
    record.banner_type = value


def _set_banner_type2(record: RawBannerRecord, value: str, element: Any) -> None:
    record.banner_type2 = value
    width, height = parse_resolution(value)
    if width is not None:
        record.width = width
        record.height = height


def _set_path(record: RawBannerRecord, value: str, element: Any) -> None:
    record.path = value


def _set_season(record: RawBannerRecord, value: str, element: Any) -> None:
    if not value.strip():
        return
    season = parse_int(value)
    if season is None:
        raise MalformedSeasonField(value, element.sourceline)
    record.season = season


FIELD_HANDLERS: Dict[str, FieldHandler] = {
    "Rating": _set_rating,
    "RatingCount": _set_vote_count,
    "Language": _set_language,
    "ThumbnailPath": _set_thumbnail_path,
    "BannerType": _set_banner_type,
    "BannerType2": _set_banner_type2,
    "BannerPath": _set_path,
    "Season": _set_season,
}


def read_banner(element: Any) -> RawBannerRecord:
    """Build a record from a fully parsed ``<Banner>`` element."""
    record = RawBannerRecord()
    for child in element:
        handler = FIELD_HANDLERS.get(child.tag)
        if handler is None:
            continue
        handler(record, child.text or "", child)
    return record


RECORD_HANDLERS: Dict[str, Callable[[Any], RawBannerRecord]] = {
    RECORD_TAG: read_banner,
}


def _new_parser() -> Any:
    return etree.XMLPullParser(
        events=("start", "end"),
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


def _discard(element: Any) -> None:
    """Release a processed top-level element and any siblings before it."""
    element.clear()
    parent = element.getparent()
    if parent is None:
        return
    while element.getprevious() is not None:
        del parent[0]


class BannerFeedReader:
    """Single forward pass over a banner feed, yielding one record per ``<Banner>``.

    Only direct children of the document element are dispatched; anything
    other than ``<Banner>`` is dropped without its subtree being inspected.
    ``cancel_event`` is any object with an ``is_set()`` method and is polled
    before each read and at each top-level element.
    """

    def __init__(
        self,
        stream: IO[Union[bytes, str]],
        cancel_event: Optional[Any] = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self.stream = stream
        self.cancel_event = cancel_event
        self.chunk_size = chunk_size
        self._depth = 0
        self._records = 0

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.debug("Banner extraction cancelled after %d records", self._records)
            raise Cancelled("Banner extraction cancelled")

    def _drain(self, parser: Any) -> Iterator[RawBannerRecord]:
        for event, element in parser.read_events():
            if event == "start":
                self._depth += 1
                if self._depth == _RECORD_DEPTH:
                    self._check_cancelled()
                continue

            if self._depth == _RECORD_DEPTH:
                handler = RECORD_HANDLERS.get(element.tag)
                if handler is not None:
                    record = handler(element)
                    self._records += 1
                    yield record
                else:
                    logger.debug("Skipping unrecognised element <%s>", element.tag)
                _discard(element)
            self._depth -= 1

    def __iter__(self) -> Iterator[RawBannerRecord]:
        parser = _new_parser()
        try:
            while True:
                self._check_cancelled()
                chunk = self.stream.read(self.chunk_size)
                if not chunk:
                    break
                parser.feed(chunk)
                yield from self._drain(parser)
            parser.close()
            yield from self._drain(parser)
        except etree.XMLSyntaxError as exc:
            raise FeedParseError(f"Malformed banner feed: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise FeedParseError(f"Banner feed is not valid text: {exc}") from exc
        logger.debug("Extracted %d banner records", self._records)


def extract_records(
    stream: IO[Union[bytes, str]],
    cancel_event: Optional[Any] = None,
) -> Iterator[RawBannerRecord]:
    """Lazily yield every ``<Banner>`` record found in ``stream``."""
    return iter(BannerFeedReader(stream, cancel_event))
