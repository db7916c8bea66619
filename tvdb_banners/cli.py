"""Command-line entry point for ranking TheTVDB season images."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence, TextIO

from .config import DEFAULT_TIMEOUT, FetchConfig
from .errors import FeedParseError
from .extractor import extract_records
from .images import fetch_images
from .models import RankedImageInfo
from .ranker import rank_images

logger = logging.getLogger("tvdb_banners.cli")


def _add_feed_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("feed", type=Path, help="Path to a banners.xml feed")
    parser.add_argument(
        "--season",
        type=int,
        required=True,
        help="Season number to collect images for",
    )
    parser.add_argument(
        "--language",
        default="en",
        help="Preferred image language code (default: en)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract and rank season images from a TheTVDB banners.xml feed.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rank_parser = subparsers.add_parser("rank", help="List the ranked images for a season")
    _add_feed_arguments(rank_parser)
    rank_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit one JSON object per image instead of tab-separated columns",
    )

    fetch_parser = subparsers.add_parser(
        "fetch", help="Download the top ranked images and report their type and size"
    )
    _add_feed_arguments(fetch_parser)
    fetch_parser.add_argument(
        "--limit",
        type=int,
        default=3,
        help="Number of top ranked images to download (default: 3)",
    )
    fetch_parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="HTTP timeout in seconds for each image",
    )

    return parser.parse_args(argv)


def _load_ranked(args: argparse.Namespace) -> List[RankedImageInfo]:
    with args.feed.open("rb") as handle:
        return rank_images(extract_records(handle), args.season, args.language)


def _format_row(image: RankedImageInfo) -> str:
    columns = [
        image.role.value,
        image.language if image.language is not None else "-",
        f"{image.rating:.2f}" if image.rating is not None else "-",
        str(image.vote_count) if image.vote_count is not None else "-",
        image.url,
    ]
    return "\t".join(columns)


def _image_to_json(image: RankedImageInfo) -> str:
    payload = dataclasses.asdict(image)
    payload["role"] = image.role.value
    return json.dumps(payload, ensure_ascii=False)


def _run_rank(args: argparse.Namespace, out: TextIO) -> None:
    images = _load_ranked(args)
    for image in images:
        out.write((_image_to_json(image) if args.json else _format_row(image)) + "\n")
    logger.info("%d images for season %d", len(images), args.season)


def _run_fetch(args: argparse.Namespace, out: TextIO) -> None:
    images = _load_ranked(args)[: max(args.limit, 0)]
    payloads = fetch_images(images, FetchConfig(timeout=args.timeout))
    for payload in payloads:
        size = (
            f"{payload.width}x{payload.height}"
            if payload.width is not None and payload.height is not None
            else "?"
        )
        out.write(f"{payload.extension}\t{size}\t{len(payload.data)}\t{payload.url}\n")
    logger.info("Fetched %d/%d images", len(payloads), len(images))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        if args.command == "rank":
            _run_rank(args, sys.stdout)
        else:
            _run_fetch(args, sys.stdout)
    except FileNotFoundError as exc:
        logger.error("Feed not found: %s", exc.filename)
        return 1
    except FeedParseError as exc:
        logger.error("Could not read %s: %s", args.feed, exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
