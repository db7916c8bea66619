"""Shared fixtures for building small banner feeds."""

import io

import pytest


def banner_xml(**fields):
    """Render one <Banner> element; keyword names are the feed's tag names."""
    children = "".join(
        f"<{tag}/>" if value is None else f"<{tag}>{value}</{tag}>"
        for tag, value in fields.items()
    )
    return f"<Banner>{children}</Banner>"


def feed_xml(*banners, extra=""):
    body = "".join(banners)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<Banners>{body}{extra}</Banners>'


@pytest.fixture
def make_feed():
    def _make(*banners, extra=""):
        return io.BytesIO(feed_xml(*banners, extra=extra).encode("utf-8"))

    return _make
