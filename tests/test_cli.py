"""
Tests for tvdb_banners/cli.py
"""

import json

import pytest

from conftest import banner_xml, feed_xml
from tvdb_banners import cli
from tvdb_banners.config import BANNER_BASE_URL
from tvdb_banners.models import ImagePayload


@pytest.fixture
def feed_path(tmp_path):
    path = tmp_path / "banners.xml"
    path.write_text(
        feed_xml(
            banner_xml(Season="1", BannerType="season", BannerType2="season", BannerPath="p.jpg", Language="en", Rating="6.5", RatingCount="4"),
            banner_xml(Season="1", BannerType="fanart", BannerType2="1920x1080", BannerPath="f.jpg"),
            banner_xml(Season="2", BannerType="season", BannerType2="season", BannerPath="x.jpg"),
        ),
        encoding="utf-8",
    )
    return path


class TestRank:
    def test_tab_output(self, feed_path, capsys):
        assert cli.main(["rank", str(feed_path), "--season", "1"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"Primary\ten\t6.50\t4\t{BANNER_BASE_URL}p.jpg",
            f"Backdrop\t-\t-\t-\t{BANNER_BASE_URL}f.jpg",
        ]

    def test_json_output(self, feed_path, capsys):
        assert cli.main(["rank", str(feed_path), "--season", "1", "--json"]) == 0
        rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert rows[0]["role"] == "Primary"
        assert rows[1]["width"] == 1920
        assert rows[1]["provider_name"] == "TheTVDB"

    def test_malformed_feed(self, tmp_path, capsys):
        path = tmp_path / "banners.xml"
        path.write_text("<Banners><Banner><Season>one</Season></Banner></Banners>", encoding="utf-8")
        assert cli.main(["rank", str(path), "--season", "1"]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_feed(self, tmp_path):
        assert cli.main(["rank", str(tmp_path / "absent.xml"), "--season", "1"]) == 1

    def test_season_is_required(self, feed_path):
        with pytest.raises(SystemExit):
            cli.main(["rank", str(feed_path)])


class TestFetch:
    def test_limit_and_output(self, feed_path, capsys, monkeypatch):
        seen = []

        def fake_fetch_images(images, config):
            seen.extend(image.url for image in images)
            assert config.timeout == 2.0
            return [
                ImagePayload(
                    url=image.url,
                    data=b"1234",
                    extension="jpg",
                    content_type="image/jpeg",
                    width=680,
                    height=1000,
                )
                for image in images
            ]

        monkeypatch.setattr(cli, "fetch_images", fake_fetch_images)
        code = cli.main(["fetch", str(feed_path), "--season", "1", "--limit", "1", "--timeout", "2"])
        assert code == 0
        assert seen == [BANNER_BASE_URL + "p.jpg"]
        assert capsys.readouterr().out == f"jpg\t680x1000\t4\t{BANNER_BASE_URL}p.jpg\n"
