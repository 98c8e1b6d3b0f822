"""Tests for loading a markdown repository from disk."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from markview.repository.loader import ItemIndex, build_tag_map, load_repository
from markview.repository.model import Location, Tag


def write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    write(
        root / "index.md",
        "---\ntitle: Home\nlanguage: en-US\ntags: [Go, Web Dev]\n---\n\n# Welcome\n\nHello.\n",
    )
    write(
        root / "berlin-office" / "office.md",
        "---\n"
        "title: Berlin HQ\n"
        "type: location\n"
        "created: 2013-05-01\n"
        "modified: 2013-06-02T08:15:00\n"
        "tags: go\n"
        "geo:\n"
        "  street: Main St 1\n"
        "  city: Berlin\n"
        "  postcode: '10115'\n"
        "  country: Germany\n"
        "  latitude: 52.5\n"
        "  longitude: 13.4\n"
        "  maptype: roadmap\n"
        "  zoom: 12\n"
        "---\n\nOffice text.\n",
    )
    write(
        root / "notes" / "notes.md",
        "# Notes\n\nNo frontmatter here.\n",
    )
    write(
        root / "notes" / "trip" / "trip.md",
        "---\ntitle: Trip\ntags: [travel]\nlocations: [berlin-office, nowhere]\n---\nGone.\n",
    )
    (root / "assets").mkdir()
    write(root / ".hidden" / "secret.md", "# Secret\n")
    return root


class TestLoadRepository:
    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_repository(tmp_path / "nope")

    def test_tree_shape(self, repo: Path):
        root = load_repository(repo)
        assert root.path == ""
        assert root.title == "Home"
        assert root.metadata.item_type == "repository"
        assert [c.path for c in root.children] == ["berlin-office", "notes"]
        assert [c.path for c in root.children[1].children] == ["notes/trip"]
        assert root.children[1].children[0].level == 2
        assert root.children[1].children[0].parent is root.children[1]

    def test_metadata(self, repo: Path):
        office = load_repository(repo).children[0]
        meta = office.metadata
        assert meta.item_type == "location"
        assert meta.creation_date == datetime(2013, 5, 1)
        assert meta.last_modified_date == datetime(2013, 6, 2, 8, 15)
        assert meta.tags == [Tag("go")]
        assert meta.geo.city == "Berlin"
        assert meta.geo.postcode == "10115"
        assert meta.geo.latitude == "52.5"
        assert meta.geo.map_type == "roadmap"
        assert meta.geo.zoom == 12
        assert office.content.strip() == "Office text."

    def test_defaults_without_frontmatter(self, repo: Path):
        notes = load_repository(repo).children[1]
        assert notes.title == "Notes"
        assert notes.metadata.item_type == "document"
        assert notes.metadata.tags == []
        assert notes.metadata.geo.city == ""

    def test_tags_and_locations(self, repo: Path):
        root = load_repository(repo)
        assert root.metadata.tags == [Tag("go"), Tag("web-dev")]
        trip = root.children[1].children[0]
        assert trip.metadata.locations == [Location("berlin-office"), Location("nowhere")]

    def test_root_without_markdown(self, tmp_path: Path):
        write(tmp_path / "site" / "child" / "page.md", "# Page\n")
        root = load_repository(tmp_path / "site")
        assert root.title == "site"
        assert root.metadata.item_type == "repository"
        assert [c.title for c in root.children] == ["Page"]

    def test_numeric_geo_keeps_source_text(self, tmp_path: Path):
        write(
            tmp_path / "r" / "index.md",
            "---\n"
            "geo:\n"
            "  postcode: 01067\n"
            "  city: Dresden\n"
            "  latitude: 51.050\n"
            "  longitude: 13.740\n"
            "  zoom: 14\n"
            "---\nx\n",
        )
        geo = load_repository(tmp_path / "r").metadata.geo
        assert geo.postcode == "01067"
        assert geo.latitude == "51.050"
        assert geo.longitude == "13.740"
        assert geo.zoom == 14

    def test_numeric_tags_kept_as_written(self, tmp_path: Path):
        write(tmp_path / "r" / "index.md", "---\ntags: [2024, 007]\n---\nx\n")
        root = load_repository(tmp_path / "r")
        assert root.metadata.tags == [Tag("2024"), Tag("007")]

    def test_markdown_less_directory_passes_children_up(self, tmp_path: Path):
        write(tmp_path / "r" / "index.md", "# Home\n")
        write(tmp_path / "r" / "blog" / "2024" / "post.md", "# Post\n")
        write(tmp_path / "r" / "blog" / "2024" / "draft" / "draft.md", "# Draft\n")
        root = load_repository(tmp_path / "r")
        assert [c.path for c in root.children] == ["blog/2024"]
        post = root.children[0]
        assert post.title == "Post"
        assert post.level == 1
        assert post.parent is root
        assert [c.path for c in post.children] == ["blog/2024/draft"]

    def test_invalid_date_ignored(self, tmp_path: Path):
        write(tmp_path / "r" / "index.md", "---\ncreated: not a date\n---\nx\n")
        root = load_repository(tmp_path / "r")
        assert root.metadata.creation_date is None

    def test_malformed_frontmatter(self, tmp_path: Path):
        write(tmp_path / "r" / "index.md", "---\ntitle: [unclosed\n---\n# Fallback\n")
        root = load_repository(tmp_path / "r")
        assert root.metadata.tags == []
        assert root.title == "Fallback"


class TestItemIndex:
    def test_resolve_by_path_name_and_title(self, repo: Path):
        root = load_repository(repo)
        index = ItemIndex(root)
        trip = root.children[1].children[0]
        assert index.resolve("notes/trip") is trip
        assert index.resolve("trip") is trip
        assert index.resolve("Berlin HQ") is root.children[0]
        assert index.resolve("BERLIN-OFFICE") is root.children[0]

    def test_unknown(self, repo: Path):
        index = ItemIndex(load_repository(repo))
        assert index.resolve("nowhere") is None
        assert index.resolve("") is None

    def test_len(self, repo: Path):
        assert len(ItemIndex(load_repository(repo))) == 4


class TestBuildTagMap:
    def test_indexes_whole_tree(self, repo: Path):
        root = load_repository(repo)
        tagmap = build_tag_map(root)
        assert [i.path for i in tagmap.items("go")] == ["", "berlin-office"]
        assert tagmap.counts() == {"go": 2, "travel": 1, "web-dev": 1}

    def test_unload_item(self, repo: Path):
        root = load_repository(repo)
        tagmap = build_tag_map(root)
        tagmap.remove(root.children[1].children[0])
        assert "travel" not in tagmap.counts()
