"""Load a markdown repository from disk into an item tree.

Layout: every directory holding a markdown file is one item. Its first
``*.md`` file (by name) supplies YAML frontmatter metadata and the body;
sub-directories with markdown become child items. A directory without
markdown is not an item itself; items below it attach to the nearest
loaded ancestor.

    repo/
    ├── index.md              # root item (type defaults to "repository")
    ├── berlin-office/
    │   └── office.md         # child item "berlin-office"
    ├── notes/
    │   ├── notes.md
    │   └── 2024-trip/
    │       └── trip.md       # grandchild "notes/2024-trip"
    └── blog/
        └── 2024/
            └── post.md       # child "blog/2024" (blog/ has no markdown)
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from markview.repository.model import (
    GeoInformation,
    Item,
    ItemType,
    Location,
    MetaData,
    Tag,
)
from markview.repository.tagmap import TagMap

logger = logging.getLogger(__name__)

_HEADING = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)

_NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class _TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that leaves numeric-looking scalars as written.

    Postcodes like ``01067`` and coordinates like ``51.050`` must keep their
    exact source text.
    """


_TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _TextScalarHandler(YAMLHandler):
    def load(self, fm: str, **kwargs: object) -> object:
        return yaml.load(fm, Loader=_TextScalarLoader)


def load_repository(root: Path) -> Item:
    """Scan ``root`` and return the root item of the content tree."""
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Repository not found: {root}")

    item = _load_item(root, root) or Item(
        path="",
        title=root.resolve().name,
        metadata=MetaData(item_type=ItemType.REPOSITORY.value),
    )
    _load_children(item, root, root)
    logger.info("Loaded %d item(s) from %s", sum(1 for _ in item.walk()), root)
    return item


def _load_children(parent: Item, directory: Path, root: Path) -> None:
    for sub in sorted(p for p in directory.iterdir() if p.is_dir()):
        if sub.name.startswith("."):
            continue
        child = _load_item(sub, root)
        if child is None:
            # No markdown here: its items hang off the nearest loaded ancestor.
            _load_children(parent, sub, root)
            continue
        parent.add_child(child)
        _load_children(child, sub, root)


def _load_item(directory: Path, root: Path) -> Item | None:
    md_files = sorted(directory.glob("*.md"))
    if not md_files:
        return None

    md_file = md_files[0]
    meta, body = _parse_frontmatter(md_file)
    is_root = directory == root
    rel_path = "" if is_root else directory.relative_to(root).as_posix()

    default_type = ItemType.REPOSITORY if is_root else ItemType.DOCUMENT
    title = str(meta.get("title") or "") or _first_heading(body) or directory.resolve().name

    return Item(
        path=rel_path,
        title=title,
        description=str(meta.get("description") or ""),
        content=body,
        metadata=MetaData(
            language=str(meta.get("language") or ""),
            creation_date=_parse_date(meta.get("created"), md_file),
            last_modified_date=_parse_date(meta.get("modified"), md_file),
            item_type=str(meta.get("type") or default_type.value).strip().lower(),
            tags=_parse_tags(meta.get("tags")),
            locations=[Location(name) for name in _as_list(meta.get("locations"))],
            geo=_parse_geo(meta.get("geo")),
        ),
    )


def _parse_frontmatter(path: Path) -> tuple[dict, str]:
    """Parse YAML frontmatter and body from a markdown file."""
    try:
        post = frontmatter.load(str(path), handler=_TextScalarHandler())
        return dict(post.metadata), post.content
    except Exception:
        logger.warning("Could not parse frontmatter in %s", path, exc_info=True)
        try:
            return {}, path.read_text(encoding="utf-8")
        except OSError:
            return {}, ""


def _first_heading(body: str) -> str:
    match = _HEADING.search(body)
    return match.group(1) if match else ""


def _as_list(value: object) -> list[str]:
    """Accept a YAML list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        values = value.split(",")
    elif isinstance(value, (list, tuple)):
        values = [str(v) for v in value]
    else:
        values = [str(value)]
    return [v.strip() for v in values if v.strip()]


def _parse_tags(value: object) -> list[Tag]:
    tags: list[Tag] = []
    for name in _as_list(value):
        try:
            tags.append(Tag(name))
        except ValueError:
            logger.debug("Ignoring invalid tag %r", name)
    return tags


def _parse_date(value: object, source: Path) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        logger.warning("Invalid date %r in %s", value, source)
        return None


def _parse_geo(value: object) -> GeoInformation:
    if not isinstance(value, dict):
        return GeoInformation()

    def text(key: str) -> str:
        raw = value.get(key)
        return "" if raw is None else str(raw).strip()

    try:
        zoom = int(value.get("zoom") or 0)
    except (TypeError, ValueError):
        zoom = 0

    return GeoInformation(
        street=text("street"),
        city=text("city"),
        postcode=text("postcode"),
        country=text("country"),
        latitude=text("latitude"),
        longitude=text("longitude"),
        map_type=text("maptype"),
        zoom=zoom,
    )


class ItemIndex:
    """Name lookup over an item tree, used to resolve location references.

    A reference matches an item's route path (``"notes/2024-trip"``), its
    directory name, or its title; name and title matching ignore case.
    """

    def __init__(self, root: Item) -> None:
        self._by_path: dict[str, Item] = {}
        self._by_name: dict[str, Item] = {}
        self._by_title: dict[str, Item] = {}
        for item in root.walk():
            self._by_path.setdefault(item.path, item)
            if item.name:
                self._by_name.setdefault(item.name.lower(), item)
            if item.title:
                self._by_title.setdefault(item.title.lower(), item)

    def resolve(self, name: str) -> Item | None:
        key = name.strip().strip("/")
        if not key:
            return None
        if key in self._by_path:
            return self._by_path[key]
        key = key.lower()
        return self._by_name.get(key) or self._by_title.get(key)

    def __len__(self) -> int:
        return len(self._by_path)


def build_tag_map(root: Item) -> TagMap:
    """Index every item of the tree by its tags."""
    tagmap = TagMap()
    for item in root.walk():
        tagmap.add(item)
    return tagmap
