"""Entry point: python -m markview [tree|tags|json] [repository]

- "tree": Print the projected view-model tree (default)
- "tags": Print the tag index with item counts
- "json": Dump the projected view-model tree as JSON
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from markview.config import MarkviewConfig, load_config

USAGE = """\
Usage: python -m markview [tree|tags|json] [repository]
  tree  — Print the projected view-model tree (default)
  tags  — Print every tag with its items
  json  — Dump the projected view-model tree as JSON"""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _project(config: MarkviewConfig):
    from markview.content import RawContentRenderer
    from markview.mapper import Projector
    from markview.repository.loader import ItemIndex, load_repository
    from markview.routes import PathRoutes

    root = load_repository(config.repository_dir)
    projector = Projector(
        ItemIndex(root), PathRoutes(config.routes), RawContentRenderer(), config.view
    )
    return projector.project(root)


def _run_tree(config: MarkviewConfig) -> None:
    model = _project(config)
    for node in model.walk():
        indent = "  " * node.level
        print(f"{indent}{node.title}  ({node.type})  {node.relative_route}")


def _run_tags(config: MarkviewConfig) -> None:
    from markview.repository.loader import build_tag_map, load_repository

    tagmap = build_tag_map(load_repository(config.repository_dir))
    for tag in tagmap.tags():
        items = tagmap.items(tag)
        print(f"{tag.name} ({len(items)})")
        for item in items:
            print(f"  - {item.path or '/'}")


def _run_json(config: MarkviewConfig) -> None:
    model = _project(config)
    print(json.dumps(model.to_dict(), ensure_ascii=False, indent=2))


COMMANDS = {"tree": _run_tree, "tags": _run_tags, "json": _run_json}


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    cmd = args[0] if args else "tree"

    if cmd not in COMMANDS:
        print(USAGE)
        return 1

    config = load_config()
    if len(args) > 1:
        config.repository_dir = Path(args[1])
    _setup_logging(config.log_level)

    try:
        COMMANDS[cmd](config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
