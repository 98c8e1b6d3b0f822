"""Configuration loading from environment variables and markview.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "markview.toml"
# RFC 850, e.g. "Monday, 02-Jan-06 15:04:05 UTC"
_DEFAULT_DATE_FORMAT = "%A, %d-%b-%y %H:%M:%S %Z"


@dataclass
class ViewConfig:
    """How view-model fields are formatted."""

    date_format: str = _DEFAULT_DATE_FORMAT
    default_language: str = "en"


@dataclass
class RoutesConfig:
    """Route shape for items and tags."""

    base_url: str = "/"
    tag_prefix: str = "tags"
    extension: str = ".html"


@dataclass
class MarkviewConfig:
    """Top-level markview configuration."""

    view: ViewConfig = field(default_factory=ViewConfig)
    routes: RoutesConfig = field(default_factory=RoutesConfig)
    repository_dir: Path = Path(".")
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> MarkviewConfig:
    """Load configuration from environment variables and optional markview.toml.

    Priority: environment variables > markview.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.markview/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".markview" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    view_data = file_data.get("view", {})
    routes_data = file_data.get("routes", {})

    config = MarkviewConfig(
        view=ViewConfig(
            date_format=os.getenv(
                "MARKVIEW_DATE_FORMAT", view_data.get("date_format", _DEFAULT_DATE_FORMAT)
            ),
            default_language=os.getenv(
                "MARKVIEW_LANGUAGE", view_data.get("default_language", "en")
            ),
        ),
        routes=RoutesConfig(
            base_url=os.getenv("MARKVIEW_BASE_URL", routes_data.get("base_url", "/")),
            tag_prefix=routes_data.get("tag_prefix", "tags"),
            extension=routes_data.get("extension", ".html"),
        ),
        repository_dir=Path(
            os.getenv("MARKVIEW_REPOSITORY", file_data.get("repository_dir", "."))
        ),
        log_level=os.getenv("MARKVIEW_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
