from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidConfiguration, MissingConfiguration
from .utils import parse_int

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

POSTS_PER_INDEX = 3


@dataclass(frozen=True)
class SiteConfig:
    title: str
    base_url: str
    author: str = ""
    description: str = ""
    language: str = "en"
    posts_per_index: int = POSTS_PER_INDEX


def load_config(path: Path) -> dict:
    if not path.exists():
        raise MissingConfiguration("Missing site configuration", path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            raise InvalidConfiguration("TOML config requires tomllib (Python 3.11+) or tomli", path)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            raise InvalidConfiguration(f"Invalid TOML in config file ({exc})", path) from exc
    elif suffix in {".yml", ".yaml"}:
        if yaml is None:
            raise InvalidConfiguration("YAML config requires PyYAML", path)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise InvalidConfiguration(f"Invalid YAML in config file ({exc})", path) from exc
        if data is None:
            data = {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidConfiguration(f"Invalid JSON in config file ({exc})", path) from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration("Config must be a mapping", path)
    return data


def load_site_config(path: Path) -> SiteConfig:
    data = load_config(path)

    def cfg_str(*keys: str, default: str = "") -> str:
        for key in keys:
            value = data.get(key)
            if value is not None:
                return str(value)
        return default

    posts_per_index = parse_int(data.get("postsPerIndex", data.get("posts_per_index")), POSTS_PER_INDEX)
    if posts_per_index <= 0:
        posts_per_index = POSTS_PER_INDEX
    return SiteConfig(
        title=cfg_str("title"),
        base_url=cfg_str("baseUrl", "base_url").rstrip("/"),
        author=cfg_str("author"),
        description=cfg_str("description"),
        language=cfg_str("language", default="en"),
        posts_per_index=posts_per_index,
    )
