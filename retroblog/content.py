from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

from .errors import BuildError, MalformedDocument, MissingRequiredField
from .render import render_markdown, strip_tags

FRONT_MATTER_RE = re.compile(r"\A---\r?\n(?:(?P<meta>.*?)\r?\n)?---(?:\r?\n|\Z)", re.DOTALL)
SLUG_RE = re.compile(r"[^a-z0-9]+")
SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
WHITESPACE_RE = re.compile(r"\s+")

REQUIRED_FIELDS = ("title", "date")
SLUG_MAX_LENGTH = 80
WORDS_PER_MINUTE = 200
SNIPPET_WORDS = 40
SNIPPET_SUFFIX = "..."
DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class Post:
    title: str
    date: str
    year: str
    category: str
    description: str
    slug: str
    reading_time: int
    content: str
    snippet: str
    source: Optional[Path] = None

    @property
    def display_category(self) -> str:
        return self.category or DEFAULT_CATEGORY

    @property
    def url_path(self) -> str:
        return f"posts/{self.slug}.html"


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    match = FRONT_MATTER_RE.match(clean_text)
    if match is None:
        raise MalformedDocument("Missing front matter block (--- ... ---)")

    meta = {}
    for line in (match.group("meta") or "").splitlines():
        if not line.strip() or ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if key:
            meta[key] = value.strip()

    missing = [field for field in REQUIRED_FIELDS if not meta.get(field)]
    if missing:
        raise MissingRequiredField(missing)
    return meta, clean_text[match.end() :]


def slugify(title: str) -> str:
    slug = SLUG_RE.sub("-", title.lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH]


def resolve_slug(meta: dict) -> str:
    if meta.get("slug"):
        return meta["slug"]
    return slugify(meta["title"])


def estimate_reading_time(text: str) -> int:
    words = len(text.split())
    # Round half up; round() would send 2.5 to 2.
    return max(1, math.floor(words / WORDS_PER_MINUTE + 0.5))


def extract_snippet(html_text: str) -> str:
    text = SCRIPT_STYLE_RE.sub("", html_text)
    text = strip_tags(text, " ")
    text = WHITESPACE_RE.sub(" ", text).strip()
    words = text.split(" ")[:SNIPPET_WORDS] if text else []
    return " ".join(words) + SNIPPET_SUFFIX


def assemble_post(
    path: Path, text: str, renderer: Callable[[str], str] = render_markdown
) -> Post:
    try:
        meta, body = parse_front_matter(text)
    except BuildError as exc:
        exc.path = path
        raise
    body = body.strip()
    html_content = renderer(body)
    return Post(
        title=meta["title"],
        date=meta["date"],
        year=meta["date"][:4],
        category=meta.get("category", ""),
        description=meta.get("description", ""),
        slug=resolve_slug(meta),
        reading_time=estimate_reading_time(body),
        content=html_content,
        snippet=extract_snippet(html_content),
        source=path,
    )


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    """Newest first. Same-date posts keep the order they were found in."""
    return sorted(posts, key=lambda post: post.date, reverse=True)
