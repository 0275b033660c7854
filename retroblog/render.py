from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

import markdown

from .errors import MissingTemplate

TAG_RE = re.compile(r"<[^>]+>")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc", "codehilite"]
MARKDOWN_CONFIGS = {"codehilite": {"guess_lang": False}}
LATE_KEYS = ("CONTENT",)


def make_markdown() -> markdown.Markdown:
    return markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, extension_configs=MARKDOWN_CONFIGS)


def render_markdown(text: str, md: markdown.Markdown | None = None) -> str:
    md = md or make_markdown()
    html_content = md.convert(text)
    md.reset()
    return html_content


def strip_tags(html_text: str, replacement: str = "") -> str:
    return TAG_RE.sub(replacement, html_text)


def render_template(template: str, context: Mapping[str, str]) -> str:
    """Replace every ``{{NAME}}`` token found in ``context``.

    Values are inserted as-is. ``CONTENT`` goes in last so placeholders that
    happen to appear inside a post body are never expanded. Tokens without a
    value in ``context`` stay in the output untouched.
    """
    output = template
    for key, value in context.items():
        if key in LATE_KEYS:
            continue
        output = output.replace(f"{{{{{key}}}}}", value)
    for key in LATE_KEYS:
        if key in context:
            output = output.replace(f"{{{{{key}}}}}", context[key])
    return output


def read_template(path: Path) -> str:
    if not path.exists():
        raise MissingTemplate("Missing template", path)
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
