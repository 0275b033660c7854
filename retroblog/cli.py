from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import load_site_config
from .content import Post, assemble_post, sort_posts
from .errors import BuildError, MissingConfiguration, MissingContentDirectory, MissingTemplate
from .pages import build_index, build_posts, build_rss, build_sitemap
from .render import make_markdown, read_template, render_markdown

DEFAULT_CONFIG = "site.json"


@dataclass(frozen=True)
class SitePaths:
    config: Path
    content_dir: Path
    post_template: Path
    index_template: Path
    posts_dir: Path
    index: Path
    feed: Path
    sitemap: Path

    @classmethod
    def from_root(cls, root: Path, config: str = DEFAULT_CONFIG) -> "SitePaths":
        config_path = Path(config)
        if not config_path.is_absolute():
            config_path = root / config_path
        return cls(
            config=config_path,
            content_dir=root / "content" / "posts",
            post_template=root / "post-template.html",
            index_template=root / "index.template.html",
            posts_dir=root / "posts",
            index=root / "index.html",
            feed=root / "feed.xml",
            sitemap=root / "sitemap.xml",
        )

    @property
    def generated_files(self) -> list[Path]:
        return [self.index, self.feed, self.sitemap]


def check_inputs(paths: SitePaths) -> None:
    if not paths.config.exists():
        raise MissingConfiguration("Missing site configuration", paths.config)
    if not paths.content_dir.is_dir():
        raise MissingContentDirectory("Missing content directory", paths.content_dir)
    for template in (paths.post_template, paths.index_template):
        if not template.exists():
            raise MissingTemplate("Missing template", template)


def discover_posts(content_dir: Path) -> list[Path]:
    return sorted(
        (path for path in content_dir.glob("*.md") if path.is_file()),
        key=lambda p: p.name,
    )


def load_posts(content_dir: Path) -> list[Post]:
    md = make_markdown()
    posts = []
    for md_file in discover_posts(content_dir):
        raw_text = md_file.read_text(encoding="utf-8")
        posts.append(assemble_post(md_file, raw_text, lambda body: render_markdown(body, md)))
    return sort_posts(posts)


def build_site(paths: SitePaths) -> list[Post]:
    check_inputs(paths)
    config = load_site_config(paths.config)
    post_template = read_template(paths.post_template)
    index_template = read_template(paths.index_template)

    posts = load_posts(paths.content_dir)
    paths.posts_dir.mkdir(parents=True, exist_ok=True)
    build_posts(post_template, paths.posts_dir, posts, config)
    build_index(index_template, paths.index, posts, config)
    build_rss(paths.feed, posts, config)
    build_sitemap(paths.sitemap, posts, config)
    return posts


def clean_site(paths: SitePaths) -> list[Path]:
    removed = []
    if paths.posts_dir.is_dir():
        removed.extend(sorted(paths.posts_dir.glob("*.html")))
    removed.extend(path for path in paths.generated_files if path.is_file())
    for path in removed:
        path.unlink()
    return removed


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Retro Markdown blog builder.")
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Delete generated pages, index, feed and sitemap, then exit.",
    )
    parser.add_argument("--root", default=".", help="Site directory (default: current directory).")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help="Path to site config file (JSON/TOML/YAML), relative to the site directory.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    paths = SitePaths.from_root(Path(args.root), args.config)
    if args.clean:
        clean_site(paths)
        print("Cleaned generated files.")
        sys.exit(0)

    start = time.perf_counter()
    try:
        posts = build_site(paths)
    except BuildError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build complete. {len(posts)} posts.")
    print(f"Build completed in {elapsed:.2f}s.")
