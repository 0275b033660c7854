from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional

from .config import SiteConfig
from .content import Post
from .render import render_template, write_text
from .utils import escape_xml, http_date, join_url, midnight_utc

FEED_LIMIT = 20
LATEST_MARKER = "<!-- LATEST_POSTS -->"
ARCHIVE_MARKER = "<!-- ARCHIVE_LIST -->"
ABOUT_PAGE = "about.html"


def site_context(config: SiteConfig) -> dict[str, str]:
    return {
        "SITE_TITLE": config.title,
        "BASE_URL": config.base_url,
        "AUTHOR": config.author,
        "DESCRIPTION": config.description,
        "LANGUAGE": config.language,
    }


def render_post_page(template: str, post: Post, config: SiteConfig) -> str:
    context = site_context(config)
    context.update(
        {
            "TITLE": post.title,
            "CATEGORY": post.display_category,
            "DATE": post.date,
            "YEAR": post.year,
            "READING_TIME": f"{post.reading_time} min",
            "DESCRIPTION": post.description or config.description,
            "CONTENT": post.content,
        }
    )
    return render_template(template, context)


def build_latest_posts(posts: list[Post], limit: int) -> str:
    articles = []
    for post in posts[:limit]:
        articles.append(
            '<article class="post">\n'
            '  <div class="meta">\n'
            f"    <span><strong>Date:</strong> {post.date}</span>\n"
            f"    <span><strong>Category:</strong> {post.display_category}</span>\n"
            f"    <span><strong>Reading Time:</strong> {post.reading_time} min</span>\n"
            '    <span><strong>Status:</strong> <span style="color:var(--hot)">LATEST</span></span>\n'
            "  </div>\n"
            f'  <h3><a href="{post.url_path}">{post.title}</a></h3>\n'
            f"  <p>{post.snippet}</p>\n"
            f'  <p><a href="{post.url_path}">Read more...</a></p>\n'
            "</article>"
        )
    return "\n".join(articles)


def build_archive_list(posts: list[Post]) -> str:
    return "\n".join(
        f'<li><a href="{post.url_path}">{post.date} - {post.title}</a></li>' for post in posts
    )


def render_index_page(template: str, posts: list[Post], config: SiteConfig) -> str:
    html_doc = render_template(template, site_context(config))
    html_doc = html_doc.replace(LATEST_MARKER, build_latest_posts(posts, config.posts_per_index), 1)
    return html_doc.replace(ARCHIVE_MARKER, build_archive_list(posts), 1)


def build_posts(template: str, posts_dir: Path, posts: list[Post], config: SiteConfig) -> None:
    for post in posts:
        out_path = posts_dir / f"{post.slug}.html"
        write_text(out_path, render_post_page(template, post, config))
        print(f"Generated post: {out_path}")


def build_index(template: str, index_path: Path, posts: list[Post], config: SiteConfig) -> None:
    write_text(index_path, render_index_page(template, posts, config))
    print(f"Generated index: {index_path}")


def post_pub_date(post: Post) -> str:
    try:
        return http_date(midnight_utc(post.date))
    except ValueError:
        return ""


def render_rss(
    posts: list[Post], config: SiteConfig, build_time: Optional[dt.datetime] = None
) -> str:
    build_time = build_time or dt.datetime.now(dt.timezone.utc)
    items = []
    for post in posts[:FEED_LIMIT]:
        link = join_url(config.base_url, post.url_path)
        pub_date = post_pub_date(post)
        lines = [
            "<item>",
            f"<title>{escape_xml(post.title)}</title>",
            f"<link>{link}</link>",
            f"<guid>{link}</guid>",
        ]
        if pub_date:
            lines.append(f"<pubDate>{pub_date}</pubDate>")
        lines.extend([f"<description>{escape_xml(post.snippet)}</description>", "</item>"])
        items.append("\n".join(lines))
    rss = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0">',
        "<channel>",
        f"<title>{escape_xml(config.title)}</title>",
        f"<link>{config.base_url}</link>",
        f"<description>{escape_xml(config.description)}</description>",
        f"<language>{config.language}</language>",
        f"<lastBuildDate>{http_date(build_time)}</lastBuildDate>",
    ]
    rss.extend(items)
    rss.extend(["</channel>", "</rss>"])
    return "\n".join(rss) + "\n"


def build_rss(feed_path: Path, posts: list[Post], config: SiteConfig) -> None:
    write_text(feed_path, render_rss(posts, config))
    print(f"Generated feed: {feed_path}")


def sitemap_urls(posts: list[Post], config: SiteConfig) -> list[str]:
    urls = [config.base_url + "/", join_url(config.base_url, ABOUT_PAGE)]
    urls.extend(join_url(config.base_url, post.url_path) for post in posts)
    return urls


def render_sitemap(posts: list[Post], config: SiteConfig) -> str:
    sitemap = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    sitemap.extend(f"<url><loc>{url}</loc></url>" for url in sitemap_urls(posts, config))
    sitemap.append("</urlset>")
    return "\n".join(sitemap) + "\n"


def build_sitemap(sitemap_path: Path, posts: list[Post], config: SiteConfig) -> None:
    write_text(sitemap_path, render_sitemap(posts, config))
    print(f"Generated sitemap: {sitemap_path}")
