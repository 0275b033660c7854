#!/usr/bin/env python3
"""Build the blog: Markdown posts in content/posts -> posts/*.html, index.html, feed.xml, sitemap.xml.

Usage:
    python build.py            # Full build
    python build.py --clean    # Remove generated files and exit
"""
from retroblog.cli import main

if __name__ == "__main__":
    main()
