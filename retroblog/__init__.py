"""Static site builder for a Markdown blog."""

__version__ = "1.0.0"
