from __future__ import annotations

from .line_parser import parse_content
from .renderer_html import render_html
from .styles import ARTICLE


def format_article_content_to_html(text: str | None) -> str:
    """Render an article body written in the site markup to an HTML string."""
    if not text:
        return ""
    document = parse_content(text, ARTICLE)
    return render_html(document, ARTICLE)
