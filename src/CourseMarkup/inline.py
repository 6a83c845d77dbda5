from __future__ import annotations

import re

from .styles import ARTICLE, Dialect

# re.ASCII keeps \w to [A-Za-z0-9_], so Hebrew letters next to an asterisk do not block italics.
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ARTICLE_ITALIC_RE = re.compile(r"(?<!\w)\*(?!\*)([^*]+?)\*(?!\w|\*)", re.ASCII)
_COURSE_ITALIC_RE = re.compile(r"(?<!\w)(?<!\*)\*(?!\*)([^*]+?)(?<!\*)\*(?!\w)(?!\*)", re.ASCII)
_STRIKE_RE = re.compile(r"~~(.*?)~~")
_CODE_RE = re.compile(r"`(.*?)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_SUP_RE = re.compile(r"<sup>(.*?)</sup>")

LINK_CLASS = "text-primary dark:text-primary-light hover:underline"
SUP_CLASS = "text-xs opacity-70 ms-0.5"


def apply_article_inline_styles(text: str) -> str:
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = _ARTICLE_ITALIC_RE.sub(r"<em>\1</em>", text)
    text = _STRIKE_RE.sub(r"<del>\1</del>", text)
    text = _CODE_RE.sub(r"<code>\1</code>", text)
    text = _LINK_RE.sub(
        rf'<a href="\2" target="_blank" rel="noopener noreferrer" class="{LINK_CLASS}">\1</a>',
        text,
    )
    return text


def apply_course_inline_styles(text: str) -> str:
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = _COURSE_ITALIC_RE.sub(r"<em>\1</em>", text)
    # Citation markers arrive as raw <sup> tags.
    text = _SUP_RE.sub(rf'<sup class="{SUP_CLASS}">\1</sup>', text)
    return text


def style_inline(text: str, dialect: Dialect = ARTICLE) -> str:
    """Convert inline markup of a single line into HTML.

    Bold is applied before italics so that ``**`` pairs are consumed first.
    Unmatched markup is left untouched.
    """
    if dialect.extended_inline:
        return apply_article_inline_styles(text)
    return apply_course_inline_styles(text)
