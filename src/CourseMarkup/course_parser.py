from __future__ import annotations

import json
import logging
from typing import Any, List, Tuple

from .line_parser import parse_content
from .model import ContentItem
from .renderer_html import render_html
from .styles import COURSE, QUIZ_CLOSE_MARKER, QUIZ_OPEN_MARKER
from .tables import TableSchemaRegistry

logger = logging.getLogger(__name__)

Segment = Tuple[str, Any]


def split_quiz_segments(text: str) -> List[Segment]:
    """Split raw course text into ("html", text) and ("quiz", payload) segments.

    Quiz regions are delimited by ``>>> QUIZ_JSON:`` and ``<<< QUIZ_JSON_END``
    and may sit anywhere, not only on their own lines. A region whose payload
    is not a JSON object stays in the surrounding text, markers included. An
    opening marker without a closing one turns the rest of the input into text.
    Whitespace-only text segments are dropped.
    """
    segments: List[Segment] = []
    pending: List[str] = []
    pos = 0

    def flush() -> None:
        chunk = "".join(pending)
        pending.clear()
        if chunk.strip():
            segments.append(("html", chunk))

    while True:
        start = text.find(QUIZ_OPEN_MARKER, pos)
        if start == -1:
            break
        end = text.find(QUIZ_CLOSE_MARKER, start + len(QUIZ_OPEN_MARKER))
        if end == -1:
            logger.debug("Unterminated quiz block at offset %d, keeping it as text", start)
            break
        region_end = end + len(QUIZ_CLOSE_MARKER)
        pending.append(text[pos:start])
        payload = _load_quiz(text[start + len(QUIZ_OPEN_MARKER):end])
        if payload is None:
            pending.append(text[start:region_end])
        else:
            flush()
            segments.append(("quiz", payload))
        pos = region_end

    pending.append(text[pos:])
    flush()
    return segments


def _load_quiz(raw: str) -> dict | None:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        logger.debug("Quiz payload is not valid JSON (%s), keeping it as text", exc)
        return None
    if not isinstance(payload, dict):
        logger.debug("Quiz payload is %s, not an object, keeping it as text", type(payload).__name__)
        return None
    return payload


def format_course_detailed_content_to_html(
    text: str | None, registry: TableSchemaRegistry | None = None
) -> List[ContentItem]:
    """Render course content into an ordered list of HTML and quiz items."""
    if not text:
        return []
    items: List[ContentItem] = []
    for kind, value in split_quiz_segments(text):
        if kind == "quiz":
            items.append(ContentItem(type="quiz", content=value))
            continue
        document = parse_content(value, COURSE, registry=registry)
        items.append(ContentItem(type="html", content=render_html(document, COURSE)))
    return items
