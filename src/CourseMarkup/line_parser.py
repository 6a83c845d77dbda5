from __future__ import annotations

import re
from typing import List

from .model import (
    AlertBlock,
    AlertType,
    Block,
    Blockquote,
    Document,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    TableBlock,
)
from .styles import ARTICLE, BLOCK_START_PATTERN, QUIZ_OPEN_MARKER, TABLE_MARKER, Dialect
from .tables import TableSchemaRegistry, default_registry

_ALERT_TYPE_RE = re.compile(r"^([A-Z]+):\s*", re.IGNORECASE | re.ASCII)
_ORDERED_ITEM_RE = re.compile(r"^(\d+)\.\s+")
_HEADING_PREFIXES = (("#### ", 4), ("### ", 3), ("## ", 2), ("# ", 1))
_RULES = {"---", "***", "___"}
# Table rows end at a new table marker or a non-table block start; a bare
# "טבלה" prefix without the trailing space is still row text.
_TABLE_ROW_END_RE = re.compile(BLOCK_START_PATTERN)


class LineCursor:
    """Forward-only view over the trimmed lines of a document."""

    def __init__(self, lines: List[str]):
        self._lines = [line.strip() for line in lines]
        self._index = 0

    def at_end(self) -> bool:
        return self._index >= len(self._lines)

    def peek(self) -> str | None:
        if self.at_end():
            return None
        return self._lines[self._index]

    def advance(self) -> str:
        line = self._lines[self._index]
        self._index += 1
        return line


def parse_content(text: str, dialect: Dialect = ARTICLE, registry: TableSchemaRegistry | None = None) -> Document:
    """Scan text line by line and group the lines into blocks."""
    if dialect.tables and registry is None:
        registry = default_registry()
    source = text.strip()
    cursor = LineCursor(source.split("\n"))
    block_start = re.compile(dialect.block_start_pattern)
    blocks: List[Block] = []

    while not cursor.at_end():
        line = cursor.peek()
        if line == "":
            cursor.advance()
            continue
        heading = _heading_level(line)
        if _is_alert_start(line, dialect):
            blocks.append(_consume_alert(cursor, block_start))
        elif dialect.tables and line.startswith(TABLE_MARKER):
            blocks.append(_consume_table(cursor, registry, source))
        elif heading:
            level, prefix_len = heading
            cursor.advance()
            blocks.append(Heading(level=level, text=line[prefix_len:]))
        elif line in _RULES:
            cursor.advance()
            blocks.append(HorizontalRule())
        elif _is_unordered_item(line):
            items = []
            while not cursor.at_end() and _is_unordered_item(cursor.peek()):
                items.append(cursor.advance()[2:])
            blocks.append(ListBlock(items=items, ordered=False))
        elif _ORDERED_ITEM_RE.match(line):
            start = int(_ORDERED_ITEM_RE.match(line).group(1))
            items = []
            while not cursor.at_end() and _ORDERED_ITEM_RE.match(cursor.peek()):
                items.append(_ORDERED_ITEM_RE.sub("", cursor.advance(), count=1))
            blocks.append(ListBlock(items=items, ordered=True, start=start))
        elif line.startswith("> "):
            quote_lines = []
            while not cursor.at_end() and cursor.peek().startswith("> "):
                quote_lines.append(cursor.advance()[2:])
            blocks.append(Blockquote(lines=quote_lines))
        else:
            blocks.append(_consume_paragraph(cursor, block_start))

    return Document(blocks=blocks)


def _is_alert_start(line: str, dialect: Dialect) -> bool:
    if not line.startswith(">>> "):
        return False
    # Degraded quiz regions keep their markers as literal text.
    return not (dialect.literal_quiz_markers and line.startswith(QUIZ_OPEN_MARKER))


def _heading_level(line: str) -> tuple[int, int] | None:
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return level, len(prefix)
    return None


def _is_unordered_item(line: str) -> bool:
    return line.startswith("* ") or line.startswith("- ")


def _consume_alert(cursor: LineCursor, block_start: re.Pattern) -> AlertBlock:
    remainder = cursor.advance()[4:]
    alert_type = AlertType.NOTE
    content = remainder
    match = _ALERT_TYPE_RE.match(remainder)
    if match:
        alert_type = AlertType.normalize(match.group(1))
        content = remainder[match.end():].strip()
    lines = [content]
    while not cursor.at_end() and cursor.peek() != "" and not block_start.match(cursor.peek()):
        lines.append(cursor.advance())
    return AlertBlock(alert_type=alert_type, lines=lines)


def _consume_table(
    cursor: LineCursor, registry: TableSchemaRegistry, source: str
) -> TableBlock:
    marker_line = cursor.advance()
    caption = marker_line[marker_line.find(":") + 1:].strip()
    header: list[str] = []
    if not cursor.at_end() and cursor.peek():
        header = registry.header_cells(cursor.advance())

    table = TableBlock(caption=caption, header=header)
    while not cursor.at_end():
        line = cursor.peek()
        if line == "" or line.startswith(TABLE_MARKER) or _TABLE_ROW_END_RE.match(line):
            break
        table.rows.append(registry.split_row(cursor.advance(), source))
    return table


def _consume_paragraph(cursor: LineCursor, block_start: re.Pattern) -> Paragraph:
    lines = [cursor.advance()]
    while not cursor.at_end():
        line = cursor.peek()
        if line == "" or block_start.match(line):
            break
        lines.append(cursor.advance())
    return Paragraph(lines=lines)
