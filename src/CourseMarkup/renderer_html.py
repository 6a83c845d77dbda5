from __future__ import annotations

from dataclasses import dataclass

from .inline import style_inline
from .model import (
    AlertBlock,
    Block,
    Blockquote,
    Document,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    TableBlock,
    TableRow,
)
from .styles import ARTICLE, Dialect


@dataclass
class RenderState:
    dialect: Dialect
    table_row_count: int = 0


def render_html(doc: Document, dialect: Dialect = ARTICLE) -> str:
    state = RenderState(dialect=dialect)
    return "\n".join(_dispatch_block(block, state) for block in doc.blocks)


def _dispatch_block(block: Block, state: RenderState) -> str:
    if isinstance(block, Heading):
        return _render_heading(block, state)
    if isinstance(block, Paragraph):
        return _render_paragraph(block, state)
    if isinstance(block, ListBlock):
        return _render_list(block, state)
    if isinstance(block, Blockquote):
        return _render_blockquote(block, state)
    if isinstance(block, AlertBlock):
        return _render_alert(block, state)
    if isinstance(block, TableBlock):
        return _render_table(block, state)
    if isinstance(block, HorizontalRule):
        return state.dialect.hr_html
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _inline(text: str, state: RenderState) -> str:
    return style_inline(text, state.dialect)


def _render_heading(heading: Heading, state: RenderState) -> str:
    tag = state.dialect.heading_tags[heading.level - 1]
    css = state.dialect.heading_classes[heading.level - 1]
    return f'<{tag} class="{css}">{_inline(heading.text, state)}</{tag}>'


def _render_paragraph(paragraph: Paragraph, state: RenderState) -> str:
    # Soft wrap: source lines of one paragraph are joined with a space.
    text = " ".join(_inline(line, state) for line in paragraph.lines)
    return f'<p class="{state.dialect.paragraph_class}">{text}</p>'


def _render_list(block: ListBlock, state: RenderState) -> str:
    dialect = state.dialect
    items = "".join(f'<li class="{dialect.list_item_class}">{_inline(item, state)}</li>' for item in block.items)
    if block.ordered:
        return f'<ol class="{dialect.ordered_list_class}" start="{block.start}">{items}</ol>'
    return f'<ul class="{dialect.unordered_list_class}">{items}</ul>'


def _render_blockquote(block: Blockquote, state: RenderState) -> str:
    text = "<br />".join(_inline(line, state) for line in block.lines)
    return f'<blockquote><p class="{state.dialect.blockquote_class}">{text}</p></blockquote>'


def _render_alert(block: AlertBlock, state: RenderState) -> str:
    dialect = state.dialect
    slug = block.alert_type.slug
    body = "<br />".join(_inline(line, state) for line in block.lines)
    return (
        f'<div class="custom-alert-box custom-alert-box-{slug} {dialect.alert_type_classes[block.alert_type]} '
        f'{dialect.alert_box_class}">'
        f'<div class="flex-shrink-0 pt-0.5">{dialect.icons[block.alert_type]}</div>'
        f'<div class="{dialect.alert_body_class}"><p class="{dialect.alert_text_class}">{body}</p></div>'
        "</div>"
    )


def _render_table(table: TableBlock, state: RenderState) -> str:
    classes = state.dialect.table_classes
    parts = [
        f'<div class="{classes["wrapper"]}"><table class="{classes["table"]}">',
        f'<caption class="{classes["caption"]}">{_inline(table.caption, state)}</caption>',
    ]
    if table.header:
        cells = "".join(f'<th scope="col" class="{classes["th"]}">{_inline(h, state)}</th>' for h in table.header)
        parts.append(f'<thead class="{classes["thead"]}"><tr>{cells}</tr></thead>')
    parts.append("<tbody>")
    state.table_row_count = 0
    for row in table.rows:
        parts.append(_render_table_row(row, state))
    parts.append("</tbody></table></div>")
    return "".join(parts)


def _render_table_row(row: TableRow, state: RenderState) -> str:
    classes = state.dialect.table_classes
    stripe = classes["row_even"] if state.table_row_count % 2 == 0 else classes["row_odd"]
    state.table_row_count += 1
    cells = []
    for cell in row.cells:
        css = classes["td_key"] if cell.key else classes["td_value"]
        span = f' colspan="{cell.colspan}"' if cell.colspan > 1 else ""
        cells.append(f'<td class="{css}"{span}>{_inline(cell.text, state)}</td>')
    return f'<tr class="{stripe} {classes["row"]}">{"".join(cells)}</tr>'
