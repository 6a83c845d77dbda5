"""Bridge between ``>>> TYPE:`` alert markup and a rich-text editor's HTML.

``preparse_alert_blocks`` turns alert blocks in raw markup into
``<div data-alert-block data-alert-type="...">`` elements that the editor
loads as alert nodes; everything else is passed through as markup.
``postserialize_alert_blocks`` goes the other way on the editor's HTML and
then converts the whole document to markdown. The two are not inverses:
the reverse direction rewrites content the forward direction never touched.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Protocol

from bs4 import BeautifulSoup, NavigableString
from markdownify import markdownify

from .model import AlertType

_TYPE_ALTERNATION = "|".join(t.value for t in AlertType)

_ALERT_BLOCK_RE = re.compile(
    rf"(^|\n\n)>>>\s*({_TYPE_ALTERNATION}):\s*(.*?)"
    rf"(?=\n\n|\n>>>\s*(?:{_TYPE_ALTERNATION}):|\n\s*#{{1,6}}\s|\n\s*\*\s|\n\s*-\s|\n\s*\d+\.\s"
    r"|\n\s*---\s*|\n\s*___\s*|\n\s*\*\*\*\s*|\Z)",
    re.DOTALL,
)

# Placeholder for a converted alert during the final markdownify pass;
# markdownify collapses the blank lines around bare text nodes.
_PLACEHOLDER_PREFIX = "COURSEMARKUPALERT"
_PLACEHOLDER_RUN_RE = re.compile(rf"\s*((?:{_PLACEHOLDER_PREFIX}\d+X\s*)+)")
_PLACEHOLDER_RE = re.compile(rf"{_PLACEHOLDER_PREFIX}\d+X")

MARKDOWN_OPTIONS = {
    "heading_style": "ATX",
    "bullets": "-",
    "escape_asterisks": False,
    "escape_underscores": False,
    "escape_misc": False,
}


class HtmlDomParser(Protocol):
    """The DOM operations the reverse conversion needs."""

    def parse(self, html: str) -> Any: ...

    def find_alert_blocks(self, document: Any) -> Iterable[Any]: ...

    def alert_type(self, node: Any) -> str | None: ...

    def inner_html(self, node: Any) -> str: ...

    def replace_with_text(self, node: Any, text: str) -> None: ...

    def body_html(self, document: Any) -> str: ...


class SoupDomParser:
    """HtmlDomParser backed by BeautifulSoup's built-in html.parser tree builder."""

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    def find_alert_blocks(self, document: BeautifulSoup) -> list:
        # Static copy: nodes are replaced while iterating.
        return list(document.select("div[data-alert-block][data-alert-type]"))

    def alert_type(self, node) -> str | None:
        value = node.get("data-alert-type")
        return value.upper() if value else None

    def inner_html(self, node) -> str:
        return node.decode_contents()

    def replace_with_text(self, node, text: str) -> None:
        node.replace_with(NavigableString(text))

    def body_html(self, document: BeautifulSoup) -> str:
        body = document.body
        if body is not None:
            return body.decode_contents()
        return document.decode()


DEFAULT_DOM_PARSER = SoupDomParser()


def html_to_markdown(html: str) -> str:
    return markdownify(html, **MARKDOWN_OPTIONS)


def _escape_angle_brackets(line: str) -> str:
    return line.replace("<", "&lt;").replace(">", "&gt;")


def preparse_alert_blocks(markdown: str) -> str:
    """Rewrite ``>>> TYPE: text`` blocks as editor alert-node HTML."""
    if not markdown:
        return ""

    def _replace(match: re.Match) -> str:
        prefix, alert_type, content = match.group(1), match.group(2), match.group(3) or ""
        lines = [line for line in content.strip().split("\n") if line.strip()]
        if lines:
            body = "".join(f"<p>{_escape_angle_brackets(line)}</p>" for line in lines)
        else:
            # The editor needs at least one paragraph to create the node.
            body = "<p></p>"
        return f'{prefix}<div data-alert-block data-alert-type="{alert_type.lower()}">{body}</div>'

    return _ALERT_BLOCK_RE.sub(_replace, markdown)


def postserialize_alert_blocks(html_output: str, dom_parser: HtmlDomParser | None = DEFAULT_DOM_PARSER) -> str:
    """Turn editor HTML back into markup with ``>>> TYPE:`` alert blocks.

    Alert divs are replaced by their markup first; the remaining document is
    then converted to markdown as a whole, and each alert ends up separated
    from its neighbours by a blank line. Without a DOM parser the input is
    returned unchanged.
    """
    if dom_parser is None or not html_output:
        return html_output

    document = dom_parser.parse(html_output)
    known_types = {t.value for t in AlertType}
    alert_blocks: dict[str, str] = {}
    for node in dom_parser.find_alert_blocks(document):
        alert_type = dom_parser.alert_type(node)
        if alert_type not in known_types:
            continue
        inner = html_to_markdown(dom_parser.inner_html(node))
        content = "\n".join(line.strip() for line in inner.splitlines() if line.strip())
        placeholder = f"{_PLACEHOLDER_PREFIX}{len(alert_blocks)}X"
        alert_blocks[placeholder] = f">>> {alert_type}: {content}"
        dom_parser.replace_with_text(node, f"\n\n{placeholder}\n\n")

    markdown = html_to_markdown(dom_parser.body_html(document))

    def _restore(match: re.Match) -> str:
        blocks = [alert_blocks.get(key, key) for key in _PLACEHOLDER_RE.findall(match.group(1))]
        return "\n\n" + "\n\n".join(blocks) + "\n\n"

    return _PLACEHOLDER_RUN_RE.sub(_restore, markdown).strip()
