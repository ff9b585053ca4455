from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PreformattedString, Tag

# Elements whose surrounding whitespace never shows up in the rendered page.
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "base", "blockquote", "body", "caption",
        "col", "colgroup", "dd", "details", "dialog", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
        "h4", "h5", "h6", "head", "header", "hr", "html", "li", "link", "main",
        "meta", "nav", "ol", "p", "pre", "script", "section", "style",
        "summary", "table", "tbody", "td", "tfoot", "th", "thead", "title",
        "tr", "ul",
    }
)

INDENT = " "


def _is_blank(node) -> bool:
    return (
        isinstance(node, NavigableString)
        and not isinstance(node, PreformattedString)
        and not node.strip()
    )


def _is_block(node) -> bool:
    if isinstance(node, Tag):
        return node.name in BLOCK_TAGS
    return isinstance(node, Comment) or _is_blank(node)


def _lays_out_children(node) -> bool:
    """A block whose children are all blocks: its inner whitespace is free to change."""
    if not isinstance(node, Tag) or node.name not in BLOCK_TAGS or node.name == "pre":
        return False
    children = list(node.children)
    return any(isinstance(c, Tag) for c in children) and all(_is_block(c) for c in children)


class HtmlFormatter:
    """
    Whitespace-only pretty printing of rendered HTML.

    Line breaks and indentation are added only between block elements. Anything
    holding text or inline markup (a paragraph, a list item, a heading, <pre>)
    is written out on one line exactly as parsed, so the rendered text does not
    change.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def format(self, html: str) -> str:
        if not self.enabled or not html.strip():
            return html

        soup = BeautifulSoup(html, "html.parser")
        top = list(soup.contents)
        if not all(_is_block(n) or isinstance(n, PreformattedString) for n in top):
            # Loose text or inline markup at the top level: leave it alone.
            return html

        lines: list[str] = []
        for node in top:
            self._emit(soup, node, 0, lines)
        return "\n".join(lines)

    __call__ = format

    def _emit(self, soup: BeautifulSoup, node, depth: int, lines: list[str]) -> None:
        if _is_blank(node):
            return

        pad = INDENT * depth
        if isinstance(node, PreformattedString):
            lines.append(pad + node.output_ready())
            return

        if not _lays_out_children(node):
            lines.append(pad + node.decode())
            return

        closing = f"</{node.name}>"
        opening = soup.new_tag(node.name, attrs=dict(node.attrs)).decode()[: -len(closing)]
        lines.append(pad + opening)
        for child in node.children:
            self._emit(soup, child, depth + 1, lines)
        lines.append(pad + closing)
