# obshtml/services/markdown_renderer.py
from __future__ import annotations

from urllib.parse import quote

import markdown

from obshtml.domain.interfaces import IMarkdownRenderer
from obshtml.utils.constants import CSS_PREVIEW, EXPORT_SUFFIX, HTML_TEMPLATE, MARKDOWN_SUFFIX


def _wikilink_url(label: str, base: str, end: str) -> str:
    # [[Some Note]] -> Some Note.md.html, matching the exported file names.
    target = label.strip()
    if not target.endswith(MARKDOWN_SUFFIX):
        target += MARKDOWN_SUFFIX
    return f"{base}{quote(target)}{end}"


class MarkdownRenderer(IMarkdownRenderer):
    """
    Converts vault Markdown to HTML.

    Besides the usual python-markdown extensions this understands [[wikilinks]]
    (pointing at the exported .md.html siblings), task lists, and wraps $...$
    math for a JS-capable viewer.
    """

    def __init__(self, css: str = CSS_PREVIEW) -> None:
        self.css = css

    def to_body_html(self, markdown_text: str) -> str:
        exts = [
            "extra",
            "fenced_code",
            "codehilite",
            "toc",
            "sane_lists",
            "smarty",
            "wikilinks",
            "pymdownx.arithmatex",
            "pymdownx.tasklist",
        ]

        ext_cfg = {
            "codehilite": {"guess_lang": False, "noclasses": True},
            "wikilinks": {
                "base_url": "",
                "end_url": EXPORT_SUFFIX,
                "build_url": _wikilink_url,
            },
            "pymdownx.arithmatex": {"generic": True},
            "pymdownx.tasklist": {"custom_checkbox": False},
        }

        return markdown.markdown(
            markdown_text,
            extensions=exts,
            extension_configs=ext_cfg,
            output_format="html5",
        )

    def to_html(self, markdown_text: str) -> str:
        return HTML_TEMPLATE.format(css=self.css, body=self.to_body_html(markdown_text))
