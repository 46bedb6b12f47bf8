"""Markdown rendering for catalog display strings.

Catalog prompts and explanations are authored as CommonMark so authors can
emphasize key words. Qt labels accept a subset of HTML, which is all the
renderer emits.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown text into HTML fragments for rich-text labels."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable("strikethrough")

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_block(self, markdown_text: str, font_size: int) -> str:
        """Render markdown wrapped in a sized container."""

        fragment = self.render_fragment(markdown_text)
        return f'<div style="font-size: {font_size}pt;">{fragment}</div>'


# Shared instance so MarkdownIt is built once; only the Qt thread renders.
renderer = MarkdownRenderer()
