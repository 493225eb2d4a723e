"""Markdown rendering for the help text and challenge titles.

Qt rich-text widgets (``QTextBrowser``) understand a subset of HTML, so the
help text is authored in markdown and rendered once when the dialog opens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""
        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (e.g. a challenge title) without a wrapping paragraph."""
        return self._markdown.renderInline(markdown_text.strip())

    def render_document(self, markdown_text: str, title: str = "ChallengeWheel") -> str:
        body = self.render_fragment(markdown_text)
        return (
            "<html><head>"
            f"<title>{html.escape(title)}</title>"
            "<style>table { border-collapse: collapse; } "
            "td, th { border: 1px solid #888; padding: 4px 8px; }</style>"
            f"</head><body>{body}</body></html>"
        )


renderer = MarkdownRenderer()
