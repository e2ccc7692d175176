"""
HTML document shell.

Wraps a rendered content fragment in a complete <!DOCTYPE html> document.
The shell itself is a package template (templates/document.html.jinja).
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

DOCUMENT_TEMPLATE = "document.html.jinja"
DEFAULT_TITLE = "Resume"


@dataclass(frozen=True)
class LinkTag:
    rel: str
    href: str
    crossorigin: bool = False


def stylesheet(href: str) -> LinkTag:
    return LinkTag(rel="stylesheet", href=href)


def preconnect(href: str, crossorigin: bool = False) -> LinkTag:
    return LinkTag(rel="preconnect", href=href, crossorigin=crossorigin)


class HTMLDocumentBuilder:
    """Renders the document shell around trusted fragments."""

    def __init__(self):
        self.env = Environment(
            loader=PackageLoader("folio.contexts.composition", "templates"),
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._template = self.env.get_template(DOCUMENT_TEMPLATE)

    def build(
        self,
        body: Iterable[str],
        links: Iterable[LinkTag] = (),
        inline_css: Optional[str] = None,
        title: str = DEFAULT_TITLE,
        lang: str = "en",
    ) -> str:
        """
        Build a full HTML document.

        Args:
            body: HTML fragments placed in <body> in order (empty ones skipped)
            links: <link> tags for <head>
            inline_css: Stylesheet text for a single inline <style> block
            title: Document title
            lang: Document language

        Returns:
            Complete HTML document
        """
        fragments: List[Markup] = [Markup(fragment) for fragment in body if fragment]
        return self._template.render(
            title=title,
            lang=lang,
            links=list(links),
            inline_css=Markup(inline_css) if inline_css else None,
            body=fragments,
        )
