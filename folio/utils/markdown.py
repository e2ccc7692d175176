"""
Markdown Utilities

Renders resume Markdown fragments (summary, skills, experience) to HTML.
"""

import markdown
from markupsafe import Markup

# GitHub-flavoured behaviour: tables/fenced code via "extra", single newlines
# inside a paragraph become <br>.
MARKDOWN_EXTENSIONS = ["extra", "nl2br", "sane_lists"]


def render_markdown(text: str) -> Markup:
    """
    Convert Markdown to HTML.

    Content comes from the resume's own data files and is trusted, so the
    result is returned as Markup and inserted unescaped by templates.

    Args:
        text: Markdown source

    Returns:
        HTML markup (empty for empty or missing input)
    """
    if not text or not text.strip():
        return Markup("")

    # Markdown instances keep per-document state; build one per call.
    converter = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, output_format="html")
    return Markup(converter.convert(text))
