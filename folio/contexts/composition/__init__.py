"""
Composition Context

Responsibilities:
- Orchestrates data loading, template rendering and CSS assembly per request
- Wraps content fragments for browser viewing or PDF capture
- Validates resume identities and template names against what exists on disk

Owns: Output modes (browser, pdf, api), document shell
Never: Drives the headless browser
"""

from folio.contexts.composition.composer import (
    RenderedTemplate,
    RenderMetadata,
    ResumeComposer,
    TemplateCSSPaths,
)
from folio.contexts.composition.html_document import HTMLDocumentBuilder, LinkTag

__all__ = [
    "HTMLDocumentBuilder",
    "LinkTag",
    "RenderedTemplate",
    "RenderMetadata",
    "ResumeComposer",
    "TemplateCSSPaths",
]
