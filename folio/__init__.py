"""
folio - resume composition and rendering

Renders structured resume data (JSON descriptors + Markdown fragments) into
styled HTML, then either serves it to a browser or rasterizes it to a PDF
through a headless browser.

Architecture:
- Styling Context: asset embedding, template manifests, CSS layer assembly
- Templating Context: resume data loading, Markdown, Jinja2 template rendering
- Composition Context: browser / PDF / API document composition
- Rendering Context: headless-browser PDF generation with content-measured pages
"""

__version__ = "0.1.0"
