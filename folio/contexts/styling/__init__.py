"""
Styling Context

Responsibilities:
- Embeds images, icons and fonts as base64 data URIs
- Loads and validates per-template manifests (stylesheet hrefs, font files)
- Assembles the layered stylesheet for browser and PDF render contexts

Owns: Asset cache, manifest cache, CSS assembly cache, RenderContext
Never: Renders templates or drives the browser
"""

from folio.contexts.styling.asset_store import AssetInfo, AssetStore
from folio.contexts.styling.css_assembler import CSSAssembler, CSSAssembly, combine_css
from folio.contexts.styling.manifest import (
    FontFamily,
    FontFile,
    ManifestRegistry,
    TemplateManifest,
)
from folio.contexts.styling.render_context import DEFAULT_TEMPLATE, RenderContext

__all__ = [
    # Assets
    "AssetInfo",
    "AssetStore",
    # Stylesheets
    "CSSAssembler",
    "CSSAssembly",
    "combine_css",
    # Manifests
    "FontFamily",
    "FontFile",
    "ManifestRegistry",
    "TemplateManifest",
    # Render context
    "DEFAULT_TEMPLATE",
    "RenderContext",
]
