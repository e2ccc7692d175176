"""
CSS Assembler

Builds the stylesheet for a render context from four layers, always
concatenated in the same order:

    base (styles/shared.css)
    template (resumes/styles/<template>.css, optional)
    font (browser: styles/fonts.css; PDF: base64 @font-face rules from the manifest)
    icon (styles/icons.css)

Assemblies are cached per (for_pdf, template, include_fonts, include_icons).
"""

import asyncio
import base64
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from dotenv import load_dotenv

from folio.contexts.styling.logger import _log_debug, _log_warning, log_css_assembly
from folio.contexts.styling.manifest import ManifestRegistry
from folio.contexts.styling.render_context import RenderContext
from folio.utils.async_tools import read_bytes, read_text
from folio.utils.errors import FontConfigurationError
from folio.utils.paths import ProjectPaths

load_dotenv()
CSS_ENABLE_FONTS = os.getenv("CSS_ENABLE_FONTS", "true").lower() != "false"
CSS_ENABLE_ICONS = os.getenv("CSS_ENABLE_ICONS", "true").lower() != "false"

LAYER_SEPARATOR = "\n\n"

CacheKey = Tuple[bool, str, bool, bool]


@dataclass(frozen=True)
class CSSAssembly:
    base_css: str
    template_css: str
    font_css: str
    icon_css: str
    complete_css: str


def combine_css(parts: List[str]) -> str:
    """Join non-empty layers with blank lines, preserving order."""
    return LAYER_SEPARATOR.join(part for part in parts if part.strip())


async def _no_layer() -> str:
    return ""


class CSSAssembler:
    """
    Assembles and caches complete stylesheets per render context.

    Concurrent requests for the same key share one in-flight assembly, so a
    cold key is read from disk once no matter how many callers race for it.
    """

    def __init__(
        self,
        paths: ProjectPaths,
        manifests: ManifestRegistry,
        enable_fonts: bool = CSS_ENABLE_FONTS,
        enable_icons: bool = CSS_ENABLE_ICONS,
    ):
        self.paths = paths
        self.manifests = manifests
        self.enable_fonts = enable_fonts
        self.enable_icons = enable_icons
        self._assemblies: Dict[CacheKey, CSSAssembly] = {}
        self._inflight: Dict[CacheKey, "asyncio.Task[CSSAssembly]"] = {}

    async def get_complete_css(self, context: RenderContext) -> str:
        """Complete stylesheet text for a context (cached)."""
        return (await self.get_css_assembly(context)).complete_css

    async def get_css_assembly(self, context: RenderContext) -> CSSAssembly:
        """
        All layers plus the combined stylesheet for a context (cached).

        Raises:
            FontConfigurationError: PDF context and the template's font
                manifest or one of its font files is missing
        """
        key = context.cache_key
        cached = self._assemblies.get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._assemble_and_cache(key, context))
            self._inflight[key] = task
        # A cancelled caller must not cancel the assembly other callers share
        return await asyncio.shield(task)

    async def _assemble_and_cache(self, key: CacheKey, context: RenderContext) -> CSSAssembly:
        try:
            assembly = await self._assemble(context)
            self._assemblies[key] = assembly
            return assembly
        finally:
            self._inflight.pop(key, None)

    async def _assemble(self, context: RenderContext) -> CSSAssembly:
        template_name = context.cache_key[1]

        if context.for_pdf:
            font_layer = self.load_pdf_font_css(template_name) if self.enable_fonts else _no_layer()
        elif context.include_fonts and self.enable_fonts:
            font_layer = self.read_css_file(self.paths.browser_font_css)
        else:
            font_layer = _no_layer()

        icon_layer = (
            self.read_css_file(self.paths.icon_css)
            if context.include_icons and self.enable_icons
            else _no_layer()
        )

        # Layers load concurrently; concatenation order below is fixed.
        base_css, template_css, font_css, icon_css = await asyncio.gather(
            self.read_css_file(self.paths.base_css),
            self.read_css_file(self.paths.template_css(template_name)),
            font_layer,
            icon_layer,
        )

        complete_css = combine_css([base_css, template_css, font_css, icon_css])
        log_css_assembly(
            cache_key=str(context.cache_key),
            layer_sizes={
                "base": len(base_css),
                "template": len(template_css),
                "font": len(font_css),
                "icon": len(icon_css),
            },
            total=len(complete_css),
        )

        return CSSAssembly(
            base_css=base_css,
            template_css=template_css,
            font_css=font_css,
            icon_css=icon_css,
            complete_css=complete_css,
        )

    async def read_css_file(self, path: Path) -> str:
        """Read a stylesheet; a missing file is an empty layer."""
        if not path.is_file():
            _log_warning(f"CSS file not found: {path}")
            return ""
        return await read_text(path)

    async def load_pdf_font_css(self, template_name: str) -> str:
        """
        Embed every font declared in the template manifest as @font-face rules.

        No fallback: a PDF rendered without its fonts looks wrong without
        failing, so a missing manifest or font file is an error.

        Raises:
            FontConfigurationError: Manifest or font file missing
        """
        if not self.manifests.has_manifest(template_name):
            raise FontConfigurationError(
                f"Font configuration not found for template '{template_name}'",
                kind="font",
                path=self.manifests.manifest_path(template_name),
            )

        manifest = await self.manifests.get_manifest(template_name)

        entries = []
        for family in manifest.fonts:
            for font_file in family.files:
                font_path = self.paths.fonts_dir / font_file.file
                if not font_path.is_file():
                    raise FontConfigurationError(
                        f"Font file not found for template '{template_name}': {font_file.file}",
                        kind="font",
                        path=font_path,
                    )
                entries.append((family.name, font_file, font_path))

        payloads = await asyncio.gather(*(read_bytes(path) for _, _, path in entries))

        rules = []
        for (family_name, font_file, _), payload in zip(entries, payloads):
            encoded = base64.b64encode(payload).decode("ascii")
            rules.append(
                "@font-face {\n"
                f"  font-family: '{family_name}';\n"
                f"  src: url('data:{font_file.mime_type};base64,{encoded}') format('{font_file.format}');\n"
                f"  font-weight: {font_file.weight};\n"
                f"  font-style: {font_file.style};\n"
                "  font-display: swap;\n"
                "}"
            )

        _log_debug(f"Embedded {len(rules)} font faces for template '{template_name}'")
        return "\n".join(rules)

    def clear_cache(self) -> None:
        self._assemblies.clear()

    def is_cached(self, context: RenderContext) -> bool:
        return context.cache_key in self._assemblies

    def get_cache_stats(self) -> Dict[str, int]:
        return {"assembly_cache_size": len(self._assemblies), "in_flight": len(self._inflight)}
