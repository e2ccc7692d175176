"""
Resume Composer

Orchestrates the data loader, template renderer, CSS assembler and asset
store into one content render, then shapes the result for its consumer:

    compose_for_browser  full document, linked stylesheets, navigation chrome
    compose_for_pdf      full document, one inline <style>, no chrome
    compose_for_api      RenderedTemplate (fragment + css + data + metadata)

Caching lives in the sub-services; the composer itself is stateless.
"""

import asyncio
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from folio.contexts.composition.html_document import (
    HTMLDocumentBuilder,
    LinkTag,
    preconnect,
    stylesheet,
)
from folio.contexts.composition.logger import _log_debug, _log_warning, log_render_complete
from folio.contexts.styling.asset_store import (
    FONT_PRECONNECT_ORIGINS,
    AssetStore,
    combined_font_import_url,
)
from folio.contexts.styling.css_assembler import CSSAssembler
from folio.contexts.styling.manifest import ManifestRegistry
from folio.contexts.styling.render_context import DEFAULT_TEMPLATE, RenderContext
from folio.contexts.templating.data_loader import DataLoader
from folio.contexts.templating.resume_data_structure import ResumeData
from folio.contexts.templating.template_renderer import TemplateRenderer
from folio.utils.async_tools import read_text
from folio.utils.errors import ResumeValidationError
from folio.utils.paths import ProjectPaths
from folio.utils.timestamp import iso_utc

DEFAULT_SHARED_CSS_HREF = "styles/shared.css"
ICON_CSS_HREF = "styles/icons.css"


@dataclass
class RenderMetadata:
    """
    Metadata for one content render.

    Attributes:
        template: Template used
        resume_type: Resume identity rendered
        render_time_ms: Wall time of the content render
        context: Render context in effect
        generated_at: UTC timestamp of the render
    """

    template: str
    resume_type: str
    render_time_ms: float
    context: RenderContext
    generated_at: str = field(default_factory=iso_utc)


@dataclass
class RenderedTemplate:
    """
    Output of one content render.

    Attributes:
        html_content: Content fragment (no document shell)
        css: Complete stylesheet for the render context
        data: Fully loaded resume data the fragment was rendered from
        metadata: Render metadata
        html: Full document; set only by the browser/PDF wrapping step
    """

    html_content: str
    css: str
    data: ResumeData
    metadata: RenderMetadata
    html: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible form for API consumers."""
        return {
            "html": self.html,
            "html_content": self.html_content,
            "css": self.css,
            "data": self.data.to_dict(),
            "metadata": asdict(self.metadata),
        }


@dataclass(frozen=True)
class TemplateCSSPaths:
    shared: str
    template: str


class ResumeComposer:
    """
    Composition entry point.

    Construct with explicit services, or use from_paths() for the default
    wiring over a project root.
    """

    def __init__(
        self,
        paths: ProjectPaths,
        asset_store: AssetStore,
        manifests: ManifestRegistry,
        css_assembler: CSSAssembler,
        data_loader: DataLoader,
        renderer: TemplateRenderer,
        document_builder: Optional[HTMLDocumentBuilder] = None,
        default_context: RenderContext = RenderContext(include_fonts=True, include_icons=True),
    ):
        self.paths = paths
        self.asset_store = asset_store
        self.manifests = manifests
        self.css_assembler = css_assembler
        self.data_loader = data_loader
        self.renderer = renderer
        self.document_builder = document_builder or HTMLDocumentBuilder()
        self.default_context = default_context

    @classmethod
    def from_paths(cls, paths: Optional[ProjectPaths] = None, **assembler_options) -> "ResumeComposer":
        """
        Wire the default service graph for a project.

        Args:
            paths: Project layout (default: ProjectPaths.from_env())
            **assembler_options: Passed to CSSAssembler (enable_fonts, enable_icons)
        """
        paths = paths or ProjectPaths.from_env()
        asset_store = AssetStore(paths.icons_dir)
        manifests = ManifestRegistry(paths)
        return cls(
            paths=paths,
            asset_store=asset_store,
            manifests=manifests,
            css_assembler=CSSAssembler(paths, manifests, **assembler_options),
            data_loader=DataLoader(paths, asset_store),
            renderer=TemplateRenderer(paths.templates_dir, asset_store),
        )

    # Validation

    def get_available_resume_types(self) -> List[str]:
        return self.data_loader.get_available_resume_types()

    def get_available_templates(self) -> List[str]:
        return self.renderer.get_available_templates()

    def validate(self, resume_id: str, template: str) -> None:
        """
        Check a resume identity and template against the current listings.

        Raises:
            ResumeValidationError: Listing the valid options
        """
        resume_types = self.get_available_resume_types()
        if resume_id not in resume_types:
            raise ResumeValidationError("resume_type", resume_id, resume_types)

        templates = self.get_available_templates()
        if template not in templates:
            raise ResumeValidationError("template", template, templates)

    # Content

    async def render_content(
        self, resume_id: str, template: str = DEFAULT_TEMPLATE, **context_overrides
    ) -> RenderedTemplate:
        """
        Render the content fragment and stylesheet for one resume.

        Args:
            resume_id: Resume identity
            template: Template name
            **context_overrides: for_pdf, include_fonts, include_icons

        Raises:
            ResumeValidationError: Unknown resume identity or template
            ResourceNotFoundError: Missing data, template or (PDF) font configuration
            TemplateRenderError: Template or helper failure
        """
        self.validate(resume_id, template)
        context = self.default_context.with_overrides(template=template, **context_overrides)

        start = time.perf_counter()

        # Icons render in every mode; preloading keeps icon() off the disk during render
        data, css, *_ = await asyncio.gather(
            self.data_loader.load_resume_data(resume_id, context),
            self.css_assembler.get_complete_css(context),
            asyncio.to_thread(self.renderer.get_template, template),
            self.asset_store.preload_icons(),
        )
        html_content = self.renderer.render(template, data, for_pdf=context.for_pdf)

        render_time_ms = (time.perf_counter() - start) * 1000
        log_render_complete(resume_id, template, "pdf" if context.for_pdf else "browser", render_time_ms)

        return RenderedTemplate(
            html_content=html_content,
            css=css,
            data=data,
            metadata=RenderMetadata(
                template=template,
                resume_type=resume_id,
                render_time_ms=render_time_ms,
                context=context,
            ),
        )

    # Output modes

    async def compose_for_browser(
        self, resume_id: str, template: str = DEFAULT_TEMPLATE, **context_overrides
    ) -> str:
        """Full document for interactive viewing; the browser fetches CSS and fonts itself."""
        context_overrides["for_pdf"] = False
        content = await self.render_content(resume_id, template, **context_overrides)

        navigation, css_paths = await asyncio.gather(
            self.load_navigation(), self.get_template_css_paths(template)
        )

        links: List[LinkTag] = [
            preconnect(FONT_PRECONNECT_ORIGINS[0]),
            preconnect(FONT_PRECONNECT_ORIGINS[1], crossorigin=True),
            stylesheet(combined_font_import_url()),
            stylesheet(css_paths.shared),
            stylesheet(css_paths.template),
        ]
        if content.metadata.context.include_icons:
            links.append(stylesheet(ICON_CSS_HREF))

        content.html = self.document_builder.build(body=[navigation, content.html_content], links=links)
        return content.html

    async def compose_for_pdf(
        self, resume_id: str, template: str = DEFAULT_TEMPLATE, **context_overrides
    ) -> str:
        """Self-contained document for headless capture: inline CSS with embedded fonts."""
        context_overrides["for_pdf"] = True
        content = await self.render_content(resume_id, template, **context_overrides)
        content.html = self.document_builder.build(body=[content.html_content], inline_css=content.css)
        return content.html

    async def compose_for_api(
        self, resume_id: str, template: str = DEFAULT_TEMPLATE, **context_overrides
    ) -> RenderedTemplate:
        """Content render without any document wrapper."""
        return await self.render_content(resume_id, template, **context_overrides)

    # Browser chrome

    async def load_navigation(self) -> str:
        """Navigation partial; empty when the project has none."""
        nav_path = self.paths.navigation_partial
        if not nav_path.is_file():
            _log_warning(f"Navigation component not found: {self.paths.display(nav_path)}")
            return ""
        return await read_text(nav_path)

    async def get_template_css_paths(self, template: str) -> TemplateCSSPaths:
        """Stylesheet hrefs for browser rendering, from the manifest when there is one."""
        if self.manifests.has_manifest(template):
            manifest = await self.manifests.get_manifest(template)
            return TemplateCSSPaths(shared=manifest.css_shared, template=manifest.css_template)

        template_css: Path = self.paths.template_css(template)
        return TemplateCSSPaths(
            shared=DEFAULT_SHARED_CSS_HREF,
            template=self.paths.display(template_css),
        )

    # Caches

    def clear_cache(self) -> None:
        """Clear every downstream cache (templates, CSS, assets, manifests)."""
        self.renderer.clear_cache()
        self.css_assembler.clear_cache()
        self.asset_store.clear_cache()
        self.manifests.clear_cache()
        _log_debug("All caches cleared")

    def get_cache_stats(self) -> Dict[str, Dict[str, Any]]:
        return {
            "templates": self.renderer.get_cache_stats(),
            "css": self.css_assembler.get_cache_stats(),
            "assets": self.asset_store.get_cache_stats(),
            "manifests": self.manifests.get_cache_stats(),
        }

