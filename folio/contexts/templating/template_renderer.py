"""
Template Renderer

Compiles and caches HTML resume templates (Jinja2) and renders them against
loaded resume data, producing a content fragment (no <html>/<head>).

Template resolution, per template name:

    resumes/<name>/layout.html    component template; every sibling *.html is
                                  preloaded as a component for component()
    resumes/<name>.html           legacy single-file template
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from jinja2 import (
    Environment,
    FileSystemLoader,
    Template,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from folio.contexts.styling.asset_store import AssetStore
from folio.contexts.templating.helpers import register_helpers, render_globals
from folio.contexts.templating.logger import _log_debug, log_template_compiled
from folio.contexts.templating.resume_data_structure import ResumeData
from folio.utils.errors import TemplateNotFoundError, TemplateRenderError

LAYOUT_FILE = "layout.html"
TEMPLATE_SUFFIX = ".html"


@dataclass
class CompiledTemplate:
    """
    A resolved template and the components preloaded for it.

    Attributes:
        name: Template name
        layout: Compiled entry template
        components: Compiled sibling templates by name (component style only)
        style: "component" or "legacy"
    """

    name: str
    layout: Template
    components: Dict[str, Template] = field(default_factory=dict)
    style: str = "legacy"


class TemplateRenderer:
    """
    Registry for loading, caching and rendering resume templates.

    Templates are compiled on first use and reused until clear_cache().
    """

    def __init__(self, templates_dir: Path, asset_store: AssetStore):
        """
        Initialize the renderer.

        Args:
            templates_dir: Root holding <name>/layout.html and <name>.html templates
            asset_store: Backs the icon() helper
        """
        self.templates_dir = Path(templates_dir)
        self.asset_store = asset_store
        self._cache: Dict[str, CompiledTemplate] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"], default_for_string=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        register_helpers(self.env)

    def get_template(self, template_name: str) -> CompiledTemplate:
        """
        Get a compiled template by name, loading and caching it if necessary.

        Raises:
            TemplateNotFoundError: Neither <name>/layout.html nor <name>.html exists
            TemplateRenderError: Template has Jinja2 syntax errors
        """
        if template_name in self._cache:
            return self._cache[template_name]

        layout_path = self.templates_dir / template_name / LAYOUT_FILE
        legacy_path = self.templates_dir / f"{template_name}{TEMPLATE_SUFFIX}"

        try:
            if layout_path.is_file():
                compiled = CompiledTemplate(
                    name=template_name,
                    layout=self.env.get_template(f"{template_name}/{LAYOUT_FILE}"),
                    components=self._load_components(template_name),
                    style="component",
                )
            elif legacy_path.is_file():
                compiled = CompiledTemplate(
                    name=template_name,
                    layout=self.env.get_template(f"{template_name}{TEMPLATE_SUFFIX}"),
                )
            else:
                raise TemplateNotFoundError(template_name, checked=[layout_path, legacy_path])
        except TemplateNotFound as e:
            raise TemplateNotFoundError(template_name, checked=[layout_path, legacy_path]) from e
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to compile template: {e}", template_name=template_name, original_error=e
            ) from e

        log_template_compiled(template_name, compiled.style, len(compiled.components))
        self._cache[template_name] = compiled
        return compiled

    def _load_components(self, template_name: str) -> Dict[str, Template]:
        template_dir = self.templates_dir / template_name
        return {
            path.stem: self.env.get_template(f"{template_name}/{path.name}")
            for path in sorted(template_dir.glob(f"*{TEMPLATE_SUFFIX}"))
            if path.name != LAYOUT_FILE
        }

    def render(self, template_name: str, data: ResumeData, for_pdf: bool = False) -> str:
        """
        Render a template against resume data.

        Args:
            template_name: Template to render
            data: Fully loaded resume data
            for_pdf: Exposed to templates as `for_pdf`

        Returns:
            HTML content fragment

        Raises:
            TemplateNotFoundError: Template does not exist
            TemplateRenderError: Compilation or helper failure (e.g. missing component)
        """
        compiled = self.get_template(template_name)

        variables = data.template_variables()
        variables["template"] = template_name
        variables["for_pdf"] = for_pdf
        bound = render_globals(template_name, self.asset_store, compiled.components, variables)

        start = time.perf_counter()
        try:
            html = compiled.layout.render(bound)
        except TemplateRenderError:
            raise
        except (TemplateError, TypeError, ValueError) as e:
            raise TemplateRenderError(
                f"Failed to render template: {e}", template_name=template_name, original_error=e
            ) from e

        _log_debug(
            f"Rendered '{template_name}' for {data.resume_id} "
            f"in {(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return html

    def get_available_templates(self) -> List[str]:
        """Template names: directories with a layout.html, plus legacy *.html files."""
        if not self.templates_dir.is_dir():
            return []

        names = set()
        for entry in self.templates_dir.iterdir():
            if entry.is_dir() and (entry / LAYOUT_FILE).is_file():
                names.add(entry.name)
            elif entry.is_file() and entry.suffix == TEMPLATE_SUFFIX:
                names.add(entry.stem)
        return sorted(names)

    def clear_cache(self) -> None:
        """Clear compiled templates (and Jinja's own template cache)."""
        self._cache.clear()
        if self.env.cache is not None:
            self.env.cache.clear()

    def is_cached(self, template_name: str) -> bool:
        return template_name in self._cache

    def get_cache_stats(self) -> Dict[str, int]:
        return {
            "template_cache_size": len(self._cache),
            "component_cache_size": sum(len(t.components) for t in self._cache.values()),
        }
