"""Rendering context shared by the styling, templating and composition contexts."""

from dataclasses import astuple, dataclass, replace
from typing import Tuple

DEFAULT_TEMPLATE = "default"


@dataclass(frozen=True)
class RenderContext:
    """
    Immutable description of one render call.

    Attributes:
        for_pdf: Render for headless PDF capture (inline everything) vs. browser
        template: Template flavor name
        include_fonts: Include the font CSS layer (browser context)
        include_icons: Include the icon CSS layer
    """

    for_pdf: bool = False
    template: str = DEFAULT_TEMPLATE
    include_fonts: bool = False
    include_icons: bool = False

    @property
    def cache_key(self) -> Tuple[bool, str, bool, bool]:
        """(for_pdf, template, include_fonts, include_icons) with defaults applied."""
        for_pdf, template, include_fonts, include_icons = astuple(self)
        return (bool(for_pdf), template or DEFAULT_TEMPLATE, bool(include_fonts), bool(include_icons))

    def with_overrides(self, **overrides) -> "RenderContext":
        return replace(self, **overrides)
