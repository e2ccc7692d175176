"""
PDF Configuration

Centralized settings for PDF generation: page.pdf() options, browser launch,
post-processing and rendering (viewport, waits). Defaults live in
pdf_defaults.yaml; environment variables override individual values.

Example:
    config = load_pdf_config()
    errors = config.validate()
    options = config.merge_options({"scale": 0.9})
"""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.rendering.logger import _log_warning

load_dotenv()

PDF_DEFAULTS_PATH = Path(__file__).parent / "pdf_defaults.yaml"

OPTIMIZATION_LEVELS = ("minimal", "balanced", "aggressive")

# page.pdf() keyword arguments that configuration and callers may set
PDF_OPTION_KEYS = (
    "scale",
    "print_background",
    "margin",
    "prefer_css_page_size",
    "page_ranges",
    "display_header_footer",
    "header_template",
    "footer_template",
    "landscape",
    "outline",
    "tagged",
)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_optional_str(value: str) -> Optional[str]:
    return value or None


# Environment variable -> (config keys, parser). Applied in order, so the
# specific timeouts win over PDF_WAIT_TIMEOUT.
ENV_OVERRIDES: Dict[str, Tuple[Tuple[str, ...], Callable[[str], Any]]] = {
    "PDF_SCALE": (("options.scale",), float),
    "PDF_PRINT_BACKGROUND": (("options.print_background",), _parse_bool),
    "PDF_MARGIN_TOP": (("options.margin.top",), str),
    "PDF_MARGIN_RIGHT": (("options.margin.right",), str),
    "PDF_MARGIN_BOTTOM": (("options.margin.bottom",), str),
    "PDF_MARGIN_LEFT": (("options.margin.left",), str),
    "PDF_PREFER_CSS_PAGE_SIZE": (("options.prefer_css_page_size",), _parse_bool),
    "PDF_PAGE_RANGES": (("options.page_ranges",), str),
    "BROWSER_HEADLESS": (("browser.headless",), _parse_bool),
    "BROWSER_EXECUTABLE_PATH": (("browser.executable_path",), _parse_optional_str),
    "BROWSER_TIMEOUT": (("browser.launch_timeout",), int),
    "PDF_OPTIMIZATION_ENABLED": (("optimization.enabled",), _parse_bool),
    "PDF_OPTIMIZATION_LEVEL": (("optimization.level",), str),
    "PDF_COMPRESSION_ENABLED": (("optimization.compression",), _parse_bool),
    "PDF_VIEWPORT_WIDTH": (("rendering.viewport.width",), int),
    "PDF_VIEWPORT_HEIGHT": (("rendering.viewport.height",), int),
    "PDF_DEVICE_SCALE_FACTOR": (("rendering.viewport.device_scale_factor",), float),
    "PDF_USER_AGENT": (("rendering.user_agent",), str),
    "PDF_WAIT_FOR_SELECTOR": (("rendering.content_selector",), str),
    "PDF_WAIT_TIMEOUT": (
        ("rendering.content_timeout", "rendering.font_timeout", "rendering.selector_timeout"),
        int,
    ),
    "PDF_FONT_TIMEOUT": (("rendering.font_timeout",), int),
    "PDF_SELECTOR_TIMEOUT": (("rendering.selector_timeout",), int),
}


@dataclass
class BrowserConfig:
    headless: bool = True
    args: List[str] = field(default_factory=list)
    executable_path: Optional[str] = None
    launch_timeout: int = 30000


@dataclass
class OptimizationConfig:
    enabled: bool = True
    level: str = "balanced"
    compression: bool = True


@dataclass
class ViewportConfig:
    width: int = 1200
    height: int = 800
    device_scale_factor: float = 2.0


@dataclass
class RenderingConfig:
    """
    Attributes:
        viewport: Page viewport used for measurement
        user_agent: Fixed user agent for reproducible rendering
        content_selector: Element whose bounding box sizes the PDF page
        content_timeout: Budget for injecting the HTML (fatal when exceeded)
        font_timeout: Budget for document.fonts.ready (tolerated)
        selector_timeout: Budget for the content element to appear (tolerated)
    """

    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    user_agent: str = ""
    content_selector: str = ".resume-content"
    content_timeout: int = 10000
    font_timeout: int = 10000
    selector_timeout: int = 10000


@dataclass
class PDFConfig:
    """Complete PDF generation configuration."""

    options: Dict[str, Any] = field(default_factory=dict)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    optimization: OptimizationConfig = field(default_factory=OptimizationConfig)
    rendering: RenderingConfig = field(default_factory=RenderingConfig)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PDFConfig":
        rendering = dict(raw.get("rendering") or {})
        viewport = ViewportConfig(**(rendering.pop("viewport", None) or {}))
        return cls(
            options=dict(raw.get("options") or {}),
            browser=BrowserConfig(**(raw.get("browser") or {})),
            optimization=OptimizationConfig(**(raw.get("optimization") or {})),
            rendering=RenderingConfig(viewport=viewport, **rendering),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def merge_options(self, custom: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Shallow merge: caller values win per top-level key."""
        merged = dict(self.options)
        if custom:
            merged.update(custom)
        return merged

    def validate(self) -> List[str]:
        """
        Check configuration for values that would produce a broken PDF.

        Returns:
            List of error messages (empty when valid)
        """
        errors = []

        scale = self.options.get("scale")
        if scale is not None and not 0.1 <= float(scale) <= 3.0:
            errors.append("PDF scale must be between 0.1 and 3.0")

        margin = self.options.get("margin") or {}
        for side, value in margin.items():
            if value and (".." in str(value) or "//" in str(value)):
                errors.append(f"Invalid margin value detected: {side}={value}")
                break

        if self.optimization.level not in OPTIMIZATION_LEVELS:
            errors.append(
                f"Unknown optimization level '{self.optimization.level}'. "
                f"Available levels: {', '.join(OPTIMIZATION_LEVELS)}"
            )

        viewport = self.rendering.viewport
        if viewport.width <= 0 or viewport.height <= 0:
            errors.append("Viewport width and height must be positive")

        for name in ("content_timeout", "font_timeout", "selector_timeout"):
            if getattr(self.rendering, name) <= 0:
                errors.append(f"rendering.{name} must be positive")

        if not self.rendering.content_selector:
            errors.append("rendering.content_selector must be set")

        return errors


def _set_dotted(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split(".")
    node = target
    for key in parents:
        node = node.setdefault(key, {})
    node[leaf] = value


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Nested override dict from environment variables.

    Raises:
        ValueError: If a variable cannot be parsed (names the variable)
    """
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for env_name, (keys, parse) in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            value = parse(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e
        for key in keys:
            _set_dotted(overrides, key, value)
    return overrides


def load_pdf_config(
    config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> PDFConfig:
    """
    Load PDF configuration: YAML defaults merged with environment overrides.

    Args:
        config_path: YAML defaults (default: pdf_defaults.yaml beside this module)
        environ: Environment mapping (default: os.environ)

    Returns:
        PDFConfig
    """
    defaults = OmegaConf.load(config_path or PDF_DEFAULTS_PATH)
    merged = OmegaConf.merge(defaults, OmegaConf.create(env_overrides(environ)))
    return PDFConfig.from_dict(OmegaConf.to_container(merged, resolve=True))


def to_pdf_kwargs(options: Mapping[str, Any], width_px: int, height_px: int) -> Dict[str, Any]:
    """
    page.pdf() keyword arguments for a content-measured page.

    The measured box always sets width/height; any caller-provided paper
    format is dropped so it cannot override the measurement.
    """
    ignored = sorted(key for key in options if key not in PDF_OPTION_KEYS)
    if ignored:
        _log_warning(f"Ignoring unsupported PDF options: {', '.join(ignored)}")

    kwargs = {key: value for key, value in options.items() if key in PDF_OPTION_KEYS}
    kwargs["width"] = f"{width_px}px"
    kwargs["height"] = f"{height_px}px"
    return kwargs
