"""Exception taxonomy shared by every folio context."""

from pathlib import Path
from typing import Iterable, List, Optional


class FolioError(Exception):
    """Base class for all folio errors."""


class ResourceNotFoundError(FolioError):
    """
    A required file (resume data, template, font configuration) is missing.

    Attributes:
        message: Error description
        kind: What was being loaded (e.g. 'header', 'template', 'font')
        path: Path that was checked
    """

    def __init__(self, message: str, kind: Optional[str] = None, path: Optional[Path] = None):
        self.message = message
        self.kind = kind
        self.path = path

        parts = [message]
        if path is not None:
            parts.append(f"Path: {path}")

        super().__init__("\n".join(parts))


class TemplateNotFoundError(ResourceNotFoundError):
    """Neither a component template directory nor a legacy template file exists."""

    def __init__(self, template_name: str, checked: Iterable[Path]):
        self.template_name = template_name
        self.checked: List[Path] = list(checked)
        checked_text = " and ".join(str(p) for p in self.checked)
        super().__init__(
            f"Template not found: {template_name} (checked {checked_text})", kind="template"
        )


class FontConfigurationError(ResourceNotFoundError):
    """PDF font embedding cannot proceed (manifest or font file missing)."""


class InvalidResumeDataError(FolioError, ValueError):
    """Resume JSON does not match the expected descriptor structure."""


class InvalidManifestError(FolioError, ValueError):
    """Template manifest is malformed."""


class ResumeValidationError(FolioError, ValueError):
    """
    Caller asked for a resume identity or template that does not exist.

    Attributes:
        field: Name of the invalid field ('resume_type' or 'template')
        value: Rejected value
        available: Valid options at the time of the check
    """

    def __init__(self, field: str, value: str, available: Iterable[str]):
        self.field = field
        self.value = value
        self.available: List[str] = list(available)

        label = "resume type" if field == "resume_type" else field
        plural = "types" if field == "resume_type" else f"{field}s"
        super().__init__(
            f"Invalid {label} '{value}'. Available {plural}: {', '.join(self.available)}"
        )


class TemplateRenderError(FolioError):
    """
    Template compilation or helper execution failed.

    Attributes:
        message: Error description
        template_name: Template being rendered
        original_error: The underlying Jinja2 or helper error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.original_error = original_error

        parts = [message]
        if template_name:
            parts.append(f"Template: {template_name}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class InvalidContentDimensionsError(FolioError):
    """Measured content box cannot size a PDF page."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        super().__init__(f"Invalid content dimensions: {width}x{height}px")


class ContentRootNotFoundError(FolioError):
    """Content root element is absent from the rendered page."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Resume content element not found: {selector}")


class ContentLoadTimeoutError(FolioError):
    """Injecting the composed HTML into the page exceeded its time budget."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Setting page content timed out after {timeout_ms}ms")


class BrowserLaunchError(FolioError):
    """Headless browser could not be started."""
