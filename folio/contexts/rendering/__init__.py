"""
Rendering Context

Responsibilities:
- Drives the shared headless browser (launch, page lifecycle, health)
- Measures rendered content and emits content-sized PDFs
- Post-processes (optimizes) and writes PDF artifacts
- Centralizes PDF configuration (YAML defaults + environment overrides)

Owns: Browser instance, PDF output directory, generation metrics
Never: Loads resume data or assembles CSS directly
"""

from folio.contexts.rendering.browser import BrowserSession, SharedBrowser, launch_chromium
from folio.contexts.rendering.pdf_config import PDFConfig, load_pdf_config
from folio.contexts.rendering.pdf_generator import (
    GenerationStage,
    PDFGenerationResult,
    PDFGenerator,
)

__all__ = [
    # Browser
    "BrowserSession",
    "SharedBrowser",
    "launch_chromium",
    # Configuration
    "PDFConfig",
    "load_pdf_config",
    # Generation
    "GenerationStage",
    "PDFGenerationResult",
    "PDFGenerator",
]
