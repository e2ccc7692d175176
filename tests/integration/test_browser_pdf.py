"""
Integration tests that drive a real headless Chromium.

Opt-in: install the browser (`playwright install chromium`) and set
FOLIO_BROWSER_TESTS=1.
"""

import asyncio
import os

import pytest

from folio.contexts.composition import ResumeComposer
from folio.contexts.rendering import PDFGenerator, load_pdf_config
from folio.utils.pdf_processing import page_count, page_dimensions

skip_without_browser = pytest.mark.skipif(
    os.getenv("FOLIO_BROWSER_TESTS") != "1",
    reason="set FOLIO_BROWSER_TESTS=1 to run tests against a real Chromium",
)


@pytest.fixture
def generator(sample_paths, tmp_path):
    composer = ResumeComposer.from_paths(sample_paths)
    return PDFGenerator(composer, config=load_pdf_config(), output_dir=tmp_path)


@pytest.mark.integration
@pytest.mark.browser
@skip_without_browser
def test_health_check(generator):
    async def run():
        try:
            return await generator.health_check()
        finally:
            await generator.close()

    assert asyncio.run(run()) is True


@pytest.mark.integration
@pytest.mark.browser
@skip_without_browser
@pytest.mark.parametrize("resume_id", ["eng_mgr", "staff_platform_engineer"])
def test_single_page_matches_content(generator, resume_id):
    """Test that the written PDF is one page sized to the measured content."""

    async def run():
        try:
            return await generator.generate_pdf(resume_id)
        finally:
            await generator.close()

    result = asyncio.run(run())

    assert result.success, result.error
    assert page_count(result.file_path) == 1

    width, height = page_dimensions(result.file_path)
    assert abs(width - result.width_px) <= 1
    assert abs(height - result.height_px) <= 1
