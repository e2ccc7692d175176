"""
Integration tests over the sample project shipped at the repository root.

Every resume identity is composed in every output mode with the real data,
templates and stylesheets (no browser required).
"""

import asyncio
import json

import pytest

from folio.contexts.composition import ResumeComposer
from folio.utils.errors import FontConfigurationError

SAMPLE_RESUMES = ["ai_lead", "eng_mgr", "staff_platform_engineer"]


@pytest.fixture
def sample_composer(sample_paths):
    return ResumeComposer.from_paths(sample_paths, enable_fonts=True, enable_icons=True)


@pytest.mark.integration
def test_sample_listings(sample_composer):
    assert sample_composer.get_available_resume_types() == SAMPLE_RESUMES
    assert sample_composer.get_available_templates() == ["default", "minimal"]


@pytest.mark.integration
@pytest.mark.parametrize("resume_id", SAMPLE_RESUMES)
def test_compose_all_modes(sample_composer, resume_id):
    """Test that each sample resume composes for browser, PDF and API."""

    async def compose():
        return await asyncio.gather(
            sample_composer.compose_for_browser(resume_id),
            sample_composer.compose_for_pdf(resume_id),
            sample_composer.compose_for_api(resume_id),
        )

    browser_html, pdf_html, rendered = asyncio.run(compose())

    for html in (browser_html, pdf_html):
        assert html.startswith("<!DOCTYPE html>")
        assert "Jordan Avery" in html
        assert 'class="resume-content resume-default"' in html

    assert '<link rel="stylesheet" href="resumes/styles/default.css">' in browser_html
    assert "<link" not in pdf_html
    assert "<style>" in pdf_html
    assert 'src="data:image/svg+xml;base64,' in pdf_html

    assert rendered.data.resume_id == resume_id
    assert all(job.html for job in rendered.data.main.experience.jobs)
    json.dumps(rendered.to_dict(), default=str)


@pytest.mark.integration
def test_eng_mgr_content(sample_composer):
    """Test formatted dates and inlined Markdown in the real template."""
    rendered = asyncio.run(sample_composer.compose_for_api("eng_mgr"))
    html = rendered.html_content

    assert "Senior Engineering Manager" in html
    assert "Mar 2021" in html
    assert "Present" in html
    assert "<strong>calm, predictable delivery</strong>" in html


@pytest.mark.integration
def test_minimal_template(sample_composer):
    """Test the single-file template: browser works, PDF needs a font manifest."""
    html = asyncio.run(sample_composer.compose_for_browser("eng_mgr", "minimal"))

    assert 'class="resume-content resume-minimal"' in html
    assert '<link rel="stylesheet" href="resumes/styles/minimal.css">' in html

    with pytest.raises(FontConfigurationError):
        asyncio.run(sample_composer.compose_for_pdf("eng_mgr", "minimal"))
