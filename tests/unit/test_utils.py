"""Unit tests for folio.utils (async helpers, timestamps, errors, PDF processing, paths)."""

import asyncio
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path

import pikepdf
import pytest

from folio.utils.async_tools import read_bytes, read_text, try_with_timeout, write_bytes
from folio.utils.errors import (
    FontConfigurationError,
    InvalidContentDimensionsError,
    ResourceNotFoundError,
    ResumeValidationError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from folio.utils.paths import ProjectPaths
from folio.utils.pdf_processing import optimize_pdf, page_count, page_dimensions
from folio.utils.timestamp import filename_timestamp, iso_utc


# Async helpers


@pytest.mark.unit
def test_try_with_timeout_returns_value():
    async def quick():
        return 42

    outcome = asyncio.run(try_with_timeout(quick(), 1000))

    assert outcome.value == 42
    assert not outcome.timed_out


@pytest.mark.unit
def test_try_with_timeout_reports_timeout():
    outcome = asyncio.run(try_with_timeout(asyncio.sleep(1), 20))

    assert outcome.timed_out
    assert outcome.value is None
    assert outcome.budget_ms == 20


@pytest.mark.unit
def test_try_with_timeout_custom_timeout_error():
    """Test that a driver-specific timeout error counts as timed out."""

    class DriverTimeout(Exception):
        pass

    async def driver_wait():
        raise DriverTimeout("waited too long")

    outcome = asyncio.run(try_with_timeout(driver_wait(), 1000, (DriverTimeout,)))

    assert outcome.timed_out


@pytest.mark.unit
def test_try_with_timeout_propagates_other_errors():
    async def broken():
        raise KeyError("x")

    with pytest.raises(KeyError):
        asyncio.run(try_with_timeout(broken(), 1000))


@pytest.mark.unit
def test_file_helpers(tmp_path):
    path = tmp_path / "file.bin"

    asyncio.run(write_bytes(path, "héllo".encode("utf-8")))

    assert asyncio.run(read_bytes(path)) == "héllo".encode("utf-8")
    assert asyncio.run(read_text(path)) == "héllo"


# Timestamps


@pytest.mark.unit
def test_iso_utc_millisecond_precision():
    moment = datetime(2025, 1, 9, 14, 3, 7, 120000, tzinfo=timezone.utc)

    assert iso_utc(moment) == "2025-01-09T14:03:07.120Z"


@pytest.mark.unit
def test_filename_timestamp_is_filename_safe():
    moment = datetime(2025, 1, 9, 14, 3, 7, 120000, tzinfo=timezone.utc)

    assert filename_timestamp(moment) == "2025-01-09T14-03-07-120Z"


# Errors


@pytest.mark.unit
def test_resume_validation_error_message():
    error = ResumeValidationError("resume_type", "x", ["a", "b"])

    assert str(error) == "Invalid resume type 'x'. Available types: a, b"
    assert isinstance(error, ValueError)


@pytest.mark.unit
def test_template_validation_error_message():
    error = ResumeValidationError("template", "fancy", ["default"])

    assert str(error) == "Invalid template 'fancy'. Available templates: default"


@pytest.mark.unit
def test_resource_errors_carry_path():
    error = FontConfigurationError("Font configuration not found", kind="font", path=Path("/x/m.json"))

    assert isinstance(error, ResourceNotFoundError)
    assert "Path: /x/m.json" in str(error)
    assert error.kind == "font"


@pytest.mark.unit
def test_template_errors():
    not_found = TemplateNotFoundError("t", [Path("a/layout.html"), Path("a.html")])
    render = TemplateRenderError("Failed", template_name="t", original_error=ValueError("bad"))

    assert "checked a/layout.html and a.html" in str(not_found)
    assert "Template: t" in str(render)
    assert "Original error: bad" in str(render)


@pytest.mark.unit
def test_invalid_dimensions_message():
    assert str(InvalidContentDimensionsError(0, 0)) == "Invalid content dimensions: 0x0px"


# PDF processing


def blank_pdf(pages=1, size=(612, 792)) -> bytes:
    output = BytesIO()
    with pikepdf.new() as pdf:
        for _ in range(pages):
            pdf.add_blank_page(page_size=size)
        pdf.save(output)
    return output.getvalue()


@pytest.mark.unit
def test_page_count_and_dimensions():
    buffer = blank_pdf(pages=2, size=(612, 1800))

    assert page_count(buffer) == 2
    width, height = page_dimensions(buffer)
    assert (round(width), round(height)) == (816, 2400)


@pytest.mark.unit
def test_page_count_unreadable():
    assert page_count(b"garbage") is None
    assert page_dimensions(b"garbage") is None


@pytest.mark.unit
@pytest.mark.parametrize("level", ["minimal", "balanced", "aggressive"])
def test_optimize_pdf_keeps_pages(level):
    optimized = optimize_pdf(blank_pdf(pages=3), level=level)

    assert page_count(optimized) == 3


@pytest.mark.unit
def test_optimize_pdf_rejects_garbage():
    with pytest.raises(pikepdf.PdfError):
        optimize_pdf(b"garbage")


# Paths


@pytest.mark.unit
def test_project_paths_layout(tmp_path):
    paths = ProjectPaths.from_env(tmp_path)

    assert paths.header_file == tmp_path.resolve() / "data/shared/header.json"
    assert paths.template_css("default") == tmp_path.resolve() / "resumes/styles/default.css"
    assert paths.display(paths.output_dir / "x.pdf") == "generated-pdfs/x.pdf"
    assert paths.display(Path("/elsewhere/x.pdf")) == "/elsewhere/x.pdf"


@pytest.mark.unit
def test_project_root_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("FOLIO_PROJECT_ROOT", str(tmp_path))

    assert ProjectPaths.from_env().root == tmp_path.resolve()
