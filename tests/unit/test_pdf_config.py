"""Unit tests for PDF configuration."""

import pytest
from loguru import logger

from folio.contexts.rendering.pdf_config import (
    env_overrides,
    load_pdf_config,
    to_pdf_kwargs,
)


@pytest.mark.unit
def test_defaults_from_yaml():
    """Test the shipped defaults with no environment overrides."""
    config = load_pdf_config(environ={})

    assert config.options["scale"] == 1.0
    assert config.options["print_background"] is True
    assert config.options["margin"] == {"top": "0in", "right": "0in", "bottom": "0in", "left": "0in"}
    assert config.options["page_ranges"] == "1"
    assert config.browser.headless is True
    assert "--no-sandbox" in config.browser.args
    assert config.optimization.level == "balanced"
    assert config.rendering.viewport.width == 1200
    assert config.rendering.viewport.device_scale_factor == 2
    assert config.rendering.content_selector == ".resume-content"
    assert config.validate() == []


@pytest.mark.unit
def test_environment_overrides():
    """Test typed parsing of environment overrides into the nested config."""
    config = load_pdf_config(
        environ={
            "PDF_SCALE": "0.9",
            "PDF_PRINT_BACKGROUND": "false",
            "PDF_MARGIN_TOP": "0.5in",
            "BROWSER_HEADLESS": "0",
            "PDF_OPTIMIZATION_LEVEL": "aggressive",
            "PDF_VIEWPORT_WIDTH": "1024",
            "PDF_WAIT_FOR_SELECTOR": "#resume",
        }
    )

    assert config.options["scale"] == 0.9
    assert config.options["print_background"] is False
    assert config.options["margin"]["top"] == "0.5in"
    assert config.options["margin"]["left"] == "0in"
    assert config.browser.headless is False
    assert config.optimization.level == "aggressive"
    assert config.rendering.viewport.width == 1024
    assert config.rendering.viewport.height == 800
    assert config.rendering.content_selector == "#resume"


@pytest.mark.unit
def test_wait_timeout_sets_all_waits_unless_specific():
    """Test that PDF_WAIT_TIMEOUT applies to every wait and specific variables win."""
    config = load_pdf_config(environ={"PDF_WAIT_TIMEOUT": "5000", "PDF_FONT_TIMEOUT": "2000"})

    assert config.rendering.content_timeout == 5000
    assert config.rendering.selector_timeout == 5000
    assert config.rendering.font_timeout == 2000


@pytest.mark.unit
def test_empty_values_are_ignored():
    assert env_overrides({"PDF_SCALE": "", "BROWSER_EXECUTABLE_PATH": ""}) == {}


@pytest.mark.unit
def test_unparseable_value_names_variable():
    with pytest.raises(ValueError, match="PDF_VIEWPORT_WIDTH"):
        env_overrides({"PDF_VIEWPORT_WIDTH": "wide"})


@pytest.mark.unit
def test_validate_reports_problems():
    """Test each validation rule."""
    config = load_pdf_config(environ={})
    config.options["scale"] = 5
    config.options["margin"]["top"] = "../etc"
    config.optimization.level = "extreme"
    config.rendering.viewport.height = 0
    config.rendering.font_timeout = 0
    config.rendering.content_selector = ""

    errors = config.validate()

    assert "PDF scale must be between 0.1 and 3.0" in errors
    assert "Invalid margin value detected: top=../etc" in errors
    assert any("Unknown optimization level 'extreme'" in error for error in errors)
    assert "Viewport width and height must be positive" in errors
    assert "rendering.font_timeout must be positive" in errors
    assert "rendering.content_selector must be set" in errors


@pytest.mark.unit
def test_merge_options_is_shallow():
    """Test that caller options replace configured values per top-level key."""
    config = load_pdf_config(environ={})

    merged = config.merge_options({"scale": 0.8, "margin": {"top": "1in"}})

    assert merged["scale"] == 0.8
    assert merged["margin"] == {"top": "1in"}
    assert merged["print_background"] is True
    assert config.options["scale"] == 1.0


@pytest.mark.unit
def test_to_pdf_kwargs_uses_measured_size():
    """Test that measured pixels always set the page size."""
    kwargs = to_pdf_kwargs(
        {"scale": 1.0, "format": "A4", "width": "8.5in", "unknown": True}, 816, 2400
    )

    assert kwargs == {"scale": 1.0, "width": "816px", "height": "2400px"}


@pytest.mark.unit
def test_to_pdf_kwargs_warns_about_ignored_options():
    """Test that unsupported caller options are named in a warning."""
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        kwargs = to_pdf_kwargs({"scale": 0.9, "printBackground": False}, 816, 2400)
    finally:
        logger.remove(handler_id)

    assert "printBackground" not in kwargs
    assert len(messages) == 1
    assert "Ignoring unsupported PDF options: printBackground" in messages[0]


@pytest.mark.unit
def test_to_dict_round_trips_structure():
    config = load_pdf_config(environ={})

    data = config.to_dict()

    assert set(data) == {"options", "browser", "optimization", "rendering"}
    assert data["rendering"]["viewport"]["width"] == 1200
