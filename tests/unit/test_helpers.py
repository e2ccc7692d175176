"""Unit tests for template helpers."""

import pytest
from jinja2 import Environment

from folio.contexts.templating.helpers import (
    format_date,
    has_content,
    has_field,
    length,
    register_helpers,
    safe,
    starts_with,
)
from folio.contexts.templating.resume_data_structure import ExperienceEntry


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("2023-01-15", "Jan 2023"),
        ("2021-03", "Mar 2021"),
        ("2019", "Jan 2019"),
        ("2024-12-01T09:30:00Z", "Dec 2024"),
        ("Present", "Present"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_date(value, expected):
    """Test ISO, partial and unparseable dates."""
    assert format_date(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (None, False),
        ("", False),
        ("   ", False),
        ("text", True),
        ([], False),
        ([1], True),
        ({}, False),
        ({"a": 1}, True),
        (0, True),
        (False, True),
    ],
)
def test_has_content(value, expected):
    assert has_content(value) is expected


@pytest.mark.unit
def test_has_field_on_objects_and_mappings():
    """Test the `has` test against dataclasses and dicts."""
    job = ExperienceEntry(company="Acme", title="")

    assert has_field(job, "company")
    assert not has_field(job, "title")
    assert not has_field(job, "no_such_field")
    assert has_field({"items": [1]}, "items")
    assert not has_field(None, "items")


@pytest.mark.unit
def test_small_helpers():
    assert length([1, 2, 3]) == 3
    assert length(None) == 0
    assert safe("<b>x</b>") == "<b>x</b>"
    assert safe(None) == ""
    assert starts_with("https://example.com", "https://")
    assert not starts_with(None, "x")


@pytest.mark.unit
def test_registered_helpers_in_templates():
    """Test filters, tests and globals from a template's point of view."""
    env = Environment(autoescape=True)
    register_helpers(env)

    template = env.from_string(
        "{{ start | format_date }}|"
        "{% if job is has 'company' %}yes{% else %}no{% endif %}|"
        "{{ text | markdown }}|"
        "{{ has_content(items) }}|"
        "{% if url is starts_with 'https' %}secure{% endif %}"
    )
    html = template.render(
        start="2020-07",
        job={"company": ""},
        text="**bold**",
        items=["x"],
        url="https://example.com",
    )

    assert html == "Jul 2020|no|<p><strong>bold</strong></p>|True|secure"


@pytest.mark.unit
def test_undefined_values_are_empty():
    """Test helpers against undefined template variables."""
    env = Environment()
    register_helpers(env)

    html = env.from_string(
        "[{{ missing | format_date }}][{{ has_content(missing) }}][{{ length(missing) }}]"
    ).render()

    assert html == "[][False][0]"
