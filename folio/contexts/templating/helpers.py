"""
Template helpers.

Filters, tests and globals available to every resume template:

    {{ sidebar.summary.content | markdown }}          Markdown -> HTML (trusted)
    {{ job.start_date | format_date }}                 "2023-01-15" -> "Jan 2023"
    {% if job is has "html" %}...{% endif %}           optional-section suppression
    {% if has_content(sidebar.skills.categories) %}
    {{ icon("email") }}                                inline SVG icon
    {{ component("experience", job=job) }}             component templates only

`icon` and `component` depend on services and are bound per render call by
render_globals(); the rest are registered once on the Jinja environment.
"""

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from jinja2 import Environment, Template, Undefined
from markupsafe import Markup

from folio.contexts.styling.asset_store import AssetStore
from folio.utils.errors import TemplateRenderError
from folio.utils.markdown import render_markdown

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Tried in order after ISO 8601 parsing
PARTIAL_DATE_FORMATS = ("%Y-%m", "%Y")


def format_date(value: Any) -> str:
    """
    Format a date as "<Mon> <Year>".

    Accepts ISO 8601 dates/datetimes, YYYY-MM and YYYY. Values that do not
    parse (e.g. "Present") are returned unchanged; empty input yields "".
    """
    if value is None or isinstance(value, Undefined):
        return ""
    text = str(value).strip()
    if not text:
        return ""

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in PARTIAL_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return text
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def has_content(value: Any) -> bool:
    """
    True for a non-empty sequence or mapping, a non-blank string, or any other
    defined non-null value.

    0 and False count as content: a zero-valued field still renders.
    """
    if value is None or isinstance(value, Undefined):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def has_field(obj: Any, field_name: str) -> bool:
    """Jinja test: `obj is has "field"` -> has_content(obj.field)."""
    if obj is None or isinstance(obj, Undefined):
        return False
    if isinstance(obj, Mapping):
        return has_content(obj.get(field_name))
    return has_content(getattr(obj, field_name, None))


def length(value: Any) -> int:
    if value is None or isinstance(value, Undefined):
        return 0
    return len(value)


def safe(value: Any) -> Markup:
    if value is None or isinstance(value, Undefined):
        return Markup("")
    return Markup(value)


def starts_with(value: Any, prefix: str) -> bool:
    if value is None or isinstance(value, Undefined):
        return False
    return str(value).startswith(prefix)


def register_helpers(env: Environment) -> None:
    """Install the service-independent helpers on a Jinja environment."""
    env.filters["markdown"] = render_markdown
    env.filters["format_date"] = format_date

    env.tests["has"] = has_field
    env.tests["starts_with"] = starts_with

    env.globals.update(
        markdown=render_markdown,
        format_date=format_date,
        has_content=has_content,
        length=length,
        safe=safe,
        starts_with=starts_with,
    )


class IconRenderer:
    """`icon(type, size)` bound to one asset store."""

    def __init__(self, asset_store: AssetStore):
        self.asset_store = asset_store

    def __call__(self, icon_type: str, size: str = "1em") -> Markup:
        return Markup(self.asset_store.get_icon_html(icon_type, size))


class ComponentInjector:
    """
    `component(name, **extra)` for one render of one component template.

    Renders a preloaded sibling template with the same variables as the
    layout, plus any keyword arguments given at the call site (used to pass
    loop variables such as the current job).
    """

    def __init__(self, template_name: str, components: Dict[str, Template], variables: Dict[str, Any]):
        self.template_name = template_name
        self.components = components
        self.variables = variables

    def __call__(self, name: str, **extra: Any) -> Markup:
        template = self.components.get(name)
        if template is None:
            available = ", ".join(sorted(self.components)) or "none"
            raise TemplateRenderError(
                f"Component '{name}' not found for template '{self.template_name}' "
                f"(available: {available})",
                template_name=self.template_name,
            )

        variables = dict(self.variables, **extra) if extra else self.variables
        return Markup(template.render(variables))


def render_globals(
    template_name: str,
    asset_store: AssetStore,
    components: Dict[str, Template],
    variables: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Complete variable mapping for one render: data plus service-bound helpers.

    The returned dict is also what component templates render with, so
    components can call icon() and component() themselves.
    """
    bound = dict(variables)
    bound["icon"] = IconRenderer(asset_store)
    bound["component"] = ComponentInjector(template_name, components, bound)
    return bound
