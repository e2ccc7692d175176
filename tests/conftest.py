"""Shared fixtures: a throwaway project tree and a fake headless browser."""

import asyncio
import copy
import json
from io import BytesIO
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pikepdf
import pytest

from folio.contexts.composition import ResumeComposer
from folio.contexts.rendering.browser import BrowserSession
from folio.contexts.rendering.pdf_config import load_pdf_config
from folio.utils.paths import ProjectPaths

REPO_ROOT = Path(__file__).resolve().parent.parent

FAKE_FONT_BYTES = b"wOF2-fake-font-payload"

LAYOUT_HTML = """<div class="resume-content resume-{{ template }}">
{{ component("header") }}
{{ component("sidebar") }}
<main>
{% for job in main.experience.jobs %}
{{ component("experience", job=job) }}
{% endfor %}
</main>
</div>
"""

HEADER_HTML = """<header>
<h1>{{ header.name }}</h1>
{% if header is has "email" %}<span class="email">{{ icon("email") }} {{ header.email }}</span>{% endif %}
</header>
"""

SIDEBAR_HTML = """<aside>
{% if sidebar is has "photo" %}<img class="photo" src="{{ sidebar.photo }}">{% endif %}
{% if sidebar.summary is has "html" %}<section class="summary">{{ sidebar.summary.html }}</section>{% endif %}
{% for category in sidebar.skills.categories %}
<div class="skill" data-name="{{ category.name }}">{% if category is has "html" %}{{ category.html }}{% else %}<em>none</em>{% endif %}</div>
{% endfor %}
</aside>
"""

EXPERIENCE_HTML = """<article class="job">
<h3>{{ job.title }} at {{ job.company }}</h3>
<span class="dates">{{ job.start_date | format_date }} - {{ job.end_date | format_date or "Present" }}</span>
{% if job is has "html" %}{{ job.html }}{% endif %}
</article>
"""

LEGACY_HTML = """<div class="resume-content legacy">
<h1>{{ header.name }}</h1>
{{ sidebar.summary.content | markdown }}
</div>
"""

MANIFEST = {
    "template": "default",
    "version": "1.0.0",
    "css": {"shared": "styles/shared.css", "template": "resumes/styles/default.css"},
    "fonts": [
        {
            "name": "Test Sans",
            "files": [
                {"weight": 400, "style": "normal", "file": "TestSans-Regular.woff2", "format": "woff2"},
                {"weight": 700, "style": "normal", "file": "TestSans-Bold.ttf", "format": "truetype"},
            ],
        }
    ],
    "metadata": {"description": "Test template"},
}

ICON_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 36 36"><rect width="36" height="36"/></svg>'


def _write(path: Path, content: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    elif isinstance(content, (dict, list)):
        path.write_text(json.dumps(content, indent=2), encoding="utf-8")
    else:
        path.write_text(content, encoding="utf-8")
    return path


def build_project(root: Path) -> ProjectPaths:
    """Create a small but complete project tree under root."""
    _write(
        root / "data/shared/header.json",
        {
            "name": "Test Person",
            "title": "Engineer",
            "email": "test@example.com",
            "phone": "555-0100",
            "location": "Remote",
            "github": "https://github.com/test",
            "mastodon": "https://example.social/@test",
        },
    )
    _write(root / "data/shared/styling.json", {"colors": {"primary": "#123456"}})

    _write(
        root / "data/eng_mgr/resume.json",
        {
            "sidebar": {
                "summary": {"title": "Summary", "markdownPath": "summary/summary.md"},
                "skills": {
                    "title": "Skills",
                    "categories": [
                        {"name": "Leadership", "markdownPath": "skills/leadership.md"},
                        {"name": "Missing", "markdownPath": "skills/does_not_exist.md"},
                    ],
                },
            },
            "main": {
                "experience": {
                    "title": "Experience",
                    "jobs": [
                        {
                            "company": "Acme",
                            "title": "Director",
                            "location": "Remote",
                            "startDate": "2021-03",
                            "endDate": None,
                            "markdownPath": "experience/acme.md",
                        },
                        {
                            "company": "Initech",
                            "title": "Manager",
                            "startDate": "2018-01-15",
                            "endDate": "2021-02",
                            "markdownPath": "experience/initech.md",
                        },
                    ]
                }
            },
        },
    )
    _write(root / "data/eng_mgr/summary/summary.md", "Builds **teams**.\nShips software.\n")
    _write(root / "data/eng_mgr/skills/leadership.md", "- Hiring\n- Coaching\n")
    _write(root / "data/eng_mgr/experience/acme.md", "- Led the platform group\n")
    _write(root / "data/eng_mgr/experience/initech.md", "- Ran the TPS report migration\n")

    _write(
        root / "data/ai_lead/resume.json",
        {
            "sidebar": {"summary": {"title": "Summary", "markdownPath": "summary/summary.md"}},
            "main": {"experience": {"title": "Experience", "jobs": []}},
        },
    )
    _write(root / "data/ai_lead/summary/summary.md", "Applied ML lead.\n")

    _write(root / "resumes/default/layout.html", LAYOUT_HTML)
    _write(root / "resumes/default/header.html", HEADER_HTML)
    _write(root / "resumes/default/sidebar.html", SIDEBAR_HTML)
    _write(root / "resumes/default/experience.html", EXPERIENCE_HTML)
    _write(root / "resumes/default/manifest.json", MANIFEST)
    _write(root / "resumes/legacy.html", LEGACY_HTML)
    _write(root / "resumes/styles/default.css", ".resume-default { color: #123456; }\n")

    _write(root / "styles/shared.css", "body { margin: 0; }\n")
    _write(root / "styles/fonts.css", "body { font-family: 'Test Sans'; }\n")
    _write(root / "styles/icons.css", ".icon { width: 1em; }\n")

    _write(root / "assets/fonts/TestSans-Regular.woff2", FAKE_FONT_BYTES)
    _write(root / "assets/fonts/TestSans-Bold.ttf", FAKE_FONT_BYTES)
    _write(root / "assets/emoji/1f4e7.svg", ICON_SVG)
    _write(root / "assets/emoji/1f4de.svg", ICON_SVG)

    _write(root / "components/navigation/nav.html", '<nav class="test-nav">Nav</nav>\n')

    return ProjectPaths.from_env(root)


@pytest.fixture
def project(tmp_path) -> ProjectPaths:
    """Fresh project tree per test."""
    return build_project(tmp_path / "project")


@pytest.fixture
def manifest_dict() -> Dict[str, Any]:
    """Mutable copy of the fixture template's manifest.json."""
    return copy.deepcopy(MANIFEST)


@pytest.fixture
def composer(project) -> ResumeComposer:
    return ResumeComposer.from_paths(project, enable_fonts=True, enable_icons=True)


@pytest.fixture
def sample_paths() -> ProjectPaths:
    """The sample project shipped at the repository root."""
    return ProjectPaths.from_env(REPO_ROOT)


@pytest.fixture
def pdf_config():
    """PDF config from YAML defaults only, with short waits."""
    config = load_pdf_config(environ={})
    config.rendering.content_timeout = 500
    config.rendering.font_timeout = 50
    config.rendering.selector_timeout = 50
    return config


def make_pdf_bytes(width_pt: float = 612, height_pt: float = 1800) -> bytes:
    """A real single-page PDF (816x2400 CSS px by default)."""
    output = BytesIO()
    with pikepdf.new() as pdf:
        pdf.add_blank_page(page_size=(width_pt, height_pt))
        pdf.save(output)
    return output.getvalue()


# Fake headless browser


class FakePage:
    """Records calls the generator makes; behaviour is set per test."""

    def __init__(
        self,
        box: Optional[Dict[str, int]] = None,
        pdf_bytes: bytes = b"",
        content_delay: float = 0,
        fonts_delay: float = 0,
    ):
        self.box = {"width": 816, "height": 2400} if box is None else box
        self.pdf_bytes = pdf_bytes or make_pdf_bytes()
        self.content_delay = content_delay
        self.fonts_delay = fonts_delay
        self.html: Optional[str] = None
        self.pdf_kwargs: Optional[Dict[str, Any]] = None
        self.calls: List[str] = []
        self.closed = False

    async def set_content(self, html, wait_until=None, timeout=None):
        self.calls.append("set_content")
        if self.content_delay:
            await asyncio.sleep(self.content_delay)
        self.html = html

    async def evaluate(self, expression, arg=None):
        if "document.fonts" in expression:
            self.calls.append("fonts")
            if self.fonts_delay:
                await asyncio.sleep(self.fonts_delay)
            return True
        self.calls.append("measure")
        return self.box

    async def wait_for_selector(self, selector, timeout=None):
        self.calls.append("wait_for_selector")
        return object()

    async def pdf(self, **kwargs):
        self.calls.append("pdf")
        self.pdf_kwargs = kwargs
        return self.pdf_bytes

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page_factory: Callable[[], FakePage] = FakePage):
        self.page_factory = page_factory
        self.pages: List[FakePage] = []
        self.page_options: List[Dict[str, Any]] = []
        self.closed = False

    async def new_page(self, **kwargs):
        page = self.page_factory()
        self.pages.append(page)
        self.page_options.append(kwargs)
        return page

    async def close(self):
        self.closed = True


class FakeLauncher:
    """Launcher returning one FakeBrowser; counts launches."""

    def __init__(self, browser: Optional[FakeBrowser] = None, error: Optional[Exception] = None):
        self.browser = browser or FakeBrowser()
        self.error = error
        self.launches = 0

    async def __call__(self, config):
        self.launches += 1
        if self.error is not None:
            raise self.error
        return BrowserSession(browser=self.browser)


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def fakes() -> SimpleNamespace:
    """Fake browser classes for tests that need custom page behaviour."""
    return SimpleNamespace(
        Page=FakePage, Browser=FakeBrowser, Launcher=FakeLauncher, pdf_bytes=make_pdf_bytes
    )
