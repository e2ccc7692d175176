"""
Project layout paths.

Every on-disk location folio reads from or writes to is derived from a single
project root (FOLIO_PROJECT_ROOT, default: the process working directory).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

SHARED_DATA_DIR = "shared"


def default_project_root() -> Path:
    """Resolve the project root from FOLIO_PROJECT_ROOT, falling back to cwd."""
    return Path(os.getenv("FOLIO_PROJECT_ROOT") or Path.cwd()).resolve()


@dataclass(frozen=True)
class ProjectPaths:
    """
    Resolved layout of a folio project.

    Attributes:
        root: Project root every other path hangs off
    """

    root: Path

    @classmethod
    def from_env(cls, root: Optional[Path] = None) -> "ProjectPaths":
        return cls(root=Path(root).resolve() if root is not None else default_project_root())

    # Data sources

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def shared_data_dir(self) -> Path:
        return self.data_dir / SHARED_DATA_DIR

    @property
    def header_file(self) -> Path:
        return self.shared_data_dir / "header.json"

    @property
    def styling_file(self) -> Path:
        return self.shared_data_dir / "styling.json"

    def resume_dir(self, resume_id: str) -> Path:
        return self.data_dir / resume_id

    def resume_file(self, resume_id: str) -> Path:
        return self.resume_dir(resume_id) / "resume.json"

    # Templates

    @property
    def templates_dir(self) -> Path:
        return self.root / "resumes"

    def template_dir(self, template_name: str) -> Path:
        return self.templates_dir / template_name

    def manifest_file(self, template_name: str) -> Path:
        return self.template_dir(template_name) / "manifest.json"

    # Stylesheets

    @property
    def base_css(self) -> Path:
        return self.root / "styles" / "shared.css"

    @property
    def browser_font_css(self) -> Path:
        return self.root / "styles" / "fonts.css"

    @property
    def icon_css(self) -> Path:
        return self.root / "styles" / "icons.css"

    def template_css(self, template_name: str) -> Path:
        return self.templates_dir / "styles" / f"{template_name}.css"

    # Assets

    @property
    def fonts_dir(self) -> Path:
        return self.root / "assets" / "fonts"

    @property
    def icons_dir(self) -> Path:
        return self.root / "assets" / "emoji"

    @property
    def navigation_partial(self) -> Path:
        return self.root / "components" / "navigation" / "nav.html"

    # Output

    @property
    def output_dir(self) -> Path:
        return self.root / "generated-pdfs"

    def display(self, path: Path) -> str:
        """Return path relative to the project root for cleaner display."""
        try:
            return str(Path(path).relative_to(self.root))
        except ValueError:
            return str(path)
