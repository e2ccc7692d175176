"""
Template manifests.

A component template may ship resumes/<template>/manifest.json declaring its
stylesheet hrefs and the font files that must be embedded for PDF output.
Manifests are validated once on load and cached per template.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from folio.contexts.styling.logger import _log_debug
from folio.utils.async_tools import read_text
from folio.utils.errors import InvalidManifestError, ResourceNotFoundError
from folio.utils.paths import ProjectPaths


@dataclass(frozen=True)
class FontFile:
    weight: int
    style: str
    file: str
    format: str

    @property
    def mime_type(self) -> str:
        if self.format == "woff2":
            return "font/woff2"
        if self.format == "woff":
            return "font/woff"
        return "font/truetype"


@dataclass(frozen=True)
class FontFamily:
    name: str
    files: List[FontFile] = field(default_factory=list)


@dataclass(frozen=True)
class TemplateManifest:
    """
    Parsed manifest.json.

    Attributes:
        template: Template name (must match the directory name)
        version: Manifest version string
        css_shared: Href of the shared stylesheet for browser rendering
        css_template: Href of the template stylesheet for browser rendering
        fonts: Font families to embed for PDF rendering
        metadata: Free-form description/author/created fields
    """

    template: str
    version: str
    css_shared: str
    css_template: str
    fonts: List[FontFamily] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], template_name: str) -> "TemplateManifest":
        """
        Validate and build a manifest.

        Raises:
            InvalidManifestError: On name mismatch or malformed css/fonts sections
        """
        if not isinstance(raw, dict):
            raise InvalidManifestError(f"Manifest for template '{template_name}' must be an object")

        if raw.get("template") != template_name:
            raise InvalidManifestError(
                f"Template name mismatch in manifest: expected '{template_name}', "
                f"got '{raw.get('template')}'"
            )

        css = raw.get("css")
        if not isinstance(css, dict) or not css.get("shared") or not css.get("template"):
            raise InvalidManifestError(
                f"Invalid CSS configuration in manifest for template '{template_name}'"
            )

        fonts_raw = raw.get("fonts")
        if not isinstance(fonts_raw, list):
            raise InvalidManifestError(
                f"Invalid fonts configuration in manifest for template '{template_name}'"
            )

        fonts = []
        for font in fonts_raw:
            if not isinstance(font, dict) or not font.get("name") or not isinstance(
                font.get("files"), list
            ):
                raise InvalidManifestError(
                    f"Invalid font configuration in manifest for template '{template_name}'"
                )
            files = []
            for font_file in font["files"]:
                required = ("weight", "style", "file", "format")
                if not isinstance(font_file, dict) or not all(font_file.get(k) for k in required):
                    raise InvalidManifestError(
                        f"Invalid font file configuration in manifest for template '{template_name}'"
                    )
                files.append(
                    FontFile(
                        weight=int(font_file["weight"]),
                        style=str(font_file["style"]),
                        file=str(font_file["file"]),
                        format=str(font_file["format"]),
                    )
                )
            fonts.append(FontFamily(name=str(font["name"]), files=files))

        return cls(
            template=template_name,
            version=str(raw.get("version", "")),
            css_shared=css["shared"],
            css_template=css["template"],
            fonts=fonts,
            metadata=dict(raw.get("metadata") or {}),
        )


class ManifestRegistry:
    """Loads and caches template manifests by template name."""

    def __init__(self, paths: ProjectPaths):
        self.paths = paths
        self._cache: Dict[str, TemplateManifest] = {}

    def manifest_path(self, template_name: str) -> Path:
        return self.paths.manifest_file(template_name)

    def has_manifest(self, template_name: str) -> bool:
        return template_name in self._cache or self.manifest_path(template_name).is_file()

    async def get_manifest(self, template_name: str) -> TemplateManifest:
        """
        Get a template's manifest, loading and caching it if necessary.

        Raises:
            ResourceNotFoundError: If manifest.json does not exist
            InvalidManifestError: If it is not valid JSON or fails validation
        """
        if template_name in self._cache:
            return self._cache[template_name]

        path = self.manifest_path(template_name)
        if not path.is_file():
            raise ResourceNotFoundError(
                f"Template manifest not found for '{template_name}'", kind="manifest", path=path
            )

        try:
            raw = json.loads(await read_text(path))
        except json.JSONDecodeError as e:
            raise InvalidManifestError(
                f"Failed to parse template manifest for '{template_name}': {e}"
            ) from e

        manifest = TemplateManifest.from_dict(raw, template_name)
        self._cache[template_name] = manifest
        _log_debug(f"Template manifest loaded for: {template_name}")
        return manifest

    def clear_cache(self) -> None:
        self._cache.clear()

    def get_cache_stats(self) -> Dict[str, Any]:
        return {"cache_size": len(self._cache), "cached_templates": sorted(self._cache)}
