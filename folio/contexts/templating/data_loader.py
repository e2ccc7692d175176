"""
Data Loader

Reads one resume identity's data from disk and returns it fully inlined:

    data/shared/header.json        -> SharedHeader
    data/shared/styling.json       -> styling tokens (pass-through)
    data/<id>/resume.json          -> ResumeDescriptor
    data/<id>/**/*.md (referenced) -> content + rendered html on each reference

All reads are issued concurrently. The loader keeps no cache of its own, so
edits to data files show up on the next render.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, List

from folio.contexts.styling.asset_store import AssetStore
from folio.contexts.styling.render_context import RenderContext
from folio.contexts.templating.logger import _log_debug, _log_warning, log_data_loaded
from folio.contexts.templating.resume_data_structure import (
    MarkdownReference,
    ResumeData,
    ResumeDescriptor,
    SharedHeader,
)
from folio.utils.async_tools import read_text
from folio.utils.errors import InvalidResumeDataError, ResourceNotFoundError
from folio.utils.markdown import render_markdown
from folio.utils.paths import SHARED_DATA_DIR, ProjectPaths

PASSTHROUGH_PHOTO_PREFIXES = ("http://", "https://", "data:")


class DataLoader:
    """
    Loads resume data for rendering.

    Args:
        paths: Project layout
        asset_store: Used to embed the photo for PDF renders
    """

    def __init__(self, paths: ProjectPaths, asset_store: AssetStore):
        self.paths = paths
        self.asset_store = asset_store

    async def load_resume_data(self, resume_id: str, context: RenderContext) -> ResumeData:
        """
        Load and inline everything a template needs for one resume.

        Markdown references whose file is missing leave that item's content
        and html unset. Missing top-level files are errors.

        Args:
            resume_id: Directory name under data/
            context: Render context (for_pdf controls photo embedding)

        Returns:
            ResumeData with all Markdown inlined

        Raises:
            ResourceNotFoundError: Resume directory, header, styling or resume.json missing
            InvalidResumeDataError: Malformed JSON or a reference escaping the resume directory
        """
        resume_dir = self.paths.resume_dir(resume_id)
        if not resume_dir.is_dir():
            raise ResourceNotFoundError(
                f"Resume data not found: {resume_id}", kind="resume", path=resume_dir
            )

        header_raw, styling_raw, descriptor = await asyncio.gather(
            self._load_json(self.paths.header_file, "header"),
            self._load_json(self.paths.styling_file, "styling"),
            self._load_descriptor(resume_id),
        )

        header = SharedHeader.from_dict(header_raw)
        if not isinstance(styling_raw, dict):
            raise InvalidResumeDataError("styling.json must contain an object")

        if context.for_pdf and descriptor.sidebar.photo:
            descriptor.sidebar.photo = await self._embed_photo(descriptor.sidebar.photo)

        return ResumeData(
            resume_id=resume_id,
            header=header,
            styling=styling_raw,
            sidebar=descriptor.sidebar,
            main=descriptor.main,
        )

    async def _load_json(self, path: Path, kind: str) -> Any:
        if not path.is_file():
            raise ResourceNotFoundError(
                f"{kind.capitalize()} file not found", kind=kind, path=path
            )
        try:
            return json.loads(await read_text(path))
        except json.JSONDecodeError as e:
            raise InvalidResumeDataError(f"Failed to parse {path}: {e}") from e

    async def _load_descriptor(self, resume_id: str) -> ResumeDescriptor:
        """Parse resume.json, then inline its Markdown references concurrently."""
        raw = await self._load_json(self.paths.resume_file(resume_id), "resume")
        descriptor = ResumeDescriptor.from_dict(raw)

        resume_dir = self.paths.resume_dir(resume_id)
        references: List[MarkdownReference] = list(descriptor.markdown_references())
        found = await asyncio.gather(
            *(self._inline_markdown(resume_dir, reference) for reference in references)
        )

        loaded = sum(1 for ok in found if ok)
        log_data_loaded(resume_id, loaded, len(found) - loaded)
        return descriptor

    def resolve_reference(self, resume_dir: Path, markdown_path: str) -> Path:
        """
        Resolve a markdownPath against the resume directory.

        Raises:
            InvalidResumeDataError: If the path points outside the resume directory
        """
        base = resume_dir.resolve()
        resolved = (base / markdown_path).resolve()
        try:
            resolved.relative_to(base)
        except ValueError:
            raise InvalidResumeDataError(
                f"Markdown reference escapes resume directory: {markdown_path}"
            ) from None
        return resolved

    async def _inline_markdown(self, resume_dir: Path, reference: MarkdownReference) -> bool:
        path = self.resolve_reference(resume_dir, reference.markdown_path)
        if not path.is_file():
            _log_warning(f"Markdown file not found, section left empty: {self.paths.display(path)}")
            return False

        text = await read_text(path)
        reference.content = text
        reference.html = render_markdown(text)
        return True

    async def _embed_photo(self, photo: str) -> str:
        """
        Inline a local photo as a data URI for PDF output.

        URLs and existing data URIs pass through. Relative paths resolve
        against the project root. If embedding fails the original reference
        is kept.
        """
        if photo.startswith(PASSTHROUGH_PHOTO_PREFIXES):
            return photo

        path = Path(photo)
        if not path.is_absolute():
            path = self.paths.root / path

        data_uri = await self.asset_store.embed_as_base64(path)
        if data_uri is None:
            _log_warning(f"Photo could not be embedded, keeping reference: {photo}")
            return photo

        _log_debug(f"Embedded photo {self.paths.display(path)}")
        return data_uri

    def get_available_resume_types(self) -> List[str]:
        """Resume identities: directories under data/, excluding shared data."""
        if not self.paths.data_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.paths.data_dir.iterdir()
            if entry.is_dir() and entry.name != SHARED_DATA_DIR and not entry.name.startswith(".")
        )
