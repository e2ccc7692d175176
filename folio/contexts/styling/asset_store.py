"""
Asset Store

Reads images, SVG icons and other static assets from disk and returns them as
base64 data URIs so that PDF renders are fully self-contained. Entries are
memoized by (kind, source path) for the lifetime of the store.
"""

import asyncio
import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from folio.contexts.styling.logger import _log_debug, _log_error, _log_warning

# Semantic icon name -> emoji codepoint SVG file under the icons directory
ICON_CODEPOINTS = {
    "email": "1f4e7",
    "location": "1f4cd",
    "link": "1f517",
    "github": "1f4bb",
    "website": "1f310",
    "phone": "1f4de",
}

FALLBACK_GLYPHS = {
    "email": "✉",
    "location": "\U0001F4CD",
    "link": "\U0001F517",
    "github": "\U0001F4BB",
    "website": "\U0001F310",
    "phone": "\U0001F4DE",
}

GENERIC_GLYPH = "•"

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}

DEFAULT_MIME_TYPE = "image/jpeg"

# Web fonts linked (not embedded) by browser renders
WEB_FONTS = {
    "Montserrat": (400, 600, 700),
    "Lato": (300, 400, 700),
}

GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"
FONT_PRECONNECT_ORIGINS = ("https://fonts.googleapis.com", "https://fonts.gstatic.com")

PathLike = Union[str, Path]


def combined_font_import_url(fonts: Dict[str, Tuple[int, ...]] = WEB_FONTS) -> str:
    """
    One Google Fonts stylesheet URL for every web font.

    Example:
        https://fonts.googleapis.com/css2?family=Montserrat:wght@400;600;700&family=Lato:wght@300;400;700&display=swap
    """
    families = "&".join(
        f"family={family}:wght@{';'.join(str(w) for w in weights)}" for family, weights in fonts.items()
    )
    return f"{GOOGLE_FONTS_CSS_URL}?{families}&display=swap"


@dataclass(frozen=True)
class AssetInfo:
    """
    Cached embedded asset.

    Attributes:
        data_uri: data:<mime>;base64,<payload>
        mime_type: MIME type derived from the file extension
        size: Size of the source file in bytes
        original_path: Source path the entry is keyed by
    """

    data_uri: str
    mime_type: str
    size: int
    original_path: str


def mime_type_for(path: PathLike) -> str:
    """MIME type from file extension; unknown extensions default to image/jpeg."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


class AssetStore:
    """
    Process-scoped cache of base64-embedded assets.

    The cache is unbounded and only emptied by clear_cache(); the asset
    universe (one photo, a handful of icons) is small and static.
    """

    def __init__(self, icons_dir: Path):
        self.icons_dir = Path(icons_dir)
        self._cache: Dict[str, AssetInfo] = {}

    @staticmethod
    def _cache_key(kind: str, path: PathLike) -> str:
        return f"{kind}:{path}"

    def _embed(self, path: PathLike, kind: str) -> Optional[str]:
        """Load and cache one asset. Returns None if the file is missing or unreadable."""
        key = self._cache_key(kind, path)
        cached = self._cache.get(key)
        if cached is not None:
            return cached.data_uri

        source = Path(path)
        if not source.is_file():
            _log_warning(f"{kind.capitalize()} file not found: {source}")
            return None

        try:
            payload = source.read_bytes()
        except OSError as e:
            _log_error(f"Failed to embed {kind} {source}: {e}")
            return None

        mime_type = "image/svg+xml" if kind == "svg" else mime_type_for(source)
        info = AssetInfo(
            data_uri=f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}",
            mime_type=mime_type,
            size=len(payload),
            original_path=str(path),
        )
        self._cache[key] = info
        _log_debug(f"Embedded {kind} {source} ({info.size} bytes)")
        return info.data_uri

    async def embed_as_base64(self, path: PathLike) -> Optional[str]:
        """
        Embed an image or SVG file as a data URI.

        Args:
            path: Source file path (also the cache key)

        Returns:
            Data URI, or None if the file does not exist
        """
        kind = "svg" if Path(path).suffix.lower() == ".svg" else "image"
        cached = self._cache.get(self._cache_key(kind, path))
        if cached is not None:
            return cached.data_uri
        return await asyncio.to_thread(self._embed, path, kind)

    def icon_path(self, icon_type: str) -> Optional[Path]:
        codepoint = ICON_CODEPOINTS.get(icon_type)
        if codepoint is None:
            return None
        return self.icons_dir / f"{codepoint}.svg"

    def get_icon_html(self, icon_type: str, size: str = "1em") -> str:
        """
        Inline <img> markup for a semantic icon.

        Synchronous so it can run inside template rendering; hits the cache
        after preload_icons() and reads the SVG from disk on a miss. Unknown
        icon names and missing SVG files fall back to a Unicode glyph.
        """
        svg_path = self.icon_path(icon_type)
        if svg_path is None:
            return self.fallback_icon(icon_type)

        data_uri = self._embed(svg_path, "svg")
        if data_uri is None:
            return self.fallback_icon(icon_type)

        return (
            f'<img src="{data_uri}" alt="{icon_type}" '
            f'style="width: {size}; height: {size}; vertical-align: middle; display: inline-block;">'
        )

    @staticmethod
    def fallback_icon(icon_type: str) -> str:
        return FALLBACK_GLYPHS.get(icon_type, GENERIC_GLYPH)

    async def preload_icons(self) -> None:
        """Warm the cache with every known icon SVG."""
        paths = [self.icon_path(icon_type) for icon_type in ICON_CODEPOINTS]
        await asyncio.gather(*(asyncio.to_thread(self._embed, p, "svg") for p in paths))

    def get_cached_asset(self, path: PathLike, kind: str = "image") -> Optional[AssetInfo]:
        return self._cache.get(self._cache_key(kind, path))

    def clear_cache(self) -> None:
        """Drop every cached asset."""
        self._cache.clear()

    def get_cache_stats(self) -> Dict[str, int]:
        return {
            "cache_size": len(self._cache),
            "total_size": sum(info.size for info in self._cache.values()),
        }
