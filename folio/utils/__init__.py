"""
Shared utilities for folio.

Common functionality used across contexts:
- Project layout paths
- Error taxonomy
- Async file access and bounded waits
- Markdown rendering
- PDF inspection/optimization
"""

from folio.utils.paths import ProjectPaths
from folio.utils.timestamp import filename_timestamp, iso_utc

__all__ = ["ProjectPaths", "filename_timestamp", "iso_utc"]
