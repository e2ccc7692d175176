"""
PDF inspection and post-processing.

page_count / page_dimensions read generated artifacts with PyPDF2;
optimize_pdf recompresses a buffer with pikepdf.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

import pikepdf
from PyPDF2 import PdfReader

# CSS pixels are 1/96 in, PDF points are 1/72 in
POINTS_PER_PIXEL = 72 / 96

PdfSource = Union[Path, bytes]


def _reader(source: PdfSource) -> PdfReader:
    if isinstance(source, (bytes, bytearray)):
        return PdfReader(BytesIO(source))
    return PdfReader(str(source))


def page_count(source: PdfSource) -> Optional[int]:
    """Get page count from a PDF file or buffer, or None if unreadable."""
    try:
        return len(_reader(source).pages)
    except Exception:
        return None


def page_dimensions(source: PdfSource, page_index: int = 0) -> Optional[Tuple[float, float]]:
    """
    Size of a page in CSS pixels, or None if unreadable.

    Used to verify that content-measured pages match the measured box.
    """
    try:
        box = _reader(source).pages[page_index].mediabox
        return float(box.width) / POINTS_PER_PIXEL, float(box.height) / POINTS_PER_PIXEL
    except Exception:
        return None


def optimize_pdf(buffer: bytes, level: str = "balanced", compress: bool = True) -> bytes:
    """
    Recompress a PDF buffer.

    Levels:
        minimal:    keep existing object streams, compress streams
        balanced:   generate object streams
        aggressive: generate object streams and recompress existing Flate data

    Raises:
        pikepdf.PdfError: If the buffer is not a readable PDF
    """
    object_stream_mode = (
        pikepdf.ObjectStreamMode.preserve if level == "minimal" else pikepdf.ObjectStreamMode.generate
    )

    output = BytesIO()
    with pikepdf.open(BytesIO(buffer)) as pdf:
        pdf.save(
            output,
            compress_streams=compress,
            object_stream_mode=object_stream_mode,
            recompress_flate=level == "aggressive",
        )
    return output.getvalue()
