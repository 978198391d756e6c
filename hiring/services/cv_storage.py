"""
CV blob storage on the local filesystem, plus PDF text extraction.
"""
import asyncio
import logging
import re
import time
import uuid
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/cv"


def _safe_file_name(file_name: str) -> str:
    name = Path(file_name).name
    return re.sub(r"[^A-Za-z0-9._-]", "_", name) or "cv"


class LocalCVStorage:
    """Stores CV files under a directory and hands back a public relative path."""

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)

    async def save(self, candidate_id: uuid.UUID, file_name: str, data: bytes) -> str:
        """Write the file as <candidate>-<timestamp ms>-<name> and return /uploads/cv/<that>."""
        stored_name = f"{candidate_id}-{int(time.time() * 1000)}-{_safe_file_name(file_name)}"
        target = self.base_dir / stored_name

        def _write():
            self.base_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        await asyncio.to_thread(_write)
        logger.info(f"Stored CV {stored_name} ({len(data)} bytes)")
        return f"{PUBLIC_PREFIX}/{stored_name}"


async def extract_pdf_text(data: bytes) -> str:
    """Extract the text layer of a PDF. Unreadable or image-only PDFs yield ''."""

    def _extract() -> str:
        reader = PdfReader(BytesIO(data))
        if reader.is_encrypted:
            logger.warning("Encrypted PDF, no text extracted")
            return ""
        pages_text: list[str] = []
        for page in reader.pages:
            text = page.extract_text()
            if text:
                pages_text.append(text)
        return "\n\n".join(pages_text)

    try:
        return await asyncio.to_thread(_extract)
    except (PdfReadError, ValueError) as e:
        logger.warning(f"Could not extract text from PDF: {e}")
        return ""
