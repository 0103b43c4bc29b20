"""
DOCFLOW - Text Extraction
Decode the selected PDF page by page and flatten it to plain text.
"""

import asyncio
import io
import logging
import re
from typing import List

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from core.exceptions import DecodeError

logger = logging.getLogger(__name__)

# Latin or Arabic letters.
ALPHABETIC_RE = re.compile("[a-zA-Z\u0600-\u06FF]")


def decode_pages(document: bytes) -> List[List[str]]:
    """
    Text fragments of every page, pages in order 1..N.
    A fragment is one non-blank line of the page's extracted text.
    """
    if not document:
        raise DecodeError("Failed to read PDF: document is empty")
    try:
        reader = PdfReader(io.BytesIO(document))
        pages = []
        for page in reader.pages:
            text = page.extract_text() or ""
            pages.append([line.strip() for line in text.splitlines() if line.strip()])
    except (PyPdfError, ValueError, KeyError) as e:
        raise DecodeError(f"Failed to read PDF: {e}") from e
    return pages


def join_pages(pages: List[List[str]]) -> str:
    """
    Each fragment is followed by a single space, each page by a newline.
    The space after the last fragment of a page is kept on purpose: three
    one-letter pages come out as three lines "a ", "b ", "c ".
    """
    return "".join("".join(f"{fragment} " for fragment in fragments) + "\n" for fragments in pages)


def has_meaningful_text(text: str) -> bool:
    return bool(ALPHABETIC_RE.search(text or ""))


async def extract_text(document: bytes) -> str:
    """Decode ``document`` off the event loop and return its joined text."""
    pages = await asyncio.to_thread(decode_pages, document)
    text = join_pages(pages)
    logger.info("[Extract] %d pages decoded, %d characters", len(pages), len(text))
    return text
