"""
Text extraction for uploaded documents

Dispatches purely on the declared media type of an upload:
- PDF -> PyMuPDF page text
- DOCX -> python-docx paragraph text
- text/* -> UTF-8 decoding

No content sniffing is done; a mislabeled file is handled according to its
declared type. Parser failures on malformed documents propagate unchanged.
"""

import io
import logging
from typing import Optional

import pymupdf  # PyMuPDF for PDF processing
from docx import Document

from document_text.extraction_config import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    TEXT_MEDIA_PREFIX,
    get_config,
)

logger = logging.getLogger(__name__)


class UnsupportedFileType(ValueError):
    """Raised when an upload declares a media type we cannot extract."""

    def __init__(self, media_type: Optional[str]):
        self.media_type = media_type
        super().__init__(f"Unsupported file type: {media_type}")


def _base_media_type(media_type: Optional[str]) -> str:
    # "text/plain; charset=utf-8" -> "text/plain"
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def extract_text_from_pdf_bytes(pdf_bytes: bytes) -> str:
    """
    Extract text content from PDF bytes.

    Args:
        pdf_bytes: Raw PDF file content

    Returns:
        Text of every page, each followed by the page separator
    """
    config = get_config("pdf")
    doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")
    text = ""

    try:
        for page in doc:
            text += page.get_text(config["text_mode"]) + config["page_separator"]  # type: ignore
    finally:
        doc.close()

    return text


def extract_text_from_docx_bytes(docx_bytes: bytes) -> str:
    """Extract the raw paragraph text of a Word (OOXML) document."""
    document = Document(io.BytesIO(docx_bytes))
    return get_config("docx")["paragraph_separator"].join(
        paragraph.text for paragraph in document.paragraphs
    )


def decode_text_bytes(data: bytes) -> str:
    config = get_config("text")
    return data.decode(config["encoding"], errors=config["errors"])


def extract_text(media_type: Optional[str], data: bytes) -> str:
    """
    Extract plain text from an uploaded document.

    Args:
        media_type: The declared media type of the upload
        data: Raw file bytes

    Returns:
        Extracted text content

    Raises:
        UnsupportedFileType: If the declared media type is not supported
    """
    base_type = _base_media_type(media_type)

    if base_type == PDF_MEDIA_TYPE:
        text = extract_text_from_pdf_bytes(data)
    elif base_type == DOCX_MEDIA_TYPE:
        text = extract_text_from_docx_bytes(data)
    elif base_type.startswith(TEXT_MEDIA_PREFIX):
        text = decode_text_bytes(data)
    else:
        raise UnsupportedFileType(media_type)

    logger.debug(f"Extracted {len(text)} characters from {base_type} upload")
    return text
