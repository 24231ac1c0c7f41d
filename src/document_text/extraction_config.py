"""
Document Text Extraction Configuration

Centralized configuration for uploaded-document text extraction.
"""

# ============================================================================
# Media Types
# ============================================================================

PDF_MEDIA_TYPE = "application/pdf"

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

# Any declared type starting with this prefix is decoded as plain text
TEXT_MEDIA_PREFIX = "text/"

# ============================================================================
# Extraction Configuration
# ============================================================================

PDF_CONFIG = {
    # Text flavour passed to PyMuPDF's page.get_text()
    "text_mode": "text",

    # Separator appended after every page
    "page_separator": "\n",
}

DOCX_CONFIG = {
    # Separator between paragraph texts
    "paragraph_separator": "\n",
}

TEXT_CONFIG = {
    # Plain-text uploads are always read as UTF-8
    "encoding": "utf-8",

    # Invalid byte sequences become U+FFFD instead of failing the upload
    "errors": "replace",
}


def get_config(section: str) -> dict:
    """
    Get configuration for a specific section.

    Args:
        section: Configuration section name ("pdf", "docx" or "text")

    Returns:
        Configuration dictionary (empty for unknown sections)
    """
    configs = {
        "pdf": PDF_CONFIG,
        "docx": DOCX_CONFIG,
        "text": TEXT_CONFIG,
    }

    return configs.get(section, {})
