import io

import pymupdf
import pytest
from docx import Document

from document_text.extraction_config import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE, get_config
from document_text.extractor import UnsupportedFileType, extract_text


def make_pdf(text: str) -> bytes:
    doc = pymupdf.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx(*paragraphs: str) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_plain_text_is_decoded_as_utf8():
    assert extract_text("text/plain", "Café backend engineer".encode("utf-8")) == "Café backend engineer"


def test_any_text_subtype_is_decoded():
    assert extract_text("text/markdown", b"# Resume") == "# Resume"


def test_media_type_parameters_are_ignored():
    assert extract_text("text/plain; charset=utf-8", b"hello") == "hello"


def test_invalid_utf8_is_replaced_not_rejected():
    assert extract_text("text/plain", b"ok \xff") == "ok �"


def test_pdf_text_is_extracted():
    text = extract_text(PDF_MEDIA_TYPE, make_pdf("Experienced backend engineer"))
    assert "Experienced backend engineer" in text


def test_docx_paragraphs_are_extracted_in_order():
    text = extract_text(DOCX_MEDIA_TYPE, make_docx("Seeking backend engineer", "API design skills"))
    assert "Seeking backend engineer" in text
    assert text.index("Seeking backend engineer") < text.index("API design skills")


@pytest.mark.parametrize("media_type", ["image/png", "application/msword", "", None])
def test_unsupported_media_type_is_rejected(media_type):
    with pytest.raises(UnsupportedFileType) as exc_info:
        extract_text(media_type, b"data")
    assert exc_info.value.media_type == media_type


def test_declared_type_wins_over_content():
    pdf = make_pdf("hidden")
    assert extract_text("text/plain", pdf).startswith("%PDF")
    with pytest.raises(UnsupportedFileType):
        extract_text("application/octet-stream", pdf)


def test_corrupt_pdf_propagates_parser_error():
    with pytest.raises(Exception) as exc_info:
        extract_text(PDF_MEDIA_TYPE, b"this is not a pdf")
    assert not isinstance(exc_info.value, UnsupportedFileType)


def test_extraction_is_idempotent():
    pdf = make_pdf("Same bytes, same text")
    docx = make_docx("Same bytes", "same text")
    assert extract_text(PDF_MEDIA_TYPE, pdf) == extract_text(PDF_MEDIA_TYPE, pdf)
    assert extract_text(DOCX_MEDIA_TYPE, docx) == extract_text(DOCX_MEDIA_TYPE, docx)
    assert extract_text("text/plain", b"abc") == extract_text("text/plain", b"abc")


def test_extraction_settings_by_section():
    assert get_config("text") == {"encoding": "utf-8", "errors": "replace"}
    assert get_config("pdf")["page_separator"] == "\n"
    assert get_config("docx")["paragraph_separator"] == "\n"
    assert get_config("xlsx") == {}
