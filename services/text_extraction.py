# services/text_extraction.py
# -*- coding: utf-8 -*-
"""
Uploaded brief (bytes) -> plain text.

- .pdf : page text via pdfplumber, pages joined with blank lines
- .txt : UTF-8 (BOM aware), latin-1 as last resort

Anything else, an empty upload or a PDF without a text layer raises
ExtractionFailed.
"""

import io
import os
from typing import Optional

import pdfplumber

from core.config import ALLOWED_EXTENSIONS
from core.logging import logger

from .errors import ExtractionFailed


def file_extension(filename: Optional[str], content_type: Optional[str] = None) -> str:
    """Lower-cased extension; falls back to the content type when the name has none."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext:
        return ext
    if content_type == "application/pdf":
        return ".pdf"
    if content_type and content_type.startswith("text/plain"):
        return ".txt"
    return ""


def extract_pdf_text(data: bytes) -> str:
    pages = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                if page_text.strip():
                    pages.append(page_text.strip())
    except Exception as e:
        # pdfplumber / pdfminer raise a wide range of parser errors
        raise ExtractionFailed(f"Unreadable PDF: {e}") from e

    if not pages:
        raise ExtractionFailed("PDF has no extractable text")

    return "\n\n".join(pages)


def extract_plain_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("text upload is not UTF-8, decoding as latin-1")
        return data.decode("latin-1")


def extract_text(
    data: bytes,
    filename: Optional[str],
    content_type: Optional[str] = None,
) -> str:
    """Extract the brief text from an uploaded document."""
    if not data:
        raise ExtractionFailed("Empty file")

    ext = file_extension(filename, content_type)
    if ext not in ALLOWED_EXTENSIONS:
        raise ExtractionFailed(
            f"Invalid file type: {ext or 'unknown'}. Allowed: {', '.join(ALLOWED_EXTENSIONS)}"
        )

    if ext == ".pdf":
        text = extract_pdf_text(data)
    else:
        text = extract_plain_text(data)

    text = text.strip()
    if not text:
        raise ExtractionFailed("Document contains no text")

    return text
