"""
Text extraction for supported script formats.

Produces the (full_text, page_count) pair the parser expects. PDF pages are
joined with form feeds so the page segmenter can split on them.
"""
import math
import xml.etree.ElementTree as ET
from pathlib import Path

import fitz  # PyMuPDF

from errors import ExtractionError, UnsupportedFormatError

# Typical screenplay page length, used when the format has no pages
LINES_PER_PAGE = 55

PLAIN_TEXT_SUFFIXES = ('.fountain', '.txt', '.spmd')


def extract_pdf_text(pdf_path: str) -> tuple[str, int]:
    """
    Extract text from a PDF, one form feed between pages.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Tuple of (full_text, page count)
    """
    try:
        doc = fitz.open(pdf_path)
    except fitz.FileDataError as e:
        raise ExtractionError(f"Cannot read PDF {pdf_path}: {e}") from e
    try:
        pages = [doc[page_num].get_text("text") for page_num in range(len(doc))]
        return '\f'.join(pages), len(doc)
    finally:
        doc.close()


def estimate_page_count(text: str) -> int:
    """Page count for formats without pages: form feeds, else line count."""
    if '\f' in text:
        return len([p for p in text.split('\f') if p.strip()]) or 1
    return max(1, math.ceil(len(text.split('\n')) / LINES_PER_PAGE))


def extract_plain_text(path: str) -> tuple[str, int]:
    """Read a Fountain or plain-text script."""
    text = Path(path).read_text(encoding='utf-8', errors='replace')
    return text, estimate_page_count(text)


def extract_fdx_text(path: str) -> tuple[str, int]:
    """
    Read a Final Draft (.fdx) script as plain text.

    Each Content/Paragraph becomes one line; a blank line is kept before
    scene headings and cues so the text reads like a printed page.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ExtractionError(f"Malformed Final Draft file {path}: {e}") from e
    content = root.find('Content')
    paragraphs = content.findall('Paragraph') if content is not None else root.iter('Paragraph')
    lines: list[str] = []

    for para in paragraphs:
        text = ''.join(''.join(t.itertext()) for t in para.findall('Text')).strip()
        if not text:
            continue
        if para.get('Type') in ('Scene Heading', 'Character', 'Action', 'Transition') and lines:
            lines.append('')
        lines.append(text)

    text = '\n'.join(lines)
    return text, estimate_page_count(text)


def extract_script_text(path: str) -> tuple[str, int]:
    """
    Extract text and page count from a script file.

    Raises:
        UnsupportedFormatError: Unknown file type
        ExtractionError: The file is corrupt or malformed
    """
    suffix = Path(path).suffix.lower()
    if suffix == '.pdf':
        return extract_pdf_text(path)
    if suffix == '.fdx':
        return extract_fdx_text(path)
    if suffix in PLAIN_TEXT_SUFFIXES:
        return extract_plain_text(path)
    raise UnsupportedFormatError(f"Unsupported script format: {suffix or path}")
