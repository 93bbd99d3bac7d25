"""
Splits a whole-document text blob into pages.

Three strategies are tried in order, each with an acceptance test:
form-feed breaks, printed page numbers, then an even line distribution.
"""
import logging
import math
from typing import Optional

from config import ParserConfig
from grammar import PAGE_NUMBER_PATTERN
from models import PageSegmentation, RawPage

logger = logging.getLogger(__name__)

FORM_FEED = '\f'


def segment_pages(
    full_text: str,
    declared_page_count: int,
    config: Optional[ParserConfig] = None
) -> PageSegmentation:
    """
    Split normalized text into pages.

    Args:
        full_text: Normalized document text
        declared_page_count: Page count reported by the extractor (>= 1)
        config: Parser options

    Returns:
        PageSegmentation with pages and the strategy that produced them
    """
    config = config or ParserConfig()

    pages = split_on_form_feeds(full_text, declared_page_count, config)
    if pages is not None:
        logger.info("Using form feed page breaks (%d pages)", len(pages))
        return PageSegmentation(pages=pages, strategy="form_feed")

    pages = split_on_page_numbers(full_text, declared_page_count, config)
    if pages is not None:
        logger.info("Using page number markers (%d pages)", len(pages))
        return PageSegmentation(pages=pages, strategy="page_numbers")

    logger.warning(
        "No reliable page breaks found; estimating %d pages by line count",
        declared_page_count
    )
    pages = distribute_lines(full_text, declared_page_count, config)
    return PageSegmentation(pages=pages, strategy="line_estimate", needs_review=True)


def _make_page(page_number: int, lines: list[str], config: ParserConfig) -> RawPage:
    text = '\n'.join(lines)
    if not config.preserve_whitespace:
        text = text.strip()
    return RawPage(
        page_number=page_number,
        raw_text=text,
        line_count=len(text.split('\n')) if text else 0,
    )


def split_on_form_feeds(
    full_text: str,
    declared_page_count: int,
    config: ParserConfig
) -> Optional[list[RawPage]]:
    """
    Form-feed split, or None when the page count is implausible.

    Accepted when the number of non-blank parts lies in
    [declared, declared * form_feed_tolerance]; extractors sometimes add
    breaks but a collapse to fewer pages means the breaks were lost.
    """
    parts = [p for p in full_text.split(FORM_FEED) if p.strip()]
    upper = declared_page_count * config.form_feed_tolerance

    logger.debug("Form feed pages found: %d (declared %d)", len(parts), declared_page_count)
    if not declared_page_count <= len(parts) <= upper:
        return None

    return [
        _make_page(index + 1, part.split('\n'), config)
        for index, part in enumerate(parts)
    ]


def split_on_page_numbers(
    full_text: str,
    declared_page_count: int,
    config: ParserConfig
) -> Optional[list[RawPage]]:
    """
    Split at printed page numbers, or None when too few were found.

    A marker is a line holding only a number in 1..declared that is larger
    than the previous marker. Each marker starts its page; marker lines are
    not part of the page text. Text before the first marker becomes the
    preceding page (or joins page 1).
    """
    lines = full_text.replace(FORM_FEED, '\n').split('\n')
    markers: list[tuple[int, int]] = []   # (line index, page number)

    for index, line in enumerate(lines):
        stripped = line.strip()
        if not PAGE_NUMBER_PATTERN.match(stripped):
            continue
        number = int(stripped.rstrip('.'))
        if not 1 <= number <= declared_page_count:
            continue
        if markers and number <= markers[-1][1]:
            continue
        markers.append((index, number))

    required = declared_page_count * config.page_number_detection_threshold
    logger.debug("Page number markers found: %d (need %.1f)", len(markers), required)
    if not markers or len(markers) < required:
        return None

    pages: list[RawPage] = []
    first_index, first_number = markers[0]
    leading = lines[:first_index]
    has_leading = any(line.strip() for line in leading)

    if has_leading and first_number > 1:
        pages.append(_make_page(first_number - 1, leading, config))
        leading = []

    for position, (index, number) in enumerate(markers):
        end = markers[position + 1][0] if position + 1 < len(markers) else len(lines)
        body = lines[index + 1:end]
        if position == 0 and has_leading and leading:
            body = leading + body
        pages.append(_make_page(number, body, config))

    return pages


def distribute_lines(
    full_text: str,
    declared_page_count: int,
    config: ParserConfig
) -> list[RawPage]:
    """
    Spread lines evenly over the declared pages. Always succeeds.

    Real pages differ a lot in line count (dialogue vs. action), so page
    attribution from this split is low confidence.
    """
    lines = full_text.replace(FORM_FEED, '\n').split('\n')

    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()

    per_page = max(1, math.ceil(len(lines) / declared_page_count))
    pages = []
    current = 0

    for i in range(declared_page_count):
        is_last_page = i == declared_page_count - 1
        end = len(lines) if is_last_page else min(current + per_page, len(lines))
        pages.append(_make_page(i + 1, lines[current:end], config))
        current = end

    return pages
