"""
Text normalisation applied to extracted script text before page segmentation.
"""
import re

from config import DEFAULT_TAB_WIDTH

# UTF-8 bytes that were decoded as cp1252 by the extractor
MOJIBAKE_REPLACEMENTS: dict[str, str] = {
    "â€™": "'",        # right single quote
    "â€˜": "'",        # left single quote
    "â€œ": '"',        # left double quote
    "â€\u009d": '"',        # right double quote
    "â€”": "—",   # em dash
    "â€“": "–",   # en dash
    "â€¦": "…",   # ellipsis
    "â€": '"',              # right double quote with its last byte lost
    "Ã ": "à",         # à
    "Ã ": "à",              # à, non-breaking space flattened by the extractor
    "Ã¨": "è",         # è
    "Ã©": "é",         # é
    "Ã¬": "ì",         # ì
    "Ã²": "ò",         # ò
    "Ã¹": "ù",         # ù
}

# Longest sequence first so a bare prefix never shadows a full sequence
MOJIBAKE_PATTERN = re.compile(
    "|".join(re.escape(k) for k in sorted(MOJIBAKE_REPLACEMENTS, key=len, reverse=True))
)
LINE_ENDING_PATTERN = re.compile(r'\r\n?')
TRAILING_SPACE_PATTERN = re.compile(r'[ \t]+(?=\n)')


def fix_mojibake(text: str) -> str:
    """Replace known mis-decoded byte sequences with the intended characters."""
    return MOJIBAKE_PATTERN.sub(lambda m: MOJIBAKE_REPLACEMENTS[m.group(0)], text)


def normalize(
    text: str,
    preserve_whitespace: bool = False,
    tab_width: int = DEFAULT_TAB_WIDTH
) -> str:
    """
    Normalize extracted script text.

    Line endings always become ``\\n`` and mojibake is always repaired.
    Form feeds are kept for the page segmenter.

    Args:
        text: Raw extracted text
        preserve_whitespace: Keep tabs and leading/trailing whitespace
            verbatim (editor round-trip) instead of expanding and trimming
        tab_width: Spaces per tab in page mode

    Returns:
        Normalized text
    """
    if not text:
        return ""

    text = LINE_ENDING_PATTERN.sub('\n', text)

    if not preserve_whitespace:
        text = text.replace('\t', ' ' * tab_width)
        text = TRAILING_SPACE_PATTERN.sub('', text)
        text = text.strip()

    # Whitespace first: a repaired character never exposes new whitespace,
    # so a second pass is a no-op.
    return fix_mojibake(text)
