"""
Classifies script lines using line-shape rules and a short lookahead.
"""
import logging
from typing import Iterable, Optional

from config import ParserConfig
from grammar import (
    is_blank,
    is_likely_action,
    is_name_shaped,
    is_page_footer,
    is_page_number,
    is_parenthetical,
    is_scene_heading,
    is_transition,
    looks_like_dialogue,
)
from models import ClassifiedLine, LineType, RawPage

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ParserConfig()

# Previous line types that make the next line dialogue
_DIALOGUE_OPENERS = (LineType.CHARACTER, LineType.PARENTHETICAL)


def is_dropped(line: str) -> bool:
    """Page numbers and page footers never reach the line stream."""
    return is_page_number(line) or is_page_footer(line)


def _supports_cue(lines: list[str], index: int) -> bool:
    """The line right after ``index`` can be the start of a dialogue block."""
    next_index = index + 1
    if next_index >= len(lines):
        return False
    next_line = lines[next_index]
    return not (
        is_blank(next_line)
        or is_scene_heading(next_line)
        or is_transition(next_line)
    )


def has_dialogue_following(lines: list[str], index: int, lookahead: int) -> bool:
    """Dialogue-shaped text within ``lookahead`` non-blank lines, before any other cue."""
    seen = 0
    for line in lines[index + 1:]:
        if is_blank(line):
            continue
        if seen >= lookahead:
            break
        seen += 1
        if is_scene_heading(line) or is_name_shaped(line):
            break
        if looks_like_dialogue(line):
            return True
    return False


def character_cue_test(
    lines: list[str],
    index: int,
    config: ParserConfig = DEFAULT_CONFIG
) -> tuple[bool, bool]:
    """
    Decide whether ``lines[index]`` is a character cue.

    A name-shaped line is a cue when the next line is non-empty, not a
    heading or transition, and not itself name-shaped. Two name-shaped
    lines in a row are resolved so that cue and dialogue keep alternating:
    if the second line would make a cue on its own, the first one is not;
    otherwise the first is a cue only if the second reads like dialogue.

    Returns:
        Tuple of (is_cue, ambiguous); ambiguous is True when the line was
        rejected only because of a name-shaped neighbour
    """
    line = lines[index]
    if not is_name_shaped(line) or not _supports_cue(lines, index):
        return False, False

    next_line = lines[index + 1]
    if is_name_shaped(next_line):
        next_is_cue = (
            _supports_cue(lines, index + 1)
            and not is_name_shaped(lines[index + 2])
        )
        if next_is_cue or not looks_like_dialogue(next_line):
            return False, True

    if config.cue_confirmation == "strict":
        if not has_dialogue_following(lines, index, config.dialogue_lookahead):
            return False, False

    return True, False


def classify(
    line: str,
    all_lines: list[str],
    index: int,
    previous_type: Optional[LineType] = None,
    config: ParserConfig = DEFAULT_CONFIG
) -> Optional[LineType]:
    """
    Classify one line of a stream. First matching rule wins.

    Args:
        line: The line to classify
        all_lines: Whole stream the line belongs to (page markers removed)
        index: Position of ``line`` in ``all_lines``
        previous_type: Type given to the previous line, for dialogue chaining
        config: Parser options

    Returns:
        LineType, or None for page numbers and footers (dropped)
    """
    stripped = line.strip()
    if not stripped:
        return LineType.EMPTY
    if is_dropped(stripped):
        return None
    if is_scene_heading(stripped):
        return LineType.SCENE_HEADING
    if is_transition(stripped):
        return LineType.TRANSITION
    if is_parenthetical(stripped):
        return LineType.PARENTHETICAL

    # A cue has already claimed this line as its dialogue
    if previous_type != LineType.CHARACTER:
        is_cue, _ = character_cue_test(all_lines, index, config)
        if is_cue:
            return LineType.CHARACTER

    if previous_type in _DIALOGUE_OPENERS:
        return LineType.DIALOGUE
    if previous_type == LineType.DIALOGUE and not is_likely_action(stripped):
        return LineType.DIALOGUE

    return LineType.ACTION


def classify_stream(
    numbered_lines: Iterable[tuple[int, str]],
    config: ParserConfig = DEFAULT_CONFIG
) -> list[ClassifiedLine]:
    """
    Classify a page-ordered stream of (page_number, line) pairs.

    Page numbers and footers are removed before classification so lookahead
    runs across page boundaries.
    """
    kept = []
    dropped = 0
    for page_number, line in numbered_lines:
        if line.strip() and is_dropped(line):
            dropped += 1
            continue
        kept.append((page_number, line))

    if dropped:
        logger.debug("Dropped %d page number/footer lines", dropped)

    texts = [line for _, line in kept]
    classified: list[ClassifiedLine] = []
    previous_type: Optional[LineType] = None

    for index, (page_number, line) in enumerate(kept):
        line_type = classify(line, texts, index, previous_type, config)
        ambiguous = False
        if line_type == LineType.ACTION:
            _, ambiguous = character_cue_test(texts, index, config)
            if ambiguous:
                logger.debug("Ambiguous name-shaped line on page %d: %r", page_number, line.strip())

        classified.append(ClassifiedLine(
            text=line.strip(),
            type=line_type,
            page_number=page_number,
            indentation=len(line) - len(line.lstrip(' \t')),
            original_text=line,
            ambiguous=ambiguous,
        ))
        previous_type = line_type

    return classified


def page_lines(pages: Iterable[RawPage]) -> list[tuple[int, str]]:
    """Flatten pages into one (page_number, line) stream in page order."""
    return [
        (page.page_number, line)
        for page in pages
        for line in page.raw_text.split('\n')
    ]


def classify_page(page: RawPage, config: ParserConfig = DEFAULT_CONFIG) -> list[ClassifiedLine]:
    """Classify a single page in isolation."""
    return classify_stream(page_lines([page]), config)
