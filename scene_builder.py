"""
Rebuilds scenes from the classified line stream.

Scenes span page boundaries, so this runs as one ordered pass over the
lines of every page.
"""
import logging
import re
from typing import Optional

from config import ParserConfig
from grammar import canonicalize_name, parse_scene_heading
from models import ClassifiedLine, DialogueLine, LineType, Scene

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary available"

# Lines that belong to the dialogue block opened by a cue
_BLOCK_TYPES = (LineType.DIALOGUE, LineType.PARENTHETICAL)


class PropMatcher:
    """Whole-word, case-insensitive matcher for a prop vocabulary."""

    def __init__(self, keywords: tuple[str, ...]):
        # Longest first so a multi-word prop beats its first word
        ordered = sorted({k.lower() for k in keywords if k}, key=len, reverse=True)
        self.names = {k: k[:1].upper() + k[1:] for k in ordered}
        self.pattern = re.compile(
            r'\b(?:' + '|'.join(re.escape(k) for k in ordered) + r')\b',
            re.IGNORECASE
        ) if ordered else None

    def extract(self, lines: list[str]) -> list[str]:
        """Capitalised keywords found in ``lines``, unique, first-seen order."""
        if self.pattern is None:
            return []
        found: dict[str, None] = {}
        for match in self.pattern.finditer('\n'.join(lines)):
            found.setdefault(self.names[match.group(0).lower()], None)
        return list(found)


def summarize_scene(
    actions: list[str],
    dialogue: list[DialogueLine],
    config: ParserConfig
) -> str:
    """Extractive summary: the first few actions and dialogue excerpts."""
    limit = config.dialogue_excerpt_length
    excerpts = []
    for line in dialogue[:config.max_summary_dialogue]:
        text = line.text if len(line.text) <= limit else line.text[:limit] + "..."
        excerpts.append(f"{line.character}: {text}")

    action_text = ' '.join(actions[:config.max_summary_actions])
    summary = f"{action_text} {' '.join(excerpts)}".strip()
    return summary or NO_SUMMARY


class _SceneDraft:
    """Accumulates one scene until it is sealed."""

    def __init__(self, scene_number: int, heading_line: ClassifiedLine, config: ParserConfig):
        self.config = config
        self.scene_number = scene_number
        self.page_number = heading_line.page_number
        self.heading = heading_line.text
        self.parsed = parse_scene_heading(heading_line.text)
        self.dialogue: list[DialogueLine] = []
        self.actions: list[str] = []
        self.actors: list[str] = []
        self.buffer: list[str] = []
        self.lines: list[ClassifiedLine] = []
        self.consume(heading_line)

    def consume(self, line: ClassifiedLine):
        """Record a line in the verbatim text buffer."""
        self.lines.append(line)
        self.buffer.append(line.original_text if self.config.preserve_whitespace else line.text)

    def add_actor(self, name: str):
        if name not in self.actors:
            self.actors.append(name)

    def seal(self, props: PropMatcher) -> Scene:
        plain_lines = [line.text for line in self.lines]
        return Scene(
            scene_number=self.scene_number,
            page_number=self.page_number,
            heading=self.heading,
            location=self.parsed.location,
            int_ext=self.parsed.int_ext,
            time_of_day=self.parsed.time_of_day,
            dialogue=self.dialogue,
            actions=self.actions,
            actors=self.actors,
            props=props.extract(plain_lines),
            text='\n'.join(self.buffer),
            summary=summarize_scene(self.actions, self.dialogue, self.config),
            lines=self.lines,
        )


def build_scenes(
    lines: list[ClassifiedLine],
    config: Optional[ParserConfig] = None
) -> list[Scene]:
    """
    Build scenes from classified lines.

    No active scene until the first heading; lines before it (title page,
    front matter) are discarded. Each heading seals the current scene and
    opens the next one, and the end of the stream seals the last.

    Args:
        lines: Classified lines of the whole document in page order
        config: Parser options

    Returns:
        Scenes numbered 1..n in heading order
    """
    config = config or ParserConfig()
    props = PropMatcher(config.prop_keywords)
    scenes: list[Scene] = []
    current: Optional[_SceneDraft] = None
    discarded = 0

    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1

        if line.type == LineType.EMPTY:
            continue

        if line.type == LineType.SCENE_HEADING:
            if current is not None:
                scenes.append(current.seal(props))
            current = _SceneDraft(len(scenes) + 1, line, config)
            continue

        if current is None:
            discarded += 1
            continue

        current.consume(line)

        if line.type == LineType.CHARACTER:
            name = canonicalize_name(line.text)
            current.add_actor(name)

            spoken: list[str] = []
            asides: list[str] = []
            while i < len(lines) and lines[i].type in _BLOCK_TYPES:
                block_line = lines[i]
                current.consume(block_line)
                if block_line.type == LineType.DIALOGUE:
                    spoken.append(block_line.text)
                else:
                    asides.append(block_line.text)
                i += 1

            if spoken:
                current.dialogue.append(DialogueLine(
                    character=name,
                    text=' '.join(spoken),
                    parentheticals=asides,
                ))
        elif line.type in (LineType.ACTION, LineType.DIALOGUE):
            # Dialogue without a cue is kept visible as action
            current.actions.append(line.text)
        # Transitions and stray parentheticals only go to the text buffer

    if current is not None:
        scenes.append(current.seal(props))

    if discarded:
        logger.info("Discarded %d lines before the first scene heading", discarded)

    return scenes


def count_discarded_lines(lines: list[ClassifiedLine]) -> int:
    """Non-empty lines before the first scene heading."""
    count = 0
    for line in lines:
        if line.type == LineType.SCENE_HEADING:
            break
        if line.type != LineType.EMPTY:
            count += 1
    return count
