"""
Data models for the screenplay structure parser.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

PageStrategy = Literal["form_feed", "page_numbers", "line_estimate"]
Confidence = Literal["high", "medium", "low"]


class LineType(str, Enum):
    """Closed set of line classifications."""
    SCENE_HEADING = "scene_heading"
    TRANSITION = "transition"
    CHARACTER = "character"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    ACTION = "action"
    EMPTY = "empty"


@dataclass(frozen=True)
class RawPage:
    """Text content of a single script page."""
    page_number: int          # 1-indexed
    raw_text: str
    line_count: int


@dataclass
class PageSegmentation:
    """Pages produced by the segmenter and the tier that produced them."""
    pages: list[RawPage]
    strategy: PageStrategy
    needs_review: bool = False


@dataclass
class ClassifiedLine:
    """A single non-dropped line with its classification."""
    text: str                 # Trimmed text
    type: LineType
    page_number: int
    indentation: int          # Leading whitespace in original_text
    original_text: str
    ambiguous: bool = False


@dataclass
class SceneHeading:
    """Parsed parts of a scene heading line."""
    int_ext: str
    location: str
    time_of_day: str
    matched: bool = True      # False when defaults were used


@dataclass
class DialogueLine:
    """One dialogue block spoken by a character."""
    character: str
    text: str
    parentheticals: list[str] = field(default_factory=list)


@dataclass
class Scene:
    """A sealed scene."""
    scene_number: int         # 1-indexed, heading order
    page_number: int          # Page of the heading
    heading: str
    location: str
    int_ext: str
    time_of_day: str
    dialogue: list[DialogueLine] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    actors: list[str] = field(default_factory=list)
    props: list[str] = field(default_factory=list)
    text: str = ""
    summary: str = ""
    lines: list[ClassifiedLine] = field(default_factory=list)


@dataclass
class Character:
    """A speaking or appearing character across the whole script."""
    name: str
    lines: int                # Dialogue blocks, not words
    scenes: int               # Distinct scenes
    dialogue: list[str] = field(default_factory=list)
    scene_ids: list[str] = field(default_factory=list)


@dataclass
class PageAnalysis:
    """Structural counts for one page."""
    page_number: int
    scene_headings: int
    characters: int
    dialogue: int
    actions: int
    transitions: int
    total_lines: int


@dataclass
class DocumentMetadata:
    """Document-level statistics."""
    total_pages: int
    declared_pages: int
    scenes: int
    characters: int
    locations: int
    location_list: list[str]
    time_periods: int
    time_list: list[str]
    total_dialogue: int
    total_actions: int
    text_length: int
    page_strategy: PageStrategy
    needs_review: bool
    confidence: Confidence = "high"
    warnings: list[str] = field(default_factory=list)


@dataclass
class ParseResult:
    """Result of parsing one script."""
    pages: list[RawPage]
    scenes: list[Scene]
    characters: list[Character]
    metadata: DocumentMetadata
    page_analysis: list[PageAnalysis] = field(default_factory=list)
