"""
Screenplay parser - rebuilds scenes, characters and statistics from text.

Heuristics only: every ambiguity resolves to a documented fallback that is
reported in the metadata warnings instead of raising.
"""
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from characters import aggregate_characters
from config import ParserConfig
from errors import EmptyScriptError, InvalidPageCountError, NoScenesFoundError
from line_classifier import classify_stream, page_lines
from models import ParseResult, Scene
from normalizer import normalize
from page_segmenter import segment_pages
from scene_builder import build_scenes, count_discarded_lines
from stats import analyze_pages, generate_metadata

logger = logging.getLogger(__name__)


def parse_script(
    full_text: str,
    declared_page_count: int,
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """
    Parse extracted screenplay text.

    Args:
        full_text: Complete extracted text of the document
        declared_page_count: Page count reported by the extractor
        config: Parser options (defaults when omitted)

    Returns:
        ParseResult with pages, scenes, characters and metadata

    Raises:
        EmptyScriptError: The text is empty or whitespace only
        InvalidPageCountError: The page count is not a positive integer
        NoScenesFoundError: No scene heading was found; the degraded
            result is attached as ``error.result``
    """
    config = config or ParserConfig()

    if not full_text or not full_text.strip():
        raise EmptyScriptError("Script text is empty")
    if isinstance(declared_page_count, bool) or not isinstance(declared_page_count, int) \
            or declared_page_count < 1:
        raise InvalidPageCountError(
            f"Declared page count must be a positive integer, got {declared_page_count!r}"
        )

    warnings: list[str] = []

    # Step 1: Normalize
    text = normalize(full_text, config.preserve_whitespace, config.tab_width)

    # Step 2: Pages
    segmentation = segment_pages(text, declared_page_count, config)
    if segmentation.needs_review:
        warnings.append(
            f"Page breaks estimated by line count over {declared_page_count} pages; "
            "page attribution is approximate"
        )
    elif len(segmentation.pages) != declared_page_count:
        warnings.append(
            f"Found {len(segmentation.pages)} pages for {declared_page_count} declared "
            f"({segmentation.strategy}); some pages were merged or split"
        )

    # Step 3: Classify across page boundaries
    lines = classify_stream(page_lines(segmentation.pages), config)
    ambiguous = sum(1 for line in lines if line.ambiguous)
    if ambiguous:
        warnings.append(f"{ambiguous} consecutive character-like line(s) treated as action")

    # Step 4: Scenes and characters
    scenes = build_scenes(lines, config)
    characters = aggregate_characters(scenes)

    discarded = count_discarded_lines(lines)
    if discarded:
        logger.debug("%d lines of front matter before the first scene", discarded)

    if not scenes:
        warnings.append("No scene headings detected; manual review required")

    # Step 5: Metadata
    metadata = generate_metadata(segmentation, declared_page_count, scenes, characters, warnings)
    result = ParseResult(
        pages=segmentation.pages,
        scenes=scenes,
        characters=characters,
        metadata=metadata,
        page_analysis=analyze_pages(lines, [p.page_number for p in segmentation.pages]),
    )

    logger.info(
        "Parsed %d scenes, %d characters from %d pages (%s)",
        len(scenes), len(characters), len(segmentation.pages), segmentation.strategy
    )

    if not scenes:
        raise NoScenesFoundError("No scene headings detected", result=result)

    return result


def _scene_to_dict(scene: Scene, include_lines: bool) -> dict:
    data = {
        "sceneNumber": scene.scene_number,
        "pageNumber": scene.page_number,
        "heading": scene.heading,
        "location": scene.location,
        "intExt": scene.int_ext,
        "timeOfDay": scene.time_of_day,
        "dialogue": [
            {"character": d.character, "text": d.text, "parentheticals": d.parentheticals}
            for d in scene.dialogue
        ],
        "actions": scene.actions,
        "actors": scene.actors,
        "props": scene.props,
        "text": scene.text,
        "summary": scene.summary,
    }
    if include_lines:
        data["formattedText"] = [
            {
                "type": line.type.value,
                "text": line.text,
                "pageNumber": line.page_number,
                "indentation": line.indentation,
                "original": line.original_text,
            }
            for line in scene.lines
        ]
    return data


def result_to_dict(
    result: ParseResult,
    include_pages: bool = True,
    include_lines: bool = False
) -> dict:
    """
    Map a ParseResult onto the field names used by the persistence layer.

    Args:
        result: Result of parse_script()
        include_pages: Include raw page text
        include_lines: Include each scene's classified lines

    Returns:
        JSON-serialisable dict
    """
    meta = result.metadata
    data = {
        "scenes": [_scene_to_dict(s, include_lines) for s in result.scenes],
        "characters": [
            {
                "name": c.name,
                "lines": c.lines,
                "scenes": c.scenes,
                "dialogue": c.dialogue,
                "sceneIds": c.scene_ids,
            }
            for c in result.characters
        ],
        "metadata": {
            "totalPages": meta.total_pages,
            "declaredPages": meta.declared_pages,
            "scenes": meta.scenes,
            "characters": meta.characters,
            "locations": meta.locations,
            "locationList": meta.location_list,
            "timePeriods": meta.time_periods,
            "timeList": meta.time_list,
            "totalDialogue": meta.total_dialogue,
            "totalActions": meta.total_actions,
            "textLength": meta.text_length,
            "pageStrategy": meta.page_strategy,
            "needsReview": meta.needs_review,
            "confidence": meta.confidence,
            "warnings": meta.warnings,
        },
        "pageAnalysis": [asdict(p) for p in result.page_analysis],
    }
    if include_pages:
        data["pages"] = [
            {"pageNumber": p.page_number, "rawText": p.raw_text, "lineCount": p.line_count}
            for p in result.pages
        ]
    return data


def write_summary(
    result: ParseResult,
    output_dir: str,
    source: str
) -> str:
    """
    Write a human-readable summary file.

    Args:
        result: ParseResult from parse_script()
        output_dir: Directory for output
        source: Original script path

    Returns:
        Path to summary file
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    summary_path = Path(output_dir) / "parse_summary.txt"
    meta = result.metadata

    lines = [
        "Script Parse Summary",
        "=" * 50,
        f"Source: {source}",
        f"Pages: {meta.total_pages} (declared {meta.declared_pages}, {meta.page_strategy})",
        f"Scenes: {meta.scenes}",
        f"Characters: {meta.characters}",
        f"Locations: {meta.locations}",
        f"Dialogue blocks: {meta.total_dialogue}",
        f"Action lines: {meta.total_actions}",
        f"Confidence: {meta.confidence}",
        f"Needs review: {meta.needs_review}",
        "",
    ]

    if meta.warnings:
        lines.append("Warnings:")
        for w in meta.warnings:
            lines.append(f"  - {w}")
        lines.append("")

    lines.append("Scenes:")
    lines.append("-" * 50)
    for scene in result.scenes:
        heading_preview = scene.heading[:60] + "..." if len(scene.heading) > 60 else scene.heading
        lines.append(f"\n{scene.scene_number}. {heading_preview} (page {scene.page_number})")
        if scene.actors:
            lines.append(f"  Cast: {', '.join(scene.actors)}")
        if scene.props:
            lines.append(f"  Props: {', '.join(scene.props)}")

    lines.append("")
    lines.append("Characters:")
    lines.append("-" * 50)
    for character in result.characters[:20]:
        lines.append(f"  {character.name}: {character.lines} lines in {character.scenes} scene(s)")
    if len(result.characters) > 20:
        lines.append(f"  ... and {len(result.characters) - 20} more")

    with open(summary_path, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines))

    return str(summary_path)
