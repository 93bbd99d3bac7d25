"""
Document and page statistics.
"""
from models import (
    Character,
    ClassifiedLine,
    Confidence,
    DocumentMetadata,
    LineType,
    PageAnalysis,
    PageSegmentation,
    Scene,
)


def _unique(values) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def _confidence(segmentation: PageSegmentation, scenes: list[Scene], warnings: list[str]) -> Confidence:
    if segmentation.strategy == "line_estimate" or len(scenes) < 2:
        return "low"
    if segmentation.strategy == "form_feed" and not warnings:
        return "high"
    return "medium"


def generate_metadata(
    segmentation: PageSegmentation,
    declared_page_count: int,
    scenes: list[Scene],
    characters: list[Character],
    warnings: list[str]
) -> DocumentMetadata:
    """
    Aggregate counts over the parse result.

    ``needs_review`` is set whenever a fallback was taken, so low
    confidence output is never reported as clean.
    """
    locations = _unique(s.location for s in scenes)
    times = _unique(s.time_of_day for s in scenes)

    return DocumentMetadata(
        total_pages=len(segmentation.pages),
        declared_pages=declared_page_count,
        scenes=len(scenes),
        characters=len(characters),
        locations=len(locations),
        location_list=locations,
        time_periods=len(times),
        time_list=times,
        total_dialogue=sum(len(s.dialogue) for s in scenes),
        total_actions=sum(len(s.actions) for s in scenes),
        text_length=sum(len(s.text) for s in scenes),
        page_strategy=segmentation.strategy,
        needs_review=segmentation.needs_review or bool(warnings) or not scenes,
        confidence=_confidence(segmentation, scenes, warnings),
        warnings=list(warnings),
    )


def analyze_pages(lines: list[ClassifiedLine], page_numbers: list[int]) -> list[PageAnalysis]:
    """Per-page counts of each structural element."""
    counts = {
        number: {line_type: 0 for line_type in LineType}
        for number in page_numbers
    }
    for line in lines:
        if line.page_number in counts:
            counts[line.page_number][line.type] += 1

    return [
        PageAnalysis(
            page_number=number,
            scene_headings=by_type[LineType.SCENE_HEADING],
            characters=by_type[LineType.CHARACTER],
            dialogue=by_type[LineType.DIALOGUE],
            actions=by_type[LineType.ACTION],
            transitions=by_type[LineType.TRANSITION],
            total_lines=sum(n for t, n in by_type.items() if t != LineType.EMPTY),
        )
        for number, by_type in counts.items()
    ]
