from line_classifier import classify_stream
from models import DialogueLine, PageSegmentation, RawPage, Scene
from stats import analyze_pages, generate_metadata


def page(number, text="x"):
    return RawPage(page_number=number, raw_text=text, line_count=1)


def scene(number, location, time_of_day, dialogue=(), actions=(), text="x"):
    return Scene(
        scene_number=number,
        page_number=1,
        heading=f"INT. {location} - {time_of_day}",
        location=location,
        int_ext="INT",
        time_of_day=time_of_day,
        dialogue=list(dialogue),
        actions=list(actions),
        text=text,
    )


SCENES = [
    scene(1, "KITCHEN", "DAY", [DialogueLine("JOHN", "Hi.")], ["He sits."], text="abc"),
    scene(2, "STREET", "NIGHT", [], ["Rain.", "Wind."], text="de"),
    scene(3, "KITCHEN", "DAY", [DialogueLine("MARY", "Bye.")], [], text="f"),
]


def test_counts_and_unique_lists():
    segmentation = PageSegmentation(pages=[page(1), page(2)], strategy="form_feed")
    meta = generate_metadata(segmentation, 2, SCENES, [], [])
    assert meta.total_pages == 2
    assert meta.declared_pages == 2
    assert meta.scenes == 3
    assert meta.location_list == ["KITCHEN", "STREET"]
    assert meta.locations == 2
    assert meta.time_list == ["DAY", "NIGHT"]
    assert meta.time_periods == 2
    assert meta.total_dialogue == 2
    assert meta.total_actions == 3
    assert meta.text_length == 6
    assert meta.page_strategy == "form_feed"
    assert not meta.needs_review
    assert meta.confidence == "high"


def test_line_estimate_needs_review():
    segmentation = PageSegmentation(pages=[page(1)], strategy="line_estimate", needs_review=True)
    meta = generate_metadata(segmentation, 1, SCENES, [], ["estimated"])
    assert meta.needs_review
    assert meta.confidence == "low"
    assert meta.warnings == ["estimated"]


def test_warnings_lower_confidence():
    segmentation = PageSegmentation(pages=[page(1)], strategy="form_feed")
    meta = generate_metadata(segmentation, 1, SCENES, [], ["1 ambiguous line"])
    assert meta.needs_review
    assert meta.confidence == "medium"


def test_page_numbers_strategy_is_medium():
    segmentation = PageSegmentation(pages=[page(1)], strategy="page_numbers")
    assert generate_metadata(segmentation, 1, SCENES, [], []).confidence == "medium"


def test_no_scenes_needs_review():
    segmentation = PageSegmentation(pages=[page(1)], strategy="form_feed")
    meta = generate_metadata(segmentation, 1, [], [], [])
    assert meta.needs_review
    assert meta.confidence == "low"
    assert meta.location_list == []


def test_analyze_pages():
    lines = classify_stream([
        (1, "INT. ROOM - DAY"),
        (1, ""),
        (1, "JOHN"),
        (1, "Hello."),
        (2, "He grabs his coat and leaves the room without a word."),
        (2, "CUT TO:"),
    ])
    analysis = analyze_pages(lines, [1, 2, 3])
    assert [p.page_number for p in analysis] == [1, 2, 3]
    first, second, third = analysis
    assert (first.scene_headings, first.characters, first.dialogue, first.total_lines) == (1, 1, 1, 3)
    assert (second.actions, second.transitions, second.total_lines) == (1, 1, 2)
    assert third.total_lines == 0
