import pytest

from grammar import (
    canonicalize_name,
    is_likely_action,
    is_name_shaped,
    is_page_footer,
    is_page_number,
    is_parenthetical,
    is_scene_heading,
    is_transition,
    looks_like_dialogue,
    parse_scene_heading,
    strip_extensions,
)


@pytest.mark.parametrize("line", [
    "INT. KITCHEN - DAY",
    "EXT. STREET - NIGHT",
    "int. kitchen - day",
    "INT/EXT. CAR - MOVING",
    "INT./EXT. CAR - NIGHT",
    "I/E. HALLWAY. NIGHT",
    "EXT. BEACH — SUNSET",
    "INT. CAR",
])
def test_scene_headings(line):
    assert is_scene_heading(line)


@pytest.mark.parametrize("line", [
    "INTERIOR DESIGN IS HARD",
    "EXTRA",
    "John enters the kitchen.",
    "INT. ab",
])
def test_not_scene_headings(line):
    assert not is_scene_heading(line)


def test_parse_heading_with_dash():
    heading = parse_scene_heading("INT. KITCHEN - DAY")
    assert (heading.int_ext, heading.location, heading.time_of_day) == ("INT", "KITCHEN", "DAY")
    assert heading.matched


def test_parse_heading_keeps_dashes_inside_location():
    heading = parse_scene_heading("EXT. JOHN'S HOUSE - BACKYARD - MOMENTS LATER")
    assert heading.int_ext == "EXT"
    assert heading.location == "JOHN'S HOUSE - BACKYARD"
    assert heading.time_of_day == "MOMENTS LATER"


def test_parse_heading_with_period_separator():
    heading = parse_scene_heading("I/E. HALLWAY. NIGHT")
    assert (heading.int_ext, heading.location, heading.time_of_day) == ("I/E", "HALLWAY", "NIGHT")


def test_parse_heading_without_time_defaults_to_day():
    heading = parse_scene_heading("INT. CAR")
    assert (heading.int_ext, heading.location, heading.time_of_day) == ("INT", "CAR", "DAY")


def test_parse_heading_combined_prefix():
    assert parse_scene_heading("INT./EXT. CAR - NIGHT").int_ext == "INT/EXT"
    assert parse_scene_heading("INT/EXT. CAR - NIGHT").int_ext == "INT/EXT"


def test_parse_heading_falls_back_to_defaults():
    heading = parse_scene_heading("JOHN")
    assert (heading.int_ext, heading.location, heading.time_of_day) == ("INT", "Unknown", "DAY")
    assert not heading.matched


def test_transitions():
    assert is_transition("CUT TO:")
    assert is_transition("FADE OUT.")
    assert is_transition("Fade in:")
    assert is_transition("THE END")
    assert not is_transition("JOHN")
    assert not is_transition("CUTTER")


def test_page_markers():
    assert is_page_number("4")
    assert is_page_number("12.")
    assert not is_page_number("1234")
    assert not is_page_number("4a")
    assert is_page_footer("- 3 of 10 -")
    assert is_page_footer("3 of 10")
    assert is_page_footer("Page 7")
    assert not is_page_footer("Three of us")


def test_parentheticals():
    assert is_parenthetical("(beat)")
    assert is_parenthetical("  (quietly)  ")
    assert not is_parenthetical("(beat) then (smiles)")
    assert not is_parenthetical("(unclosed")


def test_strip_extensions():
    assert strip_extensions("JOHN (O.S.) (CONT'D)") == "JOHN"
    assert strip_extensions("MARY") == "MARY"


@pytest.mark.parametrize("line", [
    "JOHN",
    "JOHN (O.S.)",
    "J.J.",
    "J.J. ABRAMS",
    "JJ' DAD",
    "MARY-KATE",
    "DR SMITH",
])
def test_name_shaped(line):
    assert is_name_shaped(line)


@pytest.mark.parametrize("line", [
    "John",
    "MR. SMITH",
    "THE",
    "MORE",
    "INT. CAR",
    "CUT TO:",
    "A",
    "HELLO!",
    "THE OLD MAN WALKS AWAY",
    "(O.S.)",
])
def test_not_name_shaped(line):
    assert not is_name_shaped(line)


def test_likely_action():
    assert is_likely_action("She walks slowly across the crowded room toward him.")
    assert is_likely_action("THE BUILDING EXPLODES IN A MASSIVE FIREBALL AND DEBRIS RAINS DOWN")
    assert not is_likely_action("Hello there.")
    assert not is_likely_action("JOHN")


def test_looks_like_dialogue():
    assert looks_like_dialogue("Hello there.")
    assert looks_like_dialogue("NO")
    assert looks_like_dialogue("I know")
    assert looks_like_dialogue('"Run"')
    assert not looks_like_dialogue("MARY")
    assert not looks_like_dialogue("")


def test_canonicalize_name():
    assert canonicalize_name("JJ' DAD (O.S.)") == "JJ' DAD"
    assert canonicalize_name("JJ’ DAD") == "JJ' DAD"
    assert canonicalize_name("  john   smith ") == "JOHN SMITH"
    assert canonicalize_name("MARY (V.O.) (CONT'D)") == "MARY"


def test_accented_names():
    assert is_name_shaped("JOSÉ")
    assert is_name_shaped("ÉLODIE (V.O.)")
    assert not is_name_shaped("José")
    assert canonicalize_name("josé (O.S.)") == "JOSÉ"


def test_bare_heading_is_case_insensitive():
    heading = parse_scene_heading("INT. McDONALD'S")
    assert is_scene_heading("INT. McDONALD'S")
    assert (heading.int_ext, heading.location, heading.time_of_day) == ("INT", "McDONALD'S", "DAY")
    assert is_scene_heading("ext. the garden")
