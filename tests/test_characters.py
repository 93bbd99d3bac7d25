from characters import aggregate_characters
from models import DialogueLine, Scene


def scene(number, actors, dialogue=()):
    return Scene(
        scene_number=number,
        page_number=1,
        heading=f"INT. ROOM {number} - DAY",
        location=f"ROOM {number}",
        int_ext="INT",
        time_of_day="DAY",
        dialogue=[DialogueLine(name, text) for name, text in dialogue],
        actors=list(actors),
    )


def test_extension_variants_merge_into_one_character():
    scenes = [
        scene(1, ["JJ' DAD"], [("JJ' DAD", "Where are you?")]),
        scene(2, ["JJ' DAD (O.S.)"], [("JJ' DAD (O.S.)", "Out here!")]),
    ]
    characters = aggregate_characters(scenes)
    assert len(characters) == 1
    dad = characters[0]
    assert dad.name == "JJ' DAD"
    assert dad.lines == 2
    assert dad.scenes == 2
    assert dad.scene_ids == ["1", "2"]
    assert dad.dialogue == ["Where are you?", "Out here!"]


def test_scene_counted_once_per_character():
    scenes = [scene(1, ["JOHN"], [("JOHN", "One."), ("JOHN", "Two.")])]
    john = aggregate_characters(scenes)[0]
    assert john.lines == 2
    assert john.scenes == 1


def test_silent_actor_has_no_lines():
    scenes = [scene(1, ["JOHN", "MARY"], [("JOHN", "Hi.")])]
    by_name = {c.name: c for c in aggregate_characters(scenes)}
    assert by_name["MARY"].lines == 0
    assert by_name["MARY"].scenes == 1
    assert by_name["MARY"].dialogue == []


def test_speaker_missing_from_actors_is_still_counted():
    scenes = [scene(1, [], [("GHOST", "Boo.")])]
    ghost = aggregate_characters(scenes)[0]
    assert ghost.name == "GHOST"
    assert ghost.lines == 1
    assert ghost.scenes == 0


def test_first_seen_order_and_conservation():
    scenes = [
        scene(1, ["MARY", "JOHN"], [("MARY", "A."), ("JOHN", "B.")]),
        scene(2, ["ALEX", "MARY"], [("ALEX", "C."), ("MARY", "D.")]),
    ]
    characters = aggregate_characters(scenes)
    assert [c.name for c in characters] == ["MARY", "JOHN", "ALEX"]
    assert sum(c.lines for c in characters) == 4


def test_no_scenes():
    assert aggregate_characters([]) == []
