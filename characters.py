"""
Builds the character roster from reconstructed scenes.
"""
from dataclasses import dataclass, field

from grammar import canonicalize_name
from models import Character, Scene


@dataclass
class _Tally:
    name: str
    lines: int = 0
    dialogue: list[str] = field(default_factory=list)
    scene_ids: list[str] = field(default_factory=list)


def aggregate_characters(scenes: list[Scene]) -> list[Character]:
    """
    Fold scenes into one Character per canonical name.

    Scene membership comes from each scene's actors and is counted once per
    scene; ``lines`` counts dialogue blocks. A speaker missing from the
    actor list still gets a record so every dialogue block is attributed.

    Args:
        scenes: Sealed scenes in order

    Returns:
        Characters in first-seen order
    """
    tallies: dict[str, _Tally] = {}

    for scene in scenes:
        scene_id = str(scene.scene_number)

        for actor in scene.actors:
            name = canonicalize_name(actor)
            tally = tallies.setdefault(name, _Tally(name))
            if scene_id not in tally.scene_ids:
                tally.scene_ids.append(scene_id)

        for line in scene.dialogue:
            name = canonicalize_name(line.character)
            tally = tallies.setdefault(name, _Tally(name))
            tally.lines += 1
            tally.dialogue.append(line.text)

    return [
        Character(
            name=tally.name,
            lines=tally.lines,
            scenes=len(tally.scene_ids),
            dialogue=tally.dialogue,
            scene_ids=tally.scene_ids,
        )
        for tally in tallies.values()
    ]
