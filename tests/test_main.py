import json

from main import main

SCRIPT = "INT. KITCHEN - DAY\n\nJOHN\nHello there.\n\nEXT. STREET - NIGHT\n\nMARY\nGoodbye.\n"


def write_script(tmp_path, text=SCRIPT, name="script.fountain"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_writes_result_and_summary(tmp_path, capsys):
    path = write_script(tmp_path)
    out = tmp_path / "out"
    assert main([str(path), "-o", str(out)]) == 0

    data = json.loads((out / "parse_result.json").read_text(encoding="utf-8"))
    assert data["metadata"]["scenes"] == 2
    assert [c["name"] for c in data["characters"]] == ["JOHN", "MARY"]
    assert "formattedText" not in data["scenes"][0]
    assert (out / "parse_summary.txt").exists()
    assert "Scenes detected: 2" in capsys.readouterr().out


def test_default_output_dir(tmp_path):
    path = write_script(tmp_path)
    assert main([str(path)]) == 0
    assert (tmp_path / "script_parsed" / "parse_result.json").exists()


def test_preview_writes_nothing(tmp_path, capsys):
    path = write_script(tmp_path)
    assert main([str(path), "--preview"]) == 0
    assert not (tmp_path / "script_parsed").exists()
    assert "INT. KITCHEN - DAY" in capsys.readouterr().out


def test_options(tmp_path):
    path = write_script(tmp_path, "INT. PARK - DAY\n\nShe opens an umbrella.\n")
    props = tmp_path / "props.txt"
    props.write_text("# weather\numbrella\n\n", encoding="utf-8")
    out = tmp_path / "out"
    assert main([str(path), "-o", str(out), "--props", str(props), "--include-lines"]) == 0

    scene = json.loads((out / "parse_result.json").read_text(encoding="utf-8"))["scenes"][0]
    assert scene["props"] == ["Umbrella"]
    assert scene["formattedText"][0]["type"] == "scene_heading"


def test_no_scenes_exit_code(tmp_path):
    path = write_script(tmp_path, "Just some notes.\n", name="notes.txt")
    out = tmp_path / "out"
    assert main([str(path), "-o", str(out)]) == 2
    data = json.loads((out / "parse_result.json").read_text(encoding="utf-8"))
    assert data["scenes"] == []
    assert data["metadata"]["needsReview"]


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.pdf")]) == 1


def test_unsupported_file(tmp_path):
    path = write_script(tmp_path, "text", name="script.docx")
    assert main([str(path)]) == 1


def test_invalid_page_count(tmp_path):
    path = write_script(tmp_path)
    assert main([str(path), "--pages", "0"]) == 1


def test_malformed_file(tmp_path, capsys):
    path = write_script(tmp_path, "<FinalDraft><Content>", name="script.fdx")
    assert main([str(path)]) == 1
    assert "Error:" in capsys.readouterr().out
