"""Tests for the command line tool."""

import json

import pytest

from threegraph import Scene, Vector3, add_cube
from threegraph.codec import dump, load
from threegraph.main import main, parse_args


@pytest.fixture
def scene_files(tmp_path):
    target = tmp_path / "target.json"
    source = tmp_path / "source.json"
    dump(add_cube(Scene(), 1, 1, 1), target)
    dump(add_cube(add_cube(Scene(), 2, 2, 2), 3, 3, 3), source)
    return target, source


def test_compose_writes_scene(tmp_path):
    recipe = tmp_path / "recipe.yaml"
    recipe.write_text("name: demo\nplace:\n  box:\n    cube: {size: [1, 2, 3]}\n")
    output = tmp_path / "out.json"

    assert main(["compose", str(recipe), "-o", str(output)]) == 0

    scene = load(output)
    assert scene.root.name == "demo"
    assert scene.root.children[0].name == "box"


def test_compose_to_stdout(tmp_path, capsys):
    recipe = tmp_path / "recipe.yaml"
    recipe.write_text("place:\n  box:\n    cube: {}\n")

    assert main(["compose", str(recipe)]) == 0

    document = json.loads(capsys.readouterr().out)
    assert len(document["geometries"]) == 1


def test_merge_command(tmp_path, scene_files):
    target, source = scene_files
    output = tmp_path / "merged.json"

    assert main(["merge", str(target), str(source), "--position", "1,2,3", "-o", str(output)]) == 0

    merged = load(output)
    assert len(merged.root.children) == 3
    assert len(merged.geometries) == 3
    assert [n.position for n in merged.root.children[1:]] == [Vector3(1, 2, 3)] * 2
    merged.validate()


def test_info_prints_tree(scene_files, capsys):
    _, source = scene_files
    assert main(["info", str(source)]) == 0

    out = capsys.readouterr().out
    assert "Scene contains 3 nodes:" in out
    assert "[BoxGeometry]" in out
    assert "Geometries: 2" in out


def test_missing_file_reports_error(tmp_path, capsys):
    assert main(["info", str(tmp_path / "missing.json")]) == 1
    assert "error" in capsys.readouterr().err


def test_bad_position_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["merge", "a.json", "b.json", "--position", "1,2"])


@pytest.mark.parametrize("text", ["place: [unclosed\n", "place:\n  loop:\n    recipe: recipe.yaml\n"])
def test_bad_recipe_reports_error(tmp_path, capsys, text):
    recipe = tmp_path / "recipe.yaml"
    recipe.write_text(text)
    assert main(["compose", str(recipe)]) == 1
    assert "threegraph: error:" in capsys.readouterr().err
