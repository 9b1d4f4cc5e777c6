import json

import pytest

from liquidsim.config import Config


def test_defaults_match_source():
    config = Config()
    assert config.width == 120.0
    assert config.height == 80.0
    assert config.particle_count == 25000
    assert config.camera_pos == (60.0, 40.0, 100.0)
    assert config.camera_target == (60.0, 40.0, 0.0)


def test_missing_file_gives_defaults(tmp_path):
    assert Config.load(tmp_path / "absent.json") == Config()


def test_round_trip(tmp_path):
    path = tmp_path / "config.json"
    original = Config(
        width=30.0,
        height=20.0,
        particle_count=500,
        gravity=-2.0,
        damping=0.9,
        camera_pos=(1.0, 2.0, 3.0),
        camera_target=(4.0, 5.0, 6.0),
    )
    original.save(path)
    assert Config.load(path) == original


def test_saved_file_uses_camel_case_keys(tmp_path):
    path = tmp_path / "config.json"
    Config().save(path)
    data = json.loads(path.read_text())
    assert set(data) == {
        "width",
        "height",
        "particleCount",
        "gravity",
        "damping",
        "cameraPos",
        "cameraTarget",
    }
    assert data["cameraPos"] == [60.0, 40.0, 100.0]


def test_saved_file_is_indented_by_two(tmp_path):
    path = tmp_path / "config.json"
    Config().save(path)
    assert path.read_text().splitlines()[1].startswith('  "width"')


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"particleCount": 42}))
    config = Config.load(path)
    assert config.particle_count == 42
    assert config.width == Config().width
    assert config.camera_target == Config().camera_target


def test_invalid_json_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert Config.load(path) == Config()


def test_non_object_document_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    assert Config.load(path) == Config()


def test_values_before_bad_entry_are_kept(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"width": 50.0, "cameraPos": [1.0, 2.0]}))
    config = Config.load(path)
    assert config.width == 50.0
    assert config.camera_pos == Config().camera_pos


@pytest.mark.parametrize("bad", ["wide", None, True])
def test_non_numeric_value_is_rejected(tmp_path, bad):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"width": bad}))
    assert Config.load(path).width == Config().width


def test_vector_values_become_float_tuples(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cameraTarget": [1, 2, 3]}))
    assert Config.load(path).camera_target == (1.0, 2.0, 3.0)


def test_save_to_unwritable_location_does_not_create_file(tmp_path):
    target = tmp_path / "missing_dir" / "config.json"
    Config().save(target)
    assert not target.exists()