# Tests for YAML manifest helpers
import pytest

from sitehooks.utils.manifest import ManifestError, dump_manifest, load_manifest, remove_key


def test_load_keeps_order(tmp_path):
    path = tmp_path / "x.info.yml"
    path.write_text("type: profile\nname: X\ncore: 8.x\n")

    assert list(load_manifest(path)) == ["type", "name", "core"]


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")

    assert load_manifest(path) == {}


def test_load_non_mapping(tmp_path):
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ManifestError):
        load_manifest(path)


def test_dump_block_style_unsorted(tmp_path):
    path = tmp_path / "out.yml"

    dump_manifest(path, {"name": "Varbase", "dependencies": ["node", "block"]})

    assert path.read_text() == "name: Varbase\ndependencies:\n- node\n- block\n"


def test_dump_unicode(tmp_path):
    path = tmp_path / "out.yml"

    dump_manifest(path, {"description": "Café"})

    assert "Café" in path.read_text(encoding="utf-8")


def test_remove_key():
    data = {"name": "Varbase", "distribution": {"name": "Varbase"}}

    assert remove_key(data, "distribution") is True
    assert data == {"name": "Varbase"}
    assert remove_key(data, "distribution") is False
