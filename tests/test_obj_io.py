import numpy as np
import pytest

from binmesh.obj_io import OBJ_HEADER, write_obj


def test_write_obj_uses_one_based_indices(tmp_path):
    out = tmp_path / "sub" / "mesh.obj"
    verts = np.array([[2, 4, 6], [8, 10, 12], [0, 0, 1]], dtype=np.float32)
    faces = np.array([[0, 1, 2]], dtype=np.uint32)
    write_obj(out, verts, faces)
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == OBJ_HEADER
    assert lines[1] == ""
    assert lines[2:] == [
        "v 2.000000 4.000000 6.000000",
        "v 8.000000 10.000000 12.000000",
        "v 0.000000 0.000000 1.000000",
        "f 1 2 3",
    ]


def test_write_obj_quads_and_source_comment(tmp_path):
    out = tmp_path / "quad.obj"
    verts = np.zeros((4, 3), dtype=np.float32)
    write_obj(out, verts, np.array([[3, 2, 1, 0]], dtype=np.uint32), source="asset.bin")
    text = out.read_text(encoding="utf-8")
    assert "# source: asset.bin\n" in text
    assert text.endswith("f 4 3 2 1\n")


def test_write_obj_rejects_bad_shapes(tmp_path):
    with pytest.raises(ValueError):
        write_obj(tmp_path / "x.obj", np.zeros((2, 2), dtype=np.float32))
    with pytest.raises(ValueError):
        write_obj(tmp_path / "x.obj", np.zeros((2, 3), dtype=np.float32), np.zeros((1, 5), dtype=np.uint32))
