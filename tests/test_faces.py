import io

import numpy as np

from binmesh.config import ExtractionConfig
from binmesh.cursor import ByteCursor
from binmesh.encodings import FaceEncoding
from binmesh.faces import degenerate_mask, drop_degenerate_faces, expected_face_count, extract_faces
from helpers import RelativeSeekFails, u16, u32


def _extract(data: bytes, vertex_count: int, **kw):
    cfg = ExtractionConfig(**kw)
    return extract_faces(ByteCursor(io.BytesIO(data)), cfg, vertex_count)


def test_no_face_range_skips_extraction(capsys):
    res = _extract(u32(0, 1, 2), 3, face_start_offset=8, face_end_offset=8)
    assert res.faces.shape == (0, 3)
    assert "faces" not in capsys.readouterr().out


def test_expected_count_truncates():
    cfg = ExtractionConfig(face_start_offset=4, face_end_offset=4 + 13, face_type=FaceEncoding.I16, face_quad=True)
    assert expected_face_count(cfg) == 1


def test_int32_triangles():
    data = b"\xaa" * 4 + u32(0, 1, 2, 2, 1, 3)
    res = _extract(data, 4, face_start_offset=4, face_end_offset=28)
    np.testing.assert_array_equal(res.faces, [[0, 1, 2], [2, 1, 3]])
    assert res.faces.dtype == np.uint32
    assert res.warnings == []


def test_int16_quads_big_endian():
    data = u16(0, 1, 2, 3, 3, 2, 1, 0, order=">")
    res = _extract(
        data, 4, face_start_offset=0, face_end_offset=16,
        face_type=FaceEncoding.I16, face_quad=True, byte_order="big",
    )
    np.testing.assert_array_equal(res.faces, [[0, 1, 2, 3], [3, 2, 1, 0]])


def test_out_of_range_index_is_clamped_not_dropped(capsys):
    res = _extract(u32(0, 1, 5), 2, face_start_offset=0, face_end_offset=12)
    np.testing.assert_array_equal(res.faces, [[0, 1, 0]])
    assert "Z (5)" in res.warnings[0]
    assert "[WARN]" in capsys.readouterr().out


def test_quad_w_component_is_bounds_checked():
    res = _extract(u32(0, 1, 2, 9), 3, face_start_offset=0, face_end_offset=16, face_quad=True)
    np.testing.assert_array_equal(res.faces, [[0, 1, 2, 0]])
    assert "W (9)" in res.warnings[0]


def test_short_read_keeps_partial_face():
    data = u16(0, 1, 2, 1)
    res = _extract(data, 3, face_start_offset=0, face_end_offset=12, face_type=FaceEncoding.I16)
    np.testing.assert_array_equal(res.faces, [[0, 1, 2], [1, 0, 0]])
    assert any("element y (1)" in w for w in res.warnings)


def test_face_stride():
    pad = b"\x00" * 4
    data = u32(0, 1, 2) + pad + u32(2, 1, 0) + pad
    res = _extract(data, 3, face_start_offset=0, face_end_offset=32, face_stride=4)
    np.testing.assert_array_equal(res.faces, [[0, 1, 2], [2, 1, 0]])


def test_stride_overshoot_stops_early():
    data = u32(0, 1, 2) + b"\x00" * 16 + u32(2, 1, 0)
    res = _extract(data, 3, face_start_offset=0, face_end_offset=24, face_stride=16)
    assert res.expected == 2
    np.testing.assert_array_equal(res.faces, [[0, 1, 2]])


def test_degenerate_faces_are_dropped():
    faces = np.array([[0, 1, 2], [0, 1, 0], [3, 3, 1], [1, 2, 0]], dtype=np.uint32)
    kept, dropped = drop_degenerate_faces(faces)
    np.testing.assert_array_equal(kept, [[0, 1, 2], [1, 2, 0]])
    assert dropped == 2


def test_degenerate_quads_compare_all_pairs(capsys):
    faces = np.array([[0, 1, 2, 3], [0, 1, 2, 0], [4, 1, 2, 2]], dtype=np.uint32)
    assert degenerate_mask(faces).tolist() == [False, True, True]
    drop_degenerate_faces(faces, verbose=True)
    assert "Invalid face indices found (0 1 2 0)!" in capsys.readouterr().out


def test_failed_face_stride_skip_ends_extraction():
    data = u32(0, 1, 2) + b"\x00" * 4 + u32(2, 1, 0) + b"\x00" * 4
    cfg = ExtractionConfig(face_start_offset=0, face_end_offset=32, face_stride=4)
    res = extract_faces(ByteCursor(RelativeSeekFails(data)), cfg, 3)
    np.testing.assert_array_equal(res.faces, [[0, 1, 2]])


def test_zero_face_stride_keeps_reading_when_skips_fail():
    cfg = ExtractionConfig(face_start_offset=0, face_end_offset=24)
    res = extract_faces(ByteCursor(RelativeSeekFails(u32(0, 1, 2, 2, 1, 0))), cfg, 3)
    np.testing.assert_array_equal(res.faces, [[0, 1, 2], [2, 1, 0]])
