import math

import pytest

from overworld.chunk import CHUNK_RESOLUTION, CHUNK_WIDTH
from overworld.chunkdata import (
    ChunkData,
    ChunkDataLoaderError,
    dump_chunk_data,
    load_chunk_data,
    parse_chunk_data,
)

FULL = CHUNK_RESOLUTION * CHUNK_RESOLUTION


def _flat(height=0.0):
    return ChunkData([height] * FULL)


def _sloped():
    return ChunkData([float(i % 5) * 0.7 - (i // 3) * 0.4 for i in range(FULL)])


def test_get_index_corners():
    data = _flat()
    assert data.get_index(0, 0) == 0
    assert data.get_index(CHUNK_RESOLUTION - 1, CHUNK_RESOLUTION - 1) == FULL - 1


def test_get_index_is_a_permutation_of_grid():
    data = _flat()
    indices = [
        data.get_index(x, y)
        for x in range(CHUNK_RESOLUTION)
        for y in range(CHUNK_RESOLUTION)
    ]
    assert sorted(indices) == list(range(FULL))


def test_vec3_heights_keeps_heights_and_spans_chunk():
    data = _sloped()
    positions = data.vec3_heights()
    assert [p[1] for p in positions] == data.heights
    assert positions[0] == (0.0, data.heights[0], 0.0)
    last = positions[-1]
    assert last[0] == pytest.approx(CHUNK_WIDTH)
    assert last[2] == pytest.approx(CHUNK_WIDTH)


def test_vec3_heights_follow_index_layout():
    data = _sloped()
    positions = data.vec3_heights()
    for x in range(CHUNK_RESOLUTION):
        for y in range(CHUNK_RESOLUTION):
            px, _, pz = positions[data.get_index(x, y)]
            assert px == pytest.approx(x * positions[1][0])
            assert pz == pytest.approx(y * positions[1][0])


def test_mesh_indices_cover_every_quad_with_two_triangles():
    mesh = _sloped().generate_mesh()
    assert len(mesh.indices) == 6 * (CHUNK_RESOLUTION - 1) ** 2
    assert set(mesh.indices) == set(range(FULL))


def test_mesh_uvs_span_unit_square():
    mesh = _sloped().generate_mesh()
    assert mesh.uvs[0] == (0.0, 0.0)
    assert mesh.uvs[-1] == pytest.approx((1.0, 1.0))
    assert all(0.0 <= u <= 1.0 and 0.0 <= v <= 1.0 for u, v in mesh.uvs)


def test_flat_mesh_normals_point_up():
    mesh = _flat(2.0).generate_mesh()
    assert len(mesh.normals) == FULL
    for normal in mesh.normals:
        assert normal == pytest.approx((0.0, 1.0, 0.0))


def test_sloped_mesh_normals_are_unit_length():
    mesh = _sloped().generate_mesh()
    for nx, ny, nz in mesh.normals:
        assert math.sqrt(nx * nx + ny * ny + nz * nz) == pytest.approx(1.0)
        assert ny > 0


def test_mesh_needs_full_grid():
    with pytest.raises(ValueError):
        ChunkData([0.0, 1.0]).generate_mesh()


def test_parse_anonymous_struct():
    data = parse_chunk_data("(heights: [1.0, 2, -3.5])")
    assert data.heights == [1.0, 2.0, -3.5]


def test_parse_named_struct_with_comments_and_trailing_commas():
    text = """
    // chunk at origin
    ChunkData(
        /* grid */ heights: [0.5, 1.5,],
    )
    """
    assert parse_chunk_data(text).heights == [0.5, 1.5]


def test_parse_accepts_bytes():
    assert parse_chunk_data(b"(heights:[4.0])").heights == [4.0]


def test_dump_is_compact():
    assert dump_chunk_data(ChunkData([1.0, 2.5])) == "(heights:[1.0,2.5])"


def test_dump_parse_round_trip():
    data = _sloped()
    assert parse_chunk_data(dump_chunk_data(data)) == data


def test_round_trip_special_floats():
    parsed = parse_chunk_data(dump_chunk_data(ChunkData([math.inf, -math.inf, math.nan])))
    assert math.isinf(parsed.heights[0]) and parsed.heights[0] > 0
    assert math.isinf(parsed.heights[1]) and parsed.heights[1] < 0
    assert math.isnan(parsed.heights[2])


@pytest.mark.parametrize(
    "text",
    [
        "()",
        "(other: [1.0])",
        "Terrain(heights: [1.0])",
        "(heights: 1.0)",
        "(heights: [true])",
        "(heights: [1.0]) extra",
        "(heights: [1.0",
        "(heights: [1.0], heights: [2.0])",
        "",
    ],
)
def test_parse_errors(text):
    with pytest.raises(ChunkDataLoaderError, match="Could not parse RON"):
        parse_chunk_data(text)


def test_load_from_file(tmp_path):
    path = tmp_path / "data.ron"
    data = _sloped()
    path.write_text(dump_chunk_data(data), encoding="utf-8")
    assert load_chunk_data(path) == data


def test_load_missing_file(tmp_path):
    with pytest.raises(ChunkDataLoaderError, match="Could not load asset"):
        load_chunk_data(tmp_path / "missing.ron")


def test_load_invalid_utf8(tmp_path):
    path = tmp_path / "data.ron"
    path.write_bytes(b"\xff\xfe")
    with pytest.raises(ChunkDataLoaderError, match="Could not parse RON"):
        load_chunk_data(path)