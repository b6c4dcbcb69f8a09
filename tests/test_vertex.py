import struct

import pytest

from voxelcraft.vertex import StepMode, Vertex, VertexFormat


def _vertex():
    return Vertex(
        position=(1.0, 2.0, 3.0),
        tex_coords=(0.5, 0.25),
        normal=(0.0, 1.0, 0.0),
        ao=0.75,
    )


def test_to_bytes_round_trip():
    data = _vertex().to_bytes()
    assert struct.unpack("<9f", data) == pytest.approx(
        (1.0, 2.0, 3.0, 0.5, 0.25, 0.0, 1.0, 0.0, 0.75)
    )


def test_stride_matches_packed_size():
    assert Vertex.layout().array_stride == len(_vertex().to_bytes())


def test_layout_is_per_vertex():
    assert Vertex.layout().step_mode is StepMode.VERTEX


def test_attributes_are_contiguous():
    layout = Vertex.layout()
    position = 0
    for attribute in layout.attributes:
        assert attribute.offset == position
        position += attribute.format.size
    assert position == layout.array_stride


def test_shader_locations_and_formats():
    layout = Vertex.layout()
    assert [a.shader_location for a in layout.attributes] == [0, 1, 2, 3]
    assert [a.format for a in layout.attributes] == [
        VertexFormat.FLOAT32X3,
        VertexFormat.FLOAT32X2,
        VertexFormat.FLOAT32X3,
        VertexFormat.FLOAT32,
    ]


def test_packed_fields_follow_layout_offsets():
    data = _vertex().to_bytes()
    ao_attribute = Vertex.layout().attributes[3]
    (ao,) = struct.unpack_from("<f", data, ao_attribute.offset)
    assert ao == pytest.approx(0.75)