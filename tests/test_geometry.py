import struct

import pytest

from riotty.geometry import (
    IDENTITY_MATRIX,
    MAX_INSTANCES,
    QUAD_INDICES,
    Rect,
    Uniforms,
    batch_instances,
    create_vertices_rect,
    orthographic_projection,
    pad_rows,
    padded_width,
)


def _apply(matrix, x, y):
    # column-major 4x4 applied to (x, y, 0, 1)
    return (matrix[0] * x + matrix[4] * y + matrix[12],
            matrix[1] * x + matrix[5] * y + matrix[13])


def test_rect_to_bytes_round_trip():
    rect = Rect(position=(10.0, 10.0), color=(1.0, 1.0, 0.0, 1.0), size=(50.0, 50.0))
    values = struct.unpack("=8f", rect.to_bytes())
    assert values == rect.position + rect.color + rect.size


def test_rect_default_is_zeroed():
    assert Rect().to_bytes() == bytes(len(Rect().to_bytes()))


def test_rect_rejects_bad_lengths():
    with pytest.raises(ValueError):
        Rect(position=(1.0,), color=(1.0, 1.0, 1.0, 1.0), size=(1.0, 1.0))


def test_uniforms_default_is_identity():
    values = struct.unpack("=20f", Uniforms().to_bytes())
    assert values[:16] == IDENTITY_MATRIX
    assert values[16] == 1.0
    assert values[17:] == (0.0, 0.0, 0.0)


def test_uniforms_pack_transform_and_scale():
    transform = orthographic_projection(1200, 800)
    values = struct.unpack("=20f", Uniforms(transform, 2.0).to_bytes())
    assert values[:16] == pytest.approx(transform)
    assert values[16] == 2.0


def test_uniforms_reject_wrong_matrix_size():
    with pytest.raises(ValueError):
        Uniforms((1.0, 0.0))


@pytest.mark.parametrize("width,height", [(1200, 800), (64, 64), (1, 3)])
def test_projection_maps_corners_to_clip_space(width, height):
    matrix = orthographic_projection(width, height)
    assert _apply(matrix, 0, 0) == pytest.approx((-1.0, 1.0))
    assert _apply(matrix, width, height) == pytest.approx((1.0, -1.0))


def test_projection_rejects_zero_size():
    with pytest.raises(ValueError):
        orthographic_projection(0, 800)


def test_quad_vertices_and_indices():
    vertices = create_vertices_rect()
    assert vertices[0] == (0.0, 0.0)
    assert vertices[2] == (0.5, 1.0)
    assert max(QUAD_INDICES) == len(vertices) - 1


def test_batch_instances_preserves_order_and_limit():
    rects = [Rect(position=(float(i), 0.0)) for i in range(7)]
    batches = list(batch_instances(rects, 3))
    assert [rect for batch in batches for rect in batch] == rects
    assert all(len(batch) <= 3 for batch in batches)


def test_batch_instances_default_limit():
    rects = [Rect()] * (MAX_INSTANCES + 1)
    sizes = [len(batch) for batch in batch_instances(rects)]
    assert sizes == [MAX_INSTANCES, 1]


def test_batch_instances_empty_and_invalid():
    assert list(batch_instances([])) == []
    with pytest.raises(ValueError):
        list(batch_instances([Rect()], 0))


@pytest.mark.parametrize("width", [0, 1, 100, 255, 256, 257, 1000])
def test_padded_width_invariants(width):
    result = padded_width(width)
    assert result % 256 == 0 or result == 0
    assert width <= result < width + 256


def test_padded_width_keeps_aligned_width():
    assert padded_width(8, 4) == 8


def test_pad_rows_copies_rows_and_pads_with_zeros():
    data = bytes(range(1, 7))  # 2 rows of 3
    padded = pad_rows(data, 3, 2, 4)
    stride = padded_width(3, 4)
    assert len(padded) == stride * 2
    assert padded[0:3] == data[0:3]
    assert padded[stride:stride + 3] == data[3:6]
    assert padded[3:stride] == bytes(stride - 3)


def test_pad_rows_rejects_short_data():
    with pytest.raises(ValueError):
        pad_rows(b"abc", 2, 2)