import numpy as np
import pyarrow as pa
import pytest

from pqcorpus.errors import ConfigurationError, RangeError
from pqcorpus.generators.random_columns import (
    RandomColumnGenerator,
    generate_column,
    generate_offsets,
)
from pqcorpus.types import ColumnSpec, Strategy


def _range(t="int16", n=1000, p=0.2, lo=-10000, hi=10000):
    return ColumnSpec(t, n, Strategy.SCALAR_RANGE, p, min_value=lo, max_value=hi)


def test_scalar_range_values_within_bounds(rng):
    col = generate_column(_range(), rng)
    assert col.arrow_type == pa.int16()
    assert col.values.dtype == np.int16
    assert col.values.min() >= -10000 and col.values.max() <= 10000
    assert len(col.null_bitmap) == col.length == 1000


def test_null_and_non_null_counts_add_up(rng):
    col = generate_column(_range(p=0.3), rng)
    arr = col.to_arrow()
    assert arr.null_count == col.null_count
    assert (len(arr) - arr.null_count) + arr.null_count == 1000


@pytest.mark.parametrize("p", [0.0, 0.2, 0.5, 1.0])
def test_null_fraction_converges(p):
    col = generate_column(_range("int64", n=100_000, p=p), np.random.default_rng(99))
    assert abs(col.null_count / col.length - p) < 0.01


def test_float_range(rng):
    col = generate_column(_range("float64", p=0.0, lo=-1e10, hi=1e10), rng)
    assert col.arrow_type == pa.float64()
    assert col.null_count == 0
    assert np.all((col.values >= -1e10) & (col.values <= 1e10))


def test_constant_column_is_single_run(rng):
    col = generate_column(ColumnSpec("int16", 500, Strategy.CONSTANT, value=42), rng)
    assert col.null_count == 0
    assert set(col.values.tolist()) == {42}
    assert col.to_arrow().to_pylist() == [42] * 500


def test_bounded_strings(rng):
    spec = ColumnSpec("string", 2000, Strategy.BOUNDED_STRING, 0.2, min_length=0, max_length=3)
    col = generate_column(spec, rng)
    lengths = {len(s) for s in col.values}
    assert lengths <= {0, 1, 2, 3}
    assert all("A" <= ch <= "z" for s in col.values for ch in s)
    assert col.to_arrow().type == pa.string()


def test_short_strings_have_lower_cardinality_than_long(rng):
    short = generate_column(ColumnSpec("string", 1000, Strategy.BOUNDED_STRING, min_length=0, max_length=3), rng)
    long = generate_column(ColumnSpec("string", 1000, Strategy.BOUNDED_STRING, min_length=0, max_length=30), rng)
    assert len(set(short.values)) < len(set(long.values))


def test_list_column_offsets(rng):
    spec = ColumnSpec("int64", 100, Strategy.LIST_OF_SCALAR, 0.2, min_value=-10000, max_value=10000)
    col = generate_column(spec, rng)
    assert col.is_list
    assert col.child.length == 1000
    assert len(col.offsets) == 101
    assert col.offsets[0] == 0
    assert col.offsets[-1] <= col.child.length
    assert np.all(np.diff(col.offsets) >= 0)
    arr = col.to_arrow()
    assert arr.type == pa.list_(pa.int64())
    assert len(arr) == 100
    assert arr.null_count == 0
    assert arr.values.null_count == col.child.null_count


def test_empty_list_column(rng):
    col = generate_column(ColumnSpec("int64", 0, Strategy.LIST_OF_SCALAR, min_value=0, max_value=1), rng)
    assert col.offsets.tolist() == [0]
    assert len(col.to_arrow()) == 0


def test_generate_offsets_pins_bounds(rng):
    offsets = generate_offsets(rng, 11, 0, 50)
    assert offsets[0] == 0 and offsets[-1] == 50
    assert np.all(np.diff(offsets) >= 0)


@pytest.mark.parametrize("size,first,last", [(0, 0, 10), (5, 10, 3), (5, -1, 3), (1, 0, 4)])
def test_generate_offsets_degenerate(rng, size, first, last):
    with pytest.raises(RangeError):
        generate_offsets(rng, size, first, last)


@pytest.mark.parametrize("spec", [
    ColumnSpec("int16", 10, Strategy.SCALAR_RANGE, 1.5, min_value=0, max_value=1),
    ColumnSpec("int16", 10, Strategy.SCALAR_RANGE, -0.1, min_value=0, max_value=1),
    ColumnSpec("int16", 10, Strategy.SCALAR_RANGE, 0.0, min_value=5, max_value=1),
    ColumnSpec("int16", 10, Strategy.SCALAR_RANGE, 0.0, min_value=0, max_value=40000),
    ColumnSpec("int16", 10, Strategy.CONSTANT, value=70000),
    ColumnSpec("string", 10, Strategy.SCALAR_RANGE, 0.0, min_value=0, max_value=1),
    ColumnSpec("int32", 10, Strategy.BOUNDED_STRING, min_length=0, max_length=3),
    ColumnSpec("string", 10, Strategy.BOUNDED_STRING, min_length=4, max_length=3),
    ColumnSpec("int64", 10, Strategy.LIST_OF_SCALAR, min_value=0, max_value=1, child_factor=-1),
    ColumnSpec("decimal", 10, Strategy.CONSTANT, value=1),
])
def test_invalid_specs_rejected_before_drawing(spec):
    rng = np.random.default_rng(0)
    before = rng.bit_generator.state
    with pytest.raises(ConfigurationError):
        generate_column(spec, rng)
    assert rng.bit_generator.state == before


def test_same_seed_same_columns():
    specs = [
        _range(),
        ColumnSpec("string", 300, Strategy.BOUNDED_STRING, 0.2, min_length=0, max_length=30),
        ColumnSpec("int64", 300, Strategy.LIST_OF_SCALAR, 0.2, min_value=-5, max_value=5),
    ]
    first = [RandomColumnGenerator(42).generate(s) for s in specs]
    g1, g2 = RandomColumnGenerator(42), RandomColumnGenerator(42)
    a = [g1.generate(s) for s in specs]
    b = [g2.generate(s) for s in specs]
    for x, y in zip(a, b):
        assert x.to_arrow().equals(y.to_arrow())
        assert np.array_equal(x.null_bitmap, y.null_bitmap)
    assert np.array_equal(a[2].offsets, b[2].offsets)
    assert first[0].to_arrow().equals(a[0].to_arrow())


def test_different_seeds_differ():
    a = RandomColumnGenerator(1).generate(_range())
    b = RandomColumnGenerator(2).generate(_range())
    assert not a.to_arrow().equals(b.to_arrow())


def test_float_range_wider_than_float64_rejected():
    fmax = float(np.finfo(np.float64).max)
    spec = ColumnSpec("float64", 10, Strategy.SCALAR_RANGE, min_value=-fmax, max_value=fmax)
    with pytest.raises(ConfigurationError):
        generate_column(spec, np.random.default_rng(0))


def test_float_half_range_still_generates(rng):
    half = float(np.finfo(np.float64).max) / 2
    col = generate_column(ColumnSpec("float64", 50, Strategy.SCALAR_RANGE, min_value=-half, max_value=half), rng)
    assert np.all(np.isfinite(col.values))


def test_list_child_overflowing_int32_offsets_rejected_before_drawing():
    spec = ColumnSpec("int8", 2**28, Strategy.LIST_OF_SCALAR, min_value=0, max_value=1, child_factor=10)
    rng = np.random.default_rng(0)
    before = rng.bit_generator.state
    with pytest.raises(ConfigurationError):
        generate_column(spec, rng)
    assert rng.bit_generator.state == before


def test_list_null_bitmap_reaches_arrow(rng):
    spec = ColumnSpec("int64", 6, Strategy.LIST_OF_SCALAR, min_value=0, max_value=9)
    col = generate_column(spec, rng)
    col.null_bitmap = np.array([True, False, False, True, False, False])
    arr = col.to_arrow()
    assert arr.null_count == 2
    assert arr.is_null().to_pylist() == col.null_bitmap.tolist()
