from __future__ import annotations

"""Deterministic random column generation.

Columns are drawn from a ``numpy.random.Generator``. Parameters are chosen
by the caller to provoke particular Parquet encodings:

* ``constant`` columns collapse to a single RLE run;
* short ``bounded-string`` columns (length 0-3) have few distinct values and
  end up dictionary encoded, long ones (0-30) are nearly unique;
* ``list-of-scalar`` columns exercise repetition levels and nested nulls.
"""

import logging

import numpy as np
import pyarrow as pa

from ..errors import RangeError
from ..types import (
    ColumnSpec,
    FLOAT_TYPES,
    GeneratedColumn,
    INTEGER_TYPES,
    LOGICAL_TYPES,
    Strategy,
)
from ..utils.offsets import INT32_MAX, find_offsets_violation
from .base import ColumnGenerator

logger = logging.getLogger(__name__)

# printable ASCII span used for generated strings
_CHAR_MIN = ord("A")
_CHAR_MAX = ord("z")


def _draw_nulls(rng: np.random.Generator, length: int, null_probability: float) -> np.ndarray:
    if null_probability <= 0.0 or length == 0:
        return np.zeros(length, dtype=bool)
    return rng.random(length) < null_probability


def _draw_numbers(rng: np.random.Generator, logical_type: str, length: int, low, high) -> np.ndarray:
    if logical_type in INTEGER_TYPES:
        dtype = INTEGER_TYPES[logical_type][1]
        return rng.integers(low, high, size=length, dtype=dtype, endpoint=True)
    dtype = FLOAT_TYPES[logical_type][1]
    return rng.uniform(float(low), float(high), size=length).astype(dtype)


def _draw_strings(rng: np.random.Generator, length: int, min_length: int, max_length: int) -> np.ndarray:
    lengths = rng.integers(min_length, max_length, size=length, endpoint=True)
    ends = np.cumsum(lengths)
    total = int(ends[-1]) if length else 0
    raw = rng.integers(_CHAR_MIN, _CHAR_MAX, size=total, dtype=np.uint8, endpoint=True).tobytes()
    starts = ends - lengths
    out = np.empty(length, dtype=object)
    for i, (start, end) in enumerate(zip(starts, ends)):
        out[i] = raw[start:end].decode("ascii")
    return out


def generate_offsets(rng: np.random.Generator, size: int, first_offset: int, last_offset: int) -> np.ndarray:
    """Draw ``size`` sorted int32 offsets spanning ``[first_offset, last_offset]``.

    Values are uniform within the bounds, sorted, then the first and last
    entries are pinned to the bounds.

    :raises RangeError: If no non-decreasing sequence can satisfy the bounds.
    """
    if size < 1:
        raise RangeError(f"offsets need at least one entry, got size {size}")
    if first_offset < 0 or first_offset > last_offset:
        raise RangeError(f"invalid offset bounds [{first_offset}, {last_offset}]")
    if last_offset > INT32_MAX:
        raise RangeError(f"last offset {last_offset} does not fit int32 offsets")
    if size == 1 and first_offset != last_offset:
        raise RangeError("a single offset cannot span a non-empty range")
    offsets = np.sort(rng.integers(first_offset, last_offset, size=size, dtype=np.int32, endpoint=True))
    offsets[0] = first_offset
    offsets[-1] = last_offset
    return offsets


def generate_column(spec: ColumnSpec, rng: np.random.Generator) -> GeneratedColumn:
    """Generate one column. Pure function of ``spec`` and the state of ``rng``.

    :raises ConfigurationError: If ``spec`` fails validation.
    :raises RangeError: If list offsets cannot be built.
    """
    spec.validate()
    strategy = Strategy(spec.strategy)
    arrow_type = LOGICAL_TYPES[spec.logical_type][0]
    length = spec.length

    if strategy is Strategy.CONSTANT:
        dtype = LOGICAL_TYPES[spec.logical_type][1]
        values = np.full(length, spec.value, dtype=dtype)
        return GeneratedColumn(arrow_type, length, np.zeros(length, dtype=bool), values)

    if strategy is Strategy.BOUNDED_STRING:
        values = _draw_strings(rng, length, spec.min_length, spec.max_length)
        nulls = _draw_nulls(rng, length, spec.null_probability)
        return GeneratedColumn(arrow_type, length, nulls, values)

    if strategy is Strategy.SCALAR_RANGE:
        values = _draw_numbers(rng, spec.logical_type, length, spec.min_value, spec.max_value)
        nulls = _draw_nulls(rng, length, spec.null_probability)
        return GeneratedColumn(arrow_type, length, nulls, values)

    # list-of-scalar: child material first, then offsets into it
    child_length = length * spec.child_factor
    child_values = _draw_numbers(rng, spec.logical_type, child_length, spec.min_value, spec.max_value)
    child_nulls = _draw_nulls(rng, child_length, spec.null_probability)
    child = GeneratedColumn(arrow_type, child_length, child_nulls, child_values)
    offsets = generate_offsets(rng, length + 1, 0, child_length)
    violation = find_offsets_violation(offsets, length, child_length)
    if violation is not None:
        raise RangeError(violation[1])
    return GeneratedColumn(
        pa.list_(arrow_type),
        length,
        np.zeros(length, dtype=bool),
        None,
        offsets=offsets,
        child=child,
    )


class RandomColumnGenerator(ColumnGenerator):
    """Seeded generator front end.

    Each ``generate`` call draws a fresh child seed from the master stream, so
    the n-th column of a scenario is reproducible regardless of what earlier
    columns looked like.

    :param seed: Master seed.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._seeds = np.random.default_rng(seed)

    def generate(self, spec: ColumnSpec) -> GeneratedColumn:  # type: ignore[override]
        spec.validate()
        column_seed = int(self._seeds.integers(0, 2**63 - 1))
        logger.debug(
            "generating %s column of %d rows (%s, seed=%d)",
            spec.logical_type, spec.length, Strategy(spec.strategy).value, column_seed,
        )
        return generate_column(spec, np.random.default_rng(column_seed))
