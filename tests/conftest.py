from __future__ import annotations
from pathlib import Path

import numpy as np
import pyarrow.parquet as pq
import pytest

from pqcorpus.engine.batch import BatchAssembler
from pqcorpus.generators.random_columns import RandomColumnGenerator
from pqcorpus.scenarios import example_scenario_1
from pqcorpus.schema.assembler import SchemaAssembler
from pqcorpus.types import ColumnSpec, LogicalBatch, Strategy


@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def example_batch() -> LogicalBatch:
    return example_scenario_1().build()


@pytest.fixture
def make_small_batch():
    def _make(rows: int = 10, seed: int = 7) -> LogicalBatch:
        gen = RandomColumnGenerator(seed)
        cols = [
            gen.generate(ColumnSpec("int32", rows, Strategy.SCALAR_RANGE, 0.0, min_value=-100, max_value=100)),
            gen.generate(ColumnSpec("string", rows, Strategy.BOUNDED_STRING, 0.1, min_length=0, max_length=4)),
        ]
        schema = SchemaAssembler().assemble(cols, ["x", "s"], [("k", "v")])
        return BatchAssembler().assemble(schema, cols)
    return _make


def row_group_sizes(path: Path) -> list[int]:
    md = pq.ParquetFile(path).metadata
    return [md.row_group(i).num_rows for i in range(md.num_row_groups)]


def column_encodings(path: Path, column_index: int, row_group: int = 0) -> tuple[str, ...]:
    md = pq.ParquetFile(path).metadata
    return tuple(md.row_group(row_group).column(column_index).encodings)


@pytest.fixture
def parquet_meta():
    """Helpers reading row group sizes and column encodings back from a file."""
    class _Meta:
        sizes = staticmethod(row_group_sizes)
        encodings = staticmethod(column_encodings)
    return _Meta
