from __future__ import annotations
from typing import List

from .types import ColumnSpec, Scenario, Strategy, WriterConfig

BATCH_SIZE = 1000
# smaller than the batch so every file spans several row groups
CHUNK_SIZE = BATCH_SIZE * 3 // 8


def writer_config() -> WriterConfig:
    return WriterConfig(row_group_size=CHUNK_SIZE, no_dictionary_columns=frozenset({"no_dict"}))


def example_scenario_1(seed: int = 42, row_count: int = BATCH_SIZE) -> Scenario:
    """Mixed flat, nested and constant columns, plus schema metadata."""
    columns = (
        ("a", ColumnSpec("int16", row_count, Strategy.SCALAR_RANGE, 0.2, min_value=-10000, max_value=10000)),
        ("b", ColumnSpec("float64", row_count, Strategy.SCALAR_RANGE, 0.0, min_value=-1e10, max_value=1e10)),
        # tiny strings, hopefully dictionary encoded
        ("c", ColumnSpec("string", row_count, Strategy.BOUNDED_STRING, 0.2, min_length=0, max_length=3)),
        ("d", ColumnSpec("int64", row_count, Strategy.LIST_OF_SCALAR, 0.2, min_value=-10000, max_value=10000)),
        # repeated constant, hopefully RLE encoded
        ("e", ColumnSpec("int16", row_count, Strategy.CONSTANT, value=42)),
        ("no_dict", ColumnSpec("string", row_count, Strategy.BOUNDED_STRING, 0.2, min_length=0, max_length=30)),
    )
    return Scenario(
        name="example-1",
        seed=seed,
        columns=columns,
        metadata=(("key1", "value1"), ("key2", "")),
    )


def default_scenarios() -> List[Scenario]:
    return [example_scenario_1()]
