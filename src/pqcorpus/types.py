from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import pyarrow as pa

from .errors import ConfigurationError
from .utils.offsets import INT32_MAX

MetadataPairs = Tuple[Tuple[str, str], ...]

# logical type name -> (arrow type, numpy dtype)
INTEGER_TYPES = {
    "int8": (pa.int8(), np.int8),
    "int16": (pa.int16(), np.int16),
    "int32": (pa.int32(), np.int32),
    "int64": (pa.int64(), np.int64),
    "uint8": (pa.uint8(), np.uint8),
    "uint16": (pa.uint16(), np.uint16),
    "uint32": (pa.uint32(), np.uint32),
    "uint64": (pa.uint64(), np.uint64),
}
FLOAT_TYPES = {
    "float32": (pa.float32(), np.float32),
    "float64": (pa.float64(), np.float64),
}
STRING_TYPES = {"string": (pa.string(), object)}
LOGICAL_TYPES = {**INTEGER_TYPES, **FLOAT_TYPES, **STRING_TYPES}


class Strategy(str, Enum):
    SCALAR_RANGE = "scalar-range"
    CONSTANT = "constant"
    LIST_OF_SCALAR = "list-of-scalar"
    BOUNDED_STRING = "bounded-string"


def _fits(logical_type: str, value: Any) -> bool:
    if logical_type in INTEGER_TYPES:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            return False
        info = np.iinfo(INTEGER_TYPES[logical_type][1])
        return info.min <= int(value) <= info.max
    if logical_type in FLOAT_TYPES:
        if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
            return False
        info = np.finfo(FLOAT_TYPES[logical_type][1])
        return bool(np.isfinite(value)) and info.min <= float(value) <= info.max
    if logical_type in STRING_TYPES:
        return isinstance(value, str)
    return False


@dataclass(frozen=True)
class ColumnSpec:
    """Recipe for one generated column.

    :param logical_type: Type name (see ``LOGICAL_TYPES``). For
        ``list-of-scalar`` this is the element type.
    :param length: Number of rows.
    :param strategy: Generation strategy.
    :param null_probability: Per-row null probability in ``[0, 1]``. For list
        columns it applies to the child values.
    :param min_value: Lower bound for ``scalar-range`` / ``list-of-scalar``.
    :param max_value: Upper bound for ``scalar-range`` / ``list-of-scalar``.
    :param min_length: Lower string length bound for ``bounded-string``.
    :param max_length: Upper string length bound for ``bounded-string``.
    :param value: Repeated value for ``constant``.
    :param child_factor: Child values per row for ``list-of-scalar``.
    """

    logical_type: str
    length: int
    strategy: Strategy = Strategy.SCALAR_RANGE
    null_probability: float = 0.0
    min_value: Any = None
    max_value: Any = None
    min_length: int = 0
    max_length: int = 0
    value: Any = None
    child_factor: int = 10

    def validate(self) -> None:
        if self.logical_type not in LOGICAL_TYPES:
            raise ConfigurationError(f"unsupported logical type {self.logical_type!r}")
        if not isinstance(self.length, int) or self.length < 0:
            raise ConfigurationError(f"length must be a non-negative integer, got {self.length!r}")
        if not (0.0 <= self.null_probability <= 1.0):
            raise ConfigurationError(
                f"null_probability must be within [0, 1], got {self.null_probability!r}"
            )
        strategy = Strategy(self.strategy)
        is_string = self.logical_type in STRING_TYPES

        if strategy is Strategy.BOUNDED_STRING:
            if not is_string:
                raise ConfigurationError(f"bounded-string needs a string type, got {self.logical_type!r}")
            if self.min_length < 0 or self.min_length > self.max_length:
                raise ConfigurationError(
                    f"invalid string length bounds [{self.min_length}, {self.max_length}]"
                )
        elif strategy is Strategy.CONSTANT:
            if not _fits(self.logical_type, self.value):
                raise ConfigurationError(
                    f"constant {self.value!r} does not fit logical type {self.logical_type!r}"
                )
        else:
            if is_string:
                raise ConfigurationError(f"{strategy.value} needs a numeric type, got 'string'")
            for bound in (self.min_value, self.max_value):
                if not _fits(self.logical_type, bound):
                    raise ConfigurationError(
                        f"bound {bound!r} does not fit logical type {self.logical_type!r}"
                    )
            if self.min_value > self.max_value:
                raise ConfigurationError(
                    f"min_value {self.min_value!r} is greater than max_value {self.max_value!r}"
                )
            if self.logical_type in FLOAT_TYPES and not math.isfinite(float(self.max_value) - float(self.min_value)):
                raise ConfigurationError(
                    f"range [{self.min_value!r}, {self.max_value!r}] is wider than float64 can represent"
                )
            if strategy is Strategy.LIST_OF_SCALAR and (
                not isinstance(self.child_factor, int) or self.child_factor < 0
            ):
                raise ConfigurationError(f"child_factor must be >= 0, got {self.child_factor!r}")
            if strategy is Strategy.LIST_OF_SCALAR and self.length * self.child_factor > INT32_MAX:
                raise ConfigurationError(
                    f"{self.length} rows x {self.child_factor} child values overflow int32 list offsets"
                )


@dataclass
class GeneratedColumn:
    """One typed, nullable column produced by the generator.

    ``null_bitmap[i]`` is ``True`` when row ``i`` is null. List columns carry
    ``offsets`` (``length + 1`` entries) into ``child``; their ``values`` is
    ``None``.
    """

    arrow_type: pa.DataType
    length: int
    null_bitmap: np.ndarray
    values: Any = None
    offsets: Optional[np.ndarray] = None
    child: Optional["GeneratedColumn"] = None

    @property
    def is_list(self) -> bool:
        return self.offsets is not None

    @property
    def null_count(self) -> int:
        return int(np.count_nonzero(self.null_bitmap))

    def to_arrow(self) -> pa.Array:
        if self.is_list:
            assert self.child is not None
            offsets = pa.array(self.offsets, type=pa.int32())
            mask = pa.array(self.null_bitmap) if self.null_count else None
            return pa.ListArray.from_arrays(offsets, self.child.to_arrow(), type=self.arrow_type, mask=mask)
        if self.null_count == 0:
            return pa.array(self.values, type=self.arrow_type)
        return pa.array(self.values, type=self.arrow_type, mask=self.null_bitmap)


@dataclass(frozen=True)
class Field:
    name: str
    arrow_type: pa.DataType
    nullable: bool = True

    def to_arrow(self) -> pa.Field:
        return pa.field(self.name, self.arrow_type, nullable=self.nullable)


@dataclass(frozen=True)
class LogicalSchema:
    fields: Tuple[Field, ...]
    metadata: MetadataPairs = ()

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    def to_arrow(self) -> pa.Schema:
        metadata = dict(self.metadata) if self.metadata else None
        return pa.schema([f.to_arrow() for f in self.fields], metadata=metadata)


@dataclass
class LogicalBatch:
    schema: LogicalSchema
    row_count: int
    columns: Tuple[GeneratedColumn, ...]

    def to_arrow(self) -> pa.RecordBatch:
        arrays = [c.to_arrow() for c in self.columns]
        return pa.RecordBatch.from_arrays(arrays, schema=self.schema.to_arrow())


ALLOWED_COMPRESSION = {"snappy", "gzip", "brotli", "zstd", "lz4", "none"}


@dataclass(frozen=True)
class WriterConfig:
    """Immutable Parquet writer settings.

    :param row_group_size: Upper bound on rows per row group.
    :param no_dictionary_columns: Column names written without dictionary
        encoding.
    :param compression: Parquet compression codec.
    """

    row_group_size: int
    no_dictionary_columns: frozenset = field(default_factory=frozenset)
    compression: str = "snappy"

    def __post_init__(self) -> None:
        if isinstance(self.row_group_size, bool) or not isinstance(self.row_group_size, int) \
                or self.row_group_size <= 0:
            raise ConfigurationError(f"row_group_size must be a positive integer, got {self.row_group_size!r}")
        # accept any iterable of names but store it frozen
        object.__setattr__(self, "no_dictionary_columns", frozenset(self.no_dictionary_columns))
        if self.compression not in ALLOWED_COMPRESSION:
            raise ConfigurationError(
                f"Unsupported compression '{self.compression}'. Allowed: {sorted(ALLOWED_COMPRESSION)}"
            )


@dataclass
class CorpusEntry:
    sample_id: int
    path: Path
    batch: LogicalBatch


@dataclass(frozen=True)
class Scenario:
    """A named recipe for one corpus file.

    :param name: Label used in logs and errors.
    :param seed: Seed for the column generator.
    :param columns: Ordered ``(column name, ColumnSpec)`` pairs.
    :param metadata: Ordered schema metadata pairs.
    """

    name: str
    seed: int
    columns: Tuple[Tuple[str, ColumnSpec], ...]
    metadata: MetadataPairs = ()

    def build(self) -> LogicalBatch:
        # deferred: the assemblers import this module
        from .generators.random_columns import RandomColumnGenerator
        from .schema.assembler import SchemaAssembler
        from .engine.batch import BatchAssembler

        gen = RandomColumnGenerator(self.seed)
        generated = [gen.generate(spec) for _, spec in self.columns]
        schema = SchemaAssembler().assemble(
            generated, [name for name, _ in self.columns], self.metadata
        )
        return BatchAssembler().assemble(schema, generated)


def metadata_pairs(pairs: Sequence[Sequence[str]]) -> MetadataPairs:
    return tuple((str(k), str(v)) for k, v in pairs)
