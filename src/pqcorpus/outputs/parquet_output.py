from __future__ import annotations

"""Parquet writer driver.

Turns a ``LogicalBatch`` into one Parquet file using
``pyarrow.parquet.ParquetWriter``:

* the batch is validated again right before encoding, first structurally
  and then with pyarrow's full validation;
* rows are written in slices of at most ``row_group_size``, one row group
  per slice;
* dictionary encoding is on for every leaf column except those listed in
  ``WriterConfig.no_dictionary_columns``;
* the file is encoded in memory and only copied to the sink once complete.

Requirements:
  * ``pyarrow``
"""

import logging
from typing import Any, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from ..engine.batch import validate_batch
from ..errors import BatchValidationError, CorpusIOError, EncodingError
from ..types import LogicalBatch, WriterConfig
from .base import BaseWriterDriver

logger = logging.getLogger(__name__)


def leaf_column_paths(name: str, arrow_type: pa.DataType) -> List[str]:
    """Parquet leaf column paths for an Arrow field.

    Lists use the compliant ``<name>.list.element`` layout.
    """
    if pa.types.is_list(arrow_type) or pa.types.is_large_list(arrow_type):
        return leaf_column_paths(f"{name}.list.element", arrow_type.value_type)
    if pa.types.is_struct(arrow_type):
        paths: List[str] = []
        for i in range(arrow_type.num_fields):
            child = arrow_type.field(i)
            paths.extend(leaf_column_paths(f"{name}.{child.name}", child.type))
        return paths
    return [name]


class ParquetWriterDriver(BaseWriterDriver):
    """Write a batch as row groups of bounded size."""

    def dictionary_columns(self, schema: pa.Schema, config: WriterConfig) -> List[str]:
        """Leaf paths that keep dictionary encoding under ``config``.

        Names in ``no_dictionary_columns`` that are not in ``schema`` have no
        effect.
        """
        unknown = sorted(set(config.no_dictionary_columns) - set(schema.names))
        if unknown:
            logger.debug("no_dictionary_columns not in schema, ignored: %s", unknown)
        paths: List[str] = []
        for field in schema:
            if field.name in config.no_dictionary_columns:
                continue
            paths.extend(leaf_column_paths(field.name, field.type))
        return paths

    def write(self, batch: LogicalBatch, config: WriterConfig, sink: Any, *, label: Optional[str] = None) -> None:  # type: ignore[override]
        """Encode ``batch`` into ``sink``.

        The file is encoded in memory and copied to ``sink`` only once every
        row group has been written, so a failed encode never leaves a
        readable, truncated file behind.

        :raises BatchValidationError: If the batch fails structural or pyarrow validation.
        :raises EncodingError: If pyarrow rejects a row group.
        :raises CorpusIOError: If writing to ``sink`` fails.
        """
        label = label or "<sink>"
        validate_batch(batch)
        try:
            record_batch = batch.to_arrow()
            record_batch.validate(full=True)
        except (pa.ArrowInvalid, pa.ArrowTypeError) as exc:
            raise BatchValidationError("arrow-validate-full", str(exc)) from exc

        use_dictionary = self.dictionary_columns(record_batch.schema, config)
        encoded = pa.BufferOutputStream()
        row_group = -1
        try:
            writer = pq.ParquetWriter(
                encoded,
                record_batch.schema,
                use_dictionary=use_dictionary,
                compression=config.compression,
                use_compliant_nested_type=True,
            )
            for row_group, offset in enumerate(range(0, batch.row_count, config.row_group_size)):
                chunk = record_batch.slice(offset, config.row_group_size)
                logger.debug("%s: row group %d, %d rows", label, row_group, chunk.num_rows)
                writer.write_batch(chunk, row_group_size=config.row_group_size)
            # footer only once every row group succeeded
            writer.close()
        except pa.ArrowException as exc:
            raise EncodingError(f"{label}: row group {row_group}: {exc}", row_group=row_group) from exc

        try:
            sink.write(encoded.getvalue())
        except OSError as exc:
            raise CorpusIOError("write", label, exc) from exc
