from __future__ import annotations
from typing import Sequence

from ..errors import BatchValidationError
from ..types import GeneratedColumn, LogicalBatch, LogicalSchema
from ..utils.offsets import find_offsets_violation


def _validate_column(column: GeneratedColumn, name: str, expected_length: int) -> None:
    if column.length != expected_length:
        raise BatchValidationError(
            "column-length",
            f"length {column.length} does not match row count {expected_length}",
            column=name,
        )
    if len(column.null_bitmap) != column.length:
        raise BatchValidationError(
            "null-bitmap-length",
            f"null bitmap has {len(column.null_bitmap)} entries for {column.length} rows",
            column=name,
        )
    if not column.is_list:
        if column.values is None or len(column.values) != column.length:
            got = "no" if column.values is None else len(column.values)
            raise BatchValidationError(
                "values-length", f"{got} values for {column.length} rows", column=name
            )
        return
    if column.child is None:
        raise BatchValidationError("list-child", "list column has no child values", column=name)
    violation = find_offsets_violation(column.offsets, column.length, column.child.length)
    if violation is not None:
        raise BatchValidationError(violation[0], violation[1], column=name)
    _validate_column(column.child, f"{name}.item", column.child.length)


def validate_batch(batch: LogicalBatch) -> None:
    """Check every structural invariant of ``batch``.

    :raises BatchValidationError: Naming the first invariant found broken.
    """
    fields = batch.schema.fields
    if len(batch.columns) != len(fields):
        raise BatchValidationError(
            "column-count", f"{len(batch.columns)} columns for {len(fields)} schema fields"
        )
    if batch.row_count < 0:
        raise BatchValidationError("row-count", f"negative row count {batch.row_count}")
    for field, column in zip(fields, batch.columns):
        if column.arrow_type != field.arrow_type:
            raise BatchValidationError(
                "column-type",
                f"column type {column.arrow_type} does not match field type {field.arrow_type}",
                column=field.name,
            )
        _validate_column(column, field.name, batch.row_count)


class BatchAssembler:
    """Combine a schema and its columns into a validated ``LogicalBatch``."""

    def assemble(self, schema: LogicalSchema, columns: Sequence[GeneratedColumn]) -> LogicalBatch:
        """Build the batch; the row count is taken from the first column.

        :raises BatchValidationError: If counts, lengths, types or list
            offsets are inconsistent.
        """
        row_count = columns[0].length if columns else 0
        batch = LogicalBatch(schema=schema, row_count=row_count, columns=tuple(columns))
        validate_batch(batch)
        return batch
