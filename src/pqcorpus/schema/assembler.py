from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

from ..errors import ConfigurationError, DuplicateFieldError, DuplicateMetadataKeyError
from ..types import Field, GeneratedColumn, LogicalSchema


class SchemaAssembler:
    """Derive a ``LogicalSchema`` from generated columns."""

    def assemble(
        self,
        columns: Sequence[GeneratedColumn],
        names: Sequence[str],
        metadata_pairs: Iterable[Tuple[str, str]] = (),
    ) -> LogicalSchema:
        """Pair each column with its name and attach metadata.

        Field types are taken from the columns' Arrow types. Metadata pairs are
        kept verbatim and in order; empty values are allowed.

        :param columns: Generated columns, in field order.
        :param names: One name per column.
        :param metadata_pairs: Ordered ``(key, value)`` pairs.
        :return: The assembled schema.
        :raises DuplicateFieldError: If two names collide.
        :raises DuplicateMetadataKeyError: If two metadata keys collide.
        :raises ConfigurationError: If names and columns differ in count.
        """
        if len(names) != len(columns):
            raise ConfigurationError(f"got {len(names)} names for {len(columns)} columns")

        seen_names: set[str] = set()
        fields: List[Field] = []
        for name, column in zip(names, columns):
            if name in seen_names:
                raise DuplicateFieldError(name)
            seen_names.add(name)
            fields.append(Field(name, column.arrow_type))

        seen_keys: set[str] = set()
        metadata: List[Tuple[str, str]] = []
        for key, value in metadata_pairs:
            if key in seen_keys:
                raise DuplicateMetadataKeyError(key)
            seen_keys.add(key)
            metadata.append((key, value))

        return LogicalSchema(tuple(fields), tuple(metadata))
