from __future__ import annotations
from typing import Optional


class CorpusError(Exception):
    """Base class for every failure raised while building a corpus."""


class ConfigurationError(CorpusError, ValueError):
    """Invalid column spec, writer config or scenario file."""


class RangeError(ConfigurationError):
    """Offsets (or another bounded sequence) cannot satisfy their bounds."""


class DuplicateFieldError(ConfigurationError):
    def __init__(self, name: str):
        super().__init__(f"duplicate field name: {name!r}")
        self.name = name


class DuplicateMetadataKeyError(ConfigurationError):
    def __init__(self, key: str):
        super().__init__(f"duplicate metadata key: {key!r}")
        self.key = key


class BatchValidationError(CorpusError):
    """A structural invariant of an assembled batch does not hold.

    :param invariant: Short tag naming the broken invariant
        (e.g. ``"column-length"``, ``"offsets-monotonic"``).
    :param message: Human readable detail.
    :param column: Offending column name, when known.
    :param scenario_index: Position of the scenario in the run, attached by
        the corpus writer.
    """

    def __init__(
        self,
        invariant: str,
        message: str,
        *,
        column: Optional[str] = None,
        scenario_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.invariant = invariant
        self.message = message
        self.column = column
        self.scenario_index = scenario_index

    def __str__(self) -> str:
        where = []
        if self.scenario_index is not None:
            where.append(f"scenario {self.scenario_index}")
        if self.column is not None:
            where.append(f"column {self.column!r}")
        prefix = f"[{self.invariant}]"
        if where:
            prefix += " " + ", ".join(where)
        return f"{prefix}: {self.message}"


class CorpusIOError(CorpusError, OSError):
    """Filesystem failure while creating, opening, writing or closing output."""

    def __init__(self, operation: str, path: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} failed for {path}{detail}")
        self.operation = operation
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return self.args[0]


class DirectoryError(CorpusIOError):
    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__("create directory", path, cause)


class EncodingError(CorpusError):
    """The Parquet encoder rejected a row group."""

    def __init__(self, message: str, *, row_group: Optional[int] = None):
        super().__init__(message)
        self.row_group = row_group
