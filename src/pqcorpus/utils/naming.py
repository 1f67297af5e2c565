from __future__ import annotations
from pathlib import Path

DEFAULT_PREFIX = "pq-table-"


class SampleNamer:
    """Sequential sample names: ``<prefix>1``, ``<prefix>2``, ...

    One instance per run; ids are never reused by the same instance.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX, start: int = 1):
        self.prefix = prefix
        self.next_id = start

    def next(self) -> tuple[int, str]:
        sample_id = self.next_id
        self.next_id += 1
        return sample_id, f"{self.prefix}{sample_id}"

    def next_path(self, directory: Path) -> tuple[int, Path]:
        sample_id, name = self.next()
        return sample_id, directory / name
