from __future__ import annotations
from pathlib import Path
from typing import List, Optional

from ..outputs.base import BaseWriterDriver
from ..types import Scenario


def get_writer_driver(kind: str = "parquet") -> BaseWriterDriver:
    if kind == "parquet":
        from ..outputs.parquet_output import ParquetWriterDriver
        return ParquetWriterDriver()
    raise KeyError(f"Unknown writer kind: {kind}")


def get_scenarios(path: Optional[str | Path] = None) -> List[Scenario]:
    """
    Return the scenarios for a run.
    Without ``path`` the built-in corpus is used; otherwise scenarios are loaded
    from the JSON scenario file at ``path``.
    """
    if path is None:
        from ..scenarios import default_scenarios
        return default_scenarios()
    from ..schema.scenario_loader import load_scenarios
    return load_scenarios(path)
