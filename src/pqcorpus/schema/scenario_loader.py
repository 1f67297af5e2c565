from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List

from ..errors import ConfigurationError
from ..types import ColumnSpec, Scenario, Strategy, metadata_pairs
from .jsonschema_validator import Validator


def _column_spec(column: Dict[str, Any], row_count: int) -> ColumnSpec:
    strategy = Strategy(column["strategy"])
    opts: Dict[str, Any] = {
        "logical_type": column["type"],
        "length": row_count,
        "strategy": strategy,
        "null_probability": column.get("null_probability", 0.0),
    }
    if strategy in (Strategy.SCALAR_RANGE, Strategy.LIST_OF_SCALAR):
        opts["min_value"] = column.get("min")
        opts["max_value"] = column.get("max")
    if strategy is Strategy.LIST_OF_SCALAR and "child_factor" in column:
        opts["child_factor"] = column["child_factor"]
    if strategy is Strategy.BOUNDED_STRING:
        opts["min_length"] = column.get("min_length", 0)
        opts["max_length"] = column.get("max_length", 0)
    if strategy is Strategy.CONSTANT:
        opts["value"] = column.get("value")
    return ColumnSpec(**opts)


def scenarios_from_dict(document: Any) -> List[Scenario]:
    """Build scenarios from a parsed scenario document.

    The document is checked against ``SCENARIO_FILE_SCHEMA`` first; each
    column spec is validated as well, so a bad file fails before any data is
    generated.

    :param document: Parsed JSON document.
    :return: Scenarios in file order.
    :raises ConfigurationError: On schema or column spec violations.
    """
    error = Validator().validate(document)
    if error is not None:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise ConfigurationError(f"invalid scenario file at {location}: {error.message}")

    scenarios: List[Scenario] = []
    for idx, entry in enumerate(document["scenarios"]):
        row_count = entry["row_count"]
        columns = tuple((c["name"], _column_spec(c, row_count)) for c in entry["columns"])
        for _, spec in columns:
            spec.validate()
        scenarios.append(
            Scenario(
                name=entry.get("name") or f"scenario-{idx + 1}",
                seed=entry["seed"],
                columns=columns,
                metadata=metadata_pairs(entry.get("metadata", [])),
            )
        )
    return scenarios


def load_scenarios(path: str | Path) -> List[Scenario]:
    """Read and validate a JSON scenario file.

    :raises FileNotFoundError: If ``path`` does not exist.
    :raises ConfigurationError: If the file is not valid JSON or fails validation.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"scenario file {path} is not valid JSON: {exc}") from exc
    return scenarios_from_dict(document)
