import pytest

from pqcorpus.engine.registry import get_scenarios, get_writer_driver


def test_registry_lookups_positive():
    assert get_writer_driver("parquet").__class__.__name__.lower().endswith("driver")
    names = [s.name for s in get_scenarios()]
    assert names == ["example-1"]


def test_registry_unknowns_raise():
    with pytest.raises(KeyError):
        get_writer_driver("bogus")


def test_registry_scenario_file(tmp_path):
    p = tmp_path / "s.json"
    p.write_text('{"scenarios": [{"seed": 3, "row_count": 4, "columns": '
                 '[{"name": "a", "type": "int8", "strategy": "constant", "value": 1}]}]}')
    scenarios = get_scenarios(p)
    assert len(scenarios) == 1 and scenarios[0].seed == 3
