# tests/unit/test_inputs_loader.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from sac_simulator.inputs.inputs import AppInputs, InputsLoader, load_inputs
from tests.utils import make_wire_request


def _write(tmp_path: Path, payload: dict, name: str = "request.json") -> Path:
    p = tmp_path / name
    p.write_text(json.dumps(payload), encoding="utf-8")
    return p


def test_load_bare_request(tmp_path: Path):
    cfg = load_inputs(_write(tmp_path, make_wire_request(term_months=24)))
    assert isinstance(cfg, AppInputs)
    assert cfg.request.parameters.term_months == 24
    assert cfg.run.out is None
    assert cfg.run.log_level == "INFO"
    assert cfg.run.workers == 1


def test_load_structured_shape(tmp_path: Path):
    payload = {"request": make_wire_request(), "run": {"out": "r.json", "log_level": "debug", "workers": 2}}
    cfg = InputsLoader().load(_write(tmp_path, payload))
    assert cfg.run.out == "r.json"
    assert cfg.run.log_level == "DEBUG"
    assert cfg.run.workers == 2


def test_env_overrides_apply(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SACSIM_OUT", "env.json")
    monkeypatch.setenv("SACSIM_LOG_LEVEL", "warning")
    monkeypatch.setenv("SACSIM_WORKERS", "4")
    cfg = InputsLoader().load(_write(tmp_path, make_wire_request()))
    assert cfg.run.out == "env.json"
    assert cfg.run.log_level == "WARNING"
    assert cfg.run.workers == 4


def test_bad_env_values_are_ignored(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SACSIM_WORKERS", "many")
    monkeypatch.setenv("SACSIM_LOG_LEVEL", "loud")
    cfg = InputsLoader().load(_write(tmp_path, make_wire_request()))
    assert cfg.run.workers == 1
    assert cfg.run.log_level == "INFO"


def test_with_overrides_is_non_destructive():
    loader = InputsLoader()
    cfg = loader.load_json(json.dumps(make_wire_request()))
    new = loader.with_overrides(cfg, out="x.json", workers=3)
    assert new.run.out == "x.json" and new.run.workers == 3
    assert cfg.run.out is None and cfg.run.workers == 1
    assert loader.with_overrides(cfg) is cfg


def test_with_overrides_validates():
    loader = InputsLoader()
    cfg = loader.load_json(json.dumps(make_wire_request()))
    with pytest.raises(ValueError):
        loader.with_overrides(cfg, workers=0)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        InputsLoader().load(tmp_path / "nope.json")


def test_non_json_suffix(tmp_path: Path):
    p = tmp_path / "request.yaml"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="only .json"):
        InputsLoader().load(p)


def test_invalid_json_and_invalid_shape():
    loader = InputsLoader()
    with pytest.raises(ValueError, match="Invalid JSON"):
        loader.load_json("{oops")
    with pytest.raises(ValueError, match="validation failed"):
        loader.load_json(json.dumps({"parameters": {"propertyValue": 1}}))


def test_with_env_overrides_applies_to_in_memory_inputs(monkeypatch):
    monkeypatch.setenv("SACSIM_OUT", "sample.json")
    monkeypatch.setenv("SACSIM_WORKERS", "2")
    loader = InputsLoader()
    cfg = loader.with_env_overrides(AppInputs.model_validate({"request": make_wire_request()}))
    assert cfg.run.out == "sample.json"
    assert cfg.run.workers == 2
