import importlib

import pytest

from optsim import config
from optsim.core.config_models import EngineSettings


@pytest.fixture
def restore_config(monkeypatch):
    yield monkeypatch
    monkeypatch.delenv("OPTSIM_CONFIG", raising=False)
    config.reload()


def test_default_engine_constants():
    cfg = importlib.reload(config)
    assert cfg.get("PRICE_POINTS") == 300
    assert cfg.get("DEFAULT_WINDOW") == 1000.0
    assert cfg.get("NAKED_PUT_MARGIN_FRACTION") == 0.5
    assert cfg.get("ZOOM_STEP") == 1.5
    assert cfg.get("DEFAULT_LOT_SIZE") == 50


def test_get_returns_default_for_unknown_key():
    assert config.get("NOT_A_SETTING", "fallback") == "fallback"


def test_load_from_yaml(tmp_path, restore_config):
    path = tmp_path / "optsim.yaml"
    path.write_text("PRICE_POINTS: 51\nZOOM_MAX: 4\nUNKNOWN_KEY: 1\n")
    restore_config.setenv("OPTSIM_CONFIG", str(path))

    config.reload()

    assert config.get("PRICE_POINTS") == 51
    assert config.get("ZOOM_MAX") == 4.0
    assert config.get("UNKNOWN_KEY") is None
    assert EngineSettings.from_app_config().price_points == 51


def test_load_from_env_file(tmp_path, restore_config):
    path = tmp_path / "optsim.env"
    path.write_text("# engine\nDEFAULT_WINDOW=500\nLOG_LEVEL=DEBUG\n")
    restore_config.setenv("OPTSIM_CONFIG", str(path))

    config.reload()

    assert config.get("DEFAULT_WINDOW") == 500.0
    assert config.get("LOG_LEVEL") == "DEBUG"


def test_invalid_yaml_falls_back_to_defaults(tmp_path, restore_config):
    path = tmp_path / "broken.yaml"
    path.write_text("PRICE_POINTS: [unterminated\n")
    restore_config.setenv("OPTSIM_CONFIG", str(path))

    config.reload()

    assert config.get("PRICE_POINTS") == 300


def test_update_and_save(tmp_path, restore_config):
    target = tmp_path / "saved.yaml"
    restore_config.setenv("OPTSIM_CONFIG", str(target))

    config.update({"NAKED_PUT_MARGIN_FRACTION": 0.25, "NOT_A_SETTING": 1})

    assert config.get("NAKED_PUT_MARGIN_FRACTION") == 0.25
    assert config.get("NOT_A_SETTING") is None
    assert "NAKED_PUT_MARGIN_FRACTION: 0.25" in target.read_text()
