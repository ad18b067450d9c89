import json
import logging

import pytest

import poeditor_importer.importer  # noqa: F401
from poeditor_importer import config
from poeditor_importer import logger as logger_module
from poeditor_importer.logger import clear_log_settings_cache


def test_missing_file_gives_defaults(tmp_path):
    loaded = config.load_config(tmp_path / "absent.json")

    assert loaded == config.DEFAULT_CONFIG
    assert loaded is not config.DEFAULT_CONFIG


def test_loaded_config_is_merged_with_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "poeditor": {"api_token": "abc", "project_id": "123"},
        "log_mode": "debug",
    }), encoding='utf-8')

    loaded = config.load_config(config_file)

    assert loaded["log_mode"] == "debug"
    assert loaded["timeout"] == config.DEFAULT_CONFIG["timeout"]
    assert loaded["poeditor"]["default_lang"] == "en"
    assert config.get_poeditor_settings(loaded) == {
        "api_token": "abc",
        "project_id": 123,
        "default_lang": "en",
        "res_dir_path": "app/src/main/res",
    }


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding='utf-8')

    assert config.load_config(config_file) == config.DEFAULT_CONFIG


def test_save_then_load(tmp_path):
    config_file = tmp_path / "nested" / "config.json"
    settings = dict(config.DEFAULT_CONFIG, timeout=15)

    config.save_config(settings, config_file)

    assert config.load_config(config_file)["timeout"] == 15


@pytest.fixture
def project_config_file(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "config.json")
    yield config.CONFIG_FILE
    monkeypatch.undo()
    clear_log_settings_cache()


def test_config_logger_follows_log_mode():
    config_logger = logging.getLogger("poeditor_importer.config")
    log_mode, _ = logger_module._get_log_settings()

    assert config_logger.handlers
    assert config_logger.level == logger_module._level_for_mode(log_mode)


def test_saving_project_config_reconfigures_loggers(project_config_file):
    config.save_config(dict(config.DEFAULT_CONFIG, log_mode="off"))

    for name in ("poeditor_importer.config", "poeditor_importer.importer"):
        assert logging.getLogger(name).level == logging.CRITICAL + 1

    config.save_config(dict(config.DEFAULT_CONFIG, log_mode="debug"))

    assert logging.getLogger("poeditor_importer.config").level == logging.DEBUG
