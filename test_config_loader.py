"""
Tests for configuration loading and logging setup
"""

import logging
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from fpick.config_loader import (
    CONFIG_ENV_VAR,
    ConfigLoader,
    PickerSettings,
    create_sample_config,
    get_config_loader,
    get_settings,
    reset_config_loader,
)
from fpick.logger import ColoredFormatter, setup_logger, set_debug_mode
from fpick.main import app


def test_defaults_without_config_file(tmp_path):
    loader = ConfigLoader(tmp_path / "absent.yml")

    assert loader.settings == PickerSettings()
    assert loader.raw_config == {}


def test_loads_known_keys_and_ignores_unknown(tmp_path):
    config = tmp_path / "fpick.yml"
    config.write_text(
        "default_filename: scratch.txt\n"
        "clear_screen: false\n"
        "log_level: DEBUG\n"
        "colour: blue\n"
    )

    loader = ConfigLoader(config)

    assert loader.settings.default_filename == "scratch.txt"
    assert loader.settings.clear_screen is False
    assert loader.get("log_level") == "DEBUG"
    assert loader.get("colour") is None
    assert loader.raw_config["colour"] == "blue"


def test_malformed_yaml_falls_back_to_defaults(tmp_path):
    config = tmp_path / "fpick.yml"
    config.write_text("default_filename: [unclosed\n")

    loader = ConfigLoader(config)

    assert loader.settings == PickerSettings()


def test_non_mapping_config_falls_back_to_defaults(tmp_path):
    config = tmp_path / "fpick.yml"
    config.write_text("- just\n- a list\n")

    assert ConfigLoader(config).settings == PickerSettings()


def test_env_var_selects_config(tmp_path, monkeypatch):
    config = tmp_path / "custom.yml"
    config.write_text("default_filename: from_env.txt\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
    reset_config_loader()

    assert get_config_loader().config_path == config
    assert get_settings().default_filename == "from_env.txt"


def test_local_config_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "fpick.yml").write_text("log_level: INFO\n")

    loader = ConfigLoader()

    assert loader.settings.log_level == "INFO"


def test_start_path_falls_back_to_cwd(tmp_path):
    settings = PickerSettings(start_dir=str(tmp_path / "missing"))

    assert settings.start_path() == Path.cwd()


def test_start_path_uses_existing_directory(tmp_path):
    assert PickerSettings(start_dir=str(tmp_path)).start_path() == tmp_path


def test_sample_config_round_trips(tmp_path):
    target = create_sample_config(tmp_path / "sample.yml")

    data = yaml.safe_load(target.read_text())

    assert data["default_filename"] == "temporary_file.txt"
    assert data["clear_screen"] is True
    assert ConfigLoader(target).settings.log_to_file is False


def test_sample_config_refuses_overwrite(tmp_path):
    target = tmp_path / "sample.yml"
    target.write_text("keep: me\n")

    try:
        create_sample_config(target)
    except FileExistsError:
        pass
    else:
        raise AssertionError("expected FileExistsError")

    assert target.read_text() == "keep: me\n"


def test_file_logging_writes_to_log_dir(tmp_path):
    log_dir = tmp_path / "logs"

    logger = setup_logger(level="WARNING", log_to_file=True, log_dir=log_dir)
    logging.getLogger("fpick.file_service").debug("hello from the service")
    for handler in logger.handlers:
        handler.flush()

    log_files = list(log_dir.glob("fpick_*.log"))
    assert len(log_files) == 1
    assert "hello from the service" in log_files[0].read_text()


def test_setup_logger_does_not_duplicate_handlers():
    first = setup_logger()
    count = len(first.handlers)

    second = setup_logger()

    assert second is first
    assert len(second.handlers) == count


def test_debug_mode_lowers_levels():
    logger = setup_logger(level="ERROR")

    set_debug_mode()

    assert logger.level == logging.DEBUG
    assert all(handler.level == logging.DEBUG for handler in logger.handlers)


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord("fpick", logging.ERROR, __file__, 1, "boom", None, None)

    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[31m" in output
    assert record.levelname == "ERROR"


@pytest.mark.parametrize("line,key", [
    ("start_dir: 5", "start_dir"),
    ("log_level: 10", "log_level"),
    ("clear_screen: 'no'", "clear_screen"),
    ("log_to_file: 1", "log_to_file"),
    ("default_filename: ''", "default_filename"),
    ("log_dir: [a, b]", "log_dir"),
])
def test_wrongly_typed_values_keep_defaults(tmp_path, line, key):
    config = tmp_path / "fpick.yml"
    config.write_text(f"{line}\n")

    loader = ConfigLoader(config)

    assert getattr(loader.settings, key) == getattr(PickerSettings(), key)


def test_valid_values_next_to_invalid_ones_still_apply(tmp_path):
    config = tmp_path / "fpick.yml"
    config.write_text("start_dir: 5\nclear_screen: false\n")

    settings = ConfigLoader(config).settings

    assert settings.start_dir is None
    assert settings.clear_screen is False


@pytest.mark.parametrize("line", ["start_dir: 5", "log_level: 10"])
def test_cli_survives_wrongly_typed_config(tree, tmp_path, monkeypatch, line):
    monkeypatch.chdir(tree)
    config = tmp_path / "bad.yml"
    config.write_text(f"{line}\n")
    runner = CliRunner()

    result = runner.invoke(app, ["--config", str(config), "browse"], input="d\n")

    assert result.exit_code == 0
    assert result.exception is None
    assert str(tree) in result.output
