import argparse
import os

import pytest

from installer.config_loader import (
    _deep_update,
    cli_overrides,
    load_app_settings,
    load_yaml_config,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith("ANSIBLE_BOOTSTRAP_"):
            monkeypatch.delenv(key)


def cli_namespace(**overrides):
    values = {
        "project_dir": None,
        "venv_dir": None,
        "ansible_version": None,
        "clone_repo": None,
        "skip_smoke_test": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_deep_update_merges_nested_and_ignores_none():
    source = {"a": {"x": 1, "y": 2}, "b": "keep"}
    result = _deep_update(source, {"a": {"y": 3}, "b": None, "c": None})
    assert result == {"a": {"x": 1, "y": 3}, "b": "keep", "c": None}


def test_missing_yaml_file_returns_empty(tmp_path, mock_logger):
    assert load_yaml_config(tmp_path / "missing.yaml", mock_logger) == {}


def test_invalid_yaml_returns_empty(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("project_dir: [unclosed\n", encoding="utf-8")

    assert load_yaml_config(config_file, mock_logger) == {}
    mock_logger.warning.assert_called_once()


def test_non_mapping_yaml_returns_empty(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    assert load_yaml_config(config_file, mock_logger) == {}


def test_cli_overrides_mapping():
    overrides = cli_overrides(
        cli_namespace(
            ansible_version="==10.2.0",
            clone_repo="git@github.com:example/playbooks.git",
            skip_smoke_test=True,
        )
    )
    assert overrides == {
        "ansible_version": "==10.2.0",
        "clone_repo_url": "git@github.com:example/playbooks.git",
        "run_smoke_test": False,
    }


def test_precedence_env_then_yaml_then_cli(tmp_path, monkeypatch, mock_logger):
    monkeypatch.setenv("ANSIBLE_BOOTSTRAP_ANSIBLE_VERSION", "==9.0.0")
    monkeypatch.setenv("ANSIBLE_BOOTSTRAP_SSH_KEY_NAME", "id_env")
    monkeypatch.setenv("ANSIBLE_BOOTSTRAP_PROJECT_DIR", str(tmp_path / "env"))
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"ansible_version: '==10.0.0'\nproject_dir: {tmp_path / 'yaml'}\n",
        encoding="utf-8",
    )

    settings = load_app_settings(
        cli_namespace(project_dir=str(tmp_path / "cli")),
        config_file,
        mock_logger,
    )

    assert settings.ssh_key_name == "id_env"
    assert settings.ansible_version == "==10.0.0"
    assert settings.project_dir == tmp_path / "cli"


def test_defaults_without_file_or_flags(tmp_path, mock_logger):
    settings = load_app_settings(None, tmp_path / "absent.yaml", mock_logger)
    assert settings.run_smoke_test is True
    assert settings.ansible_version == ""


def test_invalid_value_exits_with_message(tmp_path, mock_logger):
    with pytest.raises(SystemExit) as excinfo:
        load_app_settings(
            cli_namespace(ansible_version="10.2.0"),
            tmp_path / "absent.yaml",
            mock_logger,
        )

    assert str(excinfo.value.code).startswith("Configuration error:")
    mock_logger.error.assert_called_once()
