# tests/bootstrap_installer/test_bs_venv.py
import subprocess

import pytest

from bootstrap_installer.bs_models import BootstrapError
from bootstrap_installer.bs_venv import (
    ansible_requirement,
    parse_pip_show_version,
    provision_ansible_environment,
    version_satisfies,
)
from common.step_models import StepStatus

PIP_SHOW_OUTPUT = "Name: ansible\nVersion: 10.2.0\nSummary: Radically simple IT automation\n"


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("", "ansible"),
        ("==10.2.0", "ansible==10.2.0"),
        (" >=9 ", "ansible>=9"),
    ],
)
def test_ansible_requirement(spec, expected):
    assert ansible_requirement(spec) == expected


@pytest.mark.parametrize(
    "spec, installed, expected",
    [
        ("", None, True),
        ("==10.2.0", "10.2.0", True),
        ("==10.2", "10.2.0", True),
        ("==10.2.0.0", "10.2.0", True),
        ("=== 10.2.0", "10.2.0", True),
        ("==10.*", "10.2.0", True),
        (">=9,<11", "10.2.0", True),
        ("~=10.1", "10.2.0", True),
        ("==9.8.0", "10.2.0", False),
        (">=11", "10.2.0", False),
        ("==10.2.0", None, False),
        ("==11.0.0b1", "11.0.0b1", True),
    ],
)
def test_version_satisfies(spec, installed, expected):
    assert version_satisfies(spec, installed) is expected


def test_version_satisfies_rejects_invalid_constraint():
    with pytest.raises(BootstrapError, match="Invalid Ansible version constraint"):
        version_satisfies("==not a version", "10.2.0")


def test_parse_pip_show_version():
    assert parse_pip_show_version(PIP_SHOW_OUTPUT) == "10.2.0"
    assert parse_pip_show_version("WARNING: Package(s) not found: ansible") is None


@pytest.fixture
def mock_run(mocker):
    def fake_run(command, *args, **kwargs):
        if command[-2:] == ["show", "ansible"]:
            return subprocess.CompletedProcess(command, 0, PIP_SHOW_OUTPUT, "")
        if command[-1] == "--version":
            return subprocess.CompletedProcess(
                command, 0, "ansible [core 2.17.2]\n  config file = None\n", ""
            )
        return subprocess.CompletedProcess(command, 0, None, None)

    return mocker.patch("bootstrap_installer.bs_venv.run_command", side_effect=fake_run)


def test_provision_runs_commands_in_order(mock_run, app_settings, mock_logger):
    context = {}
    venv_dir = app_settings.layout.venv_dir
    python = venv_dir / "bin" / "python"

    outcome = provision_ansible_environment(context, app_settings, mock_logger)

    commands = [call.args[0] for call in mock_run.call_args_list]
    assert commands == [
        ["python3", "-m", "venv", venv_dir],
        [python, "-m", "pip", "install", "--upgrade", "pip", "wheel"],
        [python, "-m", "pip", "install", "ansible"],
        [venv_dir / "bin" / "ansible", "--version"],
        [python, "-m", "pip", "show", "ansible"],
    ]
    mock_logger.info.assert_any_call("ansible [core 2.17.2]", exc_info=False)
    assert context["ansible_version"] == "10.2.0"
    assert outcome.status == StepStatus.CHANGED


def test_provision_with_pin_and_extras(mock_run, app_settings, mock_logger):
    settings = app_settings.model_copy(
        update={"ansible_version": "==10.2.0", "extra_pip_packages": ["ansible-lint"]}
    )
    python = settings.layout.venv_dir / "bin" / "python"

    provision_ansible_environment({}, settings, mock_logger)

    mock_run.assert_any_call(
        [python, "-m", "pip", "install", "ansible==10.2.0", "ansible-lint"],
        settings,
        current_logger=mock_logger,
    )


def test_provision_pin_mismatch(mock_run, app_settings, mock_logger):
    settings = app_settings.model_copy(update={"ansible_version": "==9.8.0"})

    with pytest.raises(BootstrapError, match="Requested ansible==9.8.0 but found 10.2.0"):
        provision_ansible_environment({}, settings, mock_logger)


def test_provision_short_pin_matches_installed_release(mock_run, app_settings, mock_logger):
    settings = app_settings.model_copy(update={"ansible_version": "==10.2"})
    context = {}

    outcome = provision_ansible_environment(context, settings, mock_logger)

    assert outcome.status == StepStatus.CHANGED
    assert context["ansible_version"] == "10.2.0"


def test_provision_satisfied_range(mock_run, app_settings, mock_logger):
    settings = app_settings.model_copy(update={"ansible_version": ">=10,<11"})

    outcome = provision_ansible_environment({}, settings, mock_logger)

    assert outcome.status == StepStatus.CHANGED


def test_provision_violated_range(mock_run, app_settings, mock_logger):
    settings = app_settings.model_copy(update={"ansible_version": ">=11"})

    with pytest.raises(BootstrapError, match="Requested ansible>=11 but found 10.2.0"):
        provision_ansible_environment({}, settings, mock_logger)


def test_pip_failure_propagates(mocker, app_settings, mock_logger):
    mocker.patch(
        "bootstrap_installer.bs_venv.run_command",
        side_effect=[
            subprocess.CompletedProcess([], 0),
            subprocess.CompletedProcess([], 0),
            subprocess.CalledProcessError(1, ["pip", "install", "ansible"]),
        ],
    )
    with pytest.raises(subprocess.CalledProcessError):
        provision_ansible_environment({}, app_settings, mock_logger)
