# tests/bootstrap_installer/test_bs_platform.py
import pytest

from bootstrap_installer.bs_models import PlatformTag, UnsupportedPlatformError
from bootstrap_installer.bs_platform import (
    classify_platform,
    detect_platform,
    parse_os_release,
)
from common.step_models import StepStatus


@pytest.mark.parametrize(
    "kernel, os_release, expected",
    [
        ("Darwin", {}, PlatformTag.MACOS),
        ("Linux", {"ID": "debian"}, PlatformTag.DEBIAN),
        ("Linux", {"ID": "ubuntu"}, PlatformTag.DEBIAN),
        ("Linux", {"ID": "linuxmint", "ID_LIKE": "ubuntu debian"}, PlatformTag.DEBIAN),
        ("Linux", {"ID": "fedora"}, PlatformTag.UNSUPPORTED),
        ("Linux", {}, PlatformTag.UNSUPPORTED),
        ("Windows", {}, PlatformTag.UNSUPPORTED),
        ("", {}, PlatformTag.UNSUPPORTED),
    ],
)
def test_classify_platform(kernel, os_release, expected):
    assert classify_platform(kernel, os_release) == expected


def test_parse_os_release_strips_quotes_and_comments(tmp_path):
    path = tmp_path / "os-release"
    path.write_text(
        '# comment\nNAME="Ubuntu"\nID=ubuntu\nID_LIKE=debian\n\nBROKEN\n',
        encoding="utf-8",
    )
    assert parse_os_release(path) == {
        "NAME": "Ubuntu",
        "ID": "ubuntu",
        "ID_LIKE": "debian",
    }


def test_parse_os_release_missing_file(tmp_path):
    assert parse_os_release(tmp_path / "absent") == {}


def test_detect_debian(mocker, app_settings, mock_logger):
    mocker.patch("bootstrap_installer.bs_platform.platform.system", return_value="Linux")
    context = {}

    outcome = detect_platform(context, app_settings, mock_logger)

    assert context["platform"] == PlatformTag.DEBIAN
    assert context["os_release"]["ID"] == "debian"
    assert outcome.status == StepStatus.UNCHANGED


def test_detect_macos_ignores_os_release(mocker, app_settings, mock_logger):
    mocker.patch("bootstrap_installer.bs_platform.platform.system", return_value="Darwin")
    context = {}

    detect_platform(context, app_settings, mock_logger)

    assert context["platform"] == PlatformTag.MACOS
    assert context["os_release"] == {}


def test_detect_unsupported_distribution(mocker, app_settings, mock_logger):
    app_settings.os_release_path.write_text(
        'PRETTY_NAME="Fedora Linux 40"\nID=fedora\n', encoding="utf-8"
    )
    mocker.patch("bootstrap_installer.bs_platform.platform.system", return_value="Linux")
    context = {}

    with pytest.raises(UnsupportedPlatformError) as excinfo:
        detect_platform(context, app_settings, mock_logger)

    assert str(excinfo.value) == "Unsupported Linux distribution: Fedora Linux 40"
    assert "platform" not in context


def test_detect_unsupported_kernel(mocker, app_settings, mock_logger):
    mocker.patch("bootstrap_installer.bs_platform.platform.system", return_value="Windows")

    with pytest.raises(UnsupportedPlatformError, match="Unsupported operating system: Windows"):
        detect_platform({}, app_settings, mock_logger)
