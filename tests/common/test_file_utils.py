import stat

from common.file_utils import (
    append_line_if_absent,
    ensure_directory,
    write_file_if_absent,
)


def test_ensure_directory_creates_parents(tmp_path, app_settings, mock_logger):
    target = tmp_path / "a" / "b" / "c"

    assert ensure_directory(target, app_settings, current_logger=mock_logger) is True
    assert target.is_dir()


def test_ensure_directory_reports_existing(tmp_path, app_settings, mock_logger):
    assert ensure_directory(tmp_path, app_settings, current_logger=mock_logger) is False


def test_ensure_directory_applies_mode(tmp_path, app_settings, mock_logger):
    target = tmp_path / ".ssh"
    target.mkdir(mode=0o755)

    ensure_directory(target, app_settings, mode=0o700, current_logger=mock_logger)

    assert stat.S_IMODE(target.stat().st_mode) == 0o700


def test_write_file_if_absent_writes_new_file(tmp_path, app_settings, mock_logger):
    target = tmp_path / "inventory" / "hosts.ini"

    assert write_file_if_absent(
        target, "[local]\n", app_settings, mock_logger
    ) is True
    assert target.read_text(encoding="utf-8") == "[local]\n"


def test_write_file_if_absent_keeps_existing_content(
    tmp_path, app_settings, mock_logger
):
    target = tmp_path / "site.yml"
    target.write_text("custom\n", encoding="utf-8")

    assert write_file_if_absent(
        target, "default\n", app_settings, mock_logger
    ) is False
    assert target.read_text(encoding="utf-8") == "custom\n"


def test_append_line_if_absent_creates_file(tmp_path, app_settings, mock_logger):
    profile = tmp_path / ".zprofile"

    assert append_line_if_absent(
        profile, 'eval "$(/opt/homebrew/bin/brew shellenv)"', app_settings, mock_logger
    ) is True
    assert profile.read_text(encoding="utf-8") == (
        'eval "$(/opt/homebrew/bin/brew shellenv)"\n'
    )


def test_append_line_if_absent_is_idempotent(tmp_path, app_settings, mock_logger):
    profile = tmp_path / ".zprofile"
    profile.write_text("export EDITOR=vim", encoding="utf-8")
    line = 'eval "$(/opt/homebrew/bin/brew shellenv)"'

    assert append_line_if_absent(profile, line, app_settings, mock_logger) is True
    assert append_line_if_absent(profile, line, app_settings, mock_logger) is False
    assert profile.read_text(encoding="utf-8") == f"export EDITOR=vim\n{line}\n"
