# tests/conftest.py
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from installer.config_models import AppSettings

DEBIAN_OS_RELEASE = """\
PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"
NAME="Debian GNU/Linux"
VERSION_ID="12"
ID=debian
"""


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    logger = MagicMock(spec=logging.Logger)
    logger.isEnabledFor.return_value = False
    return logger


@pytest.fixture
def home_dir(tmp_path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def os_release_file(tmp_path) -> Path:
    path = tmp_path / "os-release"
    path.write_text(DEBIAN_OS_RELEASE, encoding="utf-8")
    return path


@pytest.fixture
def app_settings(home_dir, os_release_file) -> AppSettings:
    """AppSettings with every path redirected into a temporary home."""
    return AppSettings(
        project_dir=home_dir / "ansible",
        ssh_dir=home_dir / ".ssh",
        shell_profile=home_dir / ".zprofile",
        clone_parent_dir=home_dir / "bin",
        os_release_path=os_release_file,
    )
