# common/macos/brew_manager.py
# -*- coding: utf-8 -*-
"""
Homebrew and Command Line Tools handling for macOS hosts.
"""

import logging
import os
import platform
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

import requests

from common.command_utils import run_command
from common.file_utils import append_line_if_absent
from installer.config import HOMEBREW_PREFIX_ARM64, HOMEBREW_PREFIX_X86_64
from installer.config_models import AppSettings

DOWNLOAD_TIMEOUT_SECONDS = 60


class BrewManager:
    """
    Installs packages with Homebrew, bootstrapping Homebrew itself if needed.

    Package operations raise subprocess.CalledProcessError on failure. The
    Command Line Tools trigger is the only best-effort operation.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._brew_path: Optional[str] = None

    @staticmethod
    def homebrew_prefix() -> Path:
        """Default install prefix: /opt/homebrew on Apple silicon, /usr/local on Intel."""
        if platform.machine() == "arm64":
            return Path(HOMEBREW_PREFIX_ARM64)
        return Path(HOMEBREW_PREFIX_X86_64)

    def command_line_tools_installed(self, app_settings: AppSettings) -> bool:
        try:
            result = run_command(
                ["xcode-select", "-p"],
                app_settings,
                check=False,
                capture_output=True,
                current_logger=self.logger,
            )
        except FileNotFoundError:
            return False
        return result.returncode == 0

    def trigger_command_line_tools_install(
        self, app_settings: AppSettings
    ) -> bool:
        """
        Opens the Command Line Tools installer dialog.

        The install itself finishes asynchronously; this only reports
        whether the trigger command was accepted.
        """
        try:
            result = run_command(
                ["xcode-select", "--install"],
                app_settings,
                check=False,
                current_logger=self.logger,
            )
        except FileNotFoundError:
            self.logger.warning("'xcode-select' not found; cannot trigger the Command Line Tools installer.")
            return False
        return result.returncode == 0

    def find_brew(self) -> Optional[str]:
        if self._brew_path:
            return self._brew_path
        found = shutil.which("brew")
        if not found:
            candidate = self.homebrew_prefix() / "bin" / "brew"
            if candidate.exists():
                found = str(candidate)
        self._brew_path = found
        return found

    def download_install_script(self, install_url: str) -> str:
        """
        Fetches the official Homebrew install script.

        Raises:
            requests.exceptions.RequestException: The download failed.
        """
        self.logger.info(f"Downloading Homebrew installer from {install_url}")
        response = requests.get(install_url, timeout=DOWNLOAD_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.text

    def install_homebrew(self, app_settings: AppSettings) -> None:
        """
        Runs the official install script, then exposes brew to this process.

        The script is run from a temporary file so the command line stays
        short in the log and the installer keeps the terminal as stdin for
        its sudo and confirmation prompts.
        """
        script = self.download_install_script(app_settings.homebrew_install_url)
        with tempfile.TemporaryDirectory(prefix="homebrew_install_") as temp_dir:
            script_path = Path(temp_dir) / "install.sh"
            script_path.write_text(script, encoding="utf-8")
            run_command(
                ["/bin/bash", script_path],
                app_settings,
                current_logger=self.logger,
            )
        self.configure_shellenv(app_settings)

    def configure_shellenv(self, app_settings: AppSettings) -> None:
        """
        Makes brew available to future login shells and to this process.

        The 'brew shellenv' line is added to the shell profile only once.
        """
        brew_bin_dir = self.homebrew_prefix() / "bin"
        append_line_if_absent(
            app_settings.shell_profile,
            f'eval "$({brew_bin_dir / "brew"} shellenv)"',
            app_settings,
            current_logger=self.logger,
        )
        path_entries = os.environ.get("PATH", "").split(os.pathsep)
        if str(brew_bin_dir) not in path_entries:
            os.environ["PATH"] = os.pathsep.join([str(brew_bin_dir)] + [p for p in path_entries if p])
        self._brew_path = None

    def _brew(self) -> str:
        brew = self.find_brew()
        if not brew:
            raise FileNotFoundError("'brew' not found. Homebrew must be installed first.")
        return brew

    def update(self, app_settings: AppSettings) -> None:
        self.logger.info("Updating Homebrew formulae via 'brew update'...")
        run_command([self._brew(), "update"], app_settings, current_logger=self.logger)

    def is_installed(self, formula: str, app_settings: AppSettings) -> bool:
        """'brew list --versions' exits non-zero for formulae that are not installed."""
        result = run_command(
            [self._brew(), "list", "--versions", formula],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=self.logger,
        )
        return result.returncode == 0 and bool(result.stdout.strip())

    def install(self, packages: List[str], app_settings: AppSettings) -> List[str]:
        """
        Installs the formulae that are not installed yet.

        Returns:
            The formulae handed to 'brew install'.

        Raises:
            subprocess.CalledProcessError: brew failed.
        """
        missing = [
            pkg for pkg in packages if not self.is_installed(pkg, app_settings)
        ]
        if not missing:
            self.logger.info("All requested Homebrew formulae are already installed.")
            return []
        self.logger.info(f"Installing Homebrew formulae: {', '.join(missing)}")
        run_command(
            [self._brew(), "install"] + missing,
            app_settings,
            current_logger=self.logger,
        )
        return missing
