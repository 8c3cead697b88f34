# common/debian/apt_manager.py
# -*- coding: utf-8 -*-
import logging
import subprocess
from typing import List, Optional, Union

from common.command_utils import (
    command_exists,
    run_command,
    run_elevated_command,
)
from installer.config_models import AppSettings

# sudo resets the environment, so the variable is set through env(1).
NONINTERACTIVE_PREFIX = ["env", "DEBIAN_FRONTEND=noninteractive"]


class AptManager:
    """
    A small manager for Debian apt packages using the command-line tools.

    Failures propagate as subprocess.CalledProcessError; callers decide
    whether they are fatal.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the AptManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("apt-get"):
            self.logger.critical(
                "'apt-get' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'apt-get' not found. Is this a Debian-based system?"
            )

    def update(self, app_settings: AppSettings) -> None:
        """Refreshes the package indexes using 'apt-get update'."""
        self.logger.info("Updating apt package lists via 'apt-get update'...")
        run_elevated_command(
            NONINTERACTIVE_PREFIX + ["apt-get", "update", "-yq"],
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info("Apt package lists updated successfully.")

    def is_installed(self, pkg_name: str, app_settings: AppSettings) -> bool:
        """Checks the dpkg database for an installed package."""
        try:
            result = run_command(
                ["dpkg-query", "-W", "-f=${db:Status-Status}", pkg_name],
                app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError:
            return False
        return result.stdout.strip() == "installed"

    def install(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
        update_first: bool = True,
    ) -> List[str]:
        """
        Installs the packages that are not installed yet.

        Recommended and suggested packages are not pulled in.

        Args:
            packages: A single package name or a list of package names.
            app_settings: The application settings.
            update_first: Whether to update the package lists before installing.

        Returns:
            The packages that were handed to 'apt-get install'.

        Raises:
            subprocess.CalledProcessError: apt-get failed.
        """
        if not isinstance(packages, list):
            packages = [packages]

        if update_first:
            self.update(app_settings)

        packages_to_install = []
        for pkg_name in packages:
            if self.is_installed(pkg_name, app_settings):
                self.logger.info(
                    f"Package '{pkg_name}' is already installed. Skipping."
                )
            else:
                self.logger.info(
                    f"Marking package for installation: {pkg_name}"
                )
                packages_to_install.append(pkg_name)

        if not packages_to_install:
            self.logger.info("All requested packages are already installed.")
            return []

        self.logger.info(
            f"Committing installation for: {', '.join(packages_to_install)}"
        )
        run_elevated_command(
            NONINTERACTIVE_PREFIX
            + ["apt-get", "install", "-yq", "--no-install-recommends"]
            + packages_to_install,
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info("Packages installed successfully.")
        return packages_to_install
