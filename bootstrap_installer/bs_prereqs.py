# bootstrap_installer/bs_prereqs.py
# -*- coding: utf-8 -*-
"""
Installs the packages the rest of the bootstrap needs: a Python runtime
with venv and pip, git and an SSH client.

macOS uses Homebrew (installing Homebrew first when it is missing);
Debian-family systems use apt. Package managers already skip installed
packages, so the step is safe to repeat.
"""

import logging
from typing import List, Optional

from bootstrap_installer.bs_models import PlatformTag, UnsupportedPlatformError
from common.command_utils import get_symbols, log_bootstrap, validate_elevation
from common.debian.apt_manager import AptManager
from common.macos.brew_manager import BrewManager
from common.step_models import Notice, StepOutcome, StepStatus
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Install prerequisites"

CLT_WARNING = (
    "If prompted, complete the Command Line Tools install, then re-run this script."
)


def install_prereqs_macos(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> StepOutcome:
    """
    Ensures the Command Line Tools and Homebrew, then installs the formulae.

    A missing toolchain only triggers its installer and downgrades the
    outcome to a warning; later steps fail on their own if they need it.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_bootstrap(
        f"{symbols.get('package', '📦')} Installing prerequisites for macOS...",
        "info",
        logger_to_use,
        app_settings,
    )
    brew = BrewManager(logger=logger_to_use)
    notices: List[Notice] = []

    if not brew.command_line_tools_installed(app_settings):
        brew.trigger_command_line_tools_install(app_settings)
        notices.append(Notice(level="warning", lines=(CLT_WARNING,)))

    if not brew.find_brew():
        log_bootstrap(
            f"{symbols.get('gear', '⚙️')} Homebrew not found. Installing it...",
            "info",
            logger_to_use,
            app_settings,
        )
        brew.install_homebrew(app_settings)

    brew.update(app_settings)
    installed = brew.install(list(app_settings.macos_packages), app_settings)

    if notices:
        return StepOutcome(
            name=STEP_NAME,
            status=StepStatus.WARNING,
            message="Command Line Tools are not installed yet.",
            notices=tuple(notices),
        )
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.CHANGED if installed else StepStatus.UNCHANGED,
        message=f"{symbols.get('success', '✅')} Homebrew prerequisites ensured.",
    )


def install_prereqs_debian(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> StepOutcome:
    """Validates sudo once, refreshes apt indexes and installs missing packages."""
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_bootstrap(
        f"{symbols.get('package', '📦')} Installing prerequisites for Debian/Ubuntu...",
        "info",
        logger_to_use,
        app_settings,
    )
    validate_elevation(app_settings, logger_to_use)

    apt = AptManager(logger=logger_to_use)
    installed = apt.install(
        list(app_settings.debian_packages), app_settings, update_first=True
    )
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.CHANGED if installed else StepStatus.UNCHANGED,
        message=f"{symbols.get('success', '✅')} apt prerequisites ensured.",
    )


def install_prerequisites(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    """
    Installs the prerequisite packages for the platform in context["platform"].

    Raises:
        UnsupportedPlatformError: No supported platform was detected.
        subprocess.CalledProcessError: A package manager command failed.
    """
    tag = context.get("platform", PlatformTag.UNSUPPORTED)
    if tag == PlatformTag.MACOS:
        return install_prereqs_macos(app_settings, current_logger)
    if tag == PlatformTag.DEBIAN:
        return install_prereqs_debian(app_settings, current_logger)
    raise UnsupportedPlatformError(
        f"No prerequisite installer for platform '{getattr(tag, 'value', tag)}'",
        step_name=STEP_NAME,
    )
