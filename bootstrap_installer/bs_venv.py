# bootstrap_installer/bs_venv.py
# -*- coding: utf-8 -*-
"""
Creates the project's virtual environment and installs Ansible into it.

The environment holds no user data, so running 'python -m venv' over an
existing one each time is fine; pip then only changes what is out of date.
"""

import logging
from pathlib import Path
from typing import List, Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from bootstrap_installer.bs_models import BootstrapError
from common.command_utils import get_symbols, log_bootstrap, run_command
from common.step_models import StepOutcome, StepStatus
from installer.config import ANSIBLE_PACKAGE, PIP_BOOTSTRAP_PACKAGES
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Provision Ansible environment"


def ansible_requirement(version_spec: str) -> str:
    """'ansible' followed by the optional constraint, e.g. 'ansible==10.2.0'."""
    return f"{ANSIBLE_PACKAGE}{version_spec.strip()}"


def version_satisfies(version_spec: str, installed: Optional[str]) -> bool:
    """
    True when the installed version meets the pip constraint.

    Comparison follows PEP 440, so "==10.2" accepts 10.2.0. An empty
    constraint accepts anything, including an unknown version.
    """
    spec = version_spec.strip()
    if not spec:
        return True
    if installed is None:
        return False
    try:
        specifiers = SpecifierSet(spec)
    except InvalidSpecifier as e:
        raise BootstrapError(
            f"Invalid Ansible version constraint '{spec}'", step_name=STEP_NAME, original_error=e
        ) from e
    try:
        version = Version(installed)
    except InvalidVersion:
        # Legacy version strings can only satisfy an arbitrary-equality pin.
        return spec.startswith("===") and spec[3:].strip() == installed
    return specifiers.contains(version, prereleases=True)


def parse_pip_show_version(pip_show_output: str) -> Optional[str]:
    for line in pip_show_output.splitlines():
        key, _, value = line.partition(":")
        if key.strip().lower() == "version":
            return value.strip()
    return None


def venv_python(venv_dir: Path) -> Path:
    return venv_dir / "bin" / "python"


def installed_ansible_version(
    venv_dir: Path,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    result = run_command(
        [venv_python(venv_dir), "-m", "pip", "show", ANSIBLE_PACKAGE],
        app_settings,
        capture_output=True,
        current_logger=current_logger,
    )
    return parse_pip_show_version(result.stdout or "")


def provision_ansible_environment(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    """
    Creates the venv, upgrades pip and wheel, installs Ansible and reports
    the installed version.

    The version is stored in context["ansible_version"].

    Raises:
        subprocess.CalledProcessError: venv creation or a pip command failed.
        BootstrapError: The installed version does not meet the
            requested constraint.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    venv_dir = app_settings.layout.venv_dir
    python = venv_python(venv_dir)
    version_spec = app_settings.ansible_version

    log_bootstrap(
        f"{symbols.get('package', '📦')} Creating virtualenv at {venv_dir} and installing Ansible...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_command(
        [app_settings.python_executable, "-m", "venv", venv_dir],
        app_settings,
        current_logger=logger_to_use,
    )
    run_command(
        [python, "-m", "pip", "install", "--upgrade"] + PIP_BOOTSTRAP_PACKAGES,
        app_settings,
        current_logger=logger_to_use,
    )

    requirements: List[str] = [ansible_requirement(version_spec)]
    requirements += list(app_settings.extra_pip_packages)
    run_command(
        [python, "-m", "pip", "install"] + requirements,
        app_settings,
        current_logger=logger_to_use,
    )

    version_output = run_command(
        [venv_dir / "bin" / "ansible", "--version"],
        app_settings,
        capture_output=True,
        current_logger=logger_to_use,
    )
    first_line = (version_output.stdout or "").strip().splitlines()
    if first_line:
        log_bootstrap(first_line[0], "info", logger_to_use, app_settings)

    installed = installed_ansible_version(venv_dir, app_settings, logger_to_use)
    if not version_satisfies(version_spec, installed):
        raise BootstrapError(
            f"Requested ansible{version_spec} but found {installed or 'no ansible distribution'} in {venv_dir}",
            step_name=STEP_NAME,
        )

    context["ansible_version"] = installed
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.CHANGED,
        message=f"{symbols.get('success', '✅')} Ansible {installed or '(unknown version)'} installed in {venv_dir}.",
    )
