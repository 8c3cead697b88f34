# bootstrap_installer/bs_clone.py
# -*- coding: utf-8 -*-
"""
Optionally clones a companion git repository (for example the operator's
own playbook collection) once the SSH key exists. An existing checkout is
left alone; it is not pulled or reset.
"""

import logging
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_bootstrap, run_command
from common.file_utils import ensure_directory
from common.step_models import StepOutcome, StepStatus
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Clone companion repository"


def repository_name(repo_url: str) -> str:
    """
    Directory name git would pick for a clone URL.

    Handles https URLs and scp-style 'git@host:owner/repo.git' forms.
    """
    trimmed = repo_url.rstrip("/")
    name = trimmed.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise ValueError(f"Cannot derive a directory name from '{repo_url}'")
    return name


def clone_repository(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    repo_url = app_settings.clone_repo_url

    if not repo_url:
        return StepOutcome(
            name=STEP_NAME,
            status=StepStatus.SKIPPED,
            message="No companion repository configured.",
        )

    parent_dir: Path = app_settings.clone_parent_dir
    destination = parent_dir / repository_name(repo_url)
    context["clone_destination"] = destination

    if destination.exists():
        return StepOutcome(
            name=STEP_NAME,
            status=StepStatus.UNCHANGED,
            message=f"Project directory {destination} already exists.",
        )

    log_bootstrap(
        f"{symbols.get('gear', '⚙️')} Cloning {repo_url} into {destination}...",
        "info",
        logger_to_use,
        app_settings,
    )
    ensure_directory(parent_dir, app_settings, current_logger=logger_to_use)
    run_command(
        ["git", "clone", repo_url, destination],
        app_settings,
        current_logger=logger_to_use,
    )
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.CHANGED,
        message=f"{symbols.get('success', '✅')} Cloned {repo_url}.",
    )
