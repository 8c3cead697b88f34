# bootstrap_installer/bs_scaffold.py
# -*- coding: utf-8 -*-
"""
Creates the minimal Ansible project layout: the project root, inventory,
group_vars, host_vars and roles directories, a default inventory and a
default playbook. Files that already exist are left exactly as they are.
"""

import logging
from typing import List, Optional

from common.command_utils import get_symbols, log_bootstrap
from common.file_utils import ensure_directory, write_file_if_absent
from common.step_models import StepOutcome, StepStatus
from installer.config import DEFAULT_INVENTORY_CONTENT, DEFAULT_PLAYBOOK_CONTENT
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Scaffold project"


def scaffold_project(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    layout = app_settings.layout

    log_bootstrap(
        f"{symbols.get('gear', '⚙️')} Creating Ansible project at {layout.root}...",
        "info",
        logger_to_use,
        app_settings,
    )

    created: List[str] = []
    for directory in layout.directories:
        if ensure_directory(directory, app_settings, current_logger=logger_to_use):
            created.append(str(directory))

    templates = (
        (layout.inventory_file, DEFAULT_INVENTORY_CONTENT),
        (layout.playbook_file, DEFAULT_PLAYBOOK_CONTENT),
    )
    for file_path, content in templates:
        if write_file_if_absent(file_path, content, app_settings, current_logger=logger_to_use):
            created.append(str(file_path))

    context["project_layout"] = layout
    if created:
        return StepOutcome(
            name=STEP_NAME,
            status=StepStatus.CHANGED,
            message=f"{symbols.get('success', '✅')} Created {len(created)} project item(s) under {layout.root}.",
        )
    return StepOutcome(
        name=STEP_NAME,
        status=StepStatus.UNCHANGED,
        message=f"Project at {layout.root} already complete.",
    )
