# bootstrap_installer/bs_platform.py
# -*- coding: utf-8 -*-
"""
Determines which supported platform the bootstrapper is running on.

The kernel name comes from platform.system(); on Linux the distribution is
identified from /etc/os-release (ID, then ID_LIKE). Anything other than
macOS or a Debian-family distribution is rejected before the first change
is made to the machine.
"""

import logging
import platform
from pathlib import Path
from typing import Dict, Mapping, Optional

from bootstrap_installer.bs_models import PlatformTag, UnsupportedPlatformError
from common.command_utils import get_symbols, log_bootstrap
from common.step_models import StepOutcome, StepStatus
from installer.config import DEBIAN_DISTRIBUTION_IDS
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

STEP_NAME = "Detect platform"


def parse_os_release(path: Path) -> Dict[str, str]:
    """Reads KEY=value pairs from an os-release file; a missing file yields {}."""
    info: Dict[str, str] = {}
    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return info
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        info[key.strip()] = value.strip().strip("\"'")
    return info


def classify_platform(
    kernel_name: str, os_release: Optional[Mapping[str, str]] = None
) -> PlatformTag:
    """Maps the kernel name and os-release facts to a PlatformTag."""
    kernel = (kernel_name or "").strip().lower()
    if kernel == "darwin":
        return PlatformTag.MACOS
    if kernel != "linux":
        return PlatformTag.UNSUPPORTED

    os_release = os_release or {}
    distro_id = os_release.get("ID", "").lower()
    if distro_id in DEBIAN_DISTRIBUTION_IDS:
        return PlatformTag.DEBIAN
    id_like = os_release.get("ID_LIKE", "").lower().split()
    if any(part in DEBIAN_DISTRIBUTION_IDS for part in id_like):
        return PlatformTag.DEBIAN
    return PlatformTag.UNSUPPORTED


def describe_distribution(os_release: Mapping[str, str]) -> str:
    return (
        os_release.get("PRETTY_NAME")
        or os_release.get("NAME")
        or os_release.get("ID")
        or "unknown distribution"
    )


def detect_platform(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> StepOutcome:
    """
    Detects the platform and stores its tag in context["platform"].

    Raises:
        UnsupportedPlatformError: The kernel or the Linux distribution is
            not supported. The message names what was found.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    kernel_name = platform.system()
    os_release: Dict[str, str] = {}
    if kernel_name == "Linux":
        os_release = parse_os_release(app_settings.os_release_path)

    tag = classify_platform(kernel_name, os_release)
    if tag == PlatformTag.UNSUPPORTED:
        if kernel_name == "Linux":
            message = f"Unsupported Linux distribution: {describe_distribution(os_release)}"
        else:
            message = f"Unsupported operating system: {kernel_name or 'unknown'}"
        raise UnsupportedPlatformError(message, step_name=STEP_NAME)

    context["platform"] = tag
    context["os_release"] = os_release
    detail = describe_distribution(os_release) if os_release else kernel_name
    log_bootstrap(
        f"{symbols.get('info', 'ℹ️')} Detected platform '{tag.value}' ({detail}).",
        "info",
        logger_to_use,
        app_settings,
    )
    return StepOutcome(name=STEP_NAME, status=StepStatus.UNCHANGED)
