# bootstrap_installer/bs_models.py
# -*- coding: utf-8 -*-
"""
Platform tags, notices and errors specific to the bootstrap steps.

The generic step result types live in common.step_models.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from common.step_models import Notice


class PlatformTag(str, Enum):
    MACOS = "macos"
    DEBIAN = "debian"
    UNSUPPORTED = "unsupported"


class SshKeyNotice(Notice):
    """Public key of a freshly generated identity plus where to register it."""

    public_key: str
    key_path: Path
    registration_hint: str


class BootstrapError(Exception):
    """Raised when a bootstrap step cannot complete."""

    def __init__(
        self,
        message: str,
        step_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.step_name = step_name
        self.original_error = original_error
        super().__init__(message)


class UnsupportedPlatformError(BootstrapError):
    """The host operating system or distribution is not supported."""
