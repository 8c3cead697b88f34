# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the bootstrapper,
including defaults, type annotations, and descriptions. Settings are frozen:
one instance is built at start-up and handed to every step.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.config import (
    DEBIAN_PACKAGES,
    HOMEBREW_INSTALL_URL,
    MACOS_PACKAGES,
    OS_RELEASE_PATH,
    PROJECT_SUBDIRECTORIES,
    SYMBOLS,
)

SYMBOLS_DEFAULT: Dict[str, str] = dict(SYMBOLS)

# --- Default Static Values (can be overridden by config file/env/cli) ---
PROJECT_DIR_DEFAULT: str = "~/ansible"
SSH_DIR_DEFAULT: str = "~/.ssh"
SSH_KEY_NAME_DEFAULT: str = "id_ed25519"
SHELL_PROFILE_DEFAULT: str = "~/.zprofile"
CLONE_PARENT_DIR_DEFAULT: str = "~/bin"
PYTHON_EXECUTABLE_DEFAULT: str = "python3"

_VERSION_SPEC_PATTERN = re.compile(r"^(===|==|!=|~=|>=|<=|>|<)\s*\S+")


def _expand(path_value: Optional[Path]) -> Optional[Path]:
    if path_value is None:
        return None
    return Path(path_value).expanduser()


class ProjectLayout(BaseModel):
    """Resolved on-disk locations of the scaffolded Ansible project."""

    model_config = ConfigDict(frozen=True)

    root: Path
    subdirectories: List[Path]
    inventory_file: Path
    playbook_file: Path
    venv_dir: Path

    @property
    def directories(self) -> List[Path]:
        """Every directory the scaffolder guarantees, root first."""
        dirs = [self.root] + list(self.subdirectories)
        for parent in (self.inventory_file.parent, self.playbook_file.parent):
            if parent not in dirs:
                dirs.append(parent)
        return dirs

    @property
    def venv_bin_dir(self) -> Path:
        return self.venv_dir / "bin"


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ANSIBLE_BOOTSTRAP_",
        extra="ignore",
        frozen=True,
    )

    project_dir: Path = Field(
        default=Path(PROJECT_DIR_DEFAULT),
        description="Root directory of the scaffolded Ansible project.",
    )
    venv_dir: Optional[Path] = Field(
        default=None,
        description="Virtual environment location. Defaults to <project_dir>/.venv.",
    )
    inventory_file: Optional[Path] = Field(
        default=None,
        description="Inventory file. Defaults to <project_dir>/inventory/hosts.ini.",
    )
    playbook_file: Optional[Path] = Field(
        default=None,
        description="Playbook file. Defaults to <project_dir>/site.yml.",
    )
    ansible_version: str = Field(
        default="",
        description="pip version constraint appended to 'ansible', e.g. '==10.2.0'. Empty installs the latest release.",
    )
    extra_pip_packages: List[str] = Field(
        default_factory=list,
        description="Additional packages installed next to Ansible (e.g. ansible-lint).",
    )
    python_executable: str = Field(
        default=PYTHON_EXECUTABLE_DEFAULT,
        description="Interpreter used to create the virtual environment.",
    )

    ssh_dir: Path = Field(default=Path(SSH_DIR_DEFAULT), description="SSH configuration directory.")
    ssh_key_name: str = Field(default=SSH_KEY_NAME_DEFAULT, description="File name of the private key.")
    ssh_key_comment: Optional[str] = Field(
        default=None, description="Optional comment embedded in the generated key."
    )

    macos_packages: List[str] = Field(
        default_factory=lambda: list(MACOS_PACKAGES),
        description="Homebrew formulae installed on macOS.",
    )
    debian_packages: List[str] = Field(
        default_factory=lambda: list(DEBIAN_PACKAGES),
        description="apt packages installed on Debian-family systems.",
    )
    homebrew_install_url: str = Field(
        default=HOMEBREW_INSTALL_URL,
        description="Location of the official Homebrew install script.",
    )
    shell_profile: Path = Field(
        default=Path(SHELL_PROFILE_DEFAULT),
        description="Login shell profile that receives the 'brew shellenv' line.",
    )
    os_release_path: Path = Field(
        default=Path(OS_RELEASE_PATH),
        description="Distribution identification file read on Linux.",
    )

    clone_repo_url: Optional[str] = Field(
        default=None,
        description="Optional git repository cloned after the SSH key is in place.",
    )
    clone_parent_dir: Path = Field(
        default=Path(CLONE_PARENT_DIR_DEFAULT),
        description="Directory that receives the cloned repository.",
    )

    run_smoke_test: bool = Field(default=True, description="Run the ping smoke test at the end.")

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @field_validator(
        "project_dir",
        "venv_dir",
        "inventory_file",
        "playbook_file",
        "ssh_dir",
        "shell_profile",
        "clone_parent_dir",
        mode="after",
    )
    @classmethod
    def _expand_user(cls, value: Optional[Path]) -> Optional[Path]:
        return _expand(value)

    @field_validator("ansible_version", mode="before")
    @classmethod
    def _validate_version_spec(cls, value: Optional[str]) -> str:
        if value is None:
            return ""
        value = str(value).strip()
        if value and not _VERSION_SPEC_PATTERN.match(value):
            raise ValueError(
                f"ansible_version '{value}' must be empty or start with a comparison operator (e.g. '==10.2.0')"
            )
        return value

    @property
    def ssh_key_path(self) -> Path:
        return self.ssh_dir / self.ssh_key_name

    @property
    def ssh_public_key_path(self) -> Path:
        return self.ssh_dir / f"{self.ssh_key_name}.pub"

    @property
    def layout(self) -> ProjectLayout:
        root = self.project_dir
        return ProjectLayout(
            root=root,
            subdirectories=[root / name for name in PROJECT_SUBDIRECTORIES],
            inventory_file=self.inventory_file or root / "inventory" / "hosts.ini",
            playbook_file=self.playbook_file or root / "site.yml",
            venv_dir=self.venv_dir or root / ".venv",
        )
