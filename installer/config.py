# installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants for the Ansible workstation bootstrapper.

This module defines truly static values, such as default package lists for
each supported platform, logging symbols, the scaffold templates and the
fixed names used inside the generated project.

Runtime configuration (paths, version constraint, optional steps) is handled
by 'installer/config_models.py' and 'installer/config_loader.py'.
"""

SCRIPT_VERSION: str = "1.0"

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "key": "🔑",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

MACOS_PACKAGES: list[str] = ["python", "git", "openssh"]

DEBIAN_PACKAGES: list[str] = [
    "python3",
    "python3-venv",
    "python3-pip",
    "git",
    "openssh-client",
]

DEBIAN_DISTRIBUTION_IDS: frozenset[str] = frozenset({"debian", "ubuntu"})

HOMEBREW_INSTALL_URL: str = (
    "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
)
HOMEBREW_PREFIX_ARM64: str = "/opt/homebrew"
HOMEBREW_PREFIX_X86_64: str = "/usr/local"

OS_RELEASE_PATH: str = "/etc/os-release"

ANSIBLE_PACKAGE: str = "ansible"
PIP_BOOTSTRAP_PACKAGES: list[str] = ["pip", "wheel"]

SSH_KEY_TYPE: str = "ed25519"
SSH_KEY_REGISTRATION_HINT: str = (
    "Add this key to GitHub: https://github.com/settings/keys"
)

# Subdirectories created under the project root, in creation order.
PROJECT_SUBDIRECTORIES: tuple[str, ...] = (
    "inventory",
    "group_vars",
    "host_vars",
    "roles",
)

DEFAULT_INVENTORY_CONTENT: str = """\
[local]
localhost ansible_connection=local
"""

DEFAULT_PLAYBOOK_CONTENT: str = """\
---
- name: Bootstrap check
  hosts: all
  gather_facts: true
  tasks:
    - name: Ping
      ansible.builtin.ping:

    - name: Show Python version on target
      ansible.builtin.debug:
        var: ansible_python.version
"""
