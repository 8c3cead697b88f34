# bootstrap_installer/__init__.py
# -*- coding: utf-8 -*-
"""
Bootstrap steps for an Ansible control workstation.

Each bs_* module contributes one idempotent step of the provisioning
sequence; bs_orchestrator wires them together in their fixed order.
"""
