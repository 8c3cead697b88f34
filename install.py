#!/usr/bin/env python3
# filename: install.py
# -*- coding: utf-8 -*-
"""
Entry point for the Ansible workstation bootstrapper.
"""

import sys

from installer.main_installer import main

if __name__ == "__main__":
    sys.exit(main())
