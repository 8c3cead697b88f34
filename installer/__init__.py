"""
Installer package for the Ansible workstation bootstrapper.

This package holds the configuration layer (static constants, pydantic
settings and the loader) and the command-line entry point.
"""
