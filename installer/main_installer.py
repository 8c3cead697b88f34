# installer/main_installer.py
# -*- coding: utf-8 -*-
"""
Command-line entry point for the Ansible workstation bootstrapper.

Running without arguments performs the full bootstrap with the default
configuration. Flags only override individual settings.
"""

import argparse
import sys
from typing import List, Optional

from bootstrap_installer.bs_orchestrator import run_bootstrap
from common.logging_config import setup_logging
from installer.config import SCRIPT_VERSION
from installer.config_loader import CONFIG_FILE_DEFAULT, load_app_settings

SERVICE_NAME = "ansible-bootstrap"


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog=SERVICE_NAME,
        description=(
            "Prepare this machine as an Ansible control node: install "
            "prerequisites, create an SSH key, scaffold a project, install "
            "Ansible into a virtualenv and run a ping smoke test."
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {SCRIPT_VERSION}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE_DEFAULT,
        help="YAML configuration file (default: %(default)s, optional)",
    )
    parser.add_argument(
        "--log-file", default=None, help="Also write JSON log records here"
    )

    config_group = parser.add_argument_group("Configuration Overrides")
    config_group.add_argument(
        "--project-dir", default=None, help="Ansible project directory"
    )
    config_group.add_argument(
        "--venv-dir", default=None, help="Virtual environment directory"
    )
    config_group.add_argument(
        "--ansible-version",
        default=None,
        help="pip constraint for Ansible, e.g. '==10.2.0' (default: latest)",
    )
    config_group.add_argument(
        "--clone-repo",
        default=None,
        metavar="URL",
        help="Git repository to clone into the clone directory (~/bin)",
    )
    config_group.add_argument(
        "--skip-smoke-test",
        action="store_true",
        help="Do not run the final 'ansible all -m ping'",
    )
    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parsed_args = parse_args(args)
    logger = setup_logging(
        SERVICE_NAME,
        log_level="DEBUG" if parsed_args.verbose else None,
        enable_file=bool(parsed_args.log_file),
        log_file_path=parsed_args.log_file,
    )

    try:
        app_settings = load_app_settings(
            cli_args=parsed_args,
            config_file_path=parsed_args.config,
            current_logger=logger,
        )
        run_bootstrap(app_settings, logger)
    except SystemExit as e:
        if e.code is None or isinstance(e.code, int):
            return e.code or 0
        # The config loader exits with the validation message as the code.
        logger.error(str(e.code))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
