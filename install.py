#!/usr/bin/env python3
# filename: laravel-init/install.py
# -*- coding: utf-8 -*-
"""
Entry point for the Laravel environment bootstrap.

Checks the built-in PHP, installs Composer from its checksum-verified
installer, installs the Laravel installer and Takeout as global Composer
packages, then prints the Docker instructions for this operating system.

Exit codes: 0 success, 1 failed step, 2 installer checksum mismatch,
130 interrupted.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from common.core_utils import setup_logging
from common.orchestrator import Orchestrator
from common.system_utils import detect_os
from installer import config
from installer.config_loader import load_app_settings
from installer.config_models import PresentationSettings
from installer.install_plan import build_install_steps
from installer.presentation import Presenter

logger = logging.getLogger("laravel_init")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Set up PHP tooling for Laravel development: Composer, the Laravel installer and Takeout."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        default=config.DEFAULT_CONFIG_FILE,
        help=f"YAML configuration file (default: {config.DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output even on a terminal",
    )
    parser.add_argument(
        "--log-file", default=None, help="Also append log output to this file"
    )
    parser.add_argument(
        "--bin-dir",
        default=None,
        help="Directory to install the composer executable into (default: /usr/local/bin)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the installation steps in order and exit",
    )
    # Positional arguments from the calling shell are accepted and ignored
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parsed_args = parse_args(args)
    setup_logging(
        logging.DEBUG if parsed_args.verbose else logging.INFO,
        log_file=parsed_args.log_file,
    )

    try:
        app_settings = load_app_settings(
            parsed_args, parsed_args.config, current_logger=logger
        )
    except ValidationError as e:
        logger.error(f"{config.SYMBOLS['error']} Invalid configuration: {e}")
        return config.EXIT_STEP_FAILURE

    setup_logging(
        logging.DEBUG if app_settings.verbose else logging.INFO,
        log_file=app_settings.log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    operating_system = detect_os(current_logger=logger)
    presenter = Presenter(
        PresentationSettings(
            use_color=app_settings.use_color,
            docs_base_url=str(app_settings.takeout.docs_base_url),
        )
    )
    steps = build_install_steps(app_settings)

    if parsed_args.list:
        for i, step in enumerate(steps, 1):
            logger.info(f"  {i}. {step.name} - {step.title}")
        return config.EXIT_SUCCESS

    orchestrator = Orchestrator(
        app_settings, logger, on_step_start=presenter.title
    )
    try:
        run_result = orchestrator.run(steps)
    except KeyboardInterrupt:
        logger.warning(
            f"{config.SYMBOLS['warning']} Interrupted. Temporary files may be left behind."
        )
        return config.EXIT_INTERRUPTED

    if not run_result.ok:
        failed = run_result.failed_step
        logger.debug(
            f"Installation stopped at step '{failed.step if failed else '?'}' with exit code {run_result.exit_code}."
        )
        return run_result.exit_code

    presenter.logo()
    presenter.instructions(operating_system)
    return config.EXIT_SUCCESS


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
