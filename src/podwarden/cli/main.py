#!/usr/bin/env python3
"""
PODWARDEN CLI - Single Manifest Gate
------------------------------------
Thin command-line wrapper around the AuditEngine: parses arguments,
configures logging, prints the formatted errors and selects the exit code.

Exit codes:
    0  manifest is valid
    1  validation, read or parse failure
    2  usage error (raised by argparse)

Author: PodWarden Team
Date: 2026-10-18
"""

import sys
import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from podwarden.cli.formatter import ErrorFormatter
from podwarden.core.engine import AuditEngine

__version__ = "1.0.0"

EXIT_OK = 0
EXIT_FAILURE = 1

# Diagnostics go to stderr so they never mix with the error lines on stdout
err_console = Console(stderr=True)


class PodWardenCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self, engine: Optional[AuditEngine] = None,
                 formatter: Optional[ErrorFormatter] = None):
        """Initializes the CLI and sets up the argument parser."""
        self.engine = engine or AuditEngine()
        self.formatter = formatter or ErrorFormatter()
        self.parser = argparse.ArgumentParser(
            prog="podwarden",
            description="PodWarden - Pod manifest schema validator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        self.parser.add_argument("-v", "--version", action="version", version=f"podwarden v{__version__}")
        self.parser.add_argument("path", help="Path to the YAML manifest to validate")
        self.parser.add_argument("--table", action="store_true", help="Show a summary table after the errors")
        self.parser.add_argument("--debug", action="store_true", help="Enable debug logging on stderr")

    @staticmethod
    def _configure_logging(debug: bool):
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.WARNING,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
            force=True,
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary entry point. Returns the process exit code."""
        args = self.parser.parse_args(argv)
        self._configure_logging(args.debug)

        report = self.engine.audit_file(args.path)
        self.formatter.print_report(report)

        if args.table and report.fatal_error is None:
            self.formatter.print_table(report)

        return EXIT_OK if report.success else EXIT_FAILURE


def main(argv: Optional[List[str]] = None):
    """Application entry point with interrupt handling."""
    try:
        sys.exit(PodWardenCLI().run(argv))
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
