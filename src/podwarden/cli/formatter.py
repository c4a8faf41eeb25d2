# src/podwarden/cli/formatter.py
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from podwarden.core.models import AuditReport, ValidationError

# Initialize the Rich console for terminal output
console = Console()


class ErrorFormatter:
    """
    ErrorFormatter: turns an AuditReport into the lines the user sees.
    Plain lines go to stdout verbatim; the summary table is optional.
    """

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console

    @staticmethod
    def format_error(error: ValidationError, file_name: str) -> str:
        """
        Renders one error as "<basename>:<line> <message>",
        or "<basename> <message>" when the error has no line.
        """
        base = Path(file_name).name
        if error.line > 0:
            return f"{base}:{error.line} {error.message}"
        return f"{base} {error.message}"

    def format_report(self, report: AuditReport) -> List[str]:
        base = Path(report.file_path).name
        if report.status == "READ_ERROR":
            return [f"{base}: {report.fatal_error}"]
        if report.status == "PARSE_ERROR":
            if report.fatal_line:
                return [f"{base}:{report.fatal_line} {report.fatal_error}"]
            return [f"{base}: {report.fatal_error}"]
        return [self.format_error(e, report.file_path) for e in report.errors]

    def print_report(self, report: AuditReport):
        """Writes every formatted line, without markup or wrapping."""
        for line in self.format_report(report):
            self.console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def print_table(self, report: AuditReport):
        """
        Builds the summary table shown after the error lines.
        """
        table = Table(title=f"PodWarden Report: {Path(report.file_path).name}",
                      show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Field", style="cyan")
        table.add_column("Message")

        for error in report.errors:
            table.add_row(str(error.line) if error.line else "-", Text(error.field), Text(error.message))

        status_icon = "✅" if report.success else "❌"
        table.caption = f"{status_icon} {report.status} - {len(report.errors)} error(s)"
        self.console.print(table)
