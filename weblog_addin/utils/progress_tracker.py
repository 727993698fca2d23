"""
Progress tracking and summary utilities for metadata migration runs.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table
from rich.panel import Panel
import colorlog

from ..models.migration_result import MigrationResult


@dataclass
class ProgressTracker:
    """Tracks progress and results of migration runs."""

    console: Console = field(default_factory=Console)
    results: List[MigrationResult] = field(default_factory=list)

    def setup_colored_logging(self, level: int = logging.INFO) -> None:
        """Setup colorlog for colored console output."""
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s: %(message)s",
            datefmt=None,
            reset=True,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            },
            secondary_log_colors={},
            style='%'
        )

        logger = logging.getLogger()

        # Remove existing handlers to avoid duplicates
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        handler = colorlog.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)

    def add_result(self, result: MigrationResult) -> None:
        self.results.append(result)

    def create_progress_context(self) -> Progress:
        """Create a rich progress context manager."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
            transient=True
        )

    def get_summary(self) -> Dict[str, int]:
        """Count results by action."""
        summary = {'total': len(self.results), 'migrated': 0, 'skipped': 0, 'failed': 0}
        for result in self.results:
            summary[result.action] = summary.get(result.action, 0) + 1
        return summary

    def print_summary(self, dry_run: bool = False) -> None:
        """Print a summary of the migration run."""
        if not self.results:
            self.console.print("[yellow]No documents were processed.[/yellow]")
            return

        summary = self.get_summary()
        migrated = [r for r in self.results if r.action == 'migrated']
        failed = [r for r in self.results if not r.success]

        stats_table = Table(title="Migration Summary", show_header=True, header_style="bold magenta")
        stats_table.add_column("Category", style="cyan", no_wrap=True)
        stats_table.add_column("Count", justify="right", style="green")

        stats_table.add_row("Migrated to front matter", str(summary['migrated']))
        stats_table.add_row("Skipped (no legacy block)", str(summary['skipped']))
        stats_table.add_row("Failed", str(summary['failed']))
        stats_table.add_row("Total documents", str(summary['total']))

        self.console.print(stats_table)
        self.console.print()

        if migrated:
            self._print_results_table("Migrated", migrated, "green")

        if failed:
            self._print_results_table("Failed", failed, "red", show_errors=True)

        if failed:
            status_color = "red"
            status_text = f"Completed with {len(failed)} failures"
        elif not migrated:
            status_color = "yellow"
            status_text = "All documents already use front matter"
        else:
            status_color = "green"
            status_text = "All documents migrated successfully"

        if dry_run:
            status_text += " (dry run, nothing written)"

        self.console.print(
            Panel(
                f"[{status_color}]{status_text}[/{status_color}]",
                title="Final Status",
                border_style=status_color
            )
        )

    def _print_results_table(
        self,
        title: str,
        results: List[MigrationResult],
        color: str,
        show_errors: bool = False
    ) -> None:
        table = Table(title=title, show_header=True, header_style=f"bold {color}")
        table.add_column("Document", style="white", no_wrap=False, max_width=50)
        if show_errors:
            table.add_column("Error", style="red", no_wrap=False, max_width=60)
        else:
            table.add_column("Title", style="dim", no_wrap=False, max_width=40)

        for result in results:
            if show_errors:
                error_msg = result.error_message or "Unknown error"
                if len(error_msg) > 57:
                    error_msg = error_msg[:57] + "..."
                table.add_row(result.source, error_msg)
            else:
                table.add_row(result.source, result.title or "-")

        self.console.print(table)
        self.console.print()

