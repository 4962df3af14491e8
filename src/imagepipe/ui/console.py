"""Console output formatting utilities for imagepipe."""

from __future__ import annotations

import sys
import threading
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, progress_to_stderr: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            progress_to_stderr: If True, progress lines go to stderr and
                stdout only carries results of the command (dry-run objects,
                parameter values)
        """
        self.debug = debug
        self.progress_to_stderr = progress_to_stderr
        # steps report from worker threads; keep their lines whole
        self._lock = threading.Lock()

    def _print(self, *lines: str, err: bool = False) -> None:
        stream = sys.stderr if err or self.progress_to_stderr else sys.stdout
        with self._lock:
            for line in lines:
                print(line, file=stream)

    def print_header(self, title: str) -> None:
        """Print a section header."""
        self._print(f"\n{title}", "-" * len(title))

    def print_run_started(self, namespace: str, step_count: int, dry: bool = False) -> None:
        """Print run start information."""
        lines = ["\nRUN STARTED", f"Namespace: {namespace}", f"Steps: {step_count}"]
        if dry:
            lines.append("Mode: dry-run")
        self._print(*lines, "")

    def print_plan(self, levels: list[list[str]]) -> None:
        """Print the order steps will run in, one line per parallel level."""
        lines = ["PLAN"]
        for idx, level in enumerate(levels, start=1):
            lines.append(f"  {idx}: {', '.join(level)}")
        self._print(*lines)

    def print_step_start(self, name: str, description: str) -> None:
        self._print(f"\nSTEP STARTED: {name}", f"  {description}")

    def print_success(self, name: str) -> None:
        self._print(f"STEP SUCCEEDED: {name}")

    def print_step_skipped(self, name: str, reason: str) -> None:
        self._print(f"STEP SKIPPED: {name} ({reason})")

    def print_failure(
        self,
        name: str,
        reason: str,
        description: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message.

        Args:
            name: Step name
            reason: Failure reason/error message
            description: Optional human readable intent of the step
            hint: Optional hint for user
        """
        lines = [f"STEP FAILED: {name}"]
        if description:
            lines.append(f"  {description}")
        if self.debug:
            lines.append(f"Error details: {reason}")
        else:
            # first line only outside debug mode
            lines.append(f"Error: {reason.splitlines()[0] if reason else 'Unknown error'}")
        if hint:
            lines.append(f"Hint: {hint}")
        self._print(*lines)

    def print_results(self, results: dict[str, str]) -> None:
        """Print final results summary."""
        lines = ["\n" + "=" * 40, "RESULTS", "=" * 40]
        for step, status in results.items():
            status_display = status.upper() if status != "ok" else "SUCCESS"
            lines.append(f"  {step}: {status_display}")
        self._print(*lines)

    def print_parameter(self, name: str, value: str) -> None:
        # command output, never redirected
        with self._lock:
            print(f"{name}={value}", file=sys.stdout)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """Print structured error message to stderr."""
        lines = [f"\nERROR: {title}", message]
        if details:
            lines.extend(f"  {detail}" for detail in details)
        if suggestion:
            lines.append(f"\n{suggestion}")
        self._print(*lines, err=True)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            self._print(f"Error: {exc}", err=True)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self._print(f"[DEBUG] {message}", err=True)


# Global console instance (initialized by the CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
