"""
Simple logging system for fyne-doctor.

Log lines go to stderr so that stdout only carries the report (which may be
JSON), and optionally to an append-only log file.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO


class SimpleLogger:
    """Simple logger that writes to a console stream and an optional file."""

    def __init__(
        self,
        log_file: Optional[Path] = None,
        *,
        verbose: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.log_file = log_file
        self.verbose = verbose
        self.stream = stream

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"\n{'='*60}\n")
                f.write(f"Session started: {datetime.now().isoformat()}\n")
                f.write(f"{'='*60}\n")

    def log(self, message: str, prefix: str = "") -> None:
        """Log a message to the console stream and file.

        Args:
            message: The message to log
            prefix: Optional prefix like [INFO], [ERROR], etc.
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if prefix:
            formatted = f"[{timestamp}] {prefix} {message}"
        else:
            formatted = f"[{timestamp}] {message}"

        # Resolved per call so pytest's capsys sees the swapped stream
        output = self.stream if self.stream is not None else sys.stderr
        print(formatted, file=output, flush=True)

        if self.log_file:
            try:
                with open(self.log_file, 'a', encoding='utf-8') as f:
                    f.write(formatted + '\n')
            except OSError:
                pass  # Don't fail on logging errors

    def section(self, title: str) -> None:
        """Print a section header."""
        self.log("")
        self.log("=" * 60)
        self.log(title.center(60))
        self.log("=" * 60)

    def debug(self, message: str) -> None:
        """Log a debug message; dropped unless verbose."""
        if self.verbose:
            self.log(message, prefix="[DEBUG]")

    def success(self, message: str) -> None:
        """Log a success message."""
        self.log(message, prefix="[SUCCESS]")

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log(message, prefix="[ERROR]")

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.log(message, prefix="[WARNING]")

    def info(self, message: str) -> None:
        """Log an info message."""
        self.log(message, prefix="[INFO]")
