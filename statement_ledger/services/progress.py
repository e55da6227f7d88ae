from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

One bar across the statement files of a run. In non-TTY environments (CI,
pipes) the bar is disabled so log output stays free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Per-file progress bar for a ledger run."""

    def __init__(self, total_files: int, *, description: str = "Ingesting statements") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.failed_files = 0
        self.current_name: str | None = None

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        self.current_name = file_path.name
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True) -> None:
        """Advance the bar; a failed file is counted and printed above it with ✗."""
        if not success:
            self.failed_files += 1
        if self.pbar is not None:
            if not success:
                self.pbar.write(f"  {self.current_name} ✗")
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        """Show running stats (e.g. transactions=, failed=) next to the bar."""
        if self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
