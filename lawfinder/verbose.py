"""Reporting of exploration progress and discovered laws.

Two output channels:
- Laws, warnings and the signature -> console (stdout by default), in
  discovery order, flushed line by line
- Per-round statistics and the same laws -> optional transcript file
"""

from __future__ import annotations

import datetime
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from lawfinder.catalogue.constants import Constant
    from lawfinder.discovery.explore import Law
    from lawfinder.discovery.stats import ExplorationStats


class VerboseLogger:
    """Two-channel reporter.

    Channel 1, console: the signature, missing-instance warnings and
    numbered laws. Nothing time-dependent is written here, so two runs with
    the same seed print identical text.

    Channel 2, transcript file: everything from the console, timestamped,
    plus round statistics.
    """

    def __init__(
        self,
        log_file: str | Path | None = None,
        console: TextIO | None = None,
    ) -> None:
        self._log_file = Path(log_file) if log_file else None
        self._console = console if console is not None else sys.stdout

    @staticmethod
    def _timestamp() -> str:
        return datetime.datetime.now().isoformat(timespec="seconds")

    def _write(self, line: str) -> None:
        self._console.write(line + "\n")
        self._console.flush()
        self._transcript(line)

    def _transcript(self, line: str) -> None:
        if self._log_file is None:
            return
        with open(self._log_file, "a", encoding="utf-8") as f:
            f.write(f"[{self._timestamp()}] {line}\n")

    # ------------------------------------------------------------------
    # Console
    # ------------------------------------------------------------------

    def heading(self, text: str) -> None:
        self._write(f"== {text} ==")

    def signature(self, constants: list[Constant]) -> None:
        """Print the constants being explored, one per line."""
        self.heading("Functions")
        for con in constants:
            self._write(con.signature_line())
        self._write("")

    def warning(self, message: str) -> None:
        self._write(message)

    def law(self, law: Law) -> None:
        self._write(f"{law.number:3d}. {law.text}")

    # ------------------------------------------------------------------
    # Transcript only
    # ------------------------------------------------------------------

    def round_stats(self, stats: ExplorationStats) -> None:
        self._transcript(f"STATS {stats.summary()}")
