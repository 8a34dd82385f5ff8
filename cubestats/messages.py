"""Error codes, the package exception and console reporting helpers."""

from __future__ import annotations

import sys
import time
from enum import IntEnum

_RULE = "_" * 76
_BAR_SIZE = 50


class ErrorCode(IntEnum):
    """Exit codes that describe why processing failed."""

    SUCCESS = 0
    FAILURE = 1
    NULL_PTR = 2
    MEM_ALLOC = 3
    INDEX_RANGE = 4
    FILE_ACCESS = 5
    INT_OVERFLOW = 6
    USER_INPUT = 7
    NO_SRC_FOUND = 8


class CubeStatsError(Exception):
    """Raised when processing cannot continue; carries an error code."""

    def __init__(self, message: str, code: ErrorCode | int = ErrorCode.FAILURE) -> None:
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)

    def __str__(self) -> str:
        return self.message


def message(text: str) -> None:
    """Print an informational message to standard output."""
    print(f"  {text}", file=sys.stdout)


def message_verb(verbosity: bool, text: str) -> None:
    """Print an informational message only if ``verbosity`` is true."""
    if verbosity:
        message(text)


def status(text: str) -> None:
    """Print a highlighted status banner to standard output."""
    sys.stdout.write(
        f"\33[36m{_RULE}\33[0;1m\n\n {text}\n\33[0;36m{_RULE}\33[0m\n\n"
    )


def warning(text: str) -> None:
    """Print a warning message to standard error."""
    sys.stderr.write(f"\33[33mWARNING: {text}\33[0m\n")


def warning_verb(verbosity: bool, text: str) -> None:
    """Print a warning message only if ``verbosity`` is true."""
    if verbosity:
        warning(text)


def progress_bar(text: str, progress: int, maximum: int) -> None:
    """Draw or update a progress bar; finishes the line once complete.

    Nothing is printed if ``maximum`` is zero or smaller than ``progress``.
    """
    if not maximum or maximum < progress:
        return

    filled = _BAR_SIZE * progress // maximum
    percent = 100 * progress // maximum
    ongoing = progress < maximum

    colour = "\33[33m" if ongoing else "\33[32m"
    padding = " " * (_BAR_SIZE - filled) if ongoing else ""
    ending = "" if ongoing else "\n\n"

    sys.stdout.write(
        f"  {text} |{colour}{'=' * filled}{padding}\33[0m| {percent}%\r{ending}"
    )
    sys.stdout.flush()


def _hms(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def timestamp(start: float, start_clock: float) -> None:
    """Print wall-clock and CPU time elapsed since the given start values.

    ``start`` is a value from :func:`time.time` and ``start_clock`` one
    from :func:`time.process_time`.
    """
    elapsed = max(0, int(time.time() - start))
    elapsed_cpu = max(0, int(time.process_time() - start_clock))
    sys.stdout.write(f"\n\33[36m  Elapsed time: {_hms(elapsed)} h\n")
    sys.stdout.write(f"  CPU time:     {_hms(elapsed_cpu)} h\33[0m\n\n")