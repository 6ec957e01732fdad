"""
File Parser Module - Rebuilds multi-line log entries from a whole file

Handles:
- Format detection from the first lines of a file
- Grouping continuation lines (stack traces, wrapped messages) under their header
- Stack trace capture
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .formats import DETECTION_SAMPLE_SIZE, LogFormatName, detect_format, get_format
from .line_parser import parse_header_line
from .models import LogEntry

logger = logging.getLogger(__name__)

STACK_FRAME_MARKER = " at "


class AccumulatorState(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


class EntryAccumulator:
    """
    Two-state machine that folds physical lines into logical entries.

    IDLE: no entry in progress, non-header lines are dropped.
    ACCUMULATING: an entry is in progress, non-header lines are appended to it.
    A header line always flushes the entry in progress and starts a new one.
    """

    def __init__(self, fmt: LogFormatName):
        self.fmt = fmt
        self.start_pattern = get_format(fmt).start_pattern
        self.current: Optional[LogEntry] = None
        # True once a non-frame line has ended the first stack trace run
        self._trace_closed = False

    @property
    def state(self) -> AccumulatorState:
        if self.current is None:
            return AccumulatorState.IDLE
        return AccumulatorState.ACCUMULATING

    def is_header(self, line: str) -> bool:
        return bool(self.start_pattern.match(line))

    def feed(self, line: str) -> Optional[LogEntry]:
        """
        Consume one line.

        Returns:
            The previous entry when this line completed it, otherwise None
        """
        if self.is_header(line):
            finished = self.flush()
            self.current = parse_header_line(line, self.fmt)
            self._trace_closed = False
            return finished

        if self.current is not None:
            self._append_continuation(line)

        return None

    def flush(self) -> Optional[LogEntry]:
        """Hand back the entry in progress and return to IDLE"""
        finished = self.current
        self.current = None
        return finished

    def _append_continuation(self, line: str) -> None:
        entry = self.current
        entry.message += "\n" + line

        if self._trace_closed:
            return

        if STACK_FRAME_MARKER in line:
            entry.stack_trace = (entry.stack_trace or "") + line + "\n"
        elif entry.stack_trace:
            self._trace_closed = True


def parse_lines(lines: Iterable[str], fmt: Optional[LogFormatName] = None) -> List[LogEntry]:
    """
    Parse in-memory log lines into entries

    Args:
        lines: Physical lines without line terminators
        fmt: Dialect to use (detected from the first lines when None)

    Returns:
        List of LogEntry objects in file order
    """
    lines = list(lines)
    if fmt is None:
        fmt = detect_format(lines[:DETECTION_SAMPLE_SIZE])

    accumulator = EntryAccumulator(fmt)
    entries: List[LogEntry] = []

    for line in lines:
        finished = accumulator.feed(line)
        if finished is not None:
            entries.append(finished)

    last = accumulator.flush()
    if last is not None:
        entries.append(last)

    return entries


def parse_file(file_path: Union[str, Path]) -> List[LogEntry]:
    """
    Read and parse a whole log file

    Args:
        file_path: Path to the log file

    Returns:
        List of LogEntry objects; empty when the file is missing, empty or unreadable
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        logger.warning(f"File does not exist: {file_path}")
        return []

    try:
        content = file_path.read_text(encoding='utf-8-sig', errors='replace')
    except OSError as e:
        logger.error(f"Error reading log file {file_path}: {e}")
        return []

    lines = content.splitlines()
    if not lines:
        logger.warning(f"File is empty: {file_path}")
        return []

    try:
        fmt = detect_format(lines[:DETECTION_SAMPLE_SIZE])
        logger.debug(f"Detected {fmt.value} format for {file_path.name}")
        entries = parse_lines(lines, fmt)
    except Exception as e:
        logger.error(f"Error parsing log file {file_path}: {e}", exc_info=True)
        return []

    logger.info(f"Parsed {len(entries)} entries from {file_path.name}")
    return entries
