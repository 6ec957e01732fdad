"""
Line Parser Module - Turns a single header line into a LogEntry

Handles:
- Field extraction with the dialect's parse pattern
- Timestamp parsing and normalization to UTC
- Log level normalization to ERR / WRN / INF
- Exception type and source file extraction

Parsing never fails: anything that cannot be understood falls back to
defaults (current time, INF, raw line as message).
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PureWindowsPath
from typing import Optional

from .formats import LogFormatName, get_format
from .models import LogEntry, LogLevel

logger = logging.getLogger(__name__)

# Timestamp formats to try, most specific first
TIMESTAMP_FORMATS = [
    '%Y-%m-%d %H:%M:%S.%f %z',
    '%Y-%m-%d %H:%M:%S.%f',
    '%Y-%m-%d %H:%M:%S',
]

OFFSET_PATTERN = re.compile(r'[+-]\d{2}:\d{2}$')
EXCEPTION_PATTERN = re.compile(r'(\w+\.\w+Exception):')
SOURCE_PATTERN = re.compile(r'\bin (.+?):line \d+')

# Dialects that write milliseconds after a decimal comma
COMMA_MILLIS_FORMATS = {LogFormatName.NLOG, LogFormatName.LOG4NET}


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of parsing one header line.

    ``reason`` is None when every field came from the line itself; otherwise
    it says which default was used.
    """
    entry: LogEntry
    reason: Optional[str] = None

    @property
    def defaulted(self) -> bool:
        return self.reason is not None


def map_log_level(raw_level: str) -> LogLevel:
    """Map a dialect-specific level name onto the closed level set"""
    level = raw_level.strip().upper()

    if level == "ERR" or any(token in level for token in ("ERROR", "FATAL", "SEVERE")):
        return LogLevel.ERR

    if level == "WRN" or "WARN" in level:
        return LogLevel.WRN

    if level == "INF" or "INFO" in level:
        return LogLevel.INF

    # DEBUG, TRACE, VERBOSE and anything unknown
    return LogLevel.INF


def parse_timestamp(raw: str) -> Optional[datetime]:
    """
    Parse a header timestamp into an aware UTC datetime.

    Timestamps without an offset are taken to be UTC. Returns None when no
    known format applies.
    """
    text = " ".join(raw.split())
    # "+02:00" needs a separating space for the %z format
    if OFFSET_PATTERN.search(text) and not text[-7:-6].isspace():
        text = f"{text[:-6]} {text[-6:]}"

    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    return None


def extract_exception_type(message: str) -> Optional[str]:
    match = EXCEPTION_PATTERN.search(message)
    return match.group(1) if match else None


def extract_source_file(message: str) -> Optional[str]:
    """Basename of the first "in <path>:line <N>" reference"""
    match = SOURCE_PATTERN.search(message)
    if not match:
        return None
    # PureWindowsPath splits on both "/" and "\"
    return PureWindowsPath(match.group(1).strip()).name or None


def parse_header_line_outcome(line: str, fmt: LogFormatName) -> ParseOutcome:
    """Parse a header line, recording which defaults (if any) were applied"""
    entry = LogEntry(
        timestamp=datetime.now(timezone.utc),
        level=LogLevel.INF,
        message=line,
    )

    try:
        match = get_format(fmt).parse_pattern.match(line)
        if not match:
            return ParseOutcome(entry, "no field match")

        raw_timestamp, raw_level, raw_message = match.group(1), match.group(2), match.group(3) or ""
        reason = None

        if fmt in COMMA_MILLIS_FORMATS:
            raw_timestamp = raw_timestamp.replace(",", ".")

        timestamp = parse_timestamp(raw_timestamp)
        if timestamp is not None:
            entry.timestamp = timestamp
        else:
            reason = f"unparseable timestamp {raw_timestamp!r}"

        entry.level = map_log_level(raw_level)

        message = raw_message.strip()
        if message:
            entry.message = message
        else:
            reason = reason or "empty message"

        if "Exception" in entry.message:
            entry.exception_type = extract_exception_type(entry.message)
            entry.source_file = extract_source_file(entry.message)

        return ParseOutcome(entry, reason)

    except Exception as e:
        logger.error(f"Error parsing log line {line!r}: {e}")
        return ParseOutcome(entry, f"parse error: {e}")


def parse_header_line(line: str, fmt: LogFormatName) -> LogEntry:
    """
    Parse a single header line into a LogEntry

    Args:
        line: The header line (first line of an entry)
        fmt: Dialect the line belongs to

    Returns:
        LogEntry with defaults for anything that could not be parsed
    """
    outcome = parse_header_line_outcome(line, fmt)
    if outcome.defaulted:
        logger.debug(f"Defaulted fields for line {line!r}: {outcome.reason}")
    return outcome.entry
