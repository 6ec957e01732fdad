"""
File Selector Module - Chooses which files in a log directory are worth parsing

Handles:
- Listing regular files in the log directory
- Date extraction from file names (20240101, 2024-01-01, 2024_01_01)
- Falling back to the modification time when the name carries no date
- Directory listings with file metadata
"""
import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from .models import LogFileInfo

logger = logging.getLogger(__name__)

# Tried in order, first match that forms a real date wins
FILENAME_DATE_PATTERNS = [
    re.compile(r'(\d{4})(\d{2})(\d{2})'),    # yyyyMMdd
    re.compile(r'(\d{4})-(\d{2})-(\d{2})'),  # yyyy-MM-dd
    re.compile(r'(\d{4})_(\d{2})_(\d{2})'),  # yyyy_MM_dd
]


def _list_regular_files(directory: Path) -> List[Path]:
    return sorted(
        (path for path in directory.iterdir() if path.is_file()),
        key=lambda p: p.name,
    )


def date_from_filename(file_name: str) -> Optional[date]:
    """Extract a calendar date embedded in a file name (extension ignored)"""
    stem = Path(file_name).stem

    for pattern in FILENAME_DATE_PATTERNS:
        match = pattern.search(stem)
        if not match:
            continue
        year, month, day = (int(group) for group in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            continue

    return None


def date_from_mtime(file_path: Path) -> Optional[date]:
    """UTC calendar date of the file's last modification"""
    try:
        mtime = file_path.stat().st_mtime
    except OSError:
        return None
    return datetime.fromtimestamp(mtime, tz=timezone.utc).date()


def resolve_file_date(file_path: Path) -> Optional[date]:
    """Date a log file belongs to: from its name if possible, else its mtime"""
    return date_from_filename(file_path.name) or date_from_mtime(file_path)


def _as_date(value) -> Optional[date]:
    """Accept a date, a datetime or a YYYY-MM-DD string"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def _in_range(file_date: Optional[date], from_date: Optional[date], to_date: Optional[date]) -> bool:
    if file_date is None:
        # Undatable files are kept
        return True
    if from_date and file_date < from_date:
        return False
    if to_date and file_date > to_date:
        return False
    return True


def select_files(directory: Union[str, Path], criteria) -> List[str]:
    """
    Get the files of a log directory relevant to a date range

    Args:
        directory: Log directory (not searched recursively)
        criteria: Object with optional ``from_date`` / ``to_date`` dates

    Returns:
        File paths; every file when no bound is given or when the date filter
        would leave nothing
    """
    directory = Path(directory)

    if not directory.is_dir():
        logger.warning(f"Log directory does not exist: {directory}")
        return []

    try:
        all_files = _list_regular_files(directory)
    except OSError as e:
        logger.error(f"Error listing log directory {directory}: {e}")
        return []

    try:
        from_date = _as_date(getattr(criteria, "from_date", None))
        to_date = _as_date(getattr(criteria, "to_date", None))
    except ValueError as e:
        logger.error(f"Invalid date range for {directory}: {e}")
        return []

    if not from_date and not to_date:
        return [str(path) for path in all_files]

    relevant = [
        path for path in all_files
        if _in_range(resolve_file_date(path), from_date, to_date)
    ]

    if not relevant:
        logger.info(
            f"No file in {directory} matches {from_date}..{to_date}; using all {len(all_files)} files"
        )
        relevant = all_files

    return [str(path) for path in relevant]


def list_log_files(directory: Union[str, Path]) -> List[LogFileInfo]:
    """
    Get metadata for every file in the log directory

    Returns:
        LogFileInfo list, most recently modified first
    """
    directory = Path(directory)

    if not directory.is_dir():
        logger.warning(f"Log directory does not exist: {directory}")
        return []

    files = []
    for path in _list_regular_files(directory):
        try:
            stat = path.stat()
        except OSError as e:
            logger.warning(f"Could not stat {path}: {e}")
            continue
        files.append(LogFileInfo(
            name=path.name,
            path=str(path),
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        ))

    files.sort(key=lambda info: info.last_modified, reverse=True)
    return files
