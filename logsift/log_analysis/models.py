"""
Log Analysis Models - Data structures shared by the parser and query engine

Handles:
- Normalized log levels (ERR, WRN, INF)
- Parsed log entries
- Search criteria accepted from the collaborator boundary
- Grouped search results and aggregate statistics
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(Enum):
    """Normalized log severity levels"""
    ERR = "ERR"
    WRN = "WRN"
    INF = "INF"

    @property
    def color(self) -> str:
        """Get color representation for this log level"""
        colors = {
            LogLevel.ERR: "red",
            LogLevel.WRN: "yellow",
            LogLevel.INF: "green",
        }
        return colors.get(self, "white")


@dataclass
class LogEntry:
    """Parsed log entry, possibly spanning several physical lines"""
    timestamp: datetime
    level: LogLevel
    message: str
    exception_type: Optional[str] = None
    source_file: Optional[str] = None
    stack_trace: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export"""
        return {
            'timestamp': self.timestamp.isoformat(),
            'level': self.level.value,
            'message': self.message,
            'exceptionType': self.exception_type,
            'sourceFile': self.source_file,
            'stackTrace': self.stack_trace,
        }


class LogSearchCriteria(BaseModel):
    """
    Query parameters for searching a log directory

    Dates are whole calendar days and both bounds are inclusive. Empty strings
    coming from a form or query string mean "no filter".
    """
    model_config = ConfigDict(populate_by_name=True)

    from_date: Optional[date] = Field(default=None, alias="fromDate")
    to_date: Optional[date] = Field(default=None, alias="toDate")
    level: Optional[LogLevel] = None
    search_text: Optional[str] = Field(default=None, alias="searchText")
    exception_type: Optional[str] = Field(default=None, alias="exceptionType")
    source_file: Optional[str] = Field(default=None, alias="sourceFile")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, gt=0, alias="pageSize")

    @field_validator(
        "from_date", "to_date", "search_text", "exception_type", "source_file",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
            return value or None
        return value


@dataclass
class GroupedLogResults:
    """Search results grouped by source file, each group paginated on its own"""
    results: Dict[str, List[LogEntry]] = field(default_factory=dict)
    total_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'results': {
                name: [entry.to_dict() for entry in entries]
                for name, entries in self.results.items()
            },
            'totalCount': self.total_count,
        }


@dataclass
class LogStats:
    """Aggregate statistics over a filtered set of entries"""
    total_entries: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    common_exceptions: Dict[str, int] = field(default_factory=dict)
    common_sources: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalEntries': self.total_entries,
            'errorCount': self.error_count,
            'warningCount': self.warning_count,
            'infoCount': self.info_count,
            'commonExceptions': dict(self.common_exceptions),
            'commonSources': dict(self.common_sources),
        }


@dataclass
class LogFileInfo:
    """Metadata about a file in the log directory"""
    name: str
    path: str
    size: int
    last_modified: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'size': self.size,
            'lastModified': self.last_modified.isoformat(),
        }
