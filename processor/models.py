"""Data models for the API to ICS conversion pipeline."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional


class Stage(str, Enum):
    """Pipeline stages reported to the reporter."""
    FETCH = 'fetch'
    DECODE = 'decode'
    FILTER = 'filter'
    TRANSFORM = 'transform'
    CONVERT = 'convert'
    WRITE = 'write'


@dataclass(frozen=True)
class CalendarEvent:
    """Normalized calendar event produced by a transform."""
    summary: str
    start: str
    end: str
    description: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'CalendarEvent':
        """
        Build an event from a record that already has the event shape.

        Args:
            record: Mapping with summary, start and end keys, and optionally
                description and location

        Returns:
            CalendarEvent object

        Raises:
            ValueError: If the record is not a mapping or a required key is missing
        """
        if not isinstance(record, Mapping):
            raise ValueError(
                f"Expected a record mapping, got {type(record).__name__}"
            )

        missing = [key for key in ('summary', 'start', 'end') if key not in record]
        if missing:
            raise ValueError(f"Record missing required field(s): {', '.join(missing)}")

        return cls(
            summary=record['summary'],
            start=record['start'],
            end=record['end'],
            description=record.get('description'),
            location=record.get('location')
        )


@dataclass(frozen=True)
class RunOptions:
    """Configuration for a single conversion run."""
    url: str
    method: str = 'GET'
    headers: Dict[str, str] = field(default_factory=dict)
    filename: str = 'download.ics'
    filter: Optional[Callable[[Any], Any]] = None
    transform: Optional[Callable[[Dict[str, Any]], Any]] = None
    paginate: Optional[Callable[[str, int], Optional[str]]] = None
    timeout: Optional[int] = None


@dataclass
class RunResult:
    """Outcome of a conversion run."""
    filename: str
    pages_fetched: int = 0
    events_converted: int = 0
    file_written: bool = False
    error: Optional[Exception] = None

    @property
    def exit_code(self) -> int:
        """Process exit code for this result; write failures are not fatal."""
        if self.error is None or getattr(self.error, 'stage', None) == Stage.WRITE:
            return 0
        return 1
