"""Error taxonomy for the conversion pipeline."""
from typing import Any, Optional

from processor.models import Stage


class Api2IcsError(Exception):
    """Base error for a failed pipeline stage."""

    stage: Stage = None

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class NetworkError(Api2IcsError):
    """Request could not be sent or no response was received."""
    stage = Stage.FETCH


class PaginationError(Api2IcsError):
    """Paginate hook failed to produce the next page URL."""
    stage = Stage.FETCH


class DecodeError(Api2IcsError):
    """Response body is absent or is not valid JSON."""
    stage = Stage.DECODE


class FilterError(Api2IcsError):
    """Filter hook failed or produced something other than a list of records."""
    stage = Stage.FILTER


class TransformError(Api2IcsError):
    """Transform hook failed for a record."""
    stage = Stage.TRANSFORM


class DateFormatError(Api2IcsError):
    """Event date could not be parsed."""
    stage = Stage.CONVERT

    def __init__(self, value: Any, payload: Optional[Any] = None):
        super().__init__(f"Failed to parse date: {value!r}", payload)
        self.value = value


class FileWriteError(Api2IcsError):
    """Generated calendar could not be written to disk."""
    stage = Stage.WRITE
