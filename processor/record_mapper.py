"""Record mapper applying filter and transform hooks to decoded pages."""
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from processor.errors import FilterError, TransformError
from processor.models import CalendarEvent

logger = logging.getLogger(__name__)


class Filterer(Protocol):
    """Selects the list of raw records from a decoded response body."""

    def __call__(self, decoded: Any) -> Sequence[Dict[str, Any]]:
        ...


class Transformer(Protocol):
    """Maps one raw record to a calendar event or an event-shaped mapping."""

    def __call__(self, record: Dict[str, Any]) -> Union[CalendarEvent, Dict[str, Any]]:
        ...


class RecordMapper:
    """Mapper from decoded API pages to calendar events."""

    def __init__(
        self,
        filter: Optional[Filterer] = None,
        transform: Optional[Transformer] = None
    ):
        """
        Initialize the record mapper.

        Args:
            filter: Optional hook selecting records from the decoded body
            transform: Optional hook mapping each record to an event
        """
        self.filter = filter
        self.transform = transform

    def map_page(self, decoded: Any) -> List[CalendarEvent]:
        """
        Map one decoded page to calendar events, in filtered order.

        Args:
            decoded: Decoded JSON body of the page

        Returns:
            List of CalendarEvent objects for the page

        Raises:
            FilterError: If the filter fails or yields something other than a list
            TransformError: If any record cannot be transformed
        """
        records = self._filter(decoded)
        events = [self._transform(record) for record in records]

        logger.debug(f"Mapped {len(events)} events from {len(records)} records")
        return events

    def _filter(self, decoded: Any) -> List[Any]:
        """
        Select raw records from the decoded body.

        Args:
            decoded: Decoded JSON body

        Returns:
            List of raw records

        Raises:
            FilterError: Carrying the decoded body as payload
        """
        if self.filter is None:
            records = decoded
        else:
            try:
                records = self.filter(decoded)
            except Exception as e:
                raise FilterError(
                    f"Unable to filter data from API! {e}", payload=decoded
                ) from e

        if not isinstance(records, (list, tuple)):
            raise FilterError(
                "Unable to filter data from API! Expected a list of records, "
                f"got {type(records).__name__}",
                payload=decoded
            )

        return list(records)

    def _transform(self, record: Any) -> CalendarEvent:
        """
        Map a single record to a calendar event.

        Args:
            record: Raw record

        Returns:
            CalendarEvent object

        Raises:
            TransformError: If the hook fails or its result is not event-shaped
        """
        try:
            result = self.transform(record) if self.transform else record
            if isinstance(result, CalendarEvent):
                return result
            return CalendarEvent.from_record(result)
        except Exception as e:
            raise TransformError(f"Unable to transform data from API! {e}") from e
