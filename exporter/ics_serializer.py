"""iCalendar serializer for calendar events."""
import logging
from datetime import datetime
from typing import Any, Iterable, List

from dateutil import parser as dtparse

from processor.errors import DateFormatError
from processor.models import CalendarEvent

logger = logging.getLogger(__name__)


class IcsSerializer:
    """Serializer rendering calendar events as a minimal iCalendar document."""

    PRODUCT_ID = 'api2ics'
    TIMEZONE = 'Australia/Adelaide'
    DATE_FORMAT = '%Y%m%dT%H%M%S'
    # Distinct in year, month and day so omitted date parts show up
    PARSE_DEFAULTS = (datetime(1970, 1, 1), datetime(1971, 2, 2))

    def serialize(self, events: Iterable[CalendarEvent]) -> str:
        """
        Render events into one iCalendar document.

        Field values are emitted verbatim; reserved iCalendar characters are
        not escaped.

        Args:
            events: Events in output order

        Returns:
            iCalendar document string

        Raises:
            DateFormatError: If any event start or end cannot be parsed
        """
        lines = self._header()
        count = 0

        for event in events:
            lines.extend(self._event_lines(event))
            count += 1

        lines.append('END:VCALENDAR')

        logger.info(f"Serialized {count} events to ICS")
        return '\n'.join(lines)

    def _header(self) -> List[str]:
        return [
            'BEGIN:VCALENDAR',
            'VERSION:2.0',
            f'PRODID:{self.PRODUCT_ID}',
            'CALSCALE:GREGORIAN',
            f'X-WR-TIMEZONE:{self.TIMEZONE}',
        ]

    def _event_lines(self, event: CalendarEvent) -> List[str]:
        """
        Render a single VEVENT block.

        Args:
            event: CalendarEvent to render

        Returns:
            Lines of the VEVENT block
        """
        return [
            'BEGIN:VEVENT',
            f'SUMMARY:{event.summary}',
            f'LOCATION:{event.location or ""}',
            f'DESCRIPTION:{event.description or ""}',
            f'DTSTART:{self.format_date(event.start)}',
            f'DTEND:{self.format_date(event.end)}',
            'END:VEVENT',
        ]

    def format_date(self, value: Any) -> str:
        """
        Normalize a date-time string to YYYYMMDDTHHmmss.

        Any timezone in the value is dropped without conversion. Values
        missing the year, month or day are rejected rather than completed
        from the current date. A missing time means midnight.

        Args:
            value: Date-time string in any format dateutil understands

        Returns:
            Formatted date-time string

        Raises:
            DateFormatError: If the value cannot be parsed or is not a full date
        """
        if not isinstance(value, str):
            raise DateFormatError(value)

        try:
            first, second = (
                dtparse.parse(value, default=default) for default in self.PARSE_DEFAULTS
            )
        except (ValueError, OverflowError) as e:
            raise DateFormatError(value) from e

        if first != second:
            raise DateFormatError(value)

        return first.strftime(self.DATE_FORMAT)
