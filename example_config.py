"""
Example configuration for api2ics.

Run with: api2ics example_config

The API is expected to respond with a body shaped like:

    {
        "results": [
            {
                "title": "Honours Research",
                "description": "Project",
                "location": "Online",
                "start": "07-03-2023 10:00",
                "end": "07-03-2023 13:00"
            }
        ]
    }
"""
from processor.models import CalendarEvent, RunOptions


def select_results(data):
    # APIs rarely return a bare array
    return data['results']


def to_event(record):
    return CalendarEvent(
        summary=record['title'],
        description=record.get('description'),
        location=record.get('location'),
        start=record['start'],
        end=record['end']
    )


OPTIONS = RunOptions(
    url='https://api.example.com/calendar',
    filter=select_results,
    transform=to_event,
)
