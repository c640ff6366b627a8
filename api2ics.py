"""Entry point for converting paginated JSON API responses into an ICS file."""
import importlib
import json
import logging
import os
import sys
import time
from dataclasses import replace
from typing import List, Optional

import requests

from exporter.ics_serializer import IcsSerializer
from fetcher.api_client import ApiClient
from fetcher.paginator import iter_page_urls
from processor.errors import Api2IcsError, FileWriteError
from processor.models import CalendarEvent, RunOptions, RunResult, Stage
from processor.record_mapper import RecordMapper
from reporter.log_reporter import LoggingReporter, Reporter
from storage.ics_file_writer import IcsFileWriter

__version__ = '1.0.0'

logger = logging.getLogger(__name__)


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    EXTRA_FIELDS = ('stage', 'context')

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for name in self.EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def run(
    options: RunOptions,
    reporter: Optional[Reporter] = None,
    session: Optional[requests.Session] = None
) -> RunResult:
    """
    Fetch every page, convert the events and write the calendar file.

    Any stage failure is reported and returned in the result; nothing is
    written unless every page was fetched and converted.

    Args:
        options: Run configuration
        reporter: Reporter for stage notifications (default: LoggingReporter)
        session: Optional requests session used for all pages

    Returns:
        RunResult describing the run
    """
    reporter = reporter or LoggingReporter()
    result = RunResult(filename=options.filename)
    start_time = time.time()

    logger.info(f"Started API2ICS (v{__version__})")
    logger.info("Starting API data collection...")

    client = ApiClient(
        reporter=reporter,
        method=options.method,
        headers=options.headers,
        timeout=options.timeout,
        session=session
    )
    mapper = RecordMapper(filter=options.filter, transform=options.transform)
    results: List[CalendarEvent] = []

    try:
        for page_index, url in iter_page_urls(options.url, options.paginate):
            page = page_index + 1 if options.paginate else None
            decoded = client.fetch_page(url, page=page)
            results.extend(mapper.map_page(decoded))
            result.pages_fetched += 1

        reporter.succeed(Stage.FETCH, "Finished fetching data from API!")

        reporter.start(Stage.CONVERT)
        document = IcsSerializer().serialize(results)
        result.events_converted = len(results)
        reporter.succeed(Stage.CONVERT, "Finished converting data to ICS format!")
    except Api2IcsError as e:
        reporter.fail(e.stage, str(e), e.payload)
        result.error = e
        logger.debug(
            f"Run aborted after {round(time.time() - start_time, 2)} seconds",
            exc_info=True
        )
        return result

    reporter.start(Stage.WRITE, {'filename': options.filename})
    try:
        IcsFileWriter(options.filename).write(document)
    except FileWriteError as e:
        reporter.fail(e.stage, str(e))
        result.error = e
    else:
        result.file_written = True
        reporter.succeed(Stage.WRITE, f"Generated '{options.filename}' file!")

    logger.info(
        f"Conversion complete! {result.events_converted} events from "
        f"{result.pages_fetched} page(s) in {round(time.time() - start_time, 2)} seconds"
    )
    return result


def main(options: RunOptions) -> None:
    """
    Run a conversion and exit the process with its exit code.

    Args:
        options: Run configuration
    """
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))

    setup_logging(log_level)

    if options.timeout is None:
        options = replace(options, timeout=timeout_seconds)

    result = run(options)
    sys.exit(result.exit_code)


def cli(argv: Optional[List[str]] = None) -> None:
    """
    Load RunOptions from a Python module and run it.

    The module named on the command line must define OPTIONS.

    Args:
        argv: Command line arguments (default: sys.argv[1:])
    """
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        sys.stderr.write("usage: api2ics <config-module>\n")
        sys.exit(2)

    sys.path.insert(0, os.getcwd())
    config = importlib.import_module(argv[0])
    main(config.OPTIONS)


if __name__ == '__main__':
    cli()
