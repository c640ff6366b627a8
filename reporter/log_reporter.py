"""Reporter that renders pipeline progress as log records."""
import json
import logging
from typing import Any, Mapping, Optional, Protocol

from processor.models import Stage

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Receives stage notifications from the pipeline."""

    def start(self, stage: Stage, context: Optional[Mapping[str, Any]] = None) -> None:
        ...

    def succeed(self, stage: Stage, message: Optional[str] = None) -> None:
        ...

    def fail(self, stage: Stage, message: str, payload: Any = None) -> None:
        ...


class LoggingReporter:
    """Reporter backed by the standard logging module."""

    START_MESSAGES = {
        Stage.FETCH: "Fetching data from API...",
        Stage.CONVERT: "Converting data to ICS format...",
        Stage.WRITE: "Generating calendar file...",
    }

    def start(self, stage: Stage, context: Optional[Mapping[str, Any]] = None) -> None:
        """
        Log the start of a stage.

        Args:
            stage: Stage being started
            context: Optional details such as url, page or filename
        """
        context = dict(context or {})
        message = self.START_MESSAGES.get(stage, f"Starting {stage.value} stage...")
        if 'page' in context:
            message = f"{message} (page {context['page']})"
        if 'filename' in context:
            message = f"Generating '{context['filename']}' file..."

        logger.info(message, extra={'stage': stage.value, 'context': context})

    def succeed(self, stage: Stage, message: Optional[str] = None) -> None:
        """Log the successful end of a stage."""
        logger.info(
            message or f"Finished {stage.value} stage",
            extra={'stage': stage.value}
        )

    def fail(self, stage: Stage, message: str, payload: Any = None) -> None:
        """
        Log a stage failure, dumping the payload when one is given.

        Args:
            stage: Stage that failed
            message: Failure description
            payload: Optional decoded response shown for diagnosis
        """
        logger.error(message, extra={'stage': stage.value})

        if payload is not None:
            logger.error(
                "Response from API:\n%s",
                json.dumps(payload, indent=2, default=str),
                extra={'stage': stage.value}
            )
