"""File storage for generated iCalendar documents."""
import logging
from pathlib import Path

from processor.errors import FileWriteError

logger = logging.getLogger(__name__)


class IcsFileWriter:
    """Writer persisting an iCalendar document to a single file."""

    def __init__(self, filename: str):
        """
        Initialize the file writer.

        Args:
            filename: Path of the output file
        """
        self.path = Path(filename)

    def write(self, document: str) -> None:
        """
        Write the whole document in one go.

        Args:
            document: iCalendar document string

        Raises:
            FileWriteError: If the file cannot be written
        """
        try:
            with open(self.path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(document)
        except OSError as e:
            raise FileWriteError(f"Unable to write to file! {self.path}: {e}") from e

        logger.info(f"Wrote {len(document)} characters to {self.path}")
