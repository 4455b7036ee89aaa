"""Base class for record file parsers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, Optional, TypeVar

from rental_finance.utils.logging_config import get_logger

logger = get_logger(__name__)

RecordT = TypeVar("RecordT")


class ParseError(Exception):
    """Exception raised when an input file cannot be read."""

    def __init__(self, message: str, file_path: Optional[Path] = None):
        """Initialize ParseError.

        Args:
            message: Error message.
            file_path: Optional path to the file that failed to parse.
        """
        self.file_path = file_path
        super().__init__(message)


class BaseParser(ABC, Generic[RecordT]):
    """Abstract base class for parsers turning a file into records.

    Subclasses must implement parse(). Individual malformed values never
    fail a file; they are zeroed or left empty on the record.
    """

    @property
    def name(self) -> str:
        """Parser name for logging."""
        return self.__class__.__name__

    @abstractmethod
    def parse(self, file_path: Path) -> list[RecordT]:
        """Parse a file and return its records.

        Raises:
            ParseError: If the file is missing or structurally unusable.
        """

    def validate_file(self, file_path: Path) -> None:
        """Check the file exists and is a regular file.

        Raises:
            ParseError: If the file cannot be read.
        """
        if not file_path.exists():
            raise ParseError(f"File not found: {file_path}", file_path)
        if not file_path.is_file():
            raise ParseError(f"Not a file: {file_path}", file_path)
