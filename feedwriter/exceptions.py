"""
Feed writer exceptions.

Two families of errors are raised while building and exporting feeds:

- Programmer misuse (``NotFoundError``, ``InvalidFormatError``). These always
  propagate, whatever the renderer configuration.
- Data-quality problems found while rendering (``ExportValidationError``
  subclasses). These abort an export unless the renderer has been told to
  ignore exceptions, in which case they are collected and the offending
  element is skipped.

Responsibility: Typed error taxonomy for the feed writer
"""

from typing import Optional


class FeedWriterError(Exception):
    """Base class for every error raised by the feed writer"""


class NotFoundError(FeedWriterError, LookupError):
    """Raised when an indexed entry does not exist"""

    def __init__(self, index: int):
        super().__init__(f"Undefined index: {index}. Entry does not exist.")
        self.index = index


class InvalidFormatError(FeedWriterError, ValueError):
    """Raised when an export format is neither RSS nor Atom"""

    def __init__(self, requested: object):
        super().__init__(
            f'Invalid feed type specified: {requested!r}. Should be one of "rss" or "atom".'
        )
        self.requested = requested


class ExportValidationError(FeedWriterError, ValueError):
    """Base class for validation failures raised during rendering"""


class MissingRequiredFieldError(ExportValidationError):
    """Raised when a field the target format requires has no value"""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class InvalidEnclosureError(ExportValidationError):
    """Raised when an enclosure lacks type/uri or has an unusable length"""


class InvalidFieldError(ExportValidationError):
    """Raised when a field holds a value the target format cannot carry"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
