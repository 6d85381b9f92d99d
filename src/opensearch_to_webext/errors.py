"""Error taxonomy for the conversion run.

Each error is scoped: file-level errors drop one locale, engine-level errors
skip one engine. Nothing here aborts a batch.
"""


class ConversionError(Exception):
    """Base class for all conversion failures."""


class MalformedInput(ConversionError):
    """A descriptor file has no root element or lacks required fields."""


class NoInputFiles(ConversionError):
    """No usable descriptor files exist for an engine."""


class UnsupportedImageType(ConversionError):
    """An inline icon declares a content type with no known file extension."""

    def __init__(self, content_type: str):
        super().__init__(f"Unsupported image type: {content_type!r}")
        self.content_type = content_type


class OutputAlreadyExists(ConversionError):
    """The staging directory for an engine is already present."""
