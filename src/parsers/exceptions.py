FORMAT_NAME = "Analysis Studio"


class AxdParserError(Exception):
    """Base class for errors raised while reading an Analysis Studio file."""

    def __init__(self, message: str):
        super().__init__(message)


class FileTypeError(AxdParserError):
    """Raised when a document is not a supported Analysis Studio document."""

    def __init__(self, format_name: str = FORMAT_NAME, reason: str | None = None):
        self.format_name = format_name
        message = f"File is not a valid {format_name} file"
        super().__init__(f"{message}: {reason}" if reason else message)


class NoDataError(AxdParserError):
    """Raised when a file yields no valid height map."""

    def __init__(self, message: str = "File contains no valid height map data"):
        super().__init__(message)


class SampleDecodeError(AxdParserError):
    """Raised when an embedded sample payload cannot be decoded."""


class SizeMismatchError(SampleDecodeError):
    """Raised when a decoded payload does not hold the expected number of bytes."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Decoded sample data has {actual} bytes, expected {expected} bytes"
        )


class InvalidChannelError(AxdParserError):
    """Raised when a height-map channel has no usable grid geometry."""


class InvalidSpectrumError(AxdParserError):
    """Raised when a rendered spectrum holds no data points."""
