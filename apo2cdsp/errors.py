class ParseError(ValueError):
    """Base error raised while turning filter text into cDSP settings."""

    def __init__(self, message, line_number=None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self):
        if self.line_number is None:
            return self.message
        return f"{self.message} (line {self.line_number})"


class FormatError(ParseError):
    """A line mentions a filter but does not follow the Fc/Gain/Q layout."""


class RangeError(ParseError):
    """A frequency, gain or Q value is missing or out of range."""


class CountError(ParseError):
    """The input holds the wrong number of filters."""


class InputError(ParseError):
    """The input is not usable text at all."""


class FileAccessError(OSError):
    pass
