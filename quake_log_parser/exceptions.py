"""Exceptions raised by the Quake log parser."""


class QuakeLogParserError(Exception):
    """Base class for all parser errors."""


class SourceUnavailableError(QuakeLogParserError):
    """The log (or report) file could not be opened."""

    def __init__(self, path, reason=None):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot open {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class LogReadError(QuakeLogParserError):
    """Reading failed part way through a log file."""

    def __init__(self, path, line_num, reason=None):
        self.path = str(path)
        self.line_num = line_num
        self.reason = reason
        super().__init__(f"Error reading {self.path} after line {line_num}: {reason}")


class ReportFormatError(QuakeLogParserError):
    """A saved JSON report could not be decoded."""


class ReportWriteError(QuakeLogParserError):
    """A JSON report could not be written."""

    def __init__(self, path, reason=None):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error saving JSON report to {self.path}: {reason}")
