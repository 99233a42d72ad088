"""Exception classes and exit codes for codewalk."""

from enum import Enum


class ExitCode:
    """Standard exit codes for the codewalk commands."""

    OK = 0  # Success
    STEP_FAILURE = 1  # One or more walk steps failed to resolve
    USAGE = 2  # Command line usage error
    CONFIG = 3  # Walk file error
    RUNTIME = 4  # Runtime error while resolving or printing
    INTERNAL = 99  # Internal/unexpected error


class CliError(Exception):
    """Base class for command line interface errors."""

    exit_code = ExitCode.RUNTIME


class UsageError(CliError):
    """Error in command line usage or invalid parameters."""

    exit_code = ExitCode.USAGE


class ConfigError(CliError):
    """Error in walk file format or content."""

    exit_code = ExitCode.CONFIG


# ---------------------------------------------------------------------------
# Address resolution errors
# ---------------------------------------------------------------------------


class ErrorKind(Enum):
    """Classification of address resolution failures."""

    INVALID_ADDRESS = "invalid address"
    PARSE_ERROR = "parse error"
    ADDRESS_OUT_OF_RANGE = "address out of range"
    INVALID_PATTERN = "invalid pattern"
    NO_MATCH = "no match"
    UNSUPPORTED_DIRECTION = "unsupported direction"


class AddressError(ValueError):
    """Base class for failures while resolving an address against a buffer.

    Every subclass carries a fixed :class:`ErrorKind` so that callers can
    dispatch on ``error.kind`` without importing each class.
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAddress(AddressError):
    """A character in the address does not belong to the grammar."""

    kind = ErrorKind.INVALID_ADDRESS


class AddressParseError(AddressError):
    """A numeric literal in the address could not be converted."""

    kind = ErrorKind.PARSE_ERROR


class AddressOutOfRange(AddressError):
    """Stepping ran past the start or the end of the buffer."""

    kind = ErrorKind.ADDRESS_OUT_OF_RANGE


class InvalidPattern(AddressError):
    """A ``/pattern/`` failed to compile."""

    kind = ErrorKind.INVALID_PATTERN


class NoMatch(AddressError):
    """A ``/pattern/`` search found nothing, even after wrapping around."""

    kind = ErrorKind.NO_MATCH


class UnsupportedDirection(AddressError):
    """A ``/pattern/`` search was requested backwards."""

    kind = ErrorKind.UNSUPPORTED_DIRECTION
