"""reqline errors - every failure is fatal and mapped to an exit code."""


class ReqlineError(Exception):
    """Base class for errors reported to the user as ``ERROR: ...``."""

    exit_code = 1


class UsageError(ReqlineError):
    """Malformed command-line input. Raised before any network activity."""

    exit_code = 2


class ConfigError(ReqlineError):
    """The file given with -c is missing or holds invalid defaults."""

    exit_code = 2


class TransportError(ReqlineError):
    """The request could not be sent or the response could not be read."""


class FileSystemError(ReqlineError):
    """The response body could not be written to the output path."""
