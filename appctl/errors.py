class AppctlError(Exception):
    """Base class for errors raised before an interactive session starts."""


class TerminalUnavailable(AppctlError):
    """The terminal cannot be put into interactive input mode."""


class EnumerationFailed(AppctlError):
    """The candidate source failed to list running applications."""
