"""Exception hierarchy for throttler."""


class ThrottlerError(Exception):
    """Base exception for all throttler errors."""


class ByteQuantityError(ThrottlerError, ValueError):
    """A byte quantity such as ``10G`` could not be parsed."""

    def __init__(self, message: str, value: str = ""):
        self.value = value
        super().__init__(message)


class StatsSourceError(ThrottlerError):
    """The interface statistics table could not be opened or read."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class InterfaceNotFoundError(ThrottlerError):
    """The requested interface has no line in the statistics table."""

    def __init__(self, message: str, interface: str = "", source: str = ""):
        self.interface = interface
        self.source = source
        super().__init__(message)


class ActionError(ThrottlerError):
    """The action command could not be started."""
