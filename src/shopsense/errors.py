class ShopsenseError(Exception):
    """Base class for everything the client raises."""


class InvalidArgument(ShopsenseError, ValueError):
    """A required parameter is missing or an enumerated value is not accepted."""


class TransportError(ShopsenseError):
    """The HTTP GET failed: connection problem, timeout or non-2xx status."""


class Unimplemented(ShopsenseError, NotImplementedError):
    pass


class ConfigurationError(ShopsenseError):
    """Client configuration is incomplete (missing setting or path entry)."""
