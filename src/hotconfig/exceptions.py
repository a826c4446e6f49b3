"""Configuration exceptions."""


class HotConfigError(Exception):
    """Base class for hot-config errors."""
    pass


class ConfigurationError(HotConfigError):
    """Raised when the credential file or command line options are invalid."""
    pass
