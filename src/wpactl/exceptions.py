"""Hot-config exceptions."""

from typing import List, Optional

from hotconfig.exceptions import HotConfigError, ConfigurationError


class AmbiguousMatchError(HotConfigError):
    """Raised when several networks match and METHOD does not allow replacing them."""

    def __init__(self, message: str, network_ids: Optional[List[int]] = None):
        super().__init__(message)
        self.network_ids = network_ids or []


class CommandError(HotConfigError):
    """Raised when wpa_cli commands were not acknowledged."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class SanityCheckError(HotConfigError):
    """Raised when wpa_supplicant assigns an unexpected network id."""

    def __init__(self, message: str, expected_id: int = None, actual_id: int = None):
        super().__init__(message)
        self.expected_id = expected_id
        self.actual_id = actual_id


class CommandSpawnError(HotConfigError):
    """Raised when the wpa_cli process cannot be started."""

    def __init__(self, message: str, os_error: Exception = None):
        super().__init__(message)
        self.os_error = os_error


__all__ = [
    "HotConfigError", "ConfigurationError", "AmbiguousMatchError",
    "CommandError", "SanityCheckError", "CommandSpawnError",
]
