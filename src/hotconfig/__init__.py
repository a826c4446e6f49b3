"""Hot-config credential file handling."""

from .manager import ConfigManager, parse_config_text, resolve_config_path
from .schema import HotConfig, DesiredProfile, RunOptions
from .exceptions import HotConfigError, ConfigurationError

__all__ = [
    "ConfigManager", "parse_config_text", "resolve_config_path",
    "HotConfig", "DesiredProfile", "RunOptions",
    "HotConfigError", "ConfigurationError",
]
