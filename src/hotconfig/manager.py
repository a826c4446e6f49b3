"""Configuration manager for hot-config credential files."""

import logging
import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .schema import DEFAULT_CONFFILE, HotConfig

REQUIRED_KEYS = ("IFACE", "METHOD")

_KEY_VALUE = re.compile(r"\s*=\s*")


def parse_config_text(text: str) -> Dict[str, str]:
    """Parse key=value lines into a dictionary.

    ``#`` starts a comment anywhere on a line, blank lines are skipped and a
    single pair of surrounding double quotes is removed from each value.
    Later keys override earlier ones.
    """
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if not line:
            continue

        parts = _KEY_VALUE.split(line, maxsplit=1)
        key = parts[0]
        value = parts[1] if len(parts) > 1 else ""
        if value.startswith('"'):
            value = value[1:]
        if value.endswith('"'):
            value = value[:-1]
        values[key] = value

    return values


def resolve_config_path(conf: Optional[str] = None, confdir: Optional[str] = None,
                        conffile: Optional[str] = None) -> Path:
    """Resolve --conf or --confdir/--conffile into an absolute path."""
    if conf and (confdir or conffile):
        flag = "--confdir" if confdir else "--conffile"
        raise ConfigurationError(f"You cannot specify both {flag} and --conf")

    if conf:
        return Path(conf).expanduser().resolve()

    if confdir:
        return (Path(confdir).expanduser() / (conffile or DEFAULT_CONFFILE)).resolve()

    raise ConfigurationError("You must specify a config file: --conf=<file> or --confdir/--conffile")


class ConfigManager:
    """Loads and validates a hot-config credential file."""

    def __init__(self, config_path):
        """Initialize configuration manager."""
        self.config_path = Path(config_path)
        self.logger = logging.getLogger(__name__)

        self.current_config: Optional[HotConfig] = None

    def is_readable(self) -> bool:
        """Check that the configuration file exists and can be read."""
        return self.config_path.is_file() and os.access(self.config_path, os.R_OK)

    def load_config(self) -> HotConfig:
        """Load configuration from file."""
        try:
            text = self.config_path.read_text()
        except OSError as e:
            raise ConfigurationError(f"Couldn't open config file {self.config_path}: {e}")

        values = parse_config_text(text)

        for key in REQUIRED_KEYS:
            if key not in values:
                raise ConfigurationError(f"Config option {key} is required!")

        ignored = sorted(set(values) - set(self._known_keys()))
        if ignored:
            self.logger.debug(f"Ignoring unknown config options: {', '.join(ignored)}")

        try:
            self.current_config = HotConfig(**values)
        except ValidationError as e:
            raise ConfigurationError(self._describe_validation_error(e, values))

        self.logger.info(f"Loaded {self.config_path} (IFACE={self.current_config.iface}, "
                         f"METHOD={self.current_config.method})")
        return self.current_config

    def rename_processed(self, now: Optional[datetime] = None) -> Optional[Path]:
        """Move the processed file out of the way as <file>-processed_<date>_<time>."""
        now = now or datetime.now()
        target = self.config_path.with_name(
            f"{self.config_path.name}-processed_{now:%Y%m%d}_{now:%H%M%S}"
        )

        try:
            shutil.move(str(self.config_path), str(target))
        except OSError as e:
            self.logger.warning(f"Failed to move {self.config_path} to {target}: {e}")
            return None

        self.logger.info(f"Renamed processed config to {target}")
        return target

    @staticmethod
    def _known_keys():
        for name, field in HotConfig.model_fields.items():
            yield field.alias or name

    @staticmethod
    def _describe_validation_error(error: ValidationError, values: Dict[str, str]) -> str:
        """Turn a pydantic error into messages naming the config options."""
        aliases = {name: field.alias or name for name, field in HotConfig.model_fields.items()}
        messages = []
        for err in error.errors():
            name = str(err["loc"][0]) if err["loc"] else "config"
            key = aliases.get(name, name)
            if err["type"] == "missing":
                messages.append(f"Config option {key} is required and is missing!")
            elif key == "METHOD":
                messages.append(f"Invalid METHOD in config: {values.get('METHOD', '').lower()}")
            else:
                messages.append(f"Invalid {key} in config: {err['msg']}")
        return "\n".join(messages)
