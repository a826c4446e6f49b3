"""Configuration schema definitions using Pydantic."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_KEY_MGMT = "WPA-PSK"
DEFAULT_PROGRAM_NAME = "wpa_hotconfig"
DEFAULT_CONFFILE = "wpa_hotconfig.conf"

# Order in which desired fields are written with set_network.
PROFILE_FIELDS = ("ssid", "psk", "key_mgmt", "priority", "id_str")


class HotConfig(BaseModel):
    """Contents of a hot-config credential file."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    iface: str = Field(alias="IFACE", min_length=1)
    method: Literal["integrate", "replace"] = Field(alias="METHOD")
    ssid: str = Field(min_length=1, max_length=32)
    psk: str = Field(min_length=8, max_length=63)
    id_str: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[int] = Field(default=None, ge=0)
    key_mgmt: Optional[str] = Field(default=None, min_length=1)

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v):
        """METHOD is case-insensitive."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def blank_priority(cls, v):
        """Treat an empty priority as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DesiredProfile(BaseModel):
    """The network profile a run should leave in wpa_supplicant."""
    model_config = ConfigDict(frozen=True)

    ssid: str
    psk: str
    key_mgmt: str = DEFAULT_KEY_MGMT
    priority: Optional[int] = None
    id_str: str
    id_str_generated: bool = False

    @classmethod
    def from_config(cls, config: HotConfig, program_name: str = DEFAULT_PROGRAM_NAME,
                    now: Optional[datetime] = None) -> "DesiredProfile":
        """Build the desired profile, generating an id_str when the file has none."""
        id_str = config.id_str
        generated = id_str is None
        if generated:
            now = now or datetime.now()
            id_str = f"{program_name}_{now:%Y%m%d}_{now:%H%M%S}"

        return cls(
            ssid=config.ssid,
            psk=config.psk,
            key_mgmt=config.key_mgmt or DEFAULT_KEY_MGMT,
            priority=config.priority,
            id_str=id_str,
            id_str_generated=generated,
        )

    @property
    def match_field(self) -> str:
        """Field used to find existing networks for this profile."""
        return "ssid" if self.id_str_generated else "id_str"

    @property
    def match_value(self) -> str:
        return getattr(self, self.match_field)

    def fields(self) -> Dict[str, str]:
        """Fields to write with set_network, in write order."""
        values = {}
        for name in PROFILE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                values[name] = str(value)
        return values

    def redacted(self) -> Dict[str, str]:
        """Fields with the PSK masked, for logs and dry-run output."""
        values = self.fields()
        values["psk"] = "********"
        return values


class RunOptions(BaseModel):
    """Resolved command line options for one run."""
    model_config = ConfigDict(frozen=True)

    conf_path: Path
    dry_run: bool = Field(default=False)
    verbose: bool = Field(default=False)
    rename_processed: bool = Field(default=False)
    quiet_exit_if_no_conf: bool = Field(default=False)
    wpa_cli: str = Field(default="wpa_cli", min_length=1)
    program_name: str = Field(default=DEFAULT_PROGRAM_NAME, min_length=1)
