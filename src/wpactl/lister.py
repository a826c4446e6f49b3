"""Read-only queries against wpa_supplicant."""

import logging
import re
from typing import Dict, List, Optional

from .executor import WpaCli
from .states import NetworkProfile

# Fields list_networks does not show; fetched per network with get_network.
EXTRA_FIELDS = ("id_str", "priority", "key_mgmt")

_HEADER_SPLIT = re.compile(r"\s*/\s*")


def strip_quotes(value: str) -> str:
    """Remove a single leading and trailing double quote."""
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


class NetworkLister:
    """Lists the networks configured in wpa_supplicant."""

    def __init__(self, cli: WpaCli):
        self.cli = cli
        self.logger = logging.getLogger(__name__)

    def get_status(self) -> Dict[str, str]:
        """Get `wpa_cli status` as a dictionary."""
        status = {}
        for line in self.cli.query("status"):
            if "=" in line:
                key, value = line.split("=", 1)
                status[key] = value
        return status

    def get_network_field(self, network_id: int, name: str) -> Optional[str]:
        """Get one variable of a network, None when wpa_supplicant has no value."""
        lines = self.cli.query("get_network", network_id, name)
        if not lines or lines[0] == "FAIL":
            return None
        return strip_quotes(lines[0])

    def list_networks(self) -> List[NetworkProfile]:
        """List configured networks, sorted by id.

        Each network is enriched with id_str, priority and key_mgmt, which
        list_networks itself does not report.
        """
        lines = self.cli.query("list_networks")
        if not lines:
            return []

        headers = _HEADER_SPLIT.split(lines[0].strip())
        networks = []
        for line in lines[1:]:
            if not line:
                continue
            values = dict(zip(headers, line.split("\t")))

            try:
                network_id = int(values.get("network id", ""))
            except ValueError:
                self.logger.warning(f"Skipping unparsable list_networks line: {line!r}")
                continue

            network = NetworkProfile(
                id=network_id,
                ssid=values.get("ssid", ""),
                bssid=values.get("bssid", "any"),
                flags=values.get("flags", ""),
            )
            self._enrich(network)
            networks.append(network)

        networks.sort(key=lambda n: n.id)
        self.logger.debug(f"Found {len(networks)} configured network(s)")
        return networks

    def _enrich(self, network: NetworkProfile) -> None:
        extra = {name: self.get_network_field(network.id, name) for name in EXTRA_FIELDS}
        network.id_str = extra["id_str"]
        network.key_mgmt = extra["key_mgmt"]

        priority = extra["priority"]
        if priority is not None:
            try:
                network.priority = int(priority)
            except ValueError:
                self.logger.warning(f"Network {network.id} has non-numeric priority {priority!r}")
