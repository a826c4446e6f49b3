"""wpa_cli command execution."""

import logging
import subprocess
from typing import List

from .exceptions import CommandSpawnError
from .states import CommandResult

ACK = "OK"

# Arguments following these keys are secrets and never logged.
_SECRET_KEYS = ("psk", "password", "wep_key0", "sae_password")


class WpaCli:
    """Runs wpa_cli against one interface."""

    def __init__(self, interface: str, binary: str = "wpa_cli"):
        """Initialize wpa_cli runner.

        Args:
            interface: Wireless interface managed by wpa_supplicant
            binary: wpa_cli executable name or path
        """
        self.interface = interface
        self.binary = binary
        self.logger = logging.getLogger(__name__)

    def argv(self, command: str, *args) -> List[str]:
        """Build the full wpa_cli command line."""
        return [self.binary, "-i", self.interface, command] + [str(arg) for arg in args]

    def query(self, command: str, *args) -> List[str]:
        """Run an informational command and return its output lines.

        The exit status is not checked.
        """
        return self._spawn(self.argv(command, *args))

    def execute(self, command: str, *args) -> CommandResult:
        """Run a command that answers OK on success."""
        argv = self.argv(command, *args)
        lines = self._spawn(argv)

        if lines and lines[0] == ACK:
            return CommandResult.success(argv, lines)

        output = "\n".join(lines) if lines else "(no output)"
        return CommandResult.failure(argv, lines, f"ERROR {self.format_argv(argv)}: {output}")

    def add_network(self) -> CommandResult:
        """Add an empty network; success carries the new id as its value."""
        argv = self.argv("add_network")
        lines = self._spawn(argv)

        if len(lines) == 1 and lines[0].isdigit():
            return CommandResult.success(argv, lines)

        output = "\n".join(lines) if lines else "(no output)"
        return CommandResult.failure(argv, lines, f"ERROR {self.format_argv(argv)}: {output}")

    def _spawn(self, argv: List[str]) -> List[str]:
        """Run wpa_cli to completion and collect trimmed stdout lines."""
        self.logger.debug(f"Running: {self.format_argv(argv)}")

        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as e:
            raise CommandSpawnError(f"Failed to run {argv[0]}: {e}", e)

        if result.stderr.strip():
            self.logger.debug(f"{argv[0]} stderr: {result.stderr.strip()}")

        return [line.strip() for line in result.stdout.splitlines()]

    @staticmethod
    def format_argv(argv: List[str]) -> str:
        """Join a command line for logging, masking secret values."""
        shown = list(argv)
        for i in range(len(shown) - 1):
            if shown[i] in _SECRET_KEYS:
                shown[i + 1] = "[hidden]"
        return " ".join(shown)
