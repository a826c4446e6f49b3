#!/usr/bin/env python3
"""wpa-hotconfig entry point.

Reads a credential file (typically from a freshly inserted USB flash drive),
applies it to wpa_supplicant through wpa_cli, saves the supplicant
configuration and reassociates.
"""

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, List, Optional

from hotconfig import ConfigManager, DesiredProfile, RunOptions, resolve_config_path

from . import __version__
from .exceptions import CommandError, ConfigurationError, HotConfigError
from .executor import WpaCli
from .lister import NetworkLister
from .reconciler import Reconciler
from .states import ReconcileOutcome

SYSLOG_SOCKET = "/dev/log"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Set up logging to stdout and, when available, syslog."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if Path(SYSLOG_SOCKET).exists():
        handlers.append(logging.handlers.SysLogHandler(address=SYSLOG_SOCKET))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return logging.getLogger(__name__)


class HotConfigService:
    """Runs one hot-config reconciliation."""

    def __init__(self, options: RunOptions):
        """Initialize service."""
        self.options = options
        self.config_manager = ConfigManager(options.conf_path)
        self.logger = logging.getLogger(__name__)

    def run(self) -> ReconcileOutcome:
        """Load the credential file and reconcile wpa_supplicant with it."""
        config = self.config_manager.load_config()
        desired = DesiredProfile.from_config(config, self.options.program_name)
        self.logger.debug(f"Desired profile: {desired.redacted()}")

        cli = WpaCli(config.iface, self.options.wpa_cli)
        lister = NetworkLister(cli)

        self._log_status("Starting", lister.get_status())
        networks = lister.list_networks()

        outcome = Reconciler(cli, self.options, lister).reconcile(networks, desired, config.method)
        if outcome.dry_run:
            return outcome

        self.logger.info(f"Applied {outcome.plan.procedure.value} for network id {outcome.network_id}")
        self._log_status("Ending", lister.get_status())

        if self.options.rename_processed:
            self.config_manager.rename_processed()

        return outcome

    def _log_status(self, label: str, status: Dict[str, str]) -> None:
        self.logger.debug(f"{label} status: {status}")
        if status.get("wpa_state"):
            self.logger.info(f"{label} wpa_state={status['wpa_state']} ssid={status.get('ssid', '')}")


def build_parser() -> argparse.ArgumentParser:
    """Command line options."""
    parser = argparse.ArgumentParser(
        prog="wpa-hotconfig",
        description="Integrate WiFi settings from a credential file into wpa_supplicant via wpa_cli.",
    )
    parser.add_argument("--conf", help="path of the credential file")
    parser.add_argument("--confdir", help="directory holding the credential file")
    parser.add_argument("--conffile", help="credential file name inside --confdir")
    parser.add_argument("--quiet-exit-if-no-conf", action="store_true",
                        help="exit quietly when the credential file does not exist")
    parser.add_argument("--rename-processed-conf", action="store_true",
                        help="rename the credential file to <file>-processed_<when> after applying it")
    parser.add_argument("--dry-run", action="store_true",
                        help="print what would be done without changing wpa_supplicant")
    parser.add_argument("--verbose", action="store_true", help="print more detail")
    parser.add_argument("--wpa-cli", default="wpa_cli", help="wpa_cli executable")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = setup_logging(args.verbose)

    try:
        conf_path = resolve_config_path(args.conf, args.confdir, args.conffile)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    options = RunOptions(
        conf_path=conf_path,
        dry_run=args.dry_run,
        verbose=args.verbose,
        rename_processed=args.rename_processed_conf,
        quiet_exit_if_no_conf=args.quiet_exit_if_no_conf,
        wpa_cli=args.wpa_cli,
    )

    service = HotConfigService(options)
    if not service.config_manager.is_readable():
        if options.quiet_exit_if_no_conf:
            logger.debug(f"Quietly exiting after not finding {conf_path}")
            return 0
        logger.error(f"Config file does not exist or is unreadable: {conf_path}")
        return 1

    try:
        service.run()
    except CommandError as e:
        logger.error(str(e))
        for error in e.errors:
            logger.error(f"  {error}")
        return 1
    except HotConfigError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
