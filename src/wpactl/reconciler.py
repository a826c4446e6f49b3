"""Reconcile one desired profile with wpa_supplicant's live configuration."""

import logging
from typing import List, Optional, Tuple

from hotconfig.schema import DesiredProfile, RunOptions

from .exceptions import AmbiguousMatchError, CommandError, SanityCheckError
from .executor import WpaCli
from .lister import NetworkLister
from .states import NetworkProfile, Procedure, ReconcilePlan, ReconcileOutcome

# wpa_cli rejects these values when quoted; every other value must be quoted.
UNQUOTED_KEYS = ("key_mgmt", "priority")


def quote_value(key: str, value: str) -> str:
    """Quote a set_network value the way wpa_cli expects for this key."""
    if key in UNQUOTED_KEYS:
        return f"{value}"
    return f'"{value}"'


def find_matches(networks: List[NetworkProfile], desired: DesiredProfile) -> List[NetworkProfile]:
    """Networks identified by the desired profile's id_str, or by ssid without one."""
    field = desired.match_field
    value = desired.match_value
    matches = [network for network in networks if getattr(network, field) == value]
    return sorted(matches, key=lambda n: n.id)


def plan_reconcile(networks: List[NetworkProfile], desired: DesiredProfile,
                   method: str) -> ReconcilePlan:
    """Choose add, modify or replace for the desired profile."""
    matches = find_matches(networks, desired)

    if not matches:
        procedure = Procedure.ADD
    elif len(matches) == 1:
        procedure = Procedure.REPLACE if method == "replace" else Procedure.MODIFY
    elif method == "replace":
        procedure = Procedure.REPLACE
    else:
        ids = [n.id for n in matches]
        raise AmbiguousMatchError(
            f"Found {len(matches)} matching networks (ids {ids}) and therefore "
            f"cannot do METHOD={method}",
            ids,
        )

    return ReconcilePlan(method=method, procedure=procedure, matches=matches,
                         fields=desired.fields())


class Reconciler:
    """Applies a desired profile to wpa_supplicant through wpa_cli."""

    def __init__(self, cli: WpaCli, options: RunOptions, lister: Optional[NetworkLister] = None):
        self.cli = cli
        self.options = options
        self.lister = lister or NetworkLister(cli)
        self.logger = logging.getLogger(__name__)

    def reconcile(self, networks: List[NetworkProfile], desired: DesiredProfile,
                  method: str) -> ReconcileOutcome:
        """Bring wpa_supplicant in line with the desired profile.

        Raises:
            AmbiguousMatchError: several matches and METHOD=integrate
            CommandError: commands were not acknowledged
            SanityCheckError: add_network returned an unexpected id
        """
        plan = plan_reconcile(networks, desired, method)

        if self.options.verbose:
            for network in plan.matches:
                self.logger.info(f"Matching network: {network.to_dict()}")
        self.logger.info(f"Ready to work: METHOD={method} and procedure={plan.procedure.value}")

        if self.options.dry_run:
            print("Run with --dry-run. This is what I would have done otherwise:\n")
            print(plan.describe(desired.redacted()))
            return ReconcileOutcome(plan=plan, dry_run=True)

        outcome = ReconcileOutcome(plan=plan)
        if plan.procedure == Procedure.ADD:
            outcome.network_id, errors = self.add(networks, plan.fields)
        elif plan.procedure == Procedure.MODIFY:
            outcome.network_id = plan.matches[0].id
            errors = self.set_fields(outcome.network_id, plan.fields)
        else:
            outcome.removed_ids = self.remove(plan.matched_ids)
            # Removals change the high-water mark; add against a fresh listing.
            outcome.network_id, errors = self.add(self.lister.list_networks(), plan.fields)

        if errors:
            result = self.cli.execute("reconfigure")
            self.logger.info(f"{self.cli.format_argv(result.argv)}: {result.value}")
            raise CommandError(f"Bailing out due to {len(errors)} error(s)", errors)

        self.finish()
        return outcome

    def add(self, networks: List[NetworkProfile], fields) -> Tuple[Optional[int], List[str]]:
        """Add a network and set its fields, removing it again if any set fails.

        The new id must be one above the highest id in ``networks``.
        """
        result = self.cli.add_network()
        if not result.ok:
            return None, [result.message]

        new_id = int(result.value)
        prior_high_id = max((n.id for n in networks), default=-1)
        if new_id != prior_high_id + 1:
            raise SanityCheckError(
                f"The highest network id was {prior_high_id} and I expected to add one, "
                f"but I see: {new_id}",
                expected_id=prior_high_id + 1,
                actual_id=new_id,
            )
        self.logger.info(f"Added network id {new_id}")

        errors = self.set_fields(new_id, fields)
        if errors:
            self.logger.warning(f"Experienced {len(errors)} error(s). Removing newly added network.")
            removed = self.cli.execute("remove_network", new_id)
            self.logger.info(f"{self.cli.format_argv(removed.argv)}: {removed.value}")
            if not removed.ok:
                errors.append(removed.message)

        return new_id, errors

    def set_fields(self, network_id: int, fields) -> List[str]:
        """Run set_network for each field, collecting failures."""
        errors = []
        for key, value in fields.items():
            result = self.cli.execute("set_network", network_id, key, quote_value(key, value))
            if not result.ok:
                self.logger.error(result.message)
                errors.append(result.message)
        return errors

    def remove(self, network_ids: List[int]) -> List[int]:
        """Remove networks in ascending id order.

        If any removal fails, wpa_supplicant is told to re-read its
        configuration file and CommandError is raised.
        """
        errors = []
        removed = []
        for network_id in sorted(network_ids):
            self.logger.info(f"Removing network id {network_id}")
            result = self.cli.execute("remove_network", network_id)
            if result.ok:
                removed.append(network_id)
            else:
                errors.append(result.message)

        if errors:
            for error in errors:
                self.logger.error(error)
            self.cli.execute("reconfigure")
            raise CommandError("Bailing out after failing to remove all needed networks.", errors)

        return removed

    def finish(self) -> None:
        """Note the change in the daemon log, save the config and reassociate."""
        note = f"Applied changes from {self.options.conf_path}."
        results = [self.cli.execute("note", note)]
        results += [self.cli.execute(command) for command in ("save_config", "reassociate")]
        for result in results:
            if not result.ok:
                self.logger.warning(result.message)
