"""wpa_supplicant hot-config via wpa_cli."""

__version__ = "0.3.0"

from .executor import WpaCli
from .lister import NetworkLister
from .reconciler import Reconciler, plan_reconcile, quote_value
from .states import NetworkProfile, CommandResult, Procedure, ReconcilePlan, ReconcileOutcome
from .exceptions import (
    HotConfigError, ConfigurationError, AmbiguousMatchError,
    CommandError, SanityCheckError, CommandSpawnError
)

__all__ = [
    "__version__", "WpaCli", "NetworkLister", "Reconciler", "plan_reconcile", "quote_value",
    "NetworkProfile", "CommandResult", "Procedure", "ReconcilePlan", "ReconcileOutcome",
    "HotConfigError", "ConfigurationError", "AmbiguousMatchError",
    "CommandError", "SanityCheckError", "CommandSpawnError",
]
