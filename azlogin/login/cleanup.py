"""Post-job cleanup of Azure CLI credentials."""

import logging

from azlogin.az_cli import AzCli, find_az
from azlogin.ui.console import console

logger = logging.getLogger(__name__)


def clear_accounts(az: AzCli | None = None):
    """Remove every cached account from the Azure CLI profile.

    Self-hosted runners keep ``~/.azure`` between jobs, so the next job
    must not inherit this job's login.
    """
    if az is None:
        az = AzCli(find_az())
    console.print_info("Clearing Azure CLI accounts from the local cache.")
    az.run(["account", "clear"], silent=True)
    console.print_success("Azure CLI accounts cleared.")
