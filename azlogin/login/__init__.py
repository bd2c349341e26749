"""Azure CLI login orchestration."""

from azlogin.login.azure_cli_login import (
    AZURESTACK_PROFILE,
    AzureCliLogin,
    BestEffortResult,
    LoginResult,
    derive_azurestack_suffixes,
)
from azlogin.login.cleanup import clear_accounts

__all__ = [
    "AZURESTACK_PROFILE",
    "AzureCliLogin",
    "BestEffortResult",
    "LoginResult",
    "clear_accounts",
    "derive_azurestack_suffixes",
]
