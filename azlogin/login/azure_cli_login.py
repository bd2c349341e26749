"""Azure CLI login orchestration.

Drives ``az`` through a fixed sequence, one blocking call at a time:

1. resolve the ``az`` executable
2. ``az --version`` (logged for diagnostics)
3. register the ``azurestack`` cloud when requested, then ``az cloud set``
4. ``az login`` with the selected authentication method
5. ``az account set`` for the configured subscription

Any failure aborts the sequence.  The one tolerated failure is removing
a previous ``azurestack`` registration, which fails on first use.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from azlogin.az_cli import AzCli, find_az
from azlogin.config import AZURESTACK, LoginConfig, ServicePrincipalOidc, ServicePrincipalSecret
from azlogin.errors import CommandFailure, ConfigurationError, LoginFailure, SubscriptionFailure
from azlogin.ui.console import console

logger = logging.getLogger(__name__)

DEFAULT_CLOUD = "AzureCloud"
AZURESTACK_PROFILE = "2019-03-01-hybrid"

_README_URL = "https://github.com/Azure/login#readme"
_OIDC_DOCS_URL = (
    "https://github.com/azure/login#configure-a-service-principal-with-a-federated-credential-"
    "to-use-oidc-based-authentication"
)


@dataclass
class BestEffortResult:
    """Outcome of a step whose failure does not abort the login."""

    succeeded: bool
    error: CommandFailure | None = None


@dataclass
class LoginResult:
    """Summary of a completed login."""

    environment: str
    auth_type: str
    method: str
    subscription_id: str
    success: bool

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def derive_azurestack_suffixes(resource_manager_endpoint_url: str) -> tuple[str, str]:
    """Derive the Key Vault and Storage DNS suffixes from an ARM endpoint.

    Everything from the first ``.`` of the endpoint (minus one trailing
    ``/``) is the shared domain.  The Key Vault suffix keeps the leading
    dot, the Storage suffix does not::

        >>> derive_azurestack_suffixes("https://management.local.azurestack.external/")
        ('.vault.local.azurestack.external', 'local.azurestack.external')
    """
    base_uri = resource_manager_endpoint_url
    if base_uri.endswith("/"):
        base_uri = base_uri[:-1]
    dot = base_uri.find(".")
    if dot < 0:
        raise ConfigurationError(
            f"resourceManagerEndpointUrl '{resource_manager_endpoint_url}' has no domain to derive suffixes from."
        )
    return ".vault" + base_uri[dot:], base_uri[dot + 1:]


class AzureCliLogin:
    """Logs the Azure CLI in according to a :class:`LoginConfig`.

    Args:
        config: Resolved login inputs.
        az: Runner to use.  When omitted, ``az`` is resolved from PATH at
            the start of :meth:`login`.
    """

    def __init__(self, config: LoginConfig, az: AzCli | None = None):
        self.config = config
        self.az = az
        self.is_success = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def login(self) -> LoginResult:
        """Run the full login sequence.

        Raises:
            ToolNotFound: az is not on PATH.
            ConfigurationError: an input required by the chosen path is missing.
            TokenRetrievalFailure: the OIDC token could not be fetched.
            CommandFailure: any az call other than the cloud unregister failed.
        """
        if self.az is None:
            az_path = find_az()
            logger.debug("Azure CLI path: %s", az_path)
            self.az = AzCli(az_path)

        version = self.az.run(["--version"], silent=True)
        logger.debug("Azure CLI version used:\n%s", version.stdout)

        self.set_azurestack_env_if_necessary()

        self.az.run(["cloud", "set", "-n", self.config.environment])
        console.print_success(f'Done setting cloud: "{self.config.environment}"')

        method = self.config.auth_method()
        if isinstance(method, ServicePrincipalSecret):
            console.print_info(
                "Note: Azure/login action also supports OIDC login mechanism. "
                f"Refer {_OIDC_DOCS_URL} for more details."
            )
        elif isinstance(method, ServicePrincipalOidc):
            token = self.config.get_federated_token()
            method = dataclasses.replace(method, federated_token=token)

        self.call_cli_login(method.login_args(), method.description)
        self.set_subscription()

        self.is_success = True
        console.print_success(f"Azure CLI login succeed by using {method.description}.")
        return LoginResult(
            environment=self.config.environment,
            auth_type=self.config.auth_type.value,
            method=method.description,
            subscription_id=self.config.subscription_id,
            success=self.is_success,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def set_azurestack_env_if_necessary(self):
        """Register the ``azurestack`` cloud from the configured ARM endpoint."""
        if self.config.environment != AZURESTACK:
            return
        if not self.config.resource_manager_endpoint_url:
            raise ConfigurationError(
                "resourceManagerEndpointUrl is a required parameter when environment is defined."
            )
        endpoint = self.config.resource_manager_endpoint_url
        suffix_keyvault, suffix_storage = derive_azurestack_suffixes(endpoint)

        console.print_info(f'Unregistering cloud: "{self.config.environment}" first if it exists')
        outcome = self.unregister_cloud()
        if not outcome.succeeded:
            console.print_dim(f'Ignore cloud not registered error: "{outcome.error}"')

        console.print_info(f'Registering cloud: "{self.config.environment}" with ARM endpoint: "{endpoint}"')
        try:
            self.az.run([
                "cloud", "register",
                "-n", self.config.environment,
                "--endpoint-resource-manager", endpoint,
                "--suffix-keyvault-dns", suffix_keyvault,
                "--suffix-storage-endpoint", suffix_storage,
                "--profile", AZURESTACK_PROFILE,
            ])
        except CommandFailure:
            logger.error('Error while trying to register cloud "%s"', self.config.environment)
            raise

        console.print_success(f'Done registering cloud: "{self.config.environment}"')

    def unregister_cloud(self) -> BestEffortResult:
        """Switch to the default cloud and drop any ``azurestack`` registration.

        Failure is expected when the cloud was never registered; the cause
        is not inspected.
        """
        try:
            self.az.run(["cloud", "set", "-n", DEFAULT_CLOUD], silent=True)
            self.az.run(["cloud", "unregister", "-n", self.config.environment])
        except CommandFailure as exc:
            return BestEffortResult(succeeded=False, error=exc)
        return BestEffortResult(succeeded=True)

    def call_cli_login(self, args: list[str], method_name: str):
        """Run ``az login`` with *args*.

        Raises:
            LoginFailure: naming *method_name*, when az exits non-zero.
        """
        console.print_info(f"Attempting Azure CLI login by using {method_name}...")
        args = ["login"] + list(args)
        if self.config.allow_no_subscriptions_login:
            args.append("--allow-no-subscriptions")
        try:
            self.az.run(args, silent=True)
        except CommandFailure as exc:
            raise LoginFailure.wrap(
                exc,
                f"Azure CLI login failed by using {method_name}: {exc} "
                f"Please check the credentials and auth-type. For more information refer {_README_URL}",
                method=method_name,
            ) from exc

    def set_subscription(self):
        """Select the configured subscription, if one should be selected."""
        if self.config.allow_no_subscriptions_login:
            return
        if not self.config.subscription_id:
            logger.warning(
                "No subscription-id is given. Skip setting subscription... If there are multiple "
                "subscriptions under the tenant, please input subscription-id to specify which subscription to use."
            )
            return
        try:
            self.az.run(["account", "set", "--subscription", self.config.subscription_id], silent=True)
        except CommandFailure as exc:
            raise SubscriptionFailure.wrap(
                exc,
                f"Failed to set subscription '{self.config.subscription_id}': {exc}",
            ) from exc
        console.print_success("Subscription is set successfully.")
