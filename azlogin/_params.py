"""CLI parameter definitions for azlogin.

Every input may also be supplied as an action input (``INPUT_<NAME>``)
or through ``--config-file``; a value given on the command line wins.
"""

from knack.arguments import ArgumentsContext


def _register_login_inputs(c):
    c.argument(
        "environment",
        options_list=["--environment", "-e"],
        help="Name of the Azure cloud: AzureCloud, AzureStack, AzureUSGovernment, AzureChinaCloud "
             "or AzureGermanCloud. Default: AzureCloud.",
    )
    c.argument(
        "auth_type",
        options_list=["--auth-type"],
        choices=["SERVICE_PRINCIPAL", "IDENTITY", "service_principal", "identity"],
        help="Authenticate with a service principal (secret or OIDC) or a managed identity. "
             "Default: SERVICE_PRINCIPAL.",
    )
    c.argument(
        "creds",
        options_list=["--creds"],
        help="JSON with clientId, clientSecret, tenantId and optionally subscriptionId and "
             "resourceManagerEndpointUrl.",
    )
    c.argument("client_id", options_list=["--client-id"], help="Client ID of the service principal or user-assigned identity.")
    c.argument("tenant_id", options_list=["--tenant-id"], help="Tenant ID of the service principal.")
    c.argument("subscription_id", options_list=["--subscription-id"], help="Subscription to select after login.")
    c.argument(
        "allow_no_subscriptions",
        options_list=["--allow-no-subscriptions"],
        help="Log in to a tenant without any subscription (true/false). Default: false.",
    )
    c.argument(
        "audience",
        options_list=["--audience"],
        help="Audience of the OIDC federated token. Default: api://AzureADTokenExchange.",
    )
    c.argument(
        "config_file",
        options_list=["--config-file"],
        help="YAML file of inputs keyed by input name (e.g. client-id).",
    )


def load_arguments(self, _):
    """Register CLI parameters for all commands."""

    with ArgumentsContext(self, "run") as c:
        _register_login_inputs(c)

    with ArgumentsContext(self, "config show") as c:
        _register_login_inputs(c)
