"""Custom command implementations for azlogin.

These functions are the entry points called by the knack CLI.
Each one maps to a registered command in commands.py.
"""

import logging

from azlogin import actions

logger = logging.getLogger(__name__)


# ======================================================================
# Helpers
# ======================================================================

def _build_config(
    environment=None,
    auth_type=None,
    creds=None,
    client_id=None,
    tenant_id=None,
    subscription_id=None,
    allow_no_subscriptions=None,
    audience=None,
    config_file=None,
):
    """Resolve a LoginConfig from CLI arguments, action inputs and a file."""
    from azlogin.config import LoginConfig

    overrides = {
        "environment": environment,
        "auth-type": auth_type,
        "creds": creds,
        "client-id": client_id,
        "tenant-id": tenant_id,
        "subscription-id": subscription_id,
        "allow-no-subscriptions": allow_no_subscriptions,
        "audience": audience,
    }
    return LoginConfig.from_inputs(overrides, config_file=config_file)


# ======================================================================
# Commands
# ======================================================================

def login_run(
    environment=None,
    auth_type=None,
    creds=None,
    client_id=None,
    tenant_id=None,
    subscription_id=None,
    allow_no_subscriptions=None,
    audience=None,
    config_file=None,
):
    """Log the Azure CLI in and return a summary of the login."""
    from azlogin.login import AzureCliLogin

    actions.install_log_handler()
    # Must be exported before the first az call so every request carries it.
    actions.export_user_agent()

    config = _build_config(
        environment=environment,
        auth_type=auth_type,
        creds=creds,
        client_id=client_id,
        tenant_id=tenant_id,
        subscription_id=subscription_id,
        allow_no_subscriptions=allow_no_subscriptions,
        audience=audience,
        config_file=config_file,
    )
    config.validate()
    result = AzureCliLogin(config).login().to_dict()

    actions.set_outputs(result)
    logger.debug("Published step outputs: %s", ", ".join(result))
    return result


def login_cleanup():
    """Clear cached Azure CLI accounts after the job."""
    from azlogin.login import clear_accounts

    actions.install_log_handler()
    clear_accounts()
    return {"cleared": True}


def login_config_show(
    environment=None,
    auth_type=None,
    creds=None,
    client_id=None,
    tenant_id=None,
    subscription_id=None,
    allow_no_subscriptions=None,
    audience=None,
    config_file=None,
):
    """Return the resolved login configuration with secrets redacted."""
    config = _build_config(
        environment=environment,
        auth_type=auth_type,
        creds=creds,
        client_id=client_id,
        tenant_id=tenant_id,
        subscription_id=subscription_id,
        allow_no_subscriptions=allow_no_subscriptions,
        audience=audience,
        config_file=config_file,
    )
    data = config.to_dict(redact=True)
    data["auth_method"] = config.auth_method().description
    return data
