"""Login configuration management.

Inputs are named as in ``action.yml`` (``client-id``, ``auth-type`` …) and
resolved per input in this order:

1. an explicit CLI argument
2. the action input exported by the runner (``INPUT_CLIENT-ID`` …)
3. the optional YAML config file passed with ``--config-file``
4. the built-in default

Service principal credentials may also arrive as a single ``creds`` JSON
document (the format printed by ``az ad sp create-for-rbac --sdk-auth``).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml

from azlogin import actions
from azlogin.config.auth_methods import (
    AuthMethod,
    ServicePrincipalOidc,
    ServicePrincipalSecret,
    SystemAssignedIdentity,
    UserAssignedIdentity,
)
from azlogin.errors import ConfigurationError
from azlogin.oidc import DEFAULT_AUDIENCE, fetch_id_token, log_token_claims

logger = logging.getLogger(__name__)

__all__ = [
    "AZURESTACK",
    "AuthMethod",
    "AuthType",
    "DEFAULTS",
    "INPUT_NAMES",
    "LoginConfig",
    "SUPPORTED_ENVIRONMENTS",
    "ServicePrincipalOidc",
    "ServicePrincipalSecret",
    "SystemAssignedIdentity",
    "UserAssignedIdentity",
    "get_input",
    "load_config_file",
    "parse_bool",
]


class AuthType(str, Enum):
    """How the runner authenticates to Azure."""

    SERVICE_PRINCIPAL = "service_principal"
    IDENTITY = "identity"

    @classmethod
    def parse(cls, value: str | None) -> "AuthType":
        normalized = (value or cls.SERVICE_PRINCIPAL.value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(m.value.upper() for m in cls)
        raise ConfigurationError(f"Unsupported value '{value}' for auth-type. Supported values: {allowed}.")


AZURESTACK = "azurestack"

SUPPORTED_ENVIRONMENTS = frozenset(
    {
        "azurecloud",
        "azurestack",
        "azureusgovernment",
        "azurechinacloud",
        "azuregermancloud",
    }
)

INPUT_NAMES = (
    "environment",
    "auth-type",
    "creds",
    "client-id",
    "tenant-id",
    "subscription-id",
    "allow-no-subscriptions",
    "audience",
)

DEFAULTS: dict[str, str] = {
    "environment": "azurecloud",
    "auth-type": AuthType.SERVICE_PRINCIPAL.value,
    "allow-no-subscriptions": "false",
    "audience": DEFAULT_AUDIENCE,
}

# Keys shown as *** by ``to_dict(redact=True)``.
SECRET_FIELDS = ("service_principal_secret", "federated_token")

_TRUE_VALUES = frozenset({"true", "yes", "1", "on"})
_FALSE_VALUES = frozenset({"false", "no", "0", "off", ""})


def parse_bool(value: Any, name: str = "value") -> bool:
    """Parse an action-style boolean input."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower() if value is not None else ""
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Input '{name}' must be a boolean (true/false), got '{value}'.")


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input the way the runner exports it.

    ``client-id`` is read from ``INPUT_CLIENT-ID``: spaces become
    underscores, the name is upper-cased, hyphens are kept.
    """
    environ = os.environ if environ is None else environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    return environ.get(key, "").strip()


def load_config_file(path: str | Path) -> dict:
    """Load a YAML file of input values keyed by input name."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse configuration file {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping of input names.")

    unknown = sorted(str(k) for k in data if k not in INPUT_NAMES)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", config_path, ", ".join(unknown))
    return {k: "" if v is None else v for k, v in data.items() if k in INPUT_NAMES}


def _parse_creds(creds: str) -> dict:
    try:
        secrets = json.loads(creds)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"'creds' is not valid JSON: {exc.msg}.") from exc
    if not isinstance(secrets, dict):
        raise ConfigurationError("'creds' must be a JSON object.")
    return secrets


def _read_creds(creds: str, values: Mapping[str, Any]) -> dict:
    """Return the service principal fields a ``creds`` JSON document supplies.

    Individually supplied client-id, tenant-id and subscription-id in
    *values* win over the ones in ``creds``.
    """
    secrets = _parse_creds(creds)
    actions.set_secret(secrets.get("clientSecret"))
    if values["auth_type"] != AuthType.SERVICE_PRINCIPAL:
        logger.debug("Ignoring 'creds' for auth-type %s.", values["auth_type"].value)
        return {}

    if not (secrets.get("clientId") and secrets.get("clientSecret") and secrets.get("tenantId")):
        raise ConfigurationError(
            "Not all parameters are provided in 'creds'. Double-check if all keys are defined in "
            "'creds': 'clientId', 'clientSecret', 'tenantId'."
        )

    logger.debug("Reading creds in JSON...")
    return {
        "service_principal_id": values["service_principal_id"] or secrets["clientId"],
        "service_principal_secret": secrets["clientSecret"],
        "tenant_id": values["tenant_id"] or secrets["tenantId"],
        "subscription_id": values["subscription_id"] or secrets.get("subscriptionId", "") or "",
        "resource_manager_endpoint_url": secrets.get("resourceManagerEndpointUrl", "") or "",
    }


@dataclass(frozen=True)
class LoginConfig:
    """Resolved inputs for one login.

    Frozen once built.  ``federated_token`` is the one exception: it is
    filled in by :meth:`get_federated_token` when the OIDC path runs.
    """

    environment: str = DEFAULTS["environment"]
    auth_type: AuthType = AuthType.SERVICE_PRINCIPAL
    service_principal_id: str = ""
    tenant_id: str = ""
    service_principal_secret: str | None = None
    resource_manager_endpoint_url: str = ""
    subscription_id: str = ""
    allow_no_subscriptions_login: bool = False
    audience: str = DEFAULT_AUDIENCE
    federated_token: str | None = field(default=None, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_inputs(
        cls,
        overrides: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
        config_file: str | Path | None = None,
    ) -> "LoginConfig":
        """Build a config from CLI overrides, action inputs and a YAML file.

        Args:
            overrides: Values keyed by input name; ``None`` entries are
                treated as not supplied.
            environ: Environment to read ``INPUT_*`` variables from.
            config_file: Optional YAML file of input values.
        """
        file_values = load_config_file(config_file) if config_file else {}
        overrides = overrides or {}

        def resolve(name: str) -> Any:
            value = overrides.get(name)
            if value is not None and value != "":
                return value
            value = get_input(name, environ)
            if value:
                return value
            value = file_values.get(name)
            if value is not None and value != "":
                return value
            return DEFAULTS.get(name, "")

        auth_type = AuthType.parse(resolve("auth-type"))
        values = {
            "environment": str(resolve("environment")).strip().lower(),
            "auth_type": auth_type,
            "service_principal_id": str(resolve("client-id")).strip(),
            "tenant_id": str(resolve("tenant-id")).strip(),
            "subscription_id": str(resolve("subscription-id")).strip(),
            "allow_no_subscriptions_login": parse_bool(resolve("allow-no-subscriptions"), "allow-no-subscriptions"),
            "audience": str(resolve("audience")).strip(),
        }

        creds = resolve("creds")
        if creds:
            if isinstance(creds, dict):
                creds = json.dumps(creds)
            values.update(_read_creds(str(creds), values))

        config = cls(**values)
        config.mask_secrets()
        return config

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self):
        """Check the inputs every login path relies on.

        The azurestack endpoint is checked later by the orchestrator,
        right before the cloud is registered.
        """
        if self.environment not in SUPPORTED_ENVIRONMENTS:
            raise ConfigurationError(
                f"Unsupported value '{self.environment}' for environment. Supported values: "
                + ", ".join(sorted(SUPPORTED_ENVIRONMENTS))
                + "."
            )
        if self.auth_type == AuthType.SERVICE_PRINCIPAL and not (self.service_principal_id and self.tenant_id):
            raise ConfigurationError(
                "Using auth-type: SERVICE_PRINCIPAL. Not all values are present. "
                "Ensure 'client-id' and 'tenant-id' are supplied."
            )

    # ------------------------------------------------------------------
    # Auth method selection
    # ------------------------------------------------------------------

    def auth_method(self) -> AuthMethod:
        """Return the single authentication method these inputs select."""
        if self.auth_type == AuthType.SERVICE_PRINCIPAL:
            if self.service_principal_secret:
                return ServicePrincipalSecret(
                    client_id=self.service_principal_id,
                    tenant_id=self.tenant_id,
                    secret=self.service_principal_secret,
                )
            return ServicePrincipalOidc(client_id=self.service_principal_id, tenant_id=self.tenant_id)
        if self.service_principal_id:
            return UserAssignedIdentity(client_id=self.service_principal_id)
        return SystemAssignedIdentity()

    def get_federated_token(self) -> str:
        """Request an OIDC token for ``audience`` and remember it.

        Raises:
            TokenRetrievalFailure: propagated unchanged from the OIDC client.
        """
        token = fetch_id_token(self.audience)
        actions.set_secret(token)
        object.__setattr__(self, "federated_token", token)
        log_token_claims(token)
        return token

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def mask_secrets(self):
        """Register secret values with the runner's log masker."""
        actions.set_secret(self.service_principal_secret)
        actions.set_secret(self.federated_token)

    def to_dict(self, redact: bool = True) -> dict:
        """Return the config as plain data, hiding secrets by default."""
        data = {
            "environment": self.environment,
            "auth_type": self.auth_type.value,
            "service_principal_id": self.service_principal_id,
            "tenant_id": self.tenant_id,
            "service_principal_secret": self.service_principal_secret,
            "resource_manager_endpoint_url": self.resource_manager_endpoint_url,
            "subscription_id": self.subscription_id,
            "allow_no_subscriptions_login": self.allow_no_subscriptions_login,
            "audience": self.audience,
            "federated_token": self.federated_token,
        }
        if redact:
            for key in SECRET_FIELDS:
                if data[key]:
                    data[key] = "***"
        return data
