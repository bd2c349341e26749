"""Authentication methods supported by ``az login``.

Exactly one method is selected per login (see
``LoginConfig.auth_method``).  Each method knows how to describe itself
in log and error messages and which ``az login`` arguments it needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ServicePrincipalSecret:
    client_id: str
    tenant_id: str
    secret: str

    description = "service principal with secret"

    def login_args(self) -> list[str]:
        return [
            "--service-principal",
            "--username", self.client_id,
            "--tenant", self.tenant_id,
            f"--password={self.secret}",
        ]


@dataclass(frozen=True)
class ServicePrincipalOidc:
    """Service principal backed by a federated (OIDC) credential.

    ``federated_token`` is empty until the token has been requested;
    the orchestrator fills it in with ``dataclasses.replace``.
    """

    client_id: str
    tenant_id: str
    federated_token: str = ""

    description = "OIDC"

    def login_args(self) -> list[str]:
        return [
            "--service-principal",
            "--username", self.client_id,
            "--tenant", self.tenant_id,
            "--federated-token", self.federated_token,
        ]


@dataclass(frozen=True)
class UserAssignedIdentity:
    client_id: str

    description = "user-assigned managed identity"

    def login_args(self) -> list[str]:
        return ["--identity", "--username", self.client_id]


@dataclass(frozen=True)
class SystemAssignedIdentity:
    description = "system-assigned managed identity"

    def login_args(self) -> list[str]:
        return ["--identity"]


AuthMethod = Union[ServicePrincipalSecret, ServicePrincipalOidc, UserAssignedIdentity, SystemAssignedIdentity]
