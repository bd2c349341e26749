"""Shared test fixtures for azlogin tests."""

import os
from unittest.mock import MagicMock

import pytest

from azlogin.az_cli import AzCli
from azlogin.config import AuthType, LoginConfig
from azlogin.errors import CommandFailure

AZ_PATH = "/usr/bin/az"


# ------------------------------------------------------------------
# Global: isolate tests from the runner environment they execute in
# ------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_runner_env(monkeypatch):
    """Strip GitHub Actions variables so tests behave like a workstation.

    When the suite itself runs inside a workflow, INPUT_* and
    ACTIONS_ID_TOKEN_* values would otherwise leak into config
    resolution and OIDC requests.
    """
    for key in list(os.environ):
        if key.startswith(("INPUT_", "ACTIONS_ID_TOKEN_", "GITHUB_")):
            monkeypatch.delenv(key, raising=False)
    # setenv first so teardown restores the original value after export_user_agent()
    monkeypatch.setenv("AZURE_HTTP_USER_AGENT", "")
    monkeypatch.delenv("AZURE_HTTP_USER_AGENT")


def make_command_failure(args=None, returncode=1, stderr="ERROR: boom"):
    return CommandFailure([AZ_PATH] + list(args or ["login"]), returncode, stdout="", stderr=stderr)


@pytest.fixture
def mock_az():
    """An AzCli stand-in whose every call succeeds."""
    az = MagicMock(spec=AzCli)
    az.az_path = AZ_PATH
    az.run.return_value = MagicMock(returncode=0, stdout="azure-cli 2.61.0\n", stderr="")
    return az


@pytest.fixture
def failing_az(mock_az):
    """Build an AzCli stand-in that fails on the first call starting with *verb*."""

    def _factory(verb: str, *rest: str):
        prefix = [verb, *rest]

        def _run(args, silent=False):
            if list(args[: len(prefix)]) == prefix:
                raise make_command_failure(args)
            return MagicMock(returncode=0, stdout="azure-cli 2.61.0\n", stderr="")

        mock_az.run.side_effect = _run
        return mock_az

    return _factory


@pytest.fixture
def sp_secret_config():
    return LoginConfig(
        environment="azurecloud",
        auth_type=AuthType.SERVICE_PRINCIPAL,
        service_principal_id="client-123",
        tenant_id="tenant-456",
        service_principal_secret="s3cr3t",
        subscription_id="sub-789",
    )


@pytest.fixture
def sp_oidc_config():
    return LoginConfig(
        environment="azurecloud",
        auth_type=AuthType.SERVICE_PRINCIPAL,
        service_principal_id="client-123",
        tenant_id="tenant-456",
        subscription_id="sub-789",
    )


@pytest.fixture
def identity_config():
    return LoginConfig(auth_type=AuthType.IDENTITY, subscription_id="sub-789")


@pytest.fixture
def azurestack_config():
    return LoginConfig(
        environment="azurestack",
        auth_type=AuthType.SERVICE_PRINCIPAL,
        service_principal_id="client-123",
        tenant_id="tenant-456",
        service_principal_secret="s3cr3t",
        resource_manager_endpoint_url="https://management.local.azurestack.external/",
        subscription_id="sub-789",
    )
