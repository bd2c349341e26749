"""Help text for azlogin commands."""

from knack.help_files import helps

helps["run"] = """
type: command
short-summary: Log the Azure CLI in with a service principal or managed identity.
long-summary: |
    Runs, in order: az --version, cloud registration (AzureStack only),
    az cloud set, az login and az account set. The first failing step
    aborts the login.

    A service principal with a secret (from --creds) logs in with the secret;
    without one it requests an OIDC token from the GitHub Actions runtime and
    logs in with a federated credential. With --auth-type IDENTITY, a client
    ID selects a user-assigned identity, otherwise the system-assigned
    identity is used.
examples:
    - name: OIDC login inside a workflow (id-token write permission required)
      text: azlogin run --client-id $CLIENT_ID --tenant-id $TENANT_ID --subscription-id $SUB_ID
    - name: Log in with a secret from a creds JSON document
      text: azlogin run --creds "$AZURE_CREDENTIALS"
    - name: Log in with the system-assigned managed identity
      text: azlogin run --auth-type IDENTITY --allow-no-subscriptions true
    - name: Read inputs from a file
      text: azlogin run --config-file login.yaml
"""

helps["cleanup"] = """
type: command
short-summary: Clear all Azure CLI accounts cached on the runner.
long-summary: |
    Intended as a post-job step on self-hosted runners so a later job does
    not reuse this job's credentials.
"""

helps["config"] = """
type: group
short-summary: Inspect the resolved login configuration.
"""

helps["config show"] = """
type: command
short-summary: Show the login inputs after resolution, with secrets redacted.
examples:
    - name: Check which inputs a workflow step will use
      text: azlogin config show --config-file login.yaml
"""
