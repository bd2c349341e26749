"""Error types raised while driving the Azure CLI login sequence.

All errors derive from knack's ``CLIError`` so the CLI prints the message
and exits non-zero without a traceback.
"""

from knack.util import CLIError


class ToolNotFound(CLIError):
    """The Azure CLI executable could not be located on PATH."""


class ConfigurationError(CLIError):
    """A required input is missing or invalid for the selected code path."""


class TokenRetrievalFailure(CLIError):
    """The OIDC federated token could not be obtained."""


class CommandFailure(CLIError):
    """The Azure CLI exited with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stdout: str = "", stderr: str = "", message: str | None = None):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        # cmd may carry a password or federated token; keep it out of the message
        super().__init__(message or f"The process '{cmd[0]}' failed with exit code {returncode}")

    @classmethod
    def wrap(cls, error: "CommandFailure", message: str, **kwargs) -> "CommandFailure":
        """Re-raise *error* as *cls* with a descriptive message."""
        return cls(error.cmd, error.returncode, error.stdout, error.stderr, message=message, **kwargs)


class LoginFailure(CommandFailure):
    """``az login`` failed for the attempted authentication method."""

    def __init__(self, *args, method: str = "", **kwargs):
        self.method = method
        super().__init__(*args, **kwargs)


class SubscriptionFailure(CommandFailure):
    """``az account set`` failed for the configured subscription."""
