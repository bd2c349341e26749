"""GitHub Actions runner integration.

Thin helpers around the runner's workflow-command protocol:

* ``::add-mask::`` so secrets are scrubbed from the job log
* the ``GITHUB_ENV`` file for variables exported to later steps
* the ``GITHUB_OUTPUT`` file for step outputs
* a logging handler that turns warning/error records into annotations

Outside a runner every helper degrades to a no-op (or to updating
``os.environ`` only), so the CLI behaves the same on a workstation.
"""

import hashlib
import logging
import os
import sys
import uuid

logger = logging.getLogger(__name__)

ACTION_NAME = "AzureLogin"
USER_AGENT_VAR = "AZURE_HTTP_USER_AGENT"


def is_github_actions() -> bool:
    """Return *True* when running inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def escape_data(value: str) -> str:
    """Escape a workflow-command message body."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "") -> None:
    """Write a ``::command::message`` line to stdout."""
    sys.stdout.write(f"::{command}::{escape_data(message)}\n")
    sys.stdout.flush()


def set_secret(value: str | None) -> None:
    """Register *value* with the runner's log masker."""
    if not value or not is_github_actions():
        return
    issue_command("add-mask", value)


def _append_to_file(env_var: str, name: str, value: str) -> bool:
    path = os.environ.get(env_var)
    if not path:
        return False
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(path, "a", encoding="utf-8") as f:
        if "\n" in value:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")
    return True


def export_variable(name: str, value: str) -> None:
    """Set *name* for this process and for later steps of the job."""
    os.environ[name] = value
    if not _append_to_file("GITHUB_ENV", name, value):
        logger.debug("GITHUB_ENV not set; %s exported to this process only.", name)


def set_output(name: str, value) -> None:
    """Publish *value* as step output *name*.

    Booleans are written as ``true``/``false``, the way workflow
    expressions compare them.
    """
    if isinstance(value, bool):
        value = "true" if value else "false"
    if not _append_to_file("GITHUB_OUTPUT", name, "" if value is None else str(value)):
        logger.debug("GITHUB_OUTPUT not set; skipping step output %s.", name)


def set_outputs(values: dict) -> None:
    for name, value in values.items():
        set_output(name, value)


def build_user_agent(repository: str | None = None, prefix: str | None = None) -> str:
    """Return the user agent string the Azure CLI reports for this action.

    The repository name is hashed so it is not disclosed.  An existing
    user agent is kept as a ``+``-separated prefix.
    """
    repository = os.environ.get("GITHUB_REPOSITORY", "") if repository is None else repository
    repo_hash = hashlib.sha256(repository.encode("utf-8")).hexdigest()
    agent = f"GITHUBACTIONS/{ACTION_NAME}@v1_{repo_hash}"
    return f"{prefix}+{agent}" if prefix else agent


def export_user_agent() -> str:
    """Export ``AZURE_HTTP_USER_AGENT`` before any az invocation."""
    agent = build_user_agent(prefix=os.environ.get(USER_AGENT_VAR) or None)
    export_variable(USER_AGENT_VAR, agent)
    return agent


class ActionsLogHandler(logging.Handler):
    """Emit log records as workflow commands.

    DEBUG becomes ``::debug::`` (only shown with step debug logging),
    WARNING and ERROR become annotations.  INFO is written as plain text.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                issue_command("error", message)
            elif record.levelno >= logging.WARNING:
                issue_command("warning", message)
            elif record.levelno >= logging.INFO:
                sys.stdout.write(message + "\n")
                sys.stdout.flush()
            else:
                issue_command("debug", message)
        except Exception:
            self.handleError(record)


def install_log_handler(logger_name: str = "azlogin") -> logging.Handler | None:
    """Attach an :class:`ActionsLogHandler` when running on a runner.

    Idempotent: a second call returns the handler already installed.
    """
    if not is_github_actions():
        return None
    target = logging.getLogger(logger_name)
    for handler in target.handlers:
        if isinstance(handler, ActionsLogHandler):
            return handler
    handler = ActionsLogHandler()
    handler.setLevel(logging.DEBUG)
    target.addHandler(handler)
    target.setLevel(logging.DEBUG)
    target.propagate = False
    return handler
