"""Azure CLI process execution.

Locates the ``az`` executable and runs it with an argument vector.  Every
call blocks until the process exits; no timeout is applied.  A non-zero
exit status is raised as :class:`~azlogin.errors.CommandFailure`.
"""

import logging
import shutil
import subprocess

from azlogin.errors import CommandFailure, ToolNotFound

logger = logging.getLogger(__name__)

AZ_CLI = "az"

# Arguments whose following value must never reach a log line.
_SECRET_FLAGS = ("--password", "--federated-token")


def find_az(name: str = AZ_CLI) -> str:
    """Resolve the Azure CLI executable on PATH.

    Raises:
        ToolNotFound: if the executable is not on PATH.
    """
    found = shutil.which(name)
    if not found:
        raise ToolNotFound("Azure CLI is not found in the runner.")
    return found


def redact_args(args: list[str]) -> list[str]:
    """Return a copy of *args* safe to log.

    Handles both ``--password value`` and ``--password=value`` forms.
    """
    redacted: list[str] = []
    hide_next = False
    for arg in args:
        if hide_next:
            redacted.append("***")
            hide_next = False
            continue
        flag, sep, _ = arg.partition("=")
        if flag in _SECRET_FLAGS:
            if sep:
                redacted.append(f"{flag}=***")
            else:
                redacted.append(arg)
                hide_next = True
            continue
        redacted.append(arg)
    return redacted


def report_stderr(stderr: str) -> None:
    """Surface meaningful stderr output from a silenced command.

    Warnings are dropped.  A leading ``ERROR`` keyword is removed so the
    message is not prefixed twice once it reaches the error log.
    """
    if not stderr or not stderr.strip():
        return
    lowered = stderr.lower()
    if lowered.startswith("warning"):
        return
    if lowered.startswith("error"):
        stderr = stderr[5:].lstrip(":")
    logger.error(stderr.strip())


class AzCli:
    """Runs the Azure CLI at a resolved path."""

    def __init__(self, az_path: str):
        self.az_path = az_path

    def run(self, args: list[str], silent: bool = False) -> subprocess.CompletedProcess:
        """Execute ``az`` with *args* and wait for it to exit.

        Args:
            args: Arguments to pass to az.
            silent: Capture stdout/stderr instead of streaming them to the
                host.  Captured stderr is passed through :func:`report_stderr`.

        Returns:
            CompletedProcess result.  ``stdout`` is only populated when
            *silent* is set.

        Raises:
            CommandFailure: on a non-zero exit status.
        """
        cmd = [self.az_path] + list(args)
        logger.debug("Running: %s", " ".join(redact_args(cmd)))

        if silent:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
            report_stderr(result.stderr)
        else:
            result = subprocess.run(cmd, text=True, check=False)

        if result.returncode != 0:
            raise CommandFailure(
                cmd,
                result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )
        return result
