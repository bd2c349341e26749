"""azlogin — log the Azure CLI in from a CI/CD pipeline."""

import os
import sys

from knack import CLI
from knack.commands import CLICommandsLoader

from azlogin._help import helps  # noqa: F401

__version__ = "1.0.0"

CLI_NAME = "azlogin"


class LoginCommandsLoader(CLICommandsLoader):
    """Command loader for the azlogin CLI."""

    def load_command_table(self, args):
        from azlogin.commands import load_command_table

        load_command_table(self, args)
        return super().load_command_table(args)

    def load_arguments(self, command):
        from azlogin._params import load_arguments

        load_arguments(self, command)
        super().load_arguments(command)


COMMAND_LOADER_CLS = LoginCommandsLoader


def get_cli() -> CLI:
    """Build the knack CLI instance."""
    return CLI(
        cli_name=CLI_NAME,
        config_dir=os.path.expanduser(os.path.join("~", f".{CLI_NAME}")),
        config_env_var_prefix=CLI_NAME.upper(),
        commands_loader_cls=COMMAND_LOADER_CLS,
    )


def main(args=None) -> int:
    """Console-script entry point."""
    args = sys.argv[1:] if args is None else args
    return get_cli().invoke(args)
