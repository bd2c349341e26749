"""Command table registration for azlogin."""

from knack.commands import CommandGroup


def load_command_table(self, _):
    """Register all azlogin commands."""

    with CommandGroup(self, "", "azlogin.custom#{}") as g:
        g.command("run", "login_run")
        g.command("cleanup", "login_cleanup")

    with CommandGroup(self, "config", "azlogin.custom#{}") as g:
        g.command("show", "login_config_show")
