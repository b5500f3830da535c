"""Registry for CLI subcommands."""

from .install_command import InstallCommand
from .list_command import ListCommand
from .remove_command import RemoveCommand
from .use_command import UseCommand

COMMANDS = (
    InstallCommand,
    UseCommand,
    RemoveCommand,
    ListCommand,
)

__all__ = ["COMMANDS", "InstallCommand", "UseCommand", "RemoveCommand", "ListCommand"]
