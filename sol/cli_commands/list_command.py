"""Listing command handling for the sol CLI."""

from sol.cli_helpers import get_manager, run_guarded
from sol.common.errors import NoVersionsInstalledError


class ListCommand:
    """Handles listing installed Node.js versions."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('ls', help='List installed Node.js versions')
        parser.set_defaults(func=ListCommand.execute)

    @staticmethod
    def execute(args) -> None:
        run_guarded(ListCommand._list, args, "Listing versions failed")

    @staticmethod
    def _list(args) -> None:
        manager = get_manager(args)
        versions = manager.installed_versions()
        if not versions:
            raise NoVersionsInstalledError("No versions installed")

        current = manager.current_version()
        print("Installed versions:")
        for version in versions:
            if version == current:
                print(f"  {version} (current)")
            else:
                print(f"  {version}")
