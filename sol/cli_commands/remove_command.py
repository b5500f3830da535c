"""Remove command handling for the sol CLI."""

from sol.cli_helpers import get_manager, run_guarded


class RemoveCommand:
    """Handles removing an installed Node.js version."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('remove', help='Remove an installed Node.js version')
        parser.add_argument('version', help='The version to remove')
        parser.set_defaults(func=RemoveCommand.execute)

    @staticmethod
    def execute(args) -> None:
        run_guarded(RemoveCommand._remove, args, "Remove failed")

    @staticmethod
    def _remove(args) -> None:
        was_active = get_manager(args).remove(args.version)
        print(f"Node.js version {args.version} removed successfully")
        if was_active:
            print("No version is active anymore. Run 'sol use <version>' to select one.")
