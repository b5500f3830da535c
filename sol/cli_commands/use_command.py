"""Use command handling for the sol CLI."""

from sol.cli_helpers import get_manager, run_guarded


class UseCommand:
    """Handles switching the active Node.js version."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('use', help='Switch the active Node.js version')
        parser.add_argument('version', help='An installed version')
        parser.set_defaults(func=UseCommand.execute)

    @staticmethod
    def execute(args) -> None:
        run_guarded(UseCommand._use, args, "Switching version failed")

    @staticmethod
    def _use(args) -> None:
        get_manager(args).use(args.version)
        print(f"Node.js version {args.version} is now in use")
