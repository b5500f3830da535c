"""Install command handling for the sol CLI."""

from sol.cli_helpers import get_manager, run_guarded


class InstallCommand:
    """Handles installing a Node.js version."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add install command parser to subparsers."""
        parser = subparsers.add_parser('install', help='Download and install a Node.js version')
        parser.add_argument('version', help='The version to install, e.g. 20.11.0')
        parser.add_argument('--archive', metavar='FILE',
                            help='Install from a local .tar.gz distribution instead of downloading')
        parser.add_argument('--no-use', dest='activate', action='store_false',
                            help='Do not make the installed version the active one')
        parser.set_defaults(func=InstallCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Execute the install command."""
        run_guarded(InstallCommand._install, args, "Install failed")

    @staticmethod
    def _install(args) -> None:
        manager = get_manager(args)
        manager.install(args.version, archive=args.archive, activate=args.activate)
        print(f"Node.js version {args.version} installed successfully")
