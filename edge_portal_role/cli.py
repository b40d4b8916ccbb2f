"""
Create a role that can be used for API connections from the Apigee Edge Drupal module.

The Edge user interface cannot be used to do this because the permissions the
module needs are more fine grained than it can display. The script must be run
as a user with the orgadmin role.

Usage:
======
    create-portal-role -o myorg
    create-portal-role -u me@example.com -o myorg -r drupalportal
    python -m edge_portal_role -o myorg -d

Exit Codes:
===========
    0: Role created (or already present) and all permissions set, or -h given
    1: Invalid options or any failed API call
"""

import argparse
import logging
import sys
from typing import List, NoReturn, Optional, Tuple

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from .api import EdgeAPIError
from .config import DEFAULT_BASE_URL, DEFAULT_ROLE, validate_options
from .provision import EdgeSession, provision_role

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

EXAMPLES = """\
Examples:
  create-portal-role -o myorg                    Run script for org myorg
  create-portal-role -u me@example.com -o myorg  Run script as orgadmin me@example.com for org myorg
"""


class OptionParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        err_console.print(f"Invalid option: {message}", markup=False)
        self.print_help()
        sys.exit(1)


def build_parser() -> OptionParser:
    parser = OptionParser(
        prog="create-portal-role",
        description="Create a role that can be used for API connections from Apigee Edge Drupal module",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-o", dest="org", metavar="<org>", default="", help="The Apigee org to run this script against")
    parser.add_argument(
        "-u",
        dest="username",
        metavar="<orgadmin>",
        default="",
        help="An Apigee user account with orgadmin role to use to authenticate",
    )
    parser.add_argument(
        "-b",
        dest="base_url",
        metavar="<baseurl>",
        default=DEFAULT_BASE_URL,
        help=f"Base URL to use, defaults to public cloud URL '{DEFAULT_BASE_URL}'",
    )
    parser.add_argument(
        "-r",
        dest="role",
        metavar="<rolename>",
        default=DEFAULT_ROLE,
        help=f"The role name to create, defaults to '{DEFAULT_ROLE}'",
    )
    parser.add_argument("-d", dest="debug", action="store_true", help="Display debug information")
    return parser


def parse_options(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse flags, echo them in debug mode, and make sure an org was given.

    Exits with status 1 on invalid or missing options and 0 after ``-h``.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    args.base_url = args.base_url.rstrip("/")

    if args.debug:
        console.print(f"EDGE_ORGADMIN_EMAIL: [{args.username}]", markup=False)
        console.print(f"EDGE_ORG_NAME: [{args.org}]", markup=False)
        console.print(f"PORTAL_API_ROLE: [{args.role}]", markup=False)
        console.print(f"APIGEE_API_BASE_URL: [{args.base_url}]", markup=False)
        console.print("IS_DEBUG: [1]", markup=False)

    try:
        validate_options(args.org, args.base_url, args.role)
    except ValueError as e:
        err_console.print(f"ERROR: {e}", markup=False)
        parser.print_help()
        sys.exit(1)

    return args


def prompt_credentials(org: str, username: str = "") -> Tuple[str, str]:
    """Ask for the orgadmin email (when not given) and password.

    Returns:
        Tuple of (username, password)
    """
    console.print("==== Edge Connection Settings ====")

    if not username:
        console.print(f'What orgadmin account should be used to connect to the Apigee org "{escape(org)}"?')
        username = Prompt.ask("Email", console=console)

    console.print(f'Enter password for "{escape(username)}"')
    password = Prompt.ask(f'"{escape(username)}" password', console=console, password=True)
    console.print()

    return username, password


def setup_logging(debug: bool) -> None:
    """Send package logs to stderr, at debug level when ``-d`` is given."""
    logger = logging.getLogger("edge_portal_role")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not logger.handlers:
        logger.addHandler(RichHandler(console=err_console, show_path=False))


def main(argv: Optional[List[str]] = None) -> int:
    """Resolve options and credentials, then provision the role.

    Returns:
        0 on success, 1 if any API call fails
    """
    args = parse_options(argv)
    setup_logging(args.debug)

    username, password = prompt_credentials(args.org, args.username)
    session = EdgeSession(
        org=args.org,
        base_url=args.base_url,
        username=username,
        password=password,
        role=args.role,
        debug=args.debug,
    )

    try:
        result = provision_role(session)
    except EdgeAPIError as e:
        err_console.print(str(e), markup=False)
        return 1

    console.print()
    console.print(
        Panel(
            f"[bold green]✓ Role '{escape(session.role)}' is ready[/bold green]\n"
            f"[dim]Organization:[/dim] {escape(session.org)}\n"
            f"[dim]Role:[/dim] {'created' if result.role_created else 'already present'}\n"
            f"[dim]Permissions set:[/dim] {result.permissions}",
            border_style="green",
            box=box.SIMPLE,
        )
    )
    console.print("Done. You can now assign a user to this role through the Apigee user interface.")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
