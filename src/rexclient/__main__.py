"""CLI entry point for the REX client.

Credentials are read from REX_CLIENT_ID and REX_CLIENT_SECRET.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rexclient.client import RexClient
from rexclient.config import Settings
from rexclient.display import format_project, format_project_list, format_user
from rexclient.exceptions import RexError
from rexclient.models import ProjectAddress


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rex",
        description="Access projects and files in the REX cloud",
    )
    parser.add_argument(
        "--base-url",
        help="REX base URL (default: REX_BASE_URL or https://rex.robotic-eyes.com)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every HTTP request",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("whoami", help="Show the current user")
    subparsers.add_parser("user-count", help="Show the number of users (admin only)")

    find_parser = subparsers.add_parser("find-user", help="Look up a user by email")
    find_parser.add_argument("email", help="Email address")

    subparsers.add_parser("projects", help="List your projects")

    project_parser = subparsers.add_parser("project", help="Show a project and its files")
    project_parser.add_argument("project_id", help="Project ID (e.g. 1020)")

    create_parser = subparsers.add_parser("create-project", help="Create a new project")
    create_parser.add_argument("name", help="Project name")
    create_parser.add_argument("--address", default="", help="First address line")
    create_parser.add_argument("--postcode", default="", help="Postcode")
    create_parser.add_argument("--city", default="", help="City")
    create_parser.add_argument("--region", default="", help="Region")
    create_parser.add_argument("--country", default="", help="Country")

    upload_parser = subparsers.add_parser("upload", help="Upload a file to a project")
    upload_parser.add_argument("project_id", help="Project ID (e.g. 1020)")
    upload_parser.add_argument("file", help="Local file to upload")
    upload_parser.add_argument("--name", help="Display name (default: file name)")

    download_parser = subparsers.add_parser("download", help="Download a file link")
    download_parser.add_argument("link", help="Download link of a project file")
    download_parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Output directory (default: current directory)",
    )

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings(base_url=args.base_url) if args.base_url else Settings()
        if not settings.has_credentials:
            print("Error: REX_CLIENT_ID and REX_CLIENT_SECRET must be set", file=sys.stderr)
            sys.exit(1)
        with RexClient(settings) as client:
            client.login()
            run_command(client, args)
    except RexError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted", file=sys.stderr)
        sys.exit(130)

    sys.exit(0)


def run_command(client: RexClient, args: argparse.Namespace) -> None:
    """Dispatch a parsed command against a logged-in client."""
    if args.command == "whoami":
        user = client.user or client.users.get_current_user()
        print(format_user(user), end="")
    elif args.command == "user-count":
        print(client.users.get_user_count())
    elif args.command == "find-user":
        print(format_user(client.users.get_user_by_email(args.email)), end="")
    elif args.command == "projects":
        print(format_project_list(client.list_projects()), end="")
    elif args.command == "project":
        print(format_project(client.projects.get_project(args.project_id)), end="")
    elif args.command == "create-project":
        cmd_create_project(client, args)
    elif args.command == "upload":
        cmd_upload(client, args)
    elif args.command == "download":
        result = client.projects.download_file(args.link, Path(args.output_dir))
        print(f"{result.bytes_written} bytes downloaded and stored in {result.path}")


def cmd_create_project(client: RexClient, args: argparse.Namespace) -> None:
    address = None
    if any((args.address, args.postcode, args.city, args.region, args.country)):
        address = ProjectAddress(
            address_line1=args.address,
            postcode=args.postcode,
            city=args.city,
            region=args.region,
            country=args.country,
        )
    link = client.create_project(args.name, address=address)
    print(f"Created project {args.name}: {link}")


def cmd_upload(client: RexClient, args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)

    with path.open("rb") as source:
        project_file = client.upload_project_file(
            args.project_id,
            args.name or path.stem,
            path.name,
            source,
        )
    print(f"Uploaded {path.name} as {project_file.name}: {project_file.self_link}")


if __name__ == "__main__":
    main()
