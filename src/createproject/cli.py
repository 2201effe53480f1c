"""Command line interface for creating design system projects."""

from __future__ import annotations

import argparse
import logging
import tarfile
from pathlib import Path
from typing import Sequence

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Prompt

from .config import ProjectRequest, Settings
from .download import BARE_HINT
from .environment import Environment, SubprocessEnvironment
from .errors import CreateProjectError
from .scaffold import ProjectCreator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create Diez design system projects")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="create a new Diez project")
    create_parser.add_argument(
        "project_name",
        nargs="?",
        metavar="projectName",
        help="npm package name of the new project; prompted for when omitted",
    )
    create_parser.add_argument(
        "--bare",
        action="store_true",
        help="Use the bundled minimal template instead of downloading the example project",
    )
    create_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=None,
        help="Directory the project folder is created in (defaults to the current directory)",
    )

    return parser


def configure_logging(console: Console, *, verbose: bool = False) -> None:
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _prompt_for_name(console: Console) -> str:
    return Prompt.ask("What is the name of your project?", console=console).strip()


def _handle_create(
    args: argparse.Namespace,
    console: Console,
    environment: Environment | None,
    http_client: httpx.Client | None,
) -> int:
    name = args.project_name or _prompt_for_name(console)
    request = ProjectRequest.create(name, bare=args.bare, working_directory=args.directory)

    try:
        creator = ProjectCreator(
            environment or SubprocessEnvironment(),
            Settings.from_env(),
            http_client=http_client,
            status=lambda message: console.status(message),
        )
        report = creator.create(request)
    except CreateProjectError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        if exc.hint:
            console.print(f"[yellow]{escape(exc.hint)}[/yellow]")
        return 1
    except tarfile.TarError as exc:
        console.print(f"[bold red]Unable to extract the template project: {escape(str(exc))}[/bold red]")
        console.print(f"[yellow]{escape(BARE_HINT)}[/yellow]")
        return 1

    for paragraph in report.instructions(request.working_directory):
        console.print(paragraph, highlight=False, markup=False)
        console.print()
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    environment: Environment | None = None,
    http_client: httpx.Client | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    console = Console(soft_wrap=True)
    configure_logging(console, verbose=args.verbose)
    # "create" is the only subcommand and argparse requires one.
    return _handle_create(args, console, environment, http_client)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
