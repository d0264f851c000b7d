"""
Command-line interface for ssh-admin.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ssh_admin.config import AdminConfig, config_search_paths
from ssh_admin.directory import DirectoryError, YamlDirectory
from ssh_admin.logging import disable as disable_logging
from ssh_admin.logging import setup_logging
from ssh_admin.models import Account

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Browse and add SSH admin users",
        prog="ssh-admin",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Config file (default: ./ssh-admin.yaml or ~/.ssh-admin/config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("run", help="Open the interactive users screen (default)")

    list_parser = subparsers.add_parser("list", help="List users")
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    show_parser = subparsers.add_parser("show", help="Show user details")
    show_parser.add_argument("username", help="Username")

    add_parser = subparsers.add_parser("add", help="Add a user")
    add_parser.add_argument("username", help="Username")
    add_parser.add_argument("-e", "--email", default="", help="Email address")
    add_parser.add_argument(
        "-k",
        "--key",
        action="append",
        dest="keys",
        help="SSH public key (repeatable)",
    )

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Config commands")
    config_subparsers.add_parser("show", help="Show current configuration")
    config_init_parser = config_subparsers.add_parser("init", help="Initialize a new config file")
    config_init_parser.add_argument(
        "-o",
        "--output",
        default="ssh-admin.yaml",
        help="Output file path",
    )
    config_subparsers.add_parser("path", help="Show config file paths")

    args = parser.parse_args(argv)

    load_dotenv()

    if args.command in (None, "run"):
        cmd_run(args)
        return

    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.command == "list":
        cmd_list(args)
    elif args.command == "show":
        cmd_show(args)
    elif args.command == "add":
        cmd_add(args)
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()


def _load_config(path: str | None) -> tuple[AdminConfig, Path | None]:
    try:
        return AdminConfig.load(path)
    except (FileNotFoundError, yaml.YAMLError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _create_directory(config_path: str | None) -> YamlDirectory:
    """Create the users directory named by the config."""
    config, _ = _load_config(config_path)
    return YamlDirectory(config.users_file)


def cmd_run(args: argparse.Namespace) -> None:
    """Open the interactive screen."""
    from ssh_admin.app import AdminApp
    from ssh_admin.tui.terminal import TerminalError

    config, _ = _load_config(args.config)
    level = "DEBUG" if args.verbose else config.log_level
    if config.log_file:
        setup_logging(level, file=str(config.log_file))
    else:
        # Nothing may write to the terminal while the screen owns it
        disable_logging()

    app = AdminApp.from_config(config)
    try:
        app.run()
    except (TerminalError, DirectoryError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def cmd_list(args: argparse.Namespace) -> None:
    """List users."""
    directory = _create_directory(args.config)
    try:
        accounts = directory.accounts()
    except DirectoryError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if args.json:
        data = [a.to_dict() for a in accounts]
        console.print_json(json.dumps(data, indent=2))
        return

    table = Table(title="Users")
    table.add_column("Username", style="cyan")
    table.add_column("Email")
    table.add_column("Keys", style="dim", justify="right")

    for account in accounts:
        table.add_row(account.username, account.email or "-", str(len(account.public_keys)))

    console.print(table)
    console.print(f"\n[dim]Total: {len(accounts)} users[/dim]")


def cmd_show(args: argparse.Namespace) -> None:
    """Show user details."""
    directory = _create_directory(args.config)
    account = directory.load(args.username)
    if account is None:
        console.print(f"[red]User not found: {args.username}[/red]")
        sys.exit(1)

    console.print(f"\n[bold]{account.username}[/bold]")
    console.print(f"  Email: {account.email or '-'}")
    console.print(f"  Public keys: {len(account.public_keys)}")
    for key in account.public_keys:
        console.print(f"    [dim]{key}[/dim]")


def cmd_add(args: argparse.Namespace) -> None:
    """Add a user."""
    directory = _create_directory(args.config)
    account = Account(
        username=args.username,
        email=args.email or "",
        public_keys=list(args.keys or []),
    )
    try:
        directory.add(account)
    except DirectoryError as e:
        console.print(f"[red]Cannot add user {args.username!r}: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]Added user {account.username}[/green]")


def cmd_config(args: argparse.Namespace) -> None:
    """Configuration management."""
    if args.config_command == "show":
        _config_show(args.config)
    elif args.config_command == "init":
        _config_init(args.output)
    elif args.config_command == "path":
        _config_path()
    else:
        console.print("[yellow]Usage: ssh-admin config <show|init|path>[/yellow]")


def _config_show(config_path: str | None) -> None:
    """Show current configuration."""
    config, loaded_from = _load_config(config_path)

    if loaded_from is None:
        console.print("[dim]No config file found. Using defaults.[/dim]")
    else:
        console.print(f"[dim]Loaded from: {loaded_from}[/dim]\n")

    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False))


def _config_init(output: str) -> None:
    """Initialize a new config file."""
    output_path = Path(output)

    if output_path.exists():
        console.print(f"[red]File already exists: {output_path}[/red]")
        sys.exit(1)

    with open(output_path, "w") as f:
        yaml.dump(AdminConfig().to_dict(), f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]Created config file: {output_path}[/green]")


def _config_path() -> None:
    """Show config file search paths."""
    console.print("[bold]Config file search paths:[/bold]\n")

    for path in config_search_paths():
        exists = "[green]✓[/green]" if path.exists() else "[dim]·[/dim]"
        console.print(f"  {exists} {path}")


if __name__ == "__main__":
    main()
