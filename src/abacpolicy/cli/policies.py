"""Policy inspection CLI commands."""

from __future__ import annotations

from collections.abc import Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from abacpolicy.core.config import get_settings
from abacpolicy.core.exceptions import ConfigurationError
from abacpolicy.policy.loader import PolicyLoader
from abacpolicy.policy.store import PolicyStore, PolicyStoreBuilder

console = Console()

files_option = click.option(
    "-f",
    "--file",
    "files",
    multiple=True,
    type=click.Path(dir_okay=False),
    help="Policy document to load (repeatable). Defaults to configured files.",
)
defaults_option = click.option(
    "--defaults/--no-defaults",
    default=None,
    help="Include the built-in default policies. Defaults to the configured value.",
)


def load_store(files: Sequence[str], defaults: bool | None) -> PolicyStore:
    """
    Build a store from command line sources, falling back to settings.

    Raises:
        ConfigurationError: If a policy file cannot be loaded.
    """
    settings = get_settings()
    include_defaults = settings.policy.include_defaults if defaults is None else defaults
    paths = list(files) or list(settings.policy.files)

    builder = PolicyStoreBuilder()
    if include_defaults:
        builder.with_default_policies()
    for path in paths:
        builder.with_policies_from_file(path)
    return builder.build()


def _display(value: str) -> str:
    return escape(value) if value else "[dim]*[/dim]"


@click.group()
def policies() -> None:
    """Inspect policy documents."""
    pass


@policies.command("list")
@files_option
@defaults_option
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table")
def list_policies(files: tuple[str, ...], defaults: bool | None, output_format: str) -> None:
    """List the effective policy set."""
    try:
        store = load_store(files, defaults)
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(2)

    if output_format == "json":
        click.echo(PolicyLoader().dump_json(store))
        return

    table = Table(title="Policies")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Role", style="cyan")
    table.add_column("User")
    table.add_column("Group")
    table.add_column("Resource")
    table.add_column("Namespace")
    table.add_column("Path")
    table.add_column("Read-only")

    for index, rule in enumerate(store):
        table.add_row(
            str(index),
            _display(rule.role),
            _display(rule.user),
            _display(rule.group),
            _display(rule.resource),
            _display(rule.namespace),
            _display(rule.non_resource_path),
            "yes" if rule.read_only else "no",
        )

    console.print(table)
    console.print(f"{len(store)} policies")


@policies.command("validate")
@click.argument("paths", nargs=-1, required=True, type=click.Path(dir_okay=False))
def validate_policies(paths: tuple[str, ...]) -> None:
    """Validate one or more policy documents."""
    loader = PolicyLoader()
    failed = 0

    for path in paths:
        try:
            rules = loader.load_file(path)
        except ConfigurationError as e:
            failed += 1
            console.print(f"[red]✗[/red] {escape(path)}: {escape(str(e))}")
            continue
        console.print(f"[green]✓[/green] {escape(path)}: {len(rules)} policies")

    if failed:
        console.print(f"[red]{failed} of {len(paths)} document(s) invalid[/red]")
        raise SystemExit(1)
