"""Main CLI entry point."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape

from abacpolicy import __version__
from abacpolicy.core.config import get_settings
from abacpolicy.core.exceptions import ConfigurationError
from abacpolicy.observability.logging import LogContext, configure_logging
from abacpolicy.observability.metrics import get_metrics_collector
from abacpolicy.policy.evaluator import PolicyEvaluator
from abacpolicy.policy.models import ResourceAttributes, UserAttributes

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="abacpolicy")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    abacpolicy - Attribute-based access control evaluator.

    Use 'abacpolicy COMMAND --help' for more information on a command.
    """
    ctx.ensure_object(dict)


from abacpolicy.cli.policies import defaults_option, files_option, load_store, policies

cli.add_command(policies)


@cli.command()
def info() -> None:
    """Show application information."""
    settings = get_settings()

    console.print(f"[bold]abacpolicy[/bold] v{__version__}")
    console.print(f"Environment: {settings.environment}")
    console.print(f"Default policies: {'enabled' if settings.policy.include_defaults else 'disabled'}")
    files = ", ".join(str(p) for p in settings.policy.files) or "none"
    console.print(f"Policy files: {files}")


@cli.command()
@click.option("--format", "output_format", type=click.Choice(["yaml", "json"]), default="yaml")
def config(output_format: str) -> None:
    """Show current configuration."""
    import yaml

    settings = get_settings()
    config_dict = settings.model_dump(mode="json")

    if output_format == "json":
        click.echo(json.dumps(config_dict, indent=2))
    else:
        click.echo(yaml.safe_dump(config_dict, default_flow_style=False), nl=False)


@cli.command()
@click.option("--user-id", "-u", default="", help="User-id making the request")
@click.option("--group-id", "-g", default="", help="Group-id of the user")
@click.option("--role", "-r", "roles", multiple=True, help="Role held by the user (repeatable)")
@click.option("--resource", default="", help="Resource name")
@click.option("--namespace", "-n", default="", help="Resource namespace")
@click.option("--read-only/--write", default=True, help="Whether the request is read-only")
@files_option
@defaults_option
def check(
    user_id: str,
    group_id: str,
    roles: tuple[str, ...],
    resource: str,
    namespace: str,
    read_only: bool,
    files: tuple[str, ...],
    defaults: bool | None,
) -> None:
    """Evaluate a single access request against the policy set."""
    try:
        store = load_store(files, defaults)
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(2)

    user = UserAttributes(user_id=user_id, group_id=group_id, roles=list(roles))
    request = ResourceAttributes(resource=resource, namespace=namespace, read_only=read_only)
    evaluator = PolicyEvaluator(store)

    with LogContext(user_id=user_id, resource=resource):
        allowed = evaluator.evaluate(user, request)

    if not allowed:
        console.print(f"[red]DENY[/red] (evaluated {len(store)} policies)")
        raise SystemExit(1)

    rule = evaluator.find_match(user, request)
    console.print("[green]ALLOW[/green]")
    if rule is not None:
        click.echo(f"Matched policy: {json.dumps(rule.to_document())}")


def main() -> None:
    """Console script entry point."""
    configure_logging()
    get_metrics_collector().initialize(__version__)
    cli()


if __name__ == "__main__":
    main()
