"""Command-line interface for sfdev."""

from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from sfdev import __version__
from sfdev.config import SfdevConfig, load_config
from sfdev.editor import ConsoleHost, Dispatcher
from sfdev.editor.dispatcher import DEFAULT_ORG_VAR
from sfdev.logging import init_logger
from sfdev.sfcli import SFCommandRunner
from sfdev.sfcli.resolver import configure_resolver

console = Console()


def _dispatcher(ctx: click.Context) -> Dispatcher:
    return ctx.obj["dispatcher"]


def _finish(ctx: click.Context, result: Any) -> None:
    """Exit non-zero when an operation reported failure."""
    if result is None:
        return
    if isinstance(result, dict) and not result.get("success", False):
        ctx.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="sfdev")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--target-org", "-o", help="Org alias or username to run against")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Path | None, target_org: str | None, verbose: bool) -> None:
    """sfdev: drive the Salesforce CLI (sf or sfdx) from the terminal."""
    ctx.ensure_object(dict)

    # Load configuration
    try:
        cfg = load_config(config)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    if verbose:
        cfg.verbose = True

    session = init_logger(cfg.logs_dir, verbose=cfg.verbose, level=cfg.log_level)
    session.debug(f"sfdev {__version__} starting")

    resolver = configure_resolver(cfg.cli_candidates)
    runner = SFCommandRunner(resolver=resolver, timeout=cfg.command_timeout_seconds)
    host = ConsoleHost(console=console, variables={DEFAULT_ORG_VAR: target_org or ""})

    ctx.obj["config"] = cfg
    ctx.obj["host"] = host
    ctx.obj["dispatcher"] = Dispatcher(host, config=cfg, runner=runner)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the CLI's org list as JSON")
@click.pass_context
def orgs(ctx: click.Context, as_json: bool) -> None:
    """List authenticated orgs."""
    dispatcher = _dispatcher(ctx)
    if not as_json:
        dispatcher.dispatch("listOrgs")
        return

    result = dispatcher.dispatch("listOrgsJson")
    if result["success"]:
        console.print_json(result["stdout"])
    else:
        console.print(f"[red]{result['stderr']}[/red]", highlight=False)
    _finish(ctx, result)


@main.command("open")
@click.argument("org", required=False)
@click.pass_context
def open_org(ctx: click.Context, org: str | None) -> None:
    """Open an org in the browser."""
    _dispatcher(ctx).dispatch("openOrg", org)


@main.command()
@click.argument("path", required=False, type=click.Path(exists=True))
@click.pass_context
def deploy(ctx: click.Context, path: str | None) -> None:
    """Deploy a source file or directory."""
    _finish(ctx, _dispatcher(ctx).dispatch("deploy", path))


@main.command()
@click.argument("metadata", nargs=-1)
@click.pass_context
def retrieve(ctx: click.Context, metadata: tuple[str, ...]) -> None:
    """Retrieve metadata, e.g. ApexClass:MyClass,CustomObject:Lead."""
    _finish(ctx, _dispatcher(ctx).dispatch("retrieve", list(metadata)))


@main.command()
@click.argument("code", required=False)
@click.option(
    "--file",
    "-f",
    "apex_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read Apex code from a file",
)
@click.pass_context
def apex(ctx: click.Context, code: str | None, apex_file: Path | None) -> None:
    """Execute anonymous Apex."""
    if apex_file:
        code = apex_file.read_text()
    _finish(ctx, _dispatcher(ctx).dispatch("executeApex", code))


@main.command("test")
@click.argument("names", nargs=-1)
@click.pass_context
def run_test(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Run Apex tests (all local tests when no names are given)."""
    _finish(ctx, _dispatcher(ctx).dispatch("runTest", list(names)))


@main.command("test-classes")
@click.pass_context
def list_test_classes(ctx: click.Context) -> None:
    """List Apex test classes in the org."""
    result = _dispatcher(ctx).dispatch("listTestClasses")

    if result.get("success"):
        classes = result.get("classes", [])
        table = Table(title="Apex Test Classes")
        table.add_column("Name", style="cyan")
        table.add_column("Namespace", style="dim")
        table.add_column("API", style="yellow")
        table.add_column("Status", style="green")

        for cls in classes:
            table.add_row(
                cls.get("Name", ""),
                cls.get("NamespacePrefix") or "-",
                str(cls.get("ApiVersion") or "-"),
                cls.get("Status") or "-",
            )

        console.print(table)
        console.print(f"\nTotal: {len(classes)} classes")
    _finish(ctx, result)


@main.command("set-default")
@click.argument("org")
@click.pass_context
def set_default(ctx: click.Context, org: str) -> None:
    """Set the CLI's default target org."""
    _finish(ctx, _dispatcher(ctx).dispatch("setDefaultOrg", [org]))


@main.command()
@click.argument("org")
@click.pass_context
def logout(ctx: click.Context, org: str) -> None:
    """Log out of an org."""
    _finish(ctx, _dispatcher(ctx).dispatch("logoutOrg", [org]))


@main.group()
def logs() -> None:
    """Manage Apex debug logs."""


@logs.command("list")
@click.option("--limit", "-n", type=int, help="Maximum number of logs to list")
@click.pass_context
def logs_list(ctx: click.Context, limit: int | None) -> None:
    """List recent Apex logs."""
    result = _dispatcher(ctx).dispatch("listLogs", str(limit) if limit else None)

    if result.get("success"):
        entries = result.get("logs", [])
        if not entries:
            console.print("[yellow]No Apex logs found[/yellow]")
            return

        table = Table(title="Apex Logs")
        table.add_column("ID", style="cyan")
        table.add_column("Start Time", style="green")
        table.add_column("User")
        table.add_column("Operation", style="yellow")
        table.add_column("Status")
        table.add_column("Size", justify="right")

        for log in entries:
            user = (log.get("LogUser") or {}).get("Name") or log.get("LogUserId") or ""
            table.add_row(
                log.get("Id", ""),
                log.get("StartTime") or "-",
                user,
                log.get("Operation") or "-",
                log.get("Status") or "-",
                str(log.get("LogLength") or 0),
            )

        console.print(table)
    _finish(ctx, result)


@logs.command("get")
@click.argument("log_id")
@click.pass_context
def logs_get(ctx: click.Context, log_id: str) -> None:
    """Show the content of an Apex log."""
    _finish(ctx, _dispatcher(ctx).dispatch("getLog", log_id))


@logs.command("delete")
@click.argument("log_id")
@click.pass_context
def logs_delete(ctx: click.Context, log_id: str) -> None:
    """Delete an Apex log."""
    _finish(ctx, _dispatcher(ctx).dispatch("deleteLog", log_id))


@logs.command("clear")
@click.confirmation_option(prompt="Are you sure you want to delete all Apex logs?")
@click.pass_context
def logs_clear(ctx: click.Context) -> None:
    """Delete all Apex logs."""
    _finish(ctx, _dispatcher(ctx).dispatch("clearLogs"))


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Write a default sfdev.yaml in the current directory."""
    config: SfdevConfig = ctx.obj["config"]
    config_path = Path("sfdev.yaml")

    if config_path.exists() and not force:
        console.print(f"[yellow]{config_path} already exists (use --force to overwrite)[/yellow]")
        return

    config.to_yaml(config_path)
    console.print(f"[green]✓ Created config: {config_path}[/green]")


if __name__ == "__main__":
    main()
