"""
Main CLI application using Typer.
Provides entry point and command routing for the cement carbon analyzer.
"""
from pathlib import Path

import typer
from rich.console import Console

from cement_carbon.cli.commands import (
    analyze_cmd,
    chat_context_cmd,
    companies_cmd,
    config_cmd,
    peers_cmd,
    scenario_cmd,
)
from cement_carbon.cli.commands.common import load_app_config
from cement_carbon.utils.log_setup import setup_logging

app = typer.Typer(
    name="cement-carbon",
    help="Cement Carbon Analyzer - emission targets and carbon-price exposure of Indian cement companies",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def version_callback(value: bool):
    """Display version information."""
    if value:
        from importlib.metadata import PackageNotFoundError, version

        try:
            app_version = version("cement-carbon-analyzer")
        except PackageNotFoundError:
            app_version = "0.1.0"

        console.print(f"[bold cyan]Cement Carbon Analyzer[/bold cyan] version [green]{app_version}[/green]")
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    None,
    "--version",
    "-v",
    callback=version_callback,
    is_eager=True,
    help="Show version and exit.",
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file (default: ./config.yaml)",
    exists=True,
    dir_okay=False,
    readable=True,
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    help="Enable verbose output (DEBUG level logging)",
)
LOG_DIR_OPTION = typer.Option(
    None,
    "--log-dir",
    help="Directory for log files (default: paths.logs_dir from config)",
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = VERSION_OPTION,
    config: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    log_dir: Path | None = LOG_DIR_OPTION,
):
    """
    Cement Carbon Analyzer - compare cement companies against government emission targets.

    Use [bold cyan]cement-carbon COMMAND --help[/bold cyan] for command-specific help.
    """
    ctx.obj = {
        "config_path": config,
        "verbose": verbose,
    }

    app_config = load_app_config(ctx)
    ctx.obj["config"] = app_config

    try:
        setup_logging(
            log_level="DEBUG" if verbose else app_config.logging.level,
            log_dir=str(log_dir or app_config.paths.logs_dir),
            retention_days=app_config.logging.retention_days,
        )
    except OSError as e:
        console.print(f"[bold red]Logging Setup Error:[/bold red] {e!s}", style="red")
        raise typer.Exit(code=1) from e


app.command(name="analyze")(analyze_cmd)
app.command(name="companies")(companies_cmd)
app.command(name="peers")(peers_cmd)
app.command(name="scenario")(scenario_cmd)
app.command(name="chat-context")(chat_context_cmd)
app.command(name="config")(config_cmd)


if __name__ == "__main__":
    app()
