"""
Config command - Display the resolved configuration.
"""
import typer
from rich.table import Table

from cement_carbon.cli.commands.common import console, load_app_config


def _section_table(title: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="dim")
    table.add_column("Value", style="green")
    for label, value in rows:
        table.add_row(label, value)
    return table


def config_cmd(ctx: typer.Context):
    """
    Display current configuration settings.

    Values are merged from CLI options, CEMENT_* environment variables,
    the YAML config file and built-in defaults, in that priority.

    Example:
        cement-carbon config
        cement-carbon --config custom-config.yaml config
    """
    config_path = (ctx.obj or {}).get("config_path")
    config = load_app_config(ctx)
    console.print(f"[green]✓[/green] Using config file: [bold]{config_path or 'config.yaml'}[/bold]\n")

    console.print(
        _section_table(
            "Paths Configuration",
            [
                ("Data Directory", str(config.paths.data_dir)),
                ("Dataset File", str(config.paths.dataset_file)),
                ("Output Directory", str(config.paths.output_dir)),
                ("Logs Directory", str(config.paths.logs_dir)),
            ],
        )
    )
    console.print()

    analysis = config.analysis
    console.print(
        _section_table(
            "Analysis Configuration",
            [
                ("Default Carbon Price", f"{analysis.default_carbon_price} USD/tCO2e"),
                ("Carbon Price Range", f"{analysis.min_carbon_price} - {analysis.max_carbon_price}"),
                ("Price Step", str(analysis.carbon_price_step)),
                ("USD/INR", str(analysis.usd_inr_rate)),
                ("Earnings Multiple", str(analysis.earnings_multiple)),
                ("Gap Fiscal Year", str(analysis.gap_fiscal_year)),
            ],
        )
    )
    console.print()

    chat = config.chat
    console.print(
        _section_table(
            "Chat Configuration",
            [
                ("Model", chat.model),
                ("API Key", "set" if chat.api_key else "not set"),
                ("Max Data Chars", str(chat.max_data_chars)),
                ("Max Plants per Company", str(chat.max_plants_per_company)),
                ("Match Threshold", str(chat.match_threshold)),
            ],
        )
    )
    console.print()
    console.print(f"[bold cyan]Logging:[/bold cyan] level={config.logging.level}")
