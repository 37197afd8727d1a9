"""
Helpers shared by CLI commands: configuration, dataset and error reporting.
"""
from pathlib import Path

import typer
from rich.console import Console

from cement_carbon.analytics.analysis_engine import AnalysisEngine
from cement_carbon.analytics.models import AnalysisInputError, Company
from cement_carbon.config.loader import ConfigLoader, ConfigurationError
from cement_carbon.config.schema import AppConfig
from cement_carbon.data.loader import DatasetError, load_companies

console = Console()

DATASET_OPTION = typer.Option(
    None,
    "--dataset",
    "-d",
    help="Company dataset file (YAML or JSON, default: from config)",
)
CARBON_PRICE_OPTION = typer.Option(
    None,
    "--carbon-price",
    "-p",
    help="Assumed carbon price in USD/tCO2e (default: from config)",
)


def fail(message: str) -> typer.Exit:
    """Print an error and build the exit to raise."""
    console.print(f"[bold red]✗[/bold red] {message}", style="red")
    return typer.Exit(code=1)


def load_app_config(ctx: typer.Context) -> AppConfig:
    """Configuration loaded once per invocation and shared through the context."""
    cached = (ctx.obj or {}).get("config")
    if cached is not None:
        return cached
    config_path = (ctx.obj or {}).get("config_path")
    try:
        loader = ConfigLoader(config_path=str(config_path)) if config_path else ConfigLoader()
        return loader.load_config(create_dirs=False)
    except ConfigurationError as e:
        raise fail(f"Configuration Error: {e}") from e


def resolve_carbon_price(config: AppConfig, carbon_price: float | None) -> float:
    price = config.analysis.default_carbon_price if carbon_price is None else carbon_price
    try:
        return config.check_carbon_price(price)
    except ValueError as e:
        raise fail(str(e)) from e


def load_dataset(config: AppConfig, dataset: Path | None) -> list[Company]:
    path = dataset or config.paths.dataset_file
    try:
        return load_companies(path)
    except DatasetError as e:
        raise fail(f"Dataset Error: {e}") from e


def find_company(companies: list[Company], company_id: str) -> Company:
    for company in companies:
        if company.id.lower() == company_id.lower():
            return company
    known = ", ".join(c.id for c in companies)
    raise fail(f"Company not found: {company_id} (available: {known})")


def input_error(e: AnalysisInputError) -> typer.Exit:
    return fail(f"Cannot analyze company: {e}")


def signed(value: float, digits: int = 2) -> str:
    return f"{'+' if value > 0 else ''}{value:.{digits}f}"


def build_engine(config: AppConfig) -> AnalysisEngine:
    return AnalysisEngine(
        usd_inr_rate=config.analysis.usd_inr_rate,
        crore_divisor=config.analysis.crore_divisor,
        earnings_multiple=config.analysis.earnings_multiple,
    )
