"""
Companies command - Surplus/shortfall overview for every company.
"""
from pathlib import Path

import typer
from rich.table import Table

from cement_carbon.analytics.models import AnalysisInputError
from cement_carbon.cli.commands.common import (
    CARBON_PRICE_OPTION,
    DATASET_OPTION,
    build_engine,
    console,
    input_error,
    load_app_config,
    load_dataset,
    resolve_carbon_price,
    signed,
)
from cement_carbon.utils.log_setup import LogPhases, log_context


def companies_cmd(
    ctx: typer.Context,
    carbon_price: float | None = CARBON_PRICE_OPTION,
    dataset: Path | None = DATASET_OPTION,
):
    """
    List all companies with their emission gap and P&L impact.

    Example:
        cement-carbon companies --carbon-price 9.5
    """
    config = load_app_config(ctx)
    price = resolve_carbon_price(config, carbon_price)
    companies = load_dataset(config, dataset)
    engine = build_engine(config)

    table = Table(title=f"Cement Companies at {price} USD/tCO2e", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="dim")
    table.add_column("Company")
    table.add_column("Status")
    table.add_column("Gap (MMt)", justify="right")
    table.add_column("P&L Impact (cr)", justify="right")

    with log_context(phase=LogPhases.ANALYSIS, carbon_price=price):
        for company in companies:
            try:
                analysis = engine.analyze_company(company, price)
            except AnalysisInputError as e:
                raise input_error(e) from e
            style = "green" if analysis.is_surplus else "red"
            table.add_row(
                company.id,
                company.name,
                f"[{style}]{analysis.status}[/{style}]",
                signed(analysis.gap / 10**6),
                signed(analysis.pl_impact),
            )

    console.print(table)
