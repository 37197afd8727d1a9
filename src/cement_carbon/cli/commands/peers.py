"""
Peers command - Benchmark a company against the rest of the dataset.
"""
from pathlib import Path

import typer
from rich.table import Table

from cement_carbon.analytics.models import AnalysisInputError
from cement_carbon.analytics.peer_comparison import PeerComparison
from cement_carbon.cli.commands.common import (
    CARBON_PRICE_OPTION,
    DATASET_OPTION,
    build_engine,
    console,
    find_company,
    input_error,
    load_app_config,
    load_dataset,
    resolve_carbon_price,
    signed,
)
from cement_carbon.utils.log_setup import LogPhases, log_context

COMPANY_ARGUMENT = typer.Argument(..., help="Company id to highlight")


def peers_cmd(
    ctx: typer.Context,
    company_id: str = COMPANY_ARGUMENT,
    carbon_price: float | None = CARBON_PRICE_OPTION,
    dataset: Path | None = DATASET_OPTION,
):
    """
    Compare emission intensity, government targets and gap across peers.

    Example:
        cement-carbon peers acc
    """
    config = load_app_config(ctx)
    price = resolve_carbon_price(config, carbon_price)
    companies = load_dataset(config, dataset)
    current = find_company(companies, company_id)

    comparison = PeerComparison(build_engine(config))
    fiscal_year = config.analysis.gap_fiscal_year

    with log_context(company_id=current.id, phase=LogPhases.PEER_COMPARISON, carbon_price=price):
        try:
            rows = comparison.sorted_by_intensity(comparison.peer_rows(companies, current.id, price))
        except AnalysisInputError as e:
            raise input_error(e) from e
        gaps = comparison.gap_rows(companies, current.id, fiscal_year)

    table = Table(title="Peer Comparison (lowest intensity first)", show_header=True, header_style="bold cyan")
    table.add_column("Company")
    table.add_column("Intensity (kgCO2/t)", justify="right")
    table.add_column("Govt Target (%)", justify="right")
    table.add_column("Emissions (Mt)", justify="right")
    for row in rows:
        name = f"[bold yellow]{row.full_name}[/bold yellow]" if row.is_current else row.full_name
        table.add_row(name, f"{row.emission_intensity:,.2f}", f"{row.target_reduction:.1f}", f"{row.emissions:.2f}")
    console.print(table)
    console.print()

    gap_table = Table(
        title=f"FY {fiscal_year - 2001}-{fiscal_year - 2000} Emission Gap vs Targets",
        show_header=True,
        header_style="bold cyan",
    )
    gap_table.add_column("Company")
    gap_table.add_column("Gap (Mt CO2)", justify="right")
    for gap_row in gaps:
        style = "green" if gap_row.gap >= 0 else "red"
        name = f"[bold yellow]{gap_row.full_name}[/bold yellow]" if gap_row.is_current else gap_row.full_name
        gap_table.add_row(name, f"[{style}]{signed(gap_row.gap)}[/{style}]")
    console.print(gap_table)
