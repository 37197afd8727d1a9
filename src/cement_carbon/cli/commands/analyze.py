"""
Analyze command - Emission gap and carbon-price exposure for one company.
"""
import math
from pathlib import Path

import typer
from loguru import logger
from rich.table import Table

from cement_carbon.analytics.gap_simulator import GapSimulator
from cement_carbon.analytics.intensity_trajectory import IntensityTrajectoryBuilder
from cement_carbon.analytics.investor_metrics import InvestorMetricsCalculator
from cement_carbon.analytics.models import AnalysisInputError
from cement_carbon.analytics.stock_history import (
    expand_series,
    price_change,
    shift_series_dates_to_target,
    window,
)
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
from cement_carbon.data.brsr import get_brsr_url
from cement_carbon.utils.log_setup import LogPhases, log_context

COMPANY_ARGUMENT = typer.Argument(..., help="Company id from the dataset (e.g. ultratech)")
GAP_OPTION = typer.Option(
    None,
    "--gap-percent",
    help="Share of the target intensity gap to price, in % (default: 100)",
)


def _fmt(value: float | None, digits: int = 2, suffix: str = "") -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    return f"{value:,.{digits}f}{suffix}"


def _share_price_row(company) -> tuple[str, str] | None:
    """Latest price and six-month change, when a price history is recorded."""
    try:
        points = shift_series_dates_to_target(expand_series(company.stock_history))
    except ValueError as e:
        logger.warning("{}: skipping share price history: {}", company.id, e)
        return None
    if not points:
        return None
    _, change_pct = price_change(window(points, "6M"), company.current_share_price)
    return "Share Price (6M)", f"{company.current_share_price:,.0f} ({signed(change_pct, 1)}%)"


def analyze_cmd(
    ctx: typer.Context,
    company_id: str = COMPANY_ARGUMENT,
    carbon_price: float | None = CARBON_PRICE_OPTION,
    dataset: Path | None = DATASET_OPTION,
    gap_percent: float | None = GAP_OPTION,
):
    """
    Analyze a company's emission gap against government targets.

    Shows predicted vs target emissions, the signed gap, P&L impact at the
    chosen carbon price, investor metrics and the intensity trajectory.

    Example:
        cement-carbon analyze ultratech --carbon-price 25
    """
    config = load_app_config(ctx)
    price = resolve_carbon_price(config, carbon_price)
    companies = load_dataset(config, dataset)
    company = find_company(companies, company_id)

    engine = build_engine(config)

    with log_context(company_id=company.id, phase=LogPhases.ANALYSIS, carbon_price=price):
        try:
            analysis = engine.analyze_company(company, price)
            simulation = GapSimulator(engine).simulate(company, price, gap_percent)
        except AnalysisInputError as e:
            raise input_error(e) from e
        snapshot = InvestorMetricsCalculator().snapshot(company)
        trajectory = IntensityTrajectoryBuilder(engine).build(company)
        logger.info("Analyzed {} at {} USD/t", company.id, price)

    console.print(f"\n[bold cyan]{company.name}[/bold cyan] ({company.ticker}) at [bold]{price}[/bold] USD/tCO2e\n")

    status_style = "green" if analysis.is_surplus else "red"
    table = Table(title="Emission Analysis", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="green")
    table.add_row("Status", f"[{status_style}]{analysis.status}[/{status_style}]")
    table.add_row("Predicted Emissions", _fmt(analysis.predicted_emissions))
    table.add_row("Target Emissions", _fmt(analysis.target_emissions))
    table.add_row("Gap", f"{signed(analysis.gap / 10**6)} MMt")
    table.add_row("Gap %", _fmt(analysis.gap_percentage, suffix="%"))
    table.add_row("P&L Impact", f"{signed(analysis.pl_impact)} cr")
    table.add_row("Share Price Impact", _fmt(analysis.estimated_share_price_impact, suffix="%"))
    table.add_row("Weighted Govt Target", _fmt(engine.calculate_weighted_target(company), 1, "%"))
    table.add_row(
        f"Gap at {simulation.display_gap}",
        f"{signed(simulation.gap_mmt)} MMt ({abs(simulation.percent_vs_target):.1f}% vs target)",
    )
    table.add_row(f"P&L at {simulation.display_gap} of gap", f"{signed(simulation.pl_impact)} cr")
    console.print(table)
    console.print()

    metrics = Table(title="Investor Metrics", show_header=True, header_style="bold cyan")
    metrics.add_column("Metric", style="dim")
    metrics.add_column("Value", style="green")
    metrics.add_row("Emission Intensity", _fmt(snapshot.emission_intensity, 1, " kgCO2/t"))
    metrics.add_row(f"Intensity CAGR ({snapshot.period_label})", _fmt(snapshot.intensity_cagr, 1, "%"))
    metrics.add_row("Total Capacity", _fmt(snapshot.total_capacity, 1, " MTPA"))
    metrics.add_row("Market Cap", _fmt(snapshot.market_cap, 0, " cr"))
    share_row = _share_price_row(company)
    if share_row is not None:
        metrics.add_row(*share_row)
    console.print(metrics)

    if trajectory is not None:
        console.print()
        chart = Table(title="Intensity Trajectory (kgCO2/t)", show_header=True, header_style="bold cyan")
        chart.add_column("Year", style="dim")
        chart.add_column("Actual")
        chart.add_column("Projected")
        chart.add_column("Govt Target")
        for point in trajectory.points:
            chart.add_row(point.label, _fmt(point.actual, 0), _fmt(point.projected, 0), _fmt(point.target, 0))
        console.print(chart)

    console.print(f"\n[dim]BRSR report: {get_brsr_url(company.id)}[/dim]")
