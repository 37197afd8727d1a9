"""
Scenario command - What-if analysis for a company outside the dataset.
"""
import typer
from rich.table import Table

from cement_carbon.analytics.scenario_builder import CustomCompanyInputs, ScenarioBuilder, missing_required
from cement_carbon.cli.commands.common import console, fail
from cement_carbon.utils.log_setup import LogPhases, log_context

NAME_OPTION = typer.Option("Ramco Industries", "--name", help="Company name")
INTENSITY_OPTION = typer.Option(
    (591.0, 615.0, 578.0),
    "--intensity",
    help="Emission intensity for FY23, FY24 and FY25 (kgCO2/t)",
)
PRODUCTION_OPTION = typer.Option(
    (24_000_000.0, 25_000_000.0, 25_000_000.0),
    "--production",
    help="Production for FY23, FY24 and FY25 (tonnes)",
)
RENEWABLE_OPTION = typer.Option(4.17, "--renewable-share", help="Renewable energy share (%)")
EMPLOYEES_OPTION = typer.Option(10865, "--employees", help="Total employees")
PLANTS_OPTION = typer.Option(12, "--plants", help="Number of plants")
REVENUE_OPTION = typer.Option(80000.0, "--revenue", help="Revenue (crore)")
INCOME_OPTION = typer.Option(9000.0, "--net-income", help="Net income (crore)")
GROWTH_OPTION = typer.Option(8.0, "--revenue-growth", help="Revenue growth (%)")


def _opt(value, digits: int = 2, suffix: str = "") -> str:
    return "n/a" if value is None else f"{value:,.{digits}f}{suffix}"


def scenario_cmd(
    name: str = NAME_OPTION,
    intensity: tuple[float, float, float] = INTENSITY_OPTION,
    production: tuple[float, float, float] = PRODUCTION_OPTION,
    renewable_share: float = RENEWABLE_OPTION,
    employees: int = EMPLOYEES_OPTION,
    plants: int = PLANTS_OPTION,
    revenue: float = REVENUE_OPTION,
    net_income: float = INCOME_OPTION,
    revenue_growth: float = GROWTH_OPTION,
):
    """
    Project intensity and likely government targets for a custom company.

    Example:
        cement-carbon scenario --name "Company X" --intensity 591 615 578 --employees 10865
    """
    inputs = CustomCompanyInputs(
        name=name,
        intensities=intensity,
        renewable_share_pct=renewable_share,
        employees=employees,
        production=production,
        plants=plants,
        revenue=revenue,
        net_income=net_income,
        revenue_growth_pct=revenue_growth,
    )
    missing = missing_required(inputs)
    if missing:
        raise fail(f"Missing required inputs: {', '.join(missing)}")

    with log_context(phase=LogPhases.SCENARIO):
        result = ScenarioBuilder().build(inputs)

    table = Table(title=f"{name} - Scenario", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="green")
    table.add_row("Intensity change FY23-FY25", _opt(result.overall_change_pct, suffix="%"))
    table.add_row("Intensity CAGR", _opt(result.cagr_pct, suffix="%"))
    table.add_row("Linear projection FY26", _opt(result.projected_next_linear, 1, " kgCO2/t"))
    table.add_row("YoY reduction FY23-24", _opt(result.reductions_pct[0], suffix="%"))
    table.add_row("YoY reduction FY24-25", _opt(result.reductions_pct[1], suffix="%"))
    table.add_row("CAGR path FY26 / FY27", f"{_opt(result.intensity_path[0], 1)} / {_opt(result.intensity_path[1], 1)}")
    table.add_row("Emissions FY25", _opt(result.emissions_tco2[2], 0, " tCO2"))
    table.add_row("Emissions per employee", _opt(result.emissions_per_employee, 1, " tCO2"))
    table.add_row(
        "Predicted govt reduction Y1 / Y2",
        f"{_opt(result.target_reduction_pct[0])}% / {_opt(result.target_reduction_pct[1])}%",
    )
    table.add_row(
        "Target intensity FY26 / FY27",
        f"{_opt(result.target_intensities[0], 1)} / {_opt(result.target_intensities[1], 1)}",
    )
    table.add_row("Next year revenue", _opt(result.next_year_revenue, 0, " cr"))
    table.add_row("Net margin", _opt(result.net_margin_pct, 1, "%"))
    console.print(table)
