"""Custom company ("Company X") what-if analysis from user-entered figures.

A user supplies three fiscal-year intensities, a renewable energy share and
head count; the builder derives the intensity trend and predicts the
government reduction targets the company would likely be notified, using
regression coefficients fitted on the notified cement plants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .analysis_engine import _divide

# Target reduction regressions (% per year) on the two YoY reductions,
# renewable share and employees.
Y1_COEFFICIENTS = (1.5863, 0.0545, 0.1427, 0.0002, -5.364e-7)
Y2_COEFFICIENTS = (1.1231, 0.0833, 0.0992, -0.0060, 1.23e-6)


@dataclass
class CustomCompanyInputs:
    """User-entered figures. Intensities are kgCO2/tonne, production in tonnes."""

    name: str = ""
    intensities: tuple[Optional[float], Optional[float], Optional[float]] = (None, None, None)
    renewable_share_pct: Optional[float] = None
    employees: Optional[float] = None
    production: tuple[Optional[float], Optional[float], Optional[float]] = (None, None, None)
    plants: Optional[int] = None
    revenue: Optional[float] = None  # crore
    net_income: Optional[float] = None  # crore
    revenue_growth_pct: Optional[float] = None
    age_years: Optional[float] = None


@dataclass
class CustomCompanyResult:
    first: float
    last: float
    overall_change_pct: float
    cagr_pct: float
    projected_next_linear: float
    reductions: tuple[float, float]  # kgCO2/tonne
    reductions_pct: tuple[float, float]
    cagr_reduction_pct: float
    intensity_path: tuple[float, float]  # next two years at the CAGR
    emissions_tco2: tuple[Optional[float], Optional[float], Optional[float]]
    emissions_per_employee: Optional[float]
    target_reduction_pct: tuple[float, float]
    target_intensities: tuple[float, float]
    next_year_revenue: Optional[float] = None
    net_margin_pct: Optional[float] = None


def missing_required(inputs: CustomCompanyInputs) -> list[str]:
    """Labels of required fields that are still empty."""
    missing = []
    if not inputs.name.strip():
        missing.append("Company Name")
    if any(value is None for value in inputs.intensities):
        missing.append("Emission intensities (FY23, FY24, FY25)")
    if inputs.renewable_share_pct is None:
        missing.append("Renewable share %")
    if inputs.employees is None:
        missing.append("Total Employees")
    return missing


def _regression(coefficients: tuple[float, ...], yoy1: float, yoy2: float, share: float, employees: float) -> float:
    c0, c1, c2, c3, c4 = coefficients
    return c0 + c1 * yoy1 + c2 * yoy2 + c3 * share + c4 * employees


class ScenarioBuilder:
    """Derive the Company X scenario."""

    def __init__(self) -> None:
        self.logger = logger.bind(module="scenario_builder")

    def build(self, inputs: CustomCompanyInputs) -> Optional[CustomCompanyResult]:
        """Return the scenario, or ``None`` while required inputs are missing.

        The company name is only needed for display, so numeric analysis
        runs once intensities, renewable share and employees are present.
        """
        i23, i24, i25 = inputs.intensities
        share = inputs.renewable_share_pct
        employees = inputs.employees
        if any(v is None for v in (i23, i24, i25, share, employees)):
            self.logger.debug("Scenario inputs incomplete: {}", missing_required(inputs))
            return None

        years = 2
        overall_change_pct = _divide(i25 - i23, i23) * 100
        cagr = _divide(i25, i23) ** (1 / years) - 1
        avg_step = (i25 - i23) / 2

        reduction1 = i23 - i24
        reduction2 = i24 - i25
        reduction1_pct = _divide(reduction1, i23) * 100
        reduction2_pct = _divide(reduction2, i24) * 100
        if 0 in (i23, i24):
            self.logger.warning("Zero base intensity in scenario inputs, reductions are unbounded")

        overall_factor = (1 - reduction1_pct / 100) * (1 - reduction2_pct / 100)
        cagr_reduction_pct = -((overall_factor ** (1 / years)) - 1) * 100
        intensity_next = i25 * (1 - cagr_reduction_pct / 100)
        intensity_after = intensity_next * (1 - cagr_reduction_pct / 100)

        emissions = tuple(
            intensity * output / 1000 if output is not None else None
            for intensity, output in zip(inputs.intensities, inputs.production)
        )
        per_employee = emissions[2] / employees if emissions[2] is not None and employees > 0 else None

        y1 = _regression(Y1_COEFFICIENTS, reduction1_pct, reduction2_pct, share, employees)
        y2 = _regression(Y2_COEFFICIENTS, reduction1_pct, reduction2_pct, share, employees)
        target_next = i25 * (1 - y1 / 100)
        target_after = target_next * (1 - y2 / 100)

        next_year_revenue = None
        if inputs.revenue is not None and inputs.revenue_growth_pct is not None:
            next_year_revenue = inputs.revenue * (1 + inputs.revenue_growth_pct / 100)
        net_margin = None
        if inputs.revenue and inputs.net_income is not None:
            net_margin = inputs.net_income / inputs.revenue * 100

        return CustomCompanyResult(
            first=i23,
            last=i25,
            overall_change_pct=overall_change_pct,
            cagr_pct=cagr * 100,
            projected_next_linear=i25 + avg_step,
            reductions=(reduction1, reduction2),
            reductions_pct=(reduction1_pct, reduction2_pct),
            cagr_reduction_pct=cagr_reduction_pct,
            intensity_path=(intensity_next, intensity_after),
            emissions_tco2=emissions,
            emissions_per_employee=per_employee,
            target_reduction_pct=(y1, y2),
            target_intensities=(target_next, target_after),
            next_year_revenue=next_year_revenue,
            net_margin_pct=net_margin,
        )


__all__ = [
    "CustomCompanyInputs",
    "CustomCompanyResult",
    "ScenarioBuilder",
    "missing_required",
]
