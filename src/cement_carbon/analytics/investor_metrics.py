"""Headline investor metrics shown alongside a company analysis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .models import Company


def fiscal_label(year: int) -> str:
    """Format a fiscal start year as ``FY 22-23``."""
    return f"FY {year - 2000}-{year - 1999}"


@dataclass
class InvestorSnapshot:
    """Capacity, intensity and market figures for a single company."""

    total_capacity: float  # MTPA
    latest_emissions: float  # Mt
    emission_intensity: float  # kgCO2/tonne derived from Mt and output
    intensity_cagr: Optional[float]  # % per year
    market_cap: Optional[float]  # crore
    first_year: int
    last_year: int

    @property
    def period_label(self) -> str:
        return f"FY {self.first_year} - {self.last_year + 1}"


class InvestorMetricsCalculator:
    """Compute the investor metric cards for a company."""

    def __init__(self) -> None:
        self.logger = logger.bind(module="investor_metrics")

    def total_capacity(self, company: Company) -> float:
        return sum(plant.capacity for plant in company.plants)

    def emission_intensity(self, company: Company) -> float:
        """Latest emissions (Mt) over latest physical output, in kgCO2/tonne."""
        latest = company.latest_emission
        if not latest.physical_output:
            self.logger.warning("{}: latest physical output is zero", company.id)
            return float("nan")
        return latest.emissions * 1_000_000_000 / latest.physical_output

    def intensity_cagr(self, company: Company) -> Optional[float]:
        """Annual growth of intensity from the first recorded year to the latest.

        Negative values mean intensity is falling. ``None`` when the first
        row has no intensity or there is a single year.
        """
        history = company.emission_history
        first_intensity = history[0].intensity_per_tonne if history else None
        periods = len(history) - 1
        if not first_intensity or periods < 1:
            return None

        latest_intensity = self.emission_intensity(company)
        change = (latest_intensity - first_intensity) / first_intensity
        return ((1 + change) ** (1 / periods) - 1) * 100

    def snapshot(self, company: Company) -> InvestorSnapshot:
        latest = company.latest_emission
        return InvestorSnapshot(
            total_capacity=self.total_capacity(company),
            latest_emissions=latest.emissions,
            emission_intensity=self.emission_intensity(company),
            intensity_cagr=self.intensity_cagr(company),
            market_cap=company.market_cap,
            first_year=company.emission_history[0].year,
            last_year=latest.year,
        )


__all__ = ["InvestorMetricsCalculator", "InvestorSnapshot", "fiscal_label"]
