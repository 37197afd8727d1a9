"""Shared dataclasses for the emission analytics modules.

Units follow the BRSR disclosures the dataset is built from: emissions in
million tonnes (Mt) at company level, scope emissions in tCO2, physical
output in tonnes, intensity in kgCO2/tonne and money in crore rupees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class AnalysisInputError(ValueError):
    """Raised when a company record does not have the shape an analysis needs."""


@dataclass
class Plant:
    """Manufacturing plant with its gazette-notified reduction target."""

    name: str
    location: str
    capacity: float  # MTPA
    government_target: float  # %
    plant_code: Optional[str] = None
    baseline_output: Optional[float] = None  # tonnes
    baseline_intensity: Optional[float] = None  # tCO2/tonne
    target_intensity_2025: Optional[float] = None
    target_intensity_2026: Optional[float] = None


@dataclass
class EmissionData:
    """Emission disclosure for one fiscal year (2022 for FY 22-23)."""

    year: int
    emissions: float  # Mt (S1+S2)
    scope1: float  # tCO2
    scope2: float  # tCO2
    physical_output: float  # tonnes
    intensity_per_tonne: Optional[float] = None  # kgCO2/tonne
    intensity_per_inr: Optional[float] = None


@dataclass
class IntensityProjection:
    """Projected and government-target intensity for a forward fiscal year."""

    year: int
    projected: float  # kgCO2/tonne
    govt_target: float  # kgCO2/tonne


@dataclass
class StockSeries:
    """Compact closing-price history: a start date, a step and the prices."""

    start_date: str  # YYYY-MM-DD
    frequency: str = "D"  # D, W or M
    prices: list[float] = field(default_factory=list)
    currency: str = "INR"


@dataclass
class Company:
    """Listed cement company with plants and emission history."""

    id: str
    name: str
    ticker: str
    current_share_price: float
    revenue: float  # crore
    revenue_growth: float  # %
    net_income: float  # crore
    employees: int
    workers: int
    founded_year: int
    plants: list[Plant] = field(default_factory=list)
    emission_history: list[EmissionData] = field(default_factory=list)
    market_cap: Optional[float] = None  # crore
    sector: Optional[str] = None
    shares_outstanding: Optional[float] = None
    total_plants: Optional[int] = None
    intensity_projections: list[IntensityProjection] = field(default_factory=list)
    stock_history: Optional[StockSeries] = None

    @property
    def latest_emission(self) -> EmissionData:
        """Most recent emission row."""
        if not self.emission_history:
            raise AnalysisInputError(f"{self.id}: emission history is empty")
        return self.emission_history[-1]

    def nearest_projection(self) -> IntensityProjection:
        """First (nearest-year) intensity projection."""
        if not self.intensity_projections:
            raise AnalysisInputError(f"{self.id}: no intensity projections available")
        return self.intensity_projections[0]

    def first_n_years(self, n: int) -> list[EmissionData]:
        """Return the first ``n`` history rows in chronological order, failing when fewer exist."""
        if len(self.emission_history) < n:
            raise AnalysisInputError(
                f"{self.id}: need {n} years of emission history, found {len(self.emission_history)}"
            )
        return self.emission_history[:n]

    def intensity_history(self) -> list[EmissionData]:
        """History rows carrying a usable (non-zero) intensity value."""
        return [row for row in self.emission_history if row.intensity_per_tonne]


@dataclass
class EmissionAnalysis:
    """Derived emission and financial metrics for one company at one carbon price.

    ``gap`` is signed: positive is a surplus (better than target), negative
    a shortfall. ``pl_impact`` carries the same sign, in crore rupees.
    """

    company: Company
    predicted_emissions: float
    target_emissions: float
    gap: float
    gap_percentage: float
    pl_impact: float
    estimated_share_price_impact: float  # % change

    @property
    def is_surplus(self) -> bool:
        return self.gap > 0

    @property
    def status(self) -> str:
        return "Surplus" if self.is_surplus else "Shortfall"


__all__ = [
    "AnalysisInputError",
    "Company",
    "EmissionAnalysis",
    "EmissionData",
    "IntensityProjection",
    "Plant",
    "StockSeries",
]
