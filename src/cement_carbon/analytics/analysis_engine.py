"""Analysis engine for carbon-target gaps and carbon-price P&L exposure.

Every operation is a pure function of its arguments: a :class:`Company`
record is read, never mutated, and fresh numbers or value objects are
returned. Degenerate arithmetic (zero plant capacity, missing market cap,
a single-point regression) follows IEEE semantics and yields ``nan`` or
``inf`` rather than raising, so presentation code can render it as-is.
"""

from __future__ import annotations

import numpy as np
from loguru import logger

from .models import Company, EmissionAnalysis

USD_INR_RATE = 83.0
CRORE = 10_000_000.0
EARNINGS_MULTIPLE = 40.0


def _divide(numerator: float, denominator: float) -> float:
    """Float division that returns nan/inf for a zero denominator."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


class AnalysisEngine:
    """Derive intensity trends, target gaps and carbon-price impacts."""

    def __init__(
        self,
        *,
        usd_inr_rate: float = USD_INR_RATE,
        crore_divisor: float = CRORE,
        earnings_multiple: float = EARNINGS_MULTIPLE,
    ) -> None:
        self.usd_inr_rate = usd_inr_rate
        self.crore_divisor = crore_divisor
        self.earnings_multiple = earnings_multiple
        self.logger = logger.bind(module="analysis_engine")

    # ------------------------------------------------------------------
    # Intensity trend
    # ------------------------------------------------------------------
    def calculate_intensity_reduction_rate(self, company: Company) -> float:
        """Mean period-over-period fractional reduction in intensity.

        Rows without an intensity value are skipped. Returns 0 when fewer
        than two rows remain.
        """
        history = company.intensity_history()
        if len(history) < 2:
            return 0.0

        total_reduction = 0.0
        for prev, curr in zip(history, history[1:]):
            total_reduction += _divide(
                prev.intensity_per_tonne - curr.intensity_per_tonne,
                prev.intensity_per_tonne,
            )
        return total_reduction / (len(history) - 1)

    def predict_intensity(self, company: Company) -> float:
        """One-year-ahead intensity at the historical average reduction rate."""
        return self.predict_intensity_for_year(company, 1)

    def predict_intensity_for_year(self, company: Company, years_ahead: int) -> float:
        """Compound the average reduction rate ``years_ahead`` times.

        ``years_ahead == 0`` returns the latest recorded intensity.
        """
        if isinstance(years_ahead, bool) or not isinstance(years_ahead, (int, np.integer)):
            raise ValueError(f"years_ahead must be an integer, got {years_ahead!r}")
        if years_ahead < 0:
            raise ValueError(f"years_ahead must be non-negative, got {years_ahead}")

        history = company.intensity_history()
        if not history:
            return 0.0

        latest_intensity = history[-1].intensity_per_tonne
        reduction_rate = self.calculate_intensity_reduction_rate(company)
        return latest_intensity * (1 - reduction_rate) ** years_ahead

    # ------------------------------------------------------------------
    # Emissions
    # ------------------------------------------------------------------
    def predict_emissions(self, company: Company) -> float:
        """Least-squares trend of emissions, extrapolated one index past the data.

        Needs at least two history rows; with fewer the slope is undefined
        and ``nan`` is returned.
        """
        y = np.array([row.emissions for row in company.emission_history], dtype=float)
        n = len(y)
        x = np.arange(n, dtype=float)

        sum_x = x.sum()
        sum_y = y.sum()
        sum_xy = (x * y).sum()
        sum_x2 = (x * x).sum()

        slope = _divide(n * sum_xy - sum_x * sum_y, n * sum_x2 - sum_x * sum_x)
        intercept = _divide(sum_y - slope * sum_x, n)
        prediction = slope * n + intercept

        if np.isnan(prediction):
            self.logger.warning("Emission trend undefined for {} ({} history rows)", company.id, n)
        return float(prediction)

    def calculate_weighted_target(self, company: Company) -> float:
        """Capacity-weighted mean of plant reduction targets, in percent."""
        total_capacity = sum(plant.capacity for plant in company.plants)
        weighted_sum = sum(plant.government_target * plant.capacity for plant in company.plants)
        return _divide(weighted_sum, total_capacity)

    def calculate_target_emissions(self, company: Company) -> float:
        """Latest emissions reduced by the weighted target percentage."""
        latest_emissions = company.latest_emission.emissions
        return latest_emissions * (1 - self.calculate_weighted_target(company) / 100)

    # ------------------------------------------------------------------
    # Financial impact
    # ------------------------------------------------------------------
    def calculate_pl_impact(self, emission_gap: float, carbon_price: float) -> float:
        """Convert an emission gap and a USD/tonne carbon price into crore rupees.

        The sign of ``emission_gap`` is passed through unchanged.
        """
        return (emission_gap * carbon_price * self.usd_inr_rate) / self.crore_divisor

    def estimate_share_price_impact(self, pl_impact: float, market_cap: float | None) -> float:
        """Percent change in market cap for a P&L impact at a fixed earnings multiple."""
        if market_cap is None:
            return float("nan")
        market_cap_impact = pl_impact * self.earnings_multiple
        return _divide(market_cap_impact, market_cap) * 100

    # ------------------------------------------------------------------
    # Primary entry point
    # ------------------------------------------------------------------
    def analyze_company(self, company: Company, carbon_price: float) -> EmissionAnalysis:
        """Build the :class:`EmissionAnalysis` for ``company`` at ``carbon_price``.

        Uses the nearest intensity projection and the third emission-history
        row as the production base.

        Raises:
            AnalysisInputError: No projection, or fewer than three history rows.
        """
        projection = company.nearest_projection()
        physical_output = company.first_n_years(3)[2].physical_output

        gap = (projection.govt_target - projection.projected) * physical_output / 1000
        predicted_emissions = projection.projected * physical_output / 1000
        target_emissions = projection.govt_target * physical_output / 1000
        gap_percentage = _divide(gap, target_emissions) * 100

        pl_impact = self.calculate_pl_impact(abs(gap), carbon_price)
        signed_pl_impact = pl_impact if gap > 0 else -pl_impact
        share_price_impact = self.estimate_share_price_impact(signed_pl_impact, company.market_cap)

        self.logger.debug(
            "{}: gap={:.2f} pl_impact={:.2f}cr at {} USD/t",
            company.id,
            gap,
            signed_pl_impact,
            carbon_price,
        )

        return EmissionAnalysis(
            company=company,
            predicted_emissions=predicted_emissions,
            target_emissions=target_emissions,
            gap=gap,
            gap_percentage=gap_percentage,
            pl_impact=signed_pl_impact,
            estimated_share_price_impact=share_price_impact,
        )


_default_engine = AnalysisEngine()


def calculate_intensity_reduction_rate(company: Company) -> float:
    return _default_engine.calculate_intensity_reduction_rate(company)


def predict_intensity(company: Company) -> float:
    return _default_engine.predict_intensity(company)


def predict_intensity_for_year(company: Company, years_ahead: int) -> float:
    return _default_engine.predict_intensity_for_year(company, years_ahead)


def predict_emissions(company: Company) -> float:
    return _default_engine.predict_emissions(company)


def calculate_weighted_target(company: Company) -> float:
    return _default_engine.calculate_weighted_target(company)


def calculate_target_emissions(company: Company) -> float:
    return _default_engine.calculate_target_emissions(company)


def calculate_pl_impact(emission_gap: float, carbon_price: float) -> float:
    return _default_engine.calculate_pl_impact(emission_gap, carbon_price)


def estimate_share_price_impact(pl_impact: float, market_cap: float | None) -> float:
    return _default_engine.estimate_share_price_impact(pl_impact, market_cap)


def analyze_company(company: Company, carbon_price: float) -> EmissionAnalysis:
    return _default_engine.analyze_company(company, carbon_price)


__all__ = [
    "AnalysisEngine",
    "analyze_company",
    "calculate_intensity_reduction_rate",
    "calculate_pl_impact",
    "calculate_target_emissions",
    "calculate_weighted_target",
    "estimate_share_price_impact",
    "predict_emissions",
    "predict_intensity",
    "predict_intensity_for_year",
]
