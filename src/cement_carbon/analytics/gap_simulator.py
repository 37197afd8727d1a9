"""What-if P&L exposure for an adjustable share of the target gap."""

from __future__ import annotations

import math
from dataclasses import dataclass

from loguru import logger

from .analysis_engine import AnalysisEngine
from .models import Company

DEFAULT_GAP_PERCENT = 100.0


@dataclass
class GapSimulation:
    gap_percent: float
    exposure: float
    pl_impact: float  # crore, signed
    carbon_price: float
    percent_vs_target: float
    slider_min: float
    slider_max: float

    @property
    def display_gap(self) -> str:
        sign = "+" if self.gap_percent >= 0 else ""
        return f"{sign}{self.gap_percent:.2f} %"

    @property
    def gap_mmt(self) -> float:
        return self.exposure / 10**6


class GapSimulator:
    """Scale the nearest-year intensity gap and price it at a carbon price.

    The exposure is ``gap_percent * (output / 100) * intensity_gap`` where
    the intensity gap is ``(govt_target - projected) / 1000``.
    """

    def __init__(self, engine: AnalysisEngine | None = None) -> None:
        self.engine = engine or AnalysisEngine()
        self.logger = logger.bind(module="gap_simulator")

    @staticmethod
    def slider_bounds(default_gap: float = DEFAULT_GAP_PERCENT) -> tuple[float, float]:
        return abs(default_gap) * 0.5, max(0.5, abs(default_gap) * 2)

    def simulate(
        self,
        company: Company,
        carbon_price: float,
        gap_percent: float | None = None,
    ) -> GapSimulation:
        effective_gap = DEFAULT_GAP_PERCENT if gap_percent is None else gap_percent
        projection = company.nearest_projection()
        base_output = company.first_n_years(3)[2].physical_output / 100
        intensity_gap = (projection.govt_target - projection.projected) / 1000

        exposure = effective_gap * base_output * intensity_gap
        pl_abs = self.engine.calculate_pl_impact(abs(exposure), carbon_price)
        pl_signed = pl_abs if exposure >= 0 else -pl_abs
        target = self.engine.calculate_target_emissions(company)
        percent_vs_target = 0.0 if not target or math.isnan(target) else exposure / target * 100

        slider_min, slider_max = self.slider_bounds()
        self.logger.debug("{}: gap {}% -> {:.2f}cr", company.id, effective_gap, pl_signed)
        return GapSimulation(
            gap_percent=effective_gap,
            exposure=exposure,
            pl_impact=pl_signed,
            carbon_price=carbon_price,
            percent_vs_target=percent_vs_target,
            slider_min=slider_min,
            slider_max=slider_max,
        )


__all__ = ["DEFAULT_GAP_PERCENT", "GapSimulation", "GapSimulator"]
