"""Historical and projected intensity trajectory with target overlay.

Builds the actual/projected/target series behind the intensity chart and
the Mt CO2 emission trend. Where a company has no explicit projection the
engine's compounded reduction rate fills in, and missing government
targets fall back to the default annual reductions below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from .analysis_engine import AnalysisEngine
from .investor_metrics import fiscal_label
from .models import Company

DEFAULT_TARGET_REDUCTION_Y1 = 0.0238
DEFAULT_TARGET_REDUCTION_Y2 = 0.0161


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_mt(tonnes: float, intensity_kg_per_tonne: float) -> float:
    """Convert output (tonnes) at an intensity (kgCO2/tonne) into Mt CO2."""
    return tonnes * intensity_kg_per_tonne / 1_000_000_000


@dataclass
class TrajectoryPoint:
    label: str
    actual: Optional[float] = None
    projected: Optional[float] = None
    target: Optional[float] = None


@dataclass
class IntensityTrajectory:
    """Intensity path for one company (kgCO2/tonne)."""

    points: list[TrajectoryPoint]
    latest_intensity: float
    projected: tuple[int, int]
    targets: tuple[int, int]
    yoy_changes: list[Optional[float]] = field(default_factory=list)  # %
    cagr: float = 0.0  # fraction per year
    y_min: float = 0.0
    y_max: float = 0.0

    @property
    def beats_target(self) -> bool:
        """True when the nearest projection is at or below the nearest target."""
        return self.projected[0] <= self.targets[0]


@dataclass
class EmissionTrend:
    """Emission path in Mt CO2 using the latest output for forward years."""

    actual: list[TrajectoryPoint]
    predicted: tuple[float, float]
    target: tuple[float, float]
    last_actual: float


class IntensityTrajectoryBuilder:
    """Assemble intensity and emission trajectories for charting."""

    def __init__(self, engine: AnalysisEngine | None = None) -> None:
        self.engine = engine or AnalysisEngine()
        self.logger = logger.bind(module="intensity_trajectory")

    def forward_intensities(self, company: Company) -> tuple[tuple[int, int], tuple[int, int]]:
        """Projected and target intensities for the next two fiscal years."""
        history = company.intensity_history()
        latest_intensity = history[-1].intensity_per_tonne
        projections = company.intensity_projections

        if len(projections) > 0:
            proj1 = projections[0].projected
        else:
            proj1 = self.engine.predict_intensity_for_year(company, 1)
        if len(projections) > 1:
            proj2 = projections[1].projected
        else:
            proj2 = self.engine.predict_intensity_for_year(company, 2)

        if len(projections) > 0:
            tgt1 = round_half_up(projections[0].govt_target)
        else:
            tgt1 = round_half_up(latest_intensity * (1 - DEFAULT_TARGET_REDUCTION_Y1))
        if len(projections) > 1:
            tgt2 = round_half_up(projections[1].govt_target)
        else:
            tgt2 = round_half_up(tgt1 * (1 - DEFAULT_TARGET_REDUCTION_Y2))

        return (round_half_up(proj1), round_half_up(proj2)), (tgt1, tgt2)

    def build(self, company: Company) -> Optional[IntensityTrajectory]:
        """Return the trajectory, or ``None`` when no intensity is recorded."""
        history = company.intensity_history()
        if not history:
            self.logger.debug("{}: no intensity history, skipping trajectory", company.id)
            return None

        first = history[0]
        latest = history[-1]
        (proj1, proj2), (tgt1, tgt2) = self.forward_intensities(company)

        yoy: list[Optional[float]] = [None]
        for prev, curr in zip(history, history[1:]):
            yoy.append((curr.intensity_per_tonne - prev.intensity_per_tonne) / prev.intensity_per_tonne * 100)

        periods = max(len(history) - 1, 1)
        cagr = (latest.intensity_per_tonne / first.intensity_per_tonne) ** (1 / periods) - 1

        points = [TrajectoryPoint(label=fiscal_label(row.year), actual=row.intensity_per_tonne) for row in history]
        points.append(TrajectoryPoint(label=fiscal_label(latest.year + 1), projected=proj1, target=tgt1))
        points.append(TrajectoryPoint(label=fiscal_label(latest.year + 2), projected=proj2, target=tgt2))

        values = [row.intensity_per_tonne for row in history] + [proj1, proj2, tgt1, tgt2]
        lo, hi = min(values), max(values)
        pad = max(hi - lo, hi * 0.05) * 0.15

        return IntensityTrajectory(
            points=points,
            latest_intensity=latest.intensity_per_tonne,
            projected=(proj1, proj2),
            targets=(tgt1, tgt2),
            yoy_changes=yoy,
            cagr=cagr,
            y_min=max(0, math.floor(lo - pad)),
            y_max=math.ceil(hi + pad),
        )

    def emission_trend(self, company: Company) -> Optional[EmissionTrend]:
        """Actual Mt CO2 per year plus predicted and target Mt for two years ahead."""
        history = company.intensity_history()
        if not history:
            return None

        latest = history[-1]
        (proj1, proj2), (tgt1, tgt2) = self.forward_intensities(company)
        output = latest.physical_output

        actual = [
            TrajectoryPoint(label=fiscal_label(row.year), actual=to_mt(row.physical_output, row.intensity_per_tonne))
            for row in history
        ]
        return EmissionTrend(
            actual=actual,
            predicted=(to_mt(output, proj1), to_mt(output, proj2)),
            target=(to_mt(output, tgt1), to_mt(output, tgt2)),
            last_actual=to_mt(output, latest.intensity_per_tonne),
        )


__all__ = [
    "DEFAULT_TARGET_REDUCTION_Y1",
    "DEFAULT_TARGET_REDUCTION_Y2",
    "EmissionTrend",
    "IntensityTrajectory",
    "IntensityTrajectoryBuilder",
    "TrajectoryPoint",
    "round_half_up",
    "to_mt",
]
