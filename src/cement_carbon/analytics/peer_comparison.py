"""Peer benchmarking across the company universe."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from .analysis_engine import AnalysisEngine
from .investor_metrics import InvestorMetricsCalculator
from .models import Company


@dataclass
class PeerRow:
    """One company's benchmark values, rounded for display."""

    name: str
    full_name: str
    emission_intensity: float
    target_reduction: float
    emissions: float
    gap: float
    is_current: bool = False


@dataclass
class PeerGapRow:
    """Signed emission gap (Mt CO2) against the government target for one year."""

    name: str
    full_name: str
    gap: float
    is_current: bool = False


def short_name(name: str) -> str:
    return name.split(" ")[0]


class PeerComparison:
    """Compare a company with its peers on intensity, targets and gap."""

    def __init__(self, engine: AnalysisEngine | None = None) -> None:
        self.engine = engine or AnalysisEngine()
        self.metrics = InvestorMetricsCalculator()
        self.logger = logger.bind(module="peer_comparison")

    def peer_rows(
        self,
        companies: Sequence[Company],
        current_company_id: str,
        carbon_price: float,
    ) -> list[PeerRow]:
        """Benchmark rows in input order."""
        rows = []
        for company in companies:
            analysis = self.engine.analyze_company(company, carbon_price)
            rows.append(
                PeerRow(
                    name=short_name(company.name),
                    full_name=company.name,
                    emission_intensity=round(self.metrics.emission_intensity(company), 2),
                    target_reduction=round(self.engine.calculate_weighted_target(company), 1),
                    emissions=round(company.latest_emission.emissions, 2),
                    gap=round(analysis.gap, 2),
                    is_current=company.id == current_company_id,
                )
            )
        return rows

    def sorted_by_intensity(self, rows: Sequence[PeerRow]) -> list[PeerRow]:
        """Rows ordered from the least to the most carbon-intensive."""
        return sorted(rows, key=lambda row: row.emission_intensity)

    def gap_rows(
        self,
        companies: Sequence[Company],
        current_company_id: str,
        fiscal_year: int = 2026,
    ) -> list[PeerGapRow]:
        """Signed gap for ``fiscal_year``: positive surplus, negative shortfall.

        Companies without a projection for that year, or without history,
        contribute a zero gap.
        """
        rows = []
        for company in companies:
            projection = next(
                (p for p in company.intensity_projections if p.year == fiscal_year),
                None,
            )
            production = company.emission_history[-1].physical_output if company.emission_history else 0.0
            projected = projection.projected if projection else 0.0
            govt_target = projection.govt_target if projection else 0.0
            if projection is None:
                self.logger.debug("{}: no projection for {}", company.id, fiscal_year)

            signed_gap = (govt_target - projected) * production / 1_000_000_000
            rows.append(
                PeerGapRow(
                    name=short_name(company.name),
                    full_name=company.name,
                    gap=round(signed_gap, 2),
                    is_current=company.id == current_company_id,
                )
            )
        return rows


__all__ = ["PeerComparison", "PeerGapRow", "PeerRow", "short_name"]
