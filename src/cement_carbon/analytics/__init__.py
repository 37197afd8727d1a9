"""Analytics modules for cement emission targets and carbon-price exposure."""

from .analysis_engine import (
    AnalysisEngine,
    analyze_company,
    calculate_intensity_reduction_rate,
    calculate_pl_impact,
    calculate_target_emissions,
    calculate_weighted_target,
    estimate_share_price_impact,
    predict_emissions,
    predict_intensity,
    predict_intensity_for_year,
)
from .gap_simulator import GapSimulation, GapSimulator
from .intensity_trajectory import (
    EmissionTrend,
    IntensityTrajectory,
    IntensityTrajectoryBuilder,
    TrajectoryPoint,
)
from .investor_metrics import InvestorMetricsCalculator, InvestorSnapshot, fiscal_label
from .models import (
    AnalysisInputError,
    Company,
    EmissionAnalysis,
    EmissionData,
    IntensityProjection,
    Plant,
    StockSeries,
)
from .peer_comparison import PeerComparison, PeerGapRow, PeerRow
from .scenario_builder import CustomCompanyInputs, CustomCompanyResult, ScenarioBuilder

__all__ = [
    # Models
    "AnalysisInputError",
    "Company",
    "EmissionAnalysis",
    "EmissionData",
    "IntensityProjection",
    "Plant",
    "StockSeries",
    # Analysis Engine
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
    # Investor Metrics
    "InvestorMetricsCalculator",
    "InvestorSnapshot",
    "fiscal_label",
    # Peer Comparison
    "PeerComparison",
    "PeerGapRow",
    "PeerRow",
    # Intensity Trajectory
    "EmissionTrend",
    "IntensityTrajectory",
    "IntensityTrajectoryBuilder",
    "TrajectoryPoint",
    # Gap Simulator
    "GapSimulation",
    "GapSimulator",
    # Company X Scenario
    "CustomCompanyInputs",
    "CustomCompanyResult",
    "ScenarioBuilder",
]
