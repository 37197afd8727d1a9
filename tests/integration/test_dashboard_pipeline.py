"""Integration test: dataset -> analysis -> peers -> trajectory -> chat grounding."""

import json
import math

import pytest

from cement_carbon.analytics import (
    AnalysisEngine,
    GapSimulator,
    IntensityTrajectoryBuilder,
    InvestorMetricsCalculator,
    PeerComparison,
)
from cement_carbon.chat import build_grounding_appendix, build_system_instruction, select_relevant_companies
from cement_carbon.config.loader import load_config_for_testing
from cement_carbon.data import load_companies


@pytest.fixture
def companies(sample_dataset):
    return load_companies(sample_dataset)


def test_full_dashboard_flow(companies):
    config = load_config_for_testing(yaml_content="analysis:\n  default_carbon_price: 25\n")
    engine = AnalysisEngine(
        usd_inr_rate=config.analysis.usd_inr_rate,
        crore_divisor=config.analysis.crore_divisor,
        earnings_multiple=config.analysis.earnings_multiple,
    )
    price = config.check_carbon_price(config.analysis.default_carbon_price)

    analyses = {c.id: engine.analyze_company(c, price) for c in companies}
    assert {cid: a.status for cid, a in analyses.items()} == {
        "ultratech": "Shortfall",
        "acc": "Surplus",
        "shree": "Shortfall",
    }
    for analysis in analyses.values():
        assert math.copysign(1, analysis.pl_impact) == math.copysign(1, analysis.gap)
        assert not math.isnan(analysis.estimated_share_price_impact)

    acc = analyses["acc"]
    assert acc.gap == pytest.approx(6 * 39_500)
    assert acc.pl_impact == pytest.approx(237_000 * 25 * 83 / 1e7)

    simulation = GapSimulator(engine).simulate(acc.company, price)
    assert simulation.pl_impact == pytest.approx(acc.pl_impact)

    comparison = PeerComparison(engine)
    rows = comparison.sorted_by_intensity(comparison.peer_rows(companies, "acc", price))
    assert [row.name for row in rows][-1] == "ACC"
    gaps = comparison.gap_rows(companies, "acc", config.analysis.gap_fiscal_year)
    assert [g.gap > 0 for g in gaps] == [False, True, False]

    for company in companies:
        snapshot = InvestorMetricsCalculator().snapshot(company)
        assert snapshot.intensity_cagr < 0
        trajectory = IntensityTrajectoryBuilder(engine).build(company)
        assert len(trajectory.points) == 5
        assert trajectory.y_min < trajectory.y_max

    relevant = select_relevant_companies("UltraTech vs Shree", companies)
    assert {c.id for c in relevant} == {"ultratech", "shree"}

    appendix = build_grounding_appendix(companies, relevant, max_chars=config.chat.max_data_chars)
    assert len(json.loads(appendix)["companies_raw"]) == 3
    instruction = build_system_instruction(price, companies, appendix)
    assert "Current carbon price: 25" in instruction
    assert "UltraTech Cement Ltd (ULTRACEMCO)" in instruction
    assert "ACC Limited (ACC)" in instruction
