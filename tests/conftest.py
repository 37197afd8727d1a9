"""Shared fixtures: small hand-built company records."""

from pathlib import Path

import pytest

from cement_carbon.analytics.models import Company, EmissionData, IntensityProjection, Plant

SAMPLE_DATASET = Path(__file__).resolve().parents[1] / "data" / "sample_companies.yaml"


def make_company(
    company_id: str = "ramco",
    name: str = "Ramco Cements Limited",
    intensities=(591.0, 615.0, 578.0),
    outputs=(24_000_000.0, 25_000_000.0, 25_000_000.0),
    emissions=(14.2, 15.4, 14.5),
    projections=((2025, 486.0, 474.0), (2026, 467.0, 466.0)),
    plants=(("Alathiyur", "Tamil Nadu", 4.0, 3.0), ("Jayanthipuram", "Andhra Pradesh", 6.0, 5.0)),
    market_cap: float | None = 25_000.0,
) -> Company:
    history = [
        EmissionData(
            year=2022 + i,
            emissions=e,
            scope1=e * 950_000,
            scope2=e * 50_000,
            physical_output=o,
            intensity_per_tonne=i_,
        )
        for i, (e, o, i_) in enumerate(zip(emissions, outputs, intensities))
    ]
    return Company(
        id=company_id,
        name=name,
        ticker=company_id.upper(),
        current_share_price=900.0,
        revenue=9_000.0,
        revenue_growth=8.0,
        net_income=400.0,
        employees=10_865,
        workers=5_000,
        founded_year=1957,
        plants=[Plant(name=n, location=loc, capacity=c, government_target=t) for n, loc, c, t in plants],
        emission_history=history,
        market_cap=market_cap,
        intensity_projections=[IntensityProjection(year=y, projected=p, govt_target=g) for y, p, g in projections],
    )


@pytest.fixture
def company() -> Company:
    return make_company()


@pytest.fixture
def peers() -> list[Company]:
    return [
        make_company(),
        make_company(
            company_id="acc",
            name="ACC Limited",
            intensities=(650.0, 634.0, 623.0),
            outputs=(36_000_000.0, 38_000_000.0, 40_000_000.0),
            emissions=(23.4, 24.1, 24.0),
            projections=((2025, 612.0, 618.0), (2026, 601.0, 608.0)),
            market_cap=38_000.0,
        ),
        make_company(
            company_id="shree",
            name="Shree Cement Ltd",
            intensities=(574.0, 559.0, 552.0),
            outputs=(31_000_000.0, 34_000_000.0, 35_500_000.0),
            emissions=(17.8, 19.0, 19.6),
            projections=((2025, 544.0, 538.0),),
            market_cap=96_000.0,
        ),
    ]


@pytest.fixture
def sample_dataset() -> Path:
    return SAMPLE_DATASET
