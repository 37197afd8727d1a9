"""Grounding context for the emissions chat assistant.

Serialises the dashboard dataset into the system instruction sent with
each chat turn. The request to the language model itself lives outside
this package.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

from loguru import logger

MAX_DATA_CHARS = 40_000
MAX_PLANTS_PER_COMPANY = 12
TRUNCATION_MARKER = "\n...truncated..."


def _as_dict(item: Any) -> dict[str, Any]:
    if is_dataclass(item) and not isinstance(item, type):
        return asdict(item)
    return dict(item or {})


def _first(record: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def normalize_plant(plant: Any) -> dict[str, Any]:
    record = _as_dict(plant)
    return {
        "name": _first(record, "name", "plantName", "location", "site"),
        "capacity_mtpa": _first(record, "capacityMtpa", "capacity", "mtpa"),
        "output_t": _first(record, "output", "production", "throughput_t", "volume_t"),
        "intensity_kgco2_per_t": _first(record, "intensity", "emissionIntensity", "kgCO2PerTonne", "kgco2_t"),
        "targetIntensity_kgco2_per_t": _first(record, "targetIntensity", "govTarget", "govTargetIntensity"),
        "region": _first(record, "state", "region"),
    }


def normalize_company(company: Any, max_plants: int = MAX_PLANTS_PER_COMPANY) -> dict[str, Any]:
    """Compact company view with at most ``max_plants`` plants."""
    record = _as_dict(company)
    plants = record.get("plants")
    plants = plants if isinstance(plants, list) else None
    return {
        "id": record.get("id"),
        "name": _first(record, "name", "company", "Company"),
        "ticker": _first(record, "ticker", "symbol"),
        "plants_count": len(plants) if plants is not None else None,
        "plants": [normalize_plant(p) for p in (plants or [])[:max_plants]],
    }


def _truncate(text: str, max_chars: int) -> str:
    if len(text) > max_chars:
        logger.debug("Grounding data truncated from {} to {} chars", len(text), max_chars)
        return text[:max_chars] + TRUNCATION_MARKER
    return text


def build_data_appendix(
    companies: Sequence[Any],
    max_chars: int = MAX_DATA_CHARS,
    max_plants: int = MAX_PLANTS_PER_COMPANY,
) -> str:
    simplified = [normalize_company(c, max_plants) for c in companies]
    return _truncate(json.dumps({"companies": simplified}, indent=2, ensure_ascii=False), max_chars)


def build_raw_appendix(companies: Sequence[Any], max_chars: int = MAX_DATA_CHARS) -> str:
    """Full dashboard records, preferred over the normalised view."""
    raw = [_as_dict(c) for c in companies]
    return _truncate(json.dumps({"companies_raw": raw}, indent=2, ensure_ascii=False, default=str), max_chars)


def build_grounding_appendix(
    companies: Sequence[Any],
    relevant: Sequence[Any],
    max_chars: int = MAX_DATA_CHARS,
    max_plants: int = MAX_PLANTS_PER_COMPANY,
) -> str:
    """Raw records for every company, or the normalised view of ``relevant`` when those overflow."""
    appendix = build_raw_appendix(companies, max_chars=max_chars)
    if TRUNCATION_MARKER in appendix:
        logger.info("Raw dataset too large, grounding on {} matched companies", len(relevant))
        appendix = build_data_appendix(relevant, max_chars=max_chars, max_plants=max_plants)
    return appendix


def _company_line(company: Any) -> str:
    record = _as_dict(company)
    line = f"- {record.get('name') or 'Company'}"
    if record.get("ticker"):
        line += f" ({record['ticker']})"
    plants = record.get("plants")
    if isinstance(plants, list) and plants:
        line += f" ({len(plants)} plants)"
    return line


def build_system_instruction(carbon_price: float, companies: Sequence[Any], appendix_json: str) -> str:
    """System prompt with house style, scope, methodology and dataset."""
    company_list = "\n".join(_company_line(c) for c in companies) or "- (none listed)"
    return f"""
You are an AI assistant that provides data and analysis on cement companies' emissions and environmental targets. Do not provide or imply investment advice, and do not add disclaimers about authorization. Keep responses concise and focused on emissions, targets, and carbon-price exposure.

House style:
- Clear Markdown with headings and bullet points.
- Always use units (kgCO2/t, tCO2, USD). Show short formulas for calculations.

Context:
- Current carbon price: {carbon_price} USD/tCO2e.
- Scope: plant/company emission intensity, government target alignment, excess emissions cost.
- Companies in scope:
{company_list}

Methodology:
- Intensity = (Scope 1 + Scope 2) / output (t).
- Company intensity = weighted average of plants.
- Government target = plant-level % reduction (Gazette).
- Projected intensity = trend (last 3y) adjusted for targets.
- Excess emissions cost = max(0, projected - target) x Output x Carbon price.

Dashboard data (use primary fields from companies_raw; normalized view is backup):
{appendix_json}

When web is enabled, you may use web results for fresh context and cite sources, but prefer dashboard numbers for metrics.
"""


__all__ = [
    "MAX_DATA_CHARS",
    "MAX_PLANTS_PER_COMPANY",
    "build_data_appendix",
    "build_grounding_appendix",
    "build_raw_appendix",
    "build_system_instruction",
    "normalize_company",
    "normalize_plant",
]
