"""Dataset loading for the company universe.

Datasets are YAML or JSON documents with a top-level ``companies`` list.
Keys may be camelCase (as exported by the dashboard) or snake_case.
"""

from __future__ import annotations

import json
import re
from dataclasses import MISSING, fields
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from cement_carbon.analytics.models import (
    Company,
    EmissionData,
    IntensityProjection,
    Plant,
    StockSeries,
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")
_KEY_ALIASES = {
    "target_intensity2025": "target_intensity_2025",
    "target_intensity2026": "target_intensity_2026",
}


class DatasetError(Exception):
    """Raised when a dataset cannot be read or does not describe valid companies."""

    pass


def to_snake_case(key: str) -> str:
    snake = _CAMEL_BOUNDARY.sub(r"_\1", key).lower()
    return _KEY_ALIASES.get(snake, snake)


def _build(cls, raw: Any, where: str):
    """Instantiate dataclass ``cls`` from a mapping, ignoring unknown keys."""
    if not isinstance(raw, dict):
        raise DatasetError(f"{where}: expected a mapping, got {type(raw).__name__}")

    data = {to_snake_case(str(k)): v for k, v in raw.items()}
    known = {f.name: f for f in fields(cls)}
    missing = [
        name
        for name, f in known.items()
        if f.default is MISSING and f.default_factory is MISSING and name not in data
    ]
    if missing:
        raise DatasetError(f"{where}: missing required field(s): {', '.join(missing)}")
    return cls(**{k: v for k, v in data.items() if k in known})


class DatasetLoader:
    """Load :class:`Company` records from a YAML or JSON file."""

    def __init__(self, dataset_path: str | Path):
        self.dataset_path = Path(dataset_path)
        self.logger = logger.bind(module="dataset_loader")

    def load(self) -> list[Company]:
        """Read and convert the dataset, preserving company order.

        Raises:
            DatasetError: If the file is missing, unparsable or malformed.
        """
        document = self._read_document()
        raw_companies = document.get("companies") if isinstance(document, dict) else None
        if not isinstance(raw_companies, list):
            raise DatasetError(f"{self.dataset_path}: expected a top-level 'companies' list")

        companies = [self._parse_company(raw, index) for index, raw in enumerate(raw_companies)]
        self.logger.info("Loaded {} companies from {}", len(companies), self.dataset_path)
        return companies

    def _read_document(self) -> Any:
        if not self.dataset_path.exists():
            raise DatasetError(f"Dataset not found: {self.dataset_path}")

        try:
            text = self.dataset_path.read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetError(f"Failed to read {self.dataset_path}: {e}") from e

        try:
            if self.dataset_path.suffix.lower() == ".json":
                return json.loads(text)
            return yaml.safe_load(text) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DatasetError(f"Invalid dataset syntax in {self.dataset_path}: {e}") from e

    def _parse_company(self, raw: Any, index: int) -> Company:
        where = f"companies[{index}]"
        if not isinstance(raw, dict):
            raise DatasetError(f"{where}: expected a mapping, got {type(raw).__name__}")

        data = {to_snake_case(str(k)): v for k, v in raw.items()}
        plants = [_build(Plant, p, f"{where}.plants[{i}]") for i, p in enumerate(data.pop("plants", None) or [])]
        history = [
            _build(EmissionData, row, f"{where}.emission_history[{i}]")
            for i, row in enumerate(data.pop("emission_history", None) or [])
        ]
        projections = [
            _build(IntensityProjection, p, f"{where}.intensity_projections[{i}]")
            for i, p in enumerate(data.pop("intensity_projections", None) or [])
        ]
        stock_raw = data.pop("stock_history", None)
        stock = _build(StockSeries, stock_raw, f"{where}.stock_history") if stock_raw else None

        history.sort(key=lambda row: row.year)

        company = _build(Company, data, where)
        company.plants = plants
        company.emission_history = history
        company.intensity_projections = projections
        company.stock_history = stock
        return company


def load_companies(dataset_path: str | Path) -> list[Company]:
    """Convenience wrapper around :class:`DatasetLoader`."""
    return DatasetLoader(dataset_path).load()


__all__ = ["DatasetError", "DatasetLoader", "load_companies", "to_snake_case"]
