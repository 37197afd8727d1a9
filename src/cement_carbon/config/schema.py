"""Configuration schema using Pydantic BaseSettings with environment variable support.

Environment variables override config values using the CEMENT_ prefix.
For example: CEMENT_ANALYSIS__DEFAULT_CARBON_PRICE=25 or
CEMENT_PATHS__DATASET_FILE="/data/companies.yaml"
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PathsConfig(BaseSettings):
    """File system paths configuration."""

    model_config = SettingsConfigDict(env_prefix="CEMENT_PATHS__", env_nested_delimiter="__")

    data_dir: Path = Field(default="./data", description="Base data directory")
    dataset_file: Path = Field(default="./data/sample_companies.yaml", description="Company dataset (YAML or JSON)")
    output_dir: Path = Field(default="./data/output", description="Directory for exported results")
    logs_dir: Path = Field(default="./logs", description="Directory for log files")

    @field_validator("data_dir", "dataset_file", "output_dir", "logs_dir", mode="before")
    @classmethod
    def validate_paths(cls, v):
        """Convert string paths to Path objects and resolve them."""
        if isinstance(v, str):
            return Path(v).expanduser().resolve()
        return v


class AnalysisConfig(BaseSettings):
    """Carbon-price and financial conversion settings."""

    model_config = SettingsConfigDict(env_prefix="CEMENT_ANALYSIS__", env_nested_delimiter="__")

    default_carbon_price: float = Field(default=9.5, ge=0.0, description="Carbon price in USD/tCO2e")
    min_carbon_price: float = Field(default=0.0, ge=0.0, description="Lowest selectable carbon price")
    max_carbon_price: float = Field(default=200.0, gt=0.0, description="Highest selectable carbon price")
    carbon_price_step: float = Field(default=0.5, gt=0.0, description="Carbon price increment")
    usd_inr_rate: float = Field(default=83.0, gt=0.0, description="USD to INR conversion rate")
    crore_divisor: float = Field(default=10_000_000.0, gt=0.0, description="Rupees per crore")
    earnings_multiple: float = Field(default=40.0, gt=0.0, description="Multiple applied to P&L impact")
    gap_fiscal_year: int = Field(default=2026, description="Fiscal year for peer gap comparison")

    @model_validator(mode="after")
    def validate_price_range(self):
        """Ensure the default price sits inside the selectable range."""
        if self.min_carbon_price > self.max_carbon_price:
            raise ValueError(
                f"min_carbon_price ({self.min_carbon_price}) cannot exceed max_carbon_price ({self.max_carbon_price})"
            )
        if not self.min_carbon_price <= self.default_carbon_price <= self.max_carbon_price:
            raise ValueError(
                f"default_carbon_price ({self.default_carbon_price}) must be within "
                f"[{self.min_carbon_price}, {self.max_carbon_price}]"
            )
        return self


class ChatConfig(BaseSettings):
    """Chat assistant grounding configuration."""

    model_config = SettingsConfigDict(env_prefix="CEMENT_CHAT__", env_nested_delimiter="__")

    model: str = Field(default="gemini-1.5-flash-latest", description="Generative model name")
    api_key: str | None = Field(default=None, description="API key for the chat model")
    max_data_chars: int = Field(default=40_000, gt=0, description="Maximum characters of dataset context")
    max_plants_per_company: int = Field(default=12, gt=0, description="Plants included per company")
    match_threshold: float = Field(default=0.55, ge=0.0, le=1.0, description="Company match similarity threshold")

    @field_validator("api_key", mode="before")
    @classmethod
    def validate_api_key(cls, v):
        """Load API key from environment if not provided."""
        if v is None:
            import os

            return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        return v


class LoggingConfig(BaseSettings):
    """Logging system configuration."""

    model_config = SettingsConfigDict(env_prefix="CEMENT_LOGGING__", env_nested_delimiter="__")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Console logging level"
    )
    console: bool = Field(default=True, description="Enable console logging")
    file: bool = Field(default=True, description="Enable file logging")
    retention_days: int = Field(default=30, gt=0, description="Log file retention in days")


class AppConfig(BaseSettings):
    """Main application configuration combining all sections."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="CEMENT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        for directory in (self.paths.data_dir, self.paths.output_dir, self.paths.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def get_log_file_path(self) -> Path:
        """Get the current log file path with date."""
        from datetime import datetime

        date_str = datetime.now().strftime("%Y-%m-%d")
        return self.paths.logs_dir / f"cement-carbon-{date_str}.log"

    def check_carbon_price(self, price: float) -> float:
        """Return ``price`` if it lies in the configured range, else raise ValueError."""
        lo, hi = self.analysis.min_carbon_price, self.analysis.max_carbon_price
        if not lo <= price <= hi:
            raise ValueError(f"Carbon price {price} is outside the allowed range [{lo}, {hi}] USD/tCO2e")
        return price
