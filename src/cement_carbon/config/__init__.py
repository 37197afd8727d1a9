"""Configuration package for the cement carbon analyzer.

Configuration is managed with Pydantic BaseSettings for type validation and
automatic environment variable overrides.

Environment Variables:
    Use CEMENT_ prefix for overrides. For nested configs use double underscore.
    Examples:
        CEMENT_PATHS__DATASET_FILE=/data/companies.yaml
        CEMENT_ANALYSIS__DEFAULT_CARBON_PRICE=25
        CEMENT_CHAT__MATCH_THRESHOLD=0.6
        GEMINI_API_KEY=your_api_key
"""

from .loader import ConfigLoader, ConfigurationError, load_config
from .schema import (
    AnalysisConfig,
    AppConfig,
    ChatConfig,
    LoggingConfig,
    PathsConfig,
)

__all__ = [
    "AppConfig",
    "PathsConfig",
    "AnalysisConfig",
    "ChatConfig",
    "LoggingConfig",
    "ConfigLoader",
    "ConfigurationError",
    "load_config",
]
