"""Configuration loader with priority-based resolution.

Sources are merged in this order, later ones winning:
1. Default values
2. YAML configuration file
3. Environment variables (CEMENT_ prefix, ``__`` for nesting)
4. CLI overrides
"""

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from .schema import AppConfig

ENV_PREFIX = "CEMENT_"
DEFAULT_CONFIG_FILE = "config.yaml"

_TRUE_WORDS = {"true", "yes", "on"}
_FALSE_WORDS = {"false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when configuration loading fails."""

    pass


class ConfigLoader:
    """Merge YAML, environment and CLI settings into an :class:`AppConfig`."""

    def __init__(self, config_path: str | None = None):
        self.config_path = config_path or DEFAULT_CONFIG_FILE
        self._yaml_data: dict[str, Any] = {}
        self._cli_overrides: dict[str, Any] = {}

    def load_config(
        self,
        cli_overrides: dict[str, Any] | None = None,
        create_dirs: bool = True,
    ) -> AppConfig:
        """Resolve every source and build the validated configuration.

        Args:
            cli_overrides: Nested dict of values given on the command line
            create_dirs: Create the configured data/output/log directories

        Raises:
            ConfigurationError: If a source is unreadable or validation fails
        """
        self._cli_overrides = cli_overrides or {}
        try:
            self._yaml_data = self._read_yaml()
            merged = dict(self._yaml_data)
            self._deep_merge(merged, self._env_overrides())
            self._deep_merge(merged, self._cli_overrides)
            config = AppConfig(**merged)
        except ValidationError as e:
            raise ConfigurationError(self._format_validation_error(e)) from e
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        if create_dirs:
            config.ensure_directories()
        logger.debug("Configuration resolved from {}", self.config_path)
        return config

    def _read_yaml(self) -> dict[str, Any]:
        config_file = Path(self.config_path)
        if not config_file.exists():
            return {}

        try:
            with open(config_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_file} must contain a mapping of sections")
        return data

    def _env_overrides(self) -> dict[str, Any]:
        """Nested overrides from CEMENT_SECTION__FIELD style variables."""
        nested: dict[str, Any] = {}
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue
            parts = [part.lower() for part in env_key[len(ENV_PREFIX):].split("__")]
            current = nested
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = self._parse_env_value(env_value)
        return nested

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Interpret an environment string as bool, number, list or plain text."""
        lowered = value.strip().lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        if "," in value:
            return [item.strip() for item in value.split(",") if item.strip()]
        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                continue
        return value

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(base.get(key), dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _format_validation_error(self, validation_error: ValidationError) -> str:
        lines = [
            f"  {' -> '.join(str(x) for x in error['loc'])}: {error['msg']}"
            for error in validation_error.errors()
        ]
        return (
            "Configuration validation failed:\n"
            + "\n".join(lines)
            + "\n\nPlease check your configuration in:\n"
            f"  1. {self.config_path} (YAML file)\n"
            f"  2. Environment variables ({ENV_PREFIX}* prefix)\n"
            "  3. CLI arguments\n"
        )

    def get_config_sources_info(self) -> dict[str, Any]:
        """Describe which configuration sources are present."""
        config_file = Path(self.config_path)
        env_vars = sorted(k for k in os.environ if k.startswith(ENV_PREFIX))
        return {
            "yaml_file": {"path": str(config_file.absolute()), "exists": config_file.exists()},
            "environment_variables": {"count": len(env_vars), "variables": env_vars},
            "cli_overrides": {"count": len(self._cli_overrides), "sections": list(self._cli_overrides)},
        }


def load_config(
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
    create_dirs: bool = True,
) -> AppConfig:
    """Convenience function to load configuration."""
    return ConfigLoader(config_path).load_config(cli_overrides, create_dirs)


def load_config_for_testing(
    yaml_content: str | None = None,
    env_vars: dict[str, str] | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration from inline YAML and temporary environment variables."""
    import tempfile

    config_path = None
    if yaml_content:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False, encoding="utf-8") as f:
            f.write(yaml_content)
            config_path = f.name

    saved = {key: os.environ.get(key) for key in (env_vars or {})}
    os.environ.update(env_vars or {})
    try:
        return ConfigLoader(config_path or os.devnull).load_config(cli_overrides, create_dirs=False)
    finally:
        for key, old_value in saved.items():
            if old_value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = old_value
        if config_path:
            os.unlink(config_path)
