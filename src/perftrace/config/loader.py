"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (PERFTRACE__SECTION__KEY)
3. Project config (.perftrace/config.yaml)
4. Global config (~/.config/perftrace/config.yaml)
5. Built-in defaults (lowest priority)
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from perftrace.config.models import (
    BrowserConfig,
    LoggingConfig,
    PerfTraceConfig,
    TracingConfig,
)
from perftrace.core.errors import ConfigError

if TYPE_CHECKING:
    from perftrace.trace.protocols import TraceEngine

GLOBAL_CONFIG_PATH = Path("~/.config/perftrace/config.yaml").expanduser()
PROJECT_CONFIG_DIR = ".perftrace"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class PerfTraceSettings(BaseSettings):
        """Root config. Env vars: PERFTRACE__LOGGING__LEVEL, PERFTRACE__TRACING__ENGINE, etc."""

        model_config = SettingsConfigDict(
            env_prefix="PERFTRACE__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        tracing: TracingConfig = TracingConfig()
        browser: BrowserConfig = BrowserConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return PerfTraceSettings


def load_config(root: Path | None = None, **kwargs: Any) -> PerfTraceConfig:
    """Load config: defaults < global yaml < project yaml < env vars < kwargs.

    Args:
        root: Directory holding ``.perftrace/config.yaml``.
              Defaults to current working directory.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    root = root or Path.cwd()

    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)
    project_config = _load_yaml(root / PROJECT_CONFIG_DIR / "config.yaml")
    if project_config:
        yaml_config = _deep_merge(yaml_config, project_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    return PerfTraceConfig.model_validate(settings.model_dump())


def load_engine(path: str) -> TraceEngine:
    """Import and call a trace engine factory given as ``module:callable``.

    Raises:
        ConfigError: When the path is empty, malformed, or cannot be imported.
    """
    if not path:
        raise ConfigError.missing_required("tracing.engine")
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError.engine_not_found(path, "expected 'package.module:callable'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError.engine_not_found(path, str(e)) from e
    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise ConfigError.engine_not_found(path, f"'{attr}' is not a callable in {module_name}")
    return factory()  # type: ignore[no-any-return]
