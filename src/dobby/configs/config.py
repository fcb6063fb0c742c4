"""Configuration management using pydantic-settings.

The configuration is read **once** per process (``get_app_config`` is a
singleton factory) and handed explicitly to the orchestrator, the context
enrichers and the LLM factory.  Tests build their own ``AppConfig`` and
override ``get_app_config`` through ``app.dependency_overrides``.

Priority order (highest first):

1. Init kwargs (``AppConfig(llm=...)``)
2. Override YAML (path from ``DOBBY_CONFIG_FILE`` env var)
3. Environment variables (``DOBBY_`` prefix, ``__`` nested delimiter)
4. ``.env`` dotenv file
5. Static YAML (``configs/config.yaml``)
6. Field defaults / file secrets
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from dobby.infra.singleton import singleton

from .persona import BUILTIN_PERSONAS, PersonaConfig
from .system import (
    CryptoConfig,
    FootballConfig,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
    TracingConfig,
)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

_override_env = os.environ.get("DOBBY_CONFIG_FILE")
OVERRIDE_CONFIG_FILE: Optional[Path] = Path(_override_env) if _override_env else None

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"  # Nested environment variable delimiter
ENV_PREFIX = "DOBBY_"

DEFAULT_ENCODING = "utf-8"


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="LLM client configuration settings",
    )

    football: FootballConfig = Field(
        default_factory=FootballConfig,
        description="football-data.org context enricher settings",
    )

    crypto: CryptoConfig = Field(
        default_factory=CryptoConfig,
        description="CoinGecko context enricher settings",
    )

    personas: list[PersonaConfig] = Field(
        default_factory=lambda: list(BUILTIN_PERSONAS),
        description="Registered personas, looked up by id",
    )

    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP server settings",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="OpenTelemetry tracing settings",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings]

        if OVERRIDE_CONFIG_FILE is not None and OVERRIDE_CONFIG_FILE.is_file():
            sources.append(
                YamlConfigSettingsSource(
                    settings_cls,
                    yaml_file=OVERRIDE_CONFIG_FILE,
                )
            )

        sources.append(env_settings)
        sources.append(dotenv_settings)

        # Static YAML shipped with the repository
        sources.append(YamlConfigSettingsSource(settings_cls))

        sources.append(file_secret_settings)

        return tuple(sources)


@singleton
def get_app_config() -> AppConfig:
    """Get the process-wide application configuration (read once)."""
    return AppConfig()
