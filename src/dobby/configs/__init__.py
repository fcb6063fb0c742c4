from .config import AppConfig, get_app_config  # noqa: F401
from .persona import DEFAULT_PERSONA, PersonaConfig  # noqa: F401
from .system import (  # noqa: F401
    CryptoConfig,
    FootballConfig,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
    TracingConfig,
)
