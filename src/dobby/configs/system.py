from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """OpenAI-compatible chat completion endpoint and sampling settings."""

    endpoint: str = Field(
        default="https://api.fireworks.ai/inference/v1",
        description="Base URL of the OpenAI-compatible API (without /chat/completions)",
    )
    api_key: str = Field(default="", description="Bearer token for the LLM API")
    model_name: str = Field(
        default=(
            "accounts/sentientfoundation-serverless/models/"
            "dobby-mini-unhinged-plus-llama-3-1-8b"
        ),
        description="Model identifier sent with every completion request",
    )
    temperature: float = Field(
        default=0.85, description="Sampling temperature for model responses"
    )
    max_tokens: int = Field(
        default=1024, description="Maximum tokens in a single response"
    )
    top_p: float = Field(
        default=0.9, description="Top-p sampling parameter for model responses"
    )
    top_k: int = Field(
        default=40, description="Top-k sampling parameter (sent as an extra body field)"
    )
    presence_penalty: float = Field(default=0.5, description="Presence penalty")
    frequency_penalty: float = Field(default=0.3, description="Frequency penalty")


class FootballConfig(BaseModel):
    """football-data.org client settings."""

    endpoint: str = Field(
        default="https://api.football-data.org/v4",
        description="football-data.org API base URL",
    )
    api_key: str = Field(
        default="",
        description="X-Auth-Token value; empty disables football context",
    )
    competition_code: str = Field(default="PL", description="Competition code")
    competition_name: str = Field(
        default="Premier League", description="Human readable competition name"
    )
    recent_window_days: int = Field(
        default=10, description="Look-back window for finished matches"
    )
    upcoming_window_days: int = Field(
        default=7, description="Look-ahead window for scheduled fixtures"
    )
    max_matches: int = Field(
        default=10, description="Maximum matches listed per section"
    )


class CryptoConfig(BaseModel):
    """CoinGecko client settings."""

    endpoint: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="CoinGecko API base URL",
    )
    asset_ids: list[str] = Field(
        default_factory=lambda: ["bitcoin", "ethereum", "solana"],
        description="CoinGecko ids whose spot price is always reported",
    )
    vs_currency: str = Field(default="usd", description="Quote currency")
    trending_limit: int = Field(default=5, description="Trending coins listed")
    markets_per_page: int = Field(
        default=10, description="Coins fetched from /coins/markets"
    )
    gainers_limit: int = Field(default=5, description="Top 1h risers listed")


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=3000, description="API server port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True, description="Emit JSON lines instead of coloured text"
    )


class TracingConfig(BaseModel):
    """OpenTelemetry tracing settings."""

    enabled: bool = Field(default=False, description="Enable OTEL tracing")
    endpoint: str = Field(default="", description="OTLP HTTP traces endpoint")
    username: str = Field(default="", description="Basic auth user for OTLP")
    password: str = Field(default="", description="Basic auth password for OTLP")
    service_name: str = Field(default="dobby-chat", description="OTEL service name")
    sample_rate: float = Field(default=1.0, description="Root span sample ratio")
    excluded_urls: list[str] = Field(
        default_factory=lambda: ["/health", "/metrics"],
        description="Paths excluded from tracing and HTTP metrics",
    )
