from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvSettings(BaseSettings):
    """Base for setting groups, each field read from its flat env var (or .env)."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(EnvSettings):
    """General application settings."""

    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    @property
    def effective_log_level(self) -> str:
        # DEBUG=true overrides LOG_LEVEL
        return "DEBUG" if self.debug else self.log_level.upper()


class RpcSettings(EnvSettings):
    """Settings related to the Ethereum node connection and request retries."""

    rpc_url: str = Field(
        default="https://eth.llamarpc.com",
        validation_alias="RPC_URL",
        description="Ethereum Node JSON-RPC URL",
    )
    # Timeout for a single RPC call (seconds)
    request_timeout: float = Field(default=30, gt=0, validation_alias="RPC_TIMEOUT")
    # Retries after the first attempt for transient failures
    max_retries: int = Field(default=5, ge=0, validation_alias="RPC_MAX_RETRIES")
    # First backoff delay (seconds), doubled on every retry
    retry_base_delay: float = Field(default=0.5, ge=0, validation_alias="RPC_RETRY_BASE_DELAY")


class EnrichmentSettings(EnvSettings):
    """Settings for the secondary lookups attached to address records."""

    token_scan_timeout: float = Field(default=5.0, gt=0, validation_alias="TOKEN_SCAN_TIMEOUT")
    token_scan_concurrency: int = Field(default=4, gt=0, validation_alias="TOKEN_SCAN_CONCURRENCY")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each group reads its own flat env vars through validation_alias.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    rpc: RpcSettings = Field(default_factory=RpcSettings)
    enrichment: EnrichmentSettings = Field(default_factory=EnrichmentSettings)

    # Config to load from .env file
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Singleton instance
settings = Settings()
