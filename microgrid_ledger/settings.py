from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MICROGRID_", extra="ignore"
    )

    ENVIRONMENT: str = "LOCAL"
    LOG_LEVEL: str = "INFO"

    # Accounting policy
    CREDIT_RATE: int = 10
    OWNER_IDENTITY: str = "owner"
    # Accumulators mirror an unsigned 256-bit word
    MAX_UINT: int = 2**256 - 1
    # Events kept for inspection after delivery; oldest are dropped first
    EVENT_HISTORY_LIMIT: int = 10_000

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000


settings = Settings()
