from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    # === General ===
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, ge=1, le=65535, validation_alias="PORT")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # === Database ===
    database_url: str = Field(default="sqlite:///./orderdesk.db", validation_alias="DATABASE_URL")

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_pg_scheme(cls, v: str) -> str:
        # Render/Heroku sometimes provide 'postgres://'
        if v and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+psycopg://", 1)
        return v

    # === Logging ===
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field(default="text", validation_alias="LOG_FORMAT")

    # === Server-sent events ===
    sse_keep_alive_interval: float = Field(default=60.0, validation_alias="SSE_KEEP_ALIVE_INTERVAL")
    sse_write_timeout: float = Field(default=5.0, gt=0, validation_alias="SSE_WRITE_TIMEOUT")
    sse_queue_size: int = Field(default=100, ge=1, validation_alias="SSE_QUEUE_SIZE")
    sse_poll_interval: float = Field(default=1.0, gt=0, validation_alias="SSE_POLL_INTERVAL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
