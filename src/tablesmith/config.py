"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///app.sqlite"

    # Connection pool (pool_timeout is the acquisition wait in seconds)
    pool_size: int = 5
    max_overflow: int = 0
    pool_timeout: float = 5.0

    # Run CREATE TABLE + CREATE TRIGGER in one transaction. Disable for engines
    # whose DDL auto-commits; a failed create is then undone with DROP TABLE.
    transactional_ddl: bool = True

    # CORS
    cors_allowed_origins: list[str] = []

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    json_logs: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TABLESMITH_",
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
