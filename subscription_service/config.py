from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Full URL wins; otherwise it is assembled from the DB_* parts below.
    DATABASE_URL: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "subscriptions"

    # Connection pool
    DB_POOL_SIZE: int = 25
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Startup tasks
    DB_CREATE_TABLES: bool = False
    SEED_ON_STARTUP: bool = False

    APP_ENV: str = "development"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080
    LOG_LEVEL: str = "DEBUG"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


settings = Settings()
