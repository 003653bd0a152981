from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NUA_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Storage
    DB_PATH: str = "flights_db.txt"

    # Rejects pathologically large grids in add_flight
    MAX_SEATS_PER_FLIGHT: int = 1000

    LOG_LEVEL: str = "INFO"


settings = Settings()
