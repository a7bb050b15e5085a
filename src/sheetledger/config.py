from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = 5555

    # Database
    database_url: str
    db_echo: bool = False

    # Google Sheets
    sheet_id: str
    google_service_account_file: str = "google-service-account.json"
    sheets_timeout_seconds: int = 30


settings = Settings()
