from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Shared secret: expected x-callback-token and basic-auth user for the provider API
    xendit_secret_api_key: str = ""
    xendit_api_base_url: str = "https://api.xendit.co"
    xendit_callback_url: str = ""
    xendit_timeout_seconds: float = 10.0

    # Bearer token the app/kiosk sends to create payments
    client_api_token: str = ""

    database_url: str = "sqlite+pysqlite:///:memory:"
    openapi_path : Path = Path(__file__).resolve().parents[1] / "openapi/openapi.yaml"
    log_level: str = "INFO"


settings = Settings()
