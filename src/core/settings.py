from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Vietnam Flood Monitor"
    debug: bool = True
    # Read from GEMINI_API_KEY; without it every report falls back to the placeholder
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    # Probe the map script and fetch radar at startup
    map_autoload: bool = True


settings = Settings()
