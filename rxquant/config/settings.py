from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    directory_provider: str = "example"
    rxnorm_api_base_url: str = "https://rxnav.nlm.nih.gov/REST"
    fda_api_base_url: str = "https://api.fda.gov/drug/ndc.json"
    directory_timeout_seconds: int = 10
    fda_result_limit: int = 100
    include_inactive_packages: bool = True

    max_alternatives: int = 5
    allow_multiple_packages: bool = True
    relax_tolerance_when_unmatched: bool = False
