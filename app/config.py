"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "cross-border-screening"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Reference data (exchange rates, rule thresholds)
    data_dir: Path = Path(__file__).parent.parent / "data"

    # Approve KYC as soon as documents are submitted
    kyc_auto_approve: bool = False

    model_config = {"env_prefix": "SCREENING_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
