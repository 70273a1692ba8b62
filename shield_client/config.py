"""Client configuration module."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShieldSettings(BaseSettings):
    """Centralised client settings sourced from ``SHIELD_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SHIELD_",
        extra="ignore",
    )

    # Validator process
    validator_path: str = "./shield"
    validator_args: list[str] = Field(default_factory=list)
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Protocol
    api_version: str = "1.0"
    verify_request_hash: bool = True


settings = ShieldSettings()
