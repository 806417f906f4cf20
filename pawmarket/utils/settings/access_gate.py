"""Suspended-account gate settings."""

from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict


class AccessGateSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Path prefixes a suspended or banned account may still reach
    ACCESS_GATE_EXEMPT_PATHS: list[str] = [
        "/api/v1/auth/logout",
        "/api/v1/auth/google",
        "/api/v1/auth/mock",
        "/api/v1/auth/refresh",
    ]
    ACCESS_GATE_BYPASS_EMAILS: list[str] = []
    ACCESS_GATE_BYPASS_USER_IDS: list[UUID] = []
