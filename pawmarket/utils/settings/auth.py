from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    JWT_SECRET: SecretStr = SecretStr("pawmarket-dev-secret-key-minimum-32-characters")
    JWT_ISSUER: str = "mypaws.in"
    JWT_AUDIENCE: str = "mypaws-api"
    ACCESS_TOKEN_TTL_SECONDS: int = 3600
    REFRESH_TOKEN_TTL_SECONDS: int = 30 * 24 * 3600

    GOOGLE_CLIENT_ID: str | None = None
    # Development-only login by email
    AUTH_MOCK_ENABLED: bool = True
    COOKIE_SECURE: bool = False
