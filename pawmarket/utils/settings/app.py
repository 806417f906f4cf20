from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DEBUG: bool = False
    ENVIRONMENT: str = "DEV"
    API_VERSION: str = "0.1.0"
    BASE_URL: str = "http://localhost:8010"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "https://mypaws.in",
        "https://www.mypaws.in",
    ]

    # Accounts promoted to admin on login
    ADMIN_EMAILS: list[str] = []

    # Security settings
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024  # 10MB

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.upper() == "PROD"

    def validate_prod(self) -> None:
        """Sanity checks for production environment."""
        if self.is_production and not self.CORS_ORIGINS:
            raise ValueError("CORS_ORIGINS must be set in production")
