from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    STORAGE_BACKEND: str = "local"  # local | r2
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/api/uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB

    R2_ENDPOINT: str = ""
    R2_ACCESS_KEY: str = ""
    R2_SECRET_KEY: SecretStr = SecretStr("")
    R2_BUCKET: str = "mypaws-images"
    R2_PUBLIC_URL: str = ""
