"""Payment gateway settings configuration."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Empty keys make the gateway refuse to start
    RAZORPAY_KEY_ID: str = ""
    RAZORPAY_KEY_SECRET: SecretStr = SecretStr("")
    PAYMENT_CURRENCY: str = "INR"
    # Seconds to wait on the gateway before giving up on order creation
    PAYMENT_GATEWAY_TIMEOUT: float = 15.0
