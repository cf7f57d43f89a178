"""Configuration settings for the Afterbuy client.

Settings are read from ``AFTERBUY_*`` environment variables and an optional
``.env`` file. Nothing is loaded at import time; call :func:`get_settings`
or build :class:`Settings` directly.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.afterbuy.de/afterbuy/ABInterface.aspx"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    :param user_id: Afterbuy user name
    :type user_id: Optional[str]
    :param user_password: Afterbuy user password
    :type user_password: Optional[str]
    :param partner_id: Partner ID assigned by Afterbuy
    :type partner_id: Optional[int]
    :param partner_password: Partner password assigned by Afterbuy
    :type partner_password: Optional[str]
    :param error_language: Language of Afterbuy error descriptions
    :type error_language: str
    :param api_url: URL of the Afterbuy XML interface
    :type api_url: str
    :param timeout: Read timeout for API calls in seconds
    :type timeout: float
    :param timezone: Timezone Afterbuy uses for dates on the wire
    :type timezone: str
    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="AFTERBUY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    user_id: Optional[str] = Field(None, description="Afterbuy user name")
    user_password: Optional[str] = Field(None, description="Afterbuy user password")
    partner_id: Optional[int] = Field(None, description="Afterbuy partner ID")
    partner_password: Optional[str] = Field(None, description="Afterbuy partner password")
    error_language: str = Field("DE", description="Language of error descriptions")

    # API Configuration
    api_url: str = Field(DEFAULT_API_URL, description="Afterbuy XML interface URL")
    timeout: float = Field(30.0, gt=0, description="Read timeout in seconds")
    timezone: str = Field("Europe/Berlin", description="Timezone of dates on the wire")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("error_language")
    @classmethod
    def upper_language(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @property
    def missing_credentials(self) -> list:
        """Names of the credential variables that are not set.

        :return: Environment variable names, empty when all are present
        :rtype: list
        """
        required = {
            "AFTERBUY_USER_ID": self.user_id,
            "AFTERBUY_USER_PASSWORD": self.user_password,
            "AFTERBUY_PARTNER_ID": self.partner_id,
            "AFTERBUY_PARTNER_PASSWORD": self.partner_password,
        }
        return [name for name, value in required.items() if value is None or value == ""]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
