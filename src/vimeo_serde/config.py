import typing

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_VERSION = "3.4"
ACCEPT_TEMPLATE = "application/vnd.vimeo.*+json;version={version}"


class Settings(BaseSettings):
    """
    Client settings. Read from ``VIMEO_``-prefixed environment variables
    and/or a ``.env`` file.
    """

    api_base_url: str = "https://api.vimeo.com"
    api_version: str = DEFAULT_API_VERSION

    # Applied to collection requests that do not set their own
    per_page: typing.Optional[int] = Field(default=None, ge=1, le=100)

    timeout: float = 30.0
    access_token: typing.Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="VIMEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def accept(self) -> str:
        return ACCEPT_TEMPLATE.format(version=self.api_version)
