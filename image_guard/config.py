from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# Images API page-size ceiling. Only the first page is ever requested.
MAX_PAGE_SIZE = 100


class Settings(BaseSettings):
    """Operational defaults for the CLI.

    Nothing is read from the environment or from files; values only change
    through constructor arguments. Credentials come from the command line.
    """

    model_config = SettingsConfigDict(case_sensitive=False)

    api_base_url: str = Field(
        "https://api.cloudflare.com/client/v4",
        description="Base URL of the Cloudflare v4 API.",
    )
    request_timeout: float = Field(15.0, gt=0, description="Per-call timeout in seconds.")
    log_level: str = Field("INFO", description="Root logging level for the CLI.")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
