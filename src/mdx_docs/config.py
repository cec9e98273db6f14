"""Runtime settings for mdx-docs.

Values come from environment variables prefixed with ``MDX_DOCS_``, e.g.
``MDX_DOCS_HIGHLIGHT_STYLE=dracula``. List values are given as JSON.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide configuration."""

    model_config = SettingsConfigDict(env_prefix="MDX_DOCS_")

    highlight_style: str = Field(
        default="monokai",
        description="Pygments style used for code highlighting (a dark theme)",
    )
    stripped_tags: list[str] = Field(
        default_factory=lambda: ["SeggWatIsPageHelpful"],
        description="Legacy self-closing widget tags removed before parsing",
    )
    default_base_url: str = Field(
        default="https://api.example.com",
        description="Base URL used for curl examples when a spec has no servers",
    )
    log_level: str = Field(default="WARNING", description="CLI logging level")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
