from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Command line settings, read from ``BITBUCKET_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    bitbucket_url: str = Field(default="http://localhost:7990")
    bitbucket_token: str | None = Field(default=None)
    bitbucket_timeout: float = Field(default=30.0, gt=0)
    bitbucket_project_key: str = Field(default="TEST")

    @property
    def rest_url(self) -> str:
        url = self.bitbucket_url.rstrip("/")
        if url.endswith("/rest"):
            return url
        return f"{url}/rest"
