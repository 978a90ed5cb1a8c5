from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub - personal access token used as a bearer credential
    github_token: str = ""
    # GraphQL endpoint; override to point at GitHub Enterprise or a test server
    github_graphql_url: str = "https://api.github.com/graphql"

    # Pagination - nodes per page for each paginated connection.
    # GitHub caps connection pages at 100 nodes.
    page_size: int = Field(default=10, ge=1, le=100)
    # Overall HTTP timeout in seconds for each request
    request_timeout: float = Field(default=30.0, gt=0)

    # Application
    debug: bool = False

    @property
    def has_token(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


settings = Settings()
