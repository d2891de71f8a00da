from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_SETTINGS = ("TARGET_REPO_OWNER", "TARGET_REPO_NAME", "AGENT_GITHUB_TOKEN")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Read once at startup and never mutated afterwards; handlers receive the
    instance through ``app.state`` rather than importing a module global.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Target repository (required)
    target_repo_owner: str = Field(min_length=1)
    target_repo_name: str = Field(min_length=1)
    agent_github_token: str = Field(min_length=1)

    # Default branch for writes when the request omits one
    target_branch: str = "main"
    default_commit_message: str = "Agent: generate files"

    # GitHub API
    github_api_url: str = "https://api.github.com"
    user_agent: str = "internal-coding-agent"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    # Comma-separated; empty string allows every origin
    allowed_origins: str = ""
    # Hosts trusted to set X-Forwarded-For / X-Forwarded-Proto
    forwarded_allow_ips: str = "*"
    max_body_bytes: int = 2 * 1024 * 1024

    # Batch behaviour
    # Report non-404 SHA lookup failures instead of falling back to a create
    strict_sha_lookup: bool = False
    parallel_writes: bool = False
    max_parallel_writes: int = Field(default=4, ge=1)

    log_level: str = "INFO"

    @property
    def allowed_origin_list(self) -> list[str]:
        """Parsed allow-list; empty means every origin is accepted."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def repo_full_name(self) -> str:
        return f"{self.target_repo_owner}/{self.target_repo_name}"


def get_settings() -> Settings:
    """Load settings from the environment. Raises ``ValidationError`` if required values are missing."""
    return Settings()  # type: ignore[call-arg]
