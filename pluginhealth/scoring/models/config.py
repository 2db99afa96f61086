"""Configuration model for a scoring run."""

from pydantic import BaseModel, Field

DEFAULT_UPDATE_CENTER_URL = (
    "https://updates.jenkins.io/current/update-center.actual.json"
)


class ScoringConfig(BaseModel):
    """Settings shared by every plugin evaluated in one run."""

    update_center_url: str = Field(
        default=DEFAULT_UPDATE_CENTER_URL,
        description="Update-center snapshot location (file path or URL)",
    )
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub API base URL"
    )
    github_token: str | None = Field(
        default=None, description="GitHub personal access token"
    )
    exclusions: dict[str, list[str]] = Field(
        default_factory=dict, description="Probe keys excluded per plugin name"
    )

    def exclusions_for(self, plugin_name: str) -> set[str]:
        """Return the probe keys excluded for a plugin."""
        return set(self.exclusions.get(plugin_name, []))
