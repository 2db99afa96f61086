"""Shared inputs for every probe run on one plugin."""

from datetime import UTC, datetime
from pathlib import Path

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from pluginhealth.scoring.github import GitHubClient
from pluginhealth.scoring.models.update_center import UpdateCenter


class ProbeContext(BaseModel):
    """Per-plugin, per-run bundle of inputs. Probes must treat it as read-only."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    scm_repository: Path | None = Field(
        default=None, description="Local working tree of the plugin sources"
    )
    update_center: UpdateCenter | None = Field(
        default=None, description="Update-center snapshot"
    )
    github: GitHubClient | None = Field(default=None, description="GitHub client")
    timestamp: AwareDatetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp stamped on every result of the run",
    )

    def has_working_tree(self) -> bool:
        """Return True when the working tree is available on disk."""
        return self.scm_repository is not None and self.scm_repository.is_dir()
