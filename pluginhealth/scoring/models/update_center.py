"""Models for the update-center snapshot consumed by probes."""

import re

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from pluginhealth.scoring.models.plugin import Plugin


class UpdateCenterPlugin(BaseModel):
    """Plugin entry as published by the update center."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Plugin identifier")
    version: str | None = Field(default=None, description="Latest released version")
    scm: str | None = Field(default=None, description="Source repository URL")
    labels: list[str] = Field(default_factory=list, description="Plugin labels")
    release_timestamp: AwareDatetime | None = Field(
        default=None,
        alias="releaseTimestamp",
        description="Instant of the most recent release",
    )


class Deprecation(BaseModel):
    """Deprecation notice for a plugin."""

    model_config = ConfigDict(extra="ignore")

    url: str = Field(..., description="Link to the deprecation notice")


class WarningVersion(BaseModel):
    """Range of versions affected by a security warning."""

    model_config = ConfigDict(extra="ignore")

    pattern: str = Field(..., description="Regular expression of affected versions")


class SecurityWarning(BaseModel):
    """Security warning published by the update center."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Security advisory identifier")
    name: str = Field(..., description="Affected component name")
    type: str = Field(default="plugin", description="Affected component type")
    url: str | None = Field(default=None, description="Link to the advisory")
    versions: list[WarningVersion] = Field(
        default_factory=list, description="Affected version ranges"
    )

    def applies_to(self, plugin_name: str, version: str | None) -> bool:
        """Return True when the warning is active for the plugin version."""
        if self.type != "plugin" or self.name != plugin_name or version is None:
            return False
        return any(re.fullmatch(v.pattern, version) for v in self.versions)


class UpdateCenter(BaseModel):
    """Subset of the update-center snapshot used by probes."""

    model_config = ConfigDict(extra="ignore")

    plugins: dict[str, UpdateCenterPlugin] = Field(default_factory=dict)
    deprecations: dict[str, Deprecation] = Field(default_factory=dict)
    warnings: list[SecurityWarning] = Field(default_factory=list)

    def to_plugin(self, name: str, excluded_probes: set[str] | None = None) -> Plugin:
        """Build the core plugin view for a catalog entry.

        Raises:
            KeyError: If the plugin is not part of the snapshot

        """
        if name not in self.plugins:
            raise KeyError(f"Plugin not found in update center: {name}")

        entry = self.plugins[name]
        return Plugin(
            name=entry.name,
            version=entry.version,
            release_timestamp=entry.release_timestamp,
            scm=entry.scm,
            excluded_probes=set(excluded_probes or ()),
        )
