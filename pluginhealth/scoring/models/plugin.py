"""Plugin model holding the latest probe results."""

import logging

from pydantic import AwareDatetime, BaseModel, Field, model_validator

from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.models.result_status import ResultStatus

logger = logging.getLogger(__name__)


class Plugin(BaseModel):
    """A catalog plugin and the latest result of every probe run on it."""

    name: str = Field(..., description="Plugin identifier")
    version: str | None = Field(default=None, description="Latest released version")
    release_timestamp: AwareDatetime | None = Field(
        default=None, description="Instant of the most recent release"
    )
    scm: str | None = Field(default=None, description="Source repository URL")
    excluded_probes: set[str] = Field(
        default_factory=set, description="Probe keys never run on this plugin"
    )
    details: dict[str, ProbeResult] = Field(
        default_factory=dict, description="Latest probe result per probe key"
    )

    @model_validator(mode="after")
    def _check_details_keys(self) -> "Plugin":
        for key, result in self.details.items():
            if result.key != key:
                raise ValueError(
                    f"Result stored under '{key}' was produced by '{result.key}'"
                )
        return self

    def result_for(self, key: str) -> ProbeResult | None:
        """Return the stored result for a probe key, if any."""
        return self.details.get(key)

    def has_succeeded(self, key: str) -> bool:
        """Return True when the stored result for ``key`` is a SUCCESS."""
        result = self.details.get(key)
        return result is not None and result.status is ResultStatus.SUCCESS

    def add_details(self, result: ProbeResult) -> bool:
        """Store a result unless a result at least as recent is already stored.

        Returns:
            True if the details map was updated

        """
        previous = self.details.get(result.key)
        if not result.is_newer_than(previous):
            logger.debug(
                f"Dropping {result.key} result for {self.name}: "
                f"not newer than {previous.timestamp if previous else None}"
            )
            return False

        self.details[result.key] = result
        return True
