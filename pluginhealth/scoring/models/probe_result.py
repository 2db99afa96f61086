"""Models for probe execution results."""

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from pluginhealth.scoring.models.result_status import ResultStatus


class ProbeResult(BaseModel):
    """Outcome of a single probe on a single plugin."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Key of the probe which produced the result")
    message: str = Field(default="", description="Human readable diagnostic")
    status: ResultStatus = Field(..., description="Probe execution status")
    timestamp: AwareDatetime = Field(
        ..., description="Instant the result was produced"
    )

    @classmethod
    def success(
        cls, key: str, message: str, timestamp: AwareDatetime
    ) -> "ProbeResult":
        """Create a SUCCESS result."""
        return cls(
            key=key, message=message, status=ResultStatus.SUCCESS, timestamp=timestamp
        )

    @classmethod
    def failure(
        cls, key: str, message: str, timestamp: AwareDatetime
    ) -> "ProbeResult":
        """Create a FAILURE result."""
        return cls(
            key=key, message=message, status=ResultStatus.FAILURE, timestamp=timestamp
        )

    @classmethod
    def error(cls, key: str, message: str, timestamp: AwareDatetime) -> "ProbeResult":
        """Create an ERROR result."""
        return cls(
            key=key, message=message, status=ResultStatus.ERROR, timestamp=timestamp
        )

    def is_newer_than(self, other: "ProbeResult | None") -> bool:
        """Return True when this result may replace ``other``."""
        return other is None or self.timestamp > other.timestamp
