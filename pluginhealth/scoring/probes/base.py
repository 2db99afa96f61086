"""Abstract base class for probes."""

from abc import ABC, abstractmethod

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.context import ProbeContext


class Probe(ABC):
    """Abstract base for a single diagnostic check.

    Probes are stateless. The engine decides whether a probe runs (see
    ``pluginhealth.scoring.engine.should_run``); ``apply`` only produces the
    verdict.
    """

    @abstractmethod
    def key(self) -> str:
        """Return the key under which results are stored.

        Keys are persisted and consumed by reporting, they must never change.
        """

    @abstractmethod
    def description(self) -> str:
        """Return a human readable description of the check."""

    def requires_release(self) -> bool:
        """Return True if the probe only runs after a new plugin release."""
        return False

    def is_source_code_related(self) -> bool:
        """Return True if the probe reads the plugin working tree."""
        return False

    def probe_result_requirements(self) -> frozenset[str]:
        """Return the probe keys which must have succeeded before this one runs."""
        return frozenset()

    @abstractmethod
    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        """Run the check.

        Args:
            plugin: Plugin under evaluation, with the results of earlier probes
            context: Shared inputs of the run

        Returns:
            Result keyed by ``self.key()`` and stamped with ``context.timestamp``

        """

    def success(self, context: ProbeContext, message: str) -> ProbeResult:
        return ProbeResult.success(self.key(), message, context.timestamp)

    def failure(self, context: ProbeContext, message: str) -> ProbeResult:
        return ProbeResult.failure(self.key(), message, context.timestamp)

    def error(self, context: ProbeContext, message: str) -> ProbeResult:
        return ProbeResult.error(self.key(), message, context.timestamp)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key()!r}>"
