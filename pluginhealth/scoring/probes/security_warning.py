"""Check the update center security warnings."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext


class SecurityWarningProbe(Probe):
    """Fail when a security warning is active for the latest plugin version."""

    KEY = "security"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks for active security warnings on the latest release."

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.update_center is None:
            return self.error(context, "No update center snapshot available")

        active = sorted(
            warning.id
            for warning in context.update_center.warnings
            if warning.applies_to(plugin.name, plugin.version)
        )
        if active:
            return self.failure(
                context, f"Plugin is affected by security warnings: {', '.join(active)}"
            )
        return self.success(context, "No known security vulnerabilities")
