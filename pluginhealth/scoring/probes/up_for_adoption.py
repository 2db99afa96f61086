"""Check whether a plugin is up for adoption."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext

ADOPTION_LABEL = "adopt-this-plugin"


class UpForAdoptionProbe(Probe):
    """Fail when the plugin carries the adoption label in the update center."""

    KEY = "up-for-adoption"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks that the plugin is not looking for a new maintainer."

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.update_center is None:
            return self.error(context, "No update center snapshot available")

        entry = context.update_center.plugins.get(plugin.name)
        if entry is None:
            return self.error(context, "This plugin is not in the update center")

        if ADOPTION_LABEL in entry.labels:
            return self.failure(context, "This plugin is up for adoption")
        return self.success(context, "This plugin is not up for adoption")
