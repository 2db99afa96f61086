"""Check the update center deprecation notices."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext


class DeprecatedPluginProbe(Probe):
    """Fail when the update center lists a deprecation for the plugin."""

    KEY = "deprecation"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks that the plugin is not marked as deprecated."

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.update_center is None:
            return self.error(context, "No update center snapshot available")

        if plugin.name in context.update_center.deprecations:
            return self.failure(context, "This plugin is marked as deprecated")
        return self.success(context, "This plugin is NOT deprecated")
