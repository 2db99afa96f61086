"""Detect a Dependabot configuration."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext
from pluginhealth.scoring.probes.scm_link_validation import SCMLinkValidationProbe


class DependabotProbe(Probe):
    """Check for ``.github/dependabot.yml`` (or ``.yaml``)."""

    KEY = "dependabot"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks if Dependabot is configured on the plugin repository."

    def is_source_code_related(self) -> bool:
        return True

    def probe_result_requirements(self) -> frozenset[str]:
        return frozenset({SCMLinkValidationProbe.KEY})

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.scm_repository is None:
            return self.error(context, "No working tree available")

        github_folder = context.scm_repository / ".github"
        if not github_folder.is_dir():
            return self.failure(context, "Plugin has no GitHub configuration folder")

        for name in ("dependabot.yml", "dependabot.yaml"):
            if (github_folder / name).is_file():
                return self.success(context, "Dependabot is configured")

        return self.failure(context, "Dependabot is not configured")
