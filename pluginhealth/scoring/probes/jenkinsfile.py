"""Detect a Jenkinsfile at the repository root."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext
from pluginhealth.scoring.probes.scm_link_validation import SCMLinkValidationProbe


class JenkinsfileProbe(Probe):
    KEY = "jenkinsfile"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks that a Jenkinsfile is present at the repository root."

    def is_source_code_related(self) -> bool:
        return True

    def probe_result_requirements(self) -> frozenset[str]:
        return frozenset({SCMLinkValidationProbe.KEY})

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.scm_repository is None:
            return self.error(context, "No working tree available")

        if (context.scm_repository / "Jenkinsfile").is_file():
            return self.success(context, "Jenkinsfile found")
        return self.failure(context, "No Jenkinsfile found")
