"""Detect a CODEOWNERS file."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext
from pluginhealth.scoring.probes.scm_link_validation import SCMLinkValidationProbe

# Locations where GitHub looks up the file, in lookup order.
CODEOWNERS_LOCATIONS = ("CODEOWNERS", ".github/CODEOWNERS", "docs/CODEOWNERS")


class CodeOwnershipProbe(Probe):
    KEY = "code-ownership"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks that a CODEOWNERS file is defined in the repository."

    def is_source_code_related(self) -> bool:
        return True

    def probe_result_requirements(self) -> frozenset[str]:
        return frozenset({SCMLinkValidationProbe.KEY})

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.scm_repository is None:
            return self.error(context, "No working tree available")

        for location in CODEOWNERS_LOCATIONS:
            if (context.scm_repository / location).is_file():
                return self.success(context, "CODEOWNERS file found")
        return self.failure(context, "No CODEOWNERS file found")
