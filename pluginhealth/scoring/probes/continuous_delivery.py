"""Detect the JEP-229 continuous delivery workflow."""

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext
from pluginhealth.scoring.probes.scm_link_validation import SCMLinkValidationProbe

WORKFLOW_NAME = "cd"
WORKFLOW_EXTENSIONS = frozenset({".yml", ".yaml"})


class ContinuousDeliveryProbe(Probe):
    """Check for a ``.github/workflows/cd.yml`` (or ``cd.yaml``) definition.

    Only the file name is checked, the workflow content is not validated.
    A directory with that name does not count.
    """

    KEY = "jep-229"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Checks that JEP-229 (continuous delivery) is configured."

    def is_source_code_related(self) -> bool:
        return True

    def probe_result_requirements(self) -> frozenset[str]:
        return frozenset({SCMLinkValidationProbe.KEY})

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if context.scm_repository is None:
            return self.error(context, "No working tree available")

        workflows = context.scm_repository / ".github" / "workflows"
        if not workflows.is_dir():
            return self.failure(context, "Plugin has no GitHub Action configured")

        for entry in workflows.iterdir():
            if (
                entry.stem == WORKFLOW_NAME
                and entry.suffix in WORKFLOW_EXTENSIONS
                and (entry.is_file() or entry.is_symlink())
            ):
                return self.success(context, "JEP-229 workflow definition found")

        return self.failure(context, "Could not find JEP-229 workflow definition")
