"""Validate the SCM link published for a plugin."""

import logging
import re

from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext

logger = logging.getLogger(__name__)

# Multi-module repositories publish the module folder as /tree/<ref>/<folder>.
GITHUB_SCM_PATTERN = re.compile(
    r"https?://github\.com/(?P<repo>[^/\s]+/[^/\s]+?)(?:\.git)?"
    r"(?:/tree/[^/\s]+(?:/\S*)?)?/?"
)


class SCMLinkValidationProbe(Probe):
    """Check that the plugin SCM link points to an existing GitHub repository.

    The probe only runs again after a new plugin release. An ERROR caused by
    a transient GitHub failure (timeout, 5xx) therefore stays the stored
    result until the next release, and the source code probes which require
    this one stay skipped until then.
    """

    KEY = "scm"

    def key(self) -> str:
        return self.KEY

    def description(self) -> str:
        return "Validates that the plugin SCM link points to a GitHub repository."

    def requires_release(self) -> bool:
        return True

    async def apply(self, plugin: Plugin, context: ProbeContext) -> ProbeResult:
        if not plugin.scm:
            return self.failure(context, "The plugin SCM link is empty")

        match = GITHUB_SCM_PATTERN.fullmatch(plugin.scm.strip())
        if match is None:
            return self.failure(
                context, "SCM link doesn't match GitHub plugin repositories"
            )

        if context.github is None:
            return self.error(
                context, "Cannot validate SCM link without a GitHub client"
            )

        repository = match.group("repo")
        logger.info(f"Checking GitHub repository {repository} for {plugin.name}")
        if await context.github.repository_exists(repository):
            return self.success(context, "The plugin SCM link is valid")
        return self.failure(context, "The plugin SCM link is invalid")
