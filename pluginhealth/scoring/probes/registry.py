"""Statically registered probes."""

from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.code_ownership import CodeOwnershipProbe
from pluginhealth.scoring.probes.continuous_delivery import ContinuousDeliveryProbe
from pluginhealth.scoring.probes.contributing_guidelines import (
    ContributingGuidelinesProbe,
)
from pluginhealth.scoring.probes.dependabot import DependabotProbe
from pluginhealth.scoring.probes.deprecated_plugin import DeprecatedPluginProbe
from pluginhealth.scoring.probes.jenkinsfile import JenkinsfileProbe
from pluginhealth.scoring.probes.scm_link_validation import SCMLinkValidationProbe
from pluginhealth.scoring.probes.security_warning import SecurityWarningProbe
from pluginhealth.scoring.probes.up_for_adoption import UpForAdoptionProbe


def default_probes() -> list[Probe]:
    """Return a fresh instance of every built-in probe."""
    return [
        SCMLinkValidationProbe(),
        ContinuousDeliveryProbe(),
        DependabotProbe(),
        JenkinsfileProbe(),
        CodeOwnershipProbe(),
        ContributingGuidelinesProbe(),
        DeprecatedPluginProbe(),
        UpForAdoptionProbe(),
        SecurityWarningProbe(),
    ]
