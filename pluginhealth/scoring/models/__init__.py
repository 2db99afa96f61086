"""Data models for plugins, probe results and run configuration."""

from pluginhealth.scoring.models.config import ScoringConfig
from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.models.result_status import ResultStatus
from pluginhealth.scoring.models.update_center import (
    Deprecation,
    SecurityWarning,
    UpdateCenter,
    UpdateCenterPlugin,
    WarningVersion,
)

__all__ = [
    "Deprecation",
    "Plugin",
    "ProbeResult",
    "ResultStatus",
    "ScoringConfig",
    "SecurityWarning",
    "UpdateCenter",
    "UpdateCenterPlugin",
    "WarningVersion",
]
