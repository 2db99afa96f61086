"""Outcome labels of a probe execution."""

from enum import Enum


class ResultStatus(str, Enum):
    """Closed set of probe outcomes.

    SUCCESS and FAILURE are verdicts. ERROR means the probe could not reach one.
    """

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ERROR = "ERROR"
