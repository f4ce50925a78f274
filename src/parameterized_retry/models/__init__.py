"""
Data models for parameterized retry runs.

Exports the invocation descriptor, report models and enums.
"""

from parameterized_retry.models.enums import AttemptStatus, Decision, ResolutionReason
from parameterized_retry.models.invocation import Invocation
from parameterized_retry.models.report import InvocationResult, RunReport

__all__ = [
    "AttemptStatus",
    "Decision",
    "ResolutionReason",
    "Invocation",
    "InvocationResult",
    "RunReport",
]
