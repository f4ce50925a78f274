"""
Run report models.

Capture what a host observed for every invocation of a parameterized run,
for assertions in tests and for reporting.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from parameterized_retry.models.enums import AttemptStatus
from parameterized_retry.models.invocation import Invocation


class InvocationResult(BaseModel):
    """
    Outcome of one attempt as reported by the host.

    `retryable` is the history outcome recorded for the attempt; it is
    True for retryable failures and aborts.
    """
    model_config = ConfigDict(frozen=True)

    invocation: Invocation
    name: str = Field(..., description="Rendered display name of the invocation")
    status: AttemptStatus
    retryable: bool = Field(default=False, description="Whether the attempt was recorded as retryable")
    error_type: Optional[str] = Field(default=None, description="Exception class name, if the attempt failed")
    error_message: Optional[str] = Field(default=None, description="Exception message, if the attempt failed")


class RunReport(BaseModel):
    """
    Ordered results of a full parameterized run.

    The final status of a tuple is the status of its last attempt, which
    is the attempt the iterator committed before moving on.
    """

    display_name: str = Field(default="", description="Display name of the test method")
    tuple_count: int = Field(default=0, ge=0, description="Number of parameter tuples materialized")
    results: list[InvocationResult] = Field(default_factory=list)

    @property
    def invocation_count(self) -> int:
        return len(self.results)

    def attempts_for(self, index: int) -> list[InvocationResult]:
        """All attempts made for the tuple at `index`, in order."""
        return [result for result in self.results if result.invocation.index == index]

    def final_statuses(self) -> dict[int, AttemptStatus]:
        """Map of tuple index to the status of its last committed attempt."""
        statuses: dict[int, AttemptStatus] = {}
        for result in self.results:
            statuses[result.invocation.index] = result.status
        return statuses

    def failed_tuples(self) -> list[int]:
        return [
            index
            for index, status in self.final_statuses().items()
            if status == AttemptStatus.FAILED
        ]

    @property
    def succeeded(self) -> bool:
        return not self.failed_tuples()
