"""
Invocation descriptors handed to the invocation-context boundary.

The iterator exposes nothing but these: the tuple's zero-based position,
its (already truncated) argument values, and the attempt number.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Invocation(BaseModel):
    """
    One ready-to-run invocation of the test body.

    Retried attempts share `index` and `arguments` with the first attempt
    and differ only in `attempt`.
    """
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Zero-based position of the tuple in the parameter sequence")
    arguments: tuple[Any, ...] = Field(..., description="Argument values passed to the test body")
    attempt: int = Field(default=1, ge=1, description="Attempt number for this tuple (1 = first try)")

    @property
    def is_retry(self) -> bool:
        return self.attempt > 1
