"""Data types shared by the wait handlers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_POLL_INTERVAL = 5.0


@dataclass(frozen=True)
class OperationHandle:
    """Identifies one long-running operation: a named resource in a project."""

    project_id: str
    name: str

    @property
    def label(self) -> str:
        return f"'{self.name}' (project {self.project_id})"


class OperationState(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationStatus:
    """One classified poll result.

    ``result`` is only meaningful for SUCCEEDED, ``reason`` only for FAILED.
    """

    state: OperationState
    result: Any = None
    reason: str = ""
    detail: str = ""  # raw state string, for progress logging

    @property
    def terminal(self) -> bool:
        return self.state in (OperationState.SUCCEEDED, OperationState.FAILED)

    @classmethod
    def pending(cls, detail=""):
        return cls(OperationState.PENDING, detail=detail)

    @classmethod
    def in_progress(cls, detail=""):
        return cls(OperationState.IN_PROGRESS, detail=detail)

    @classmethod
    def succeeded(cls, result=None, detail=""):
        return cls(OperationState.SUCCEEDED, result=result, detail=detail)

    @classmethod
    def failed(cls, reason, detail=""):
        return cls(OperationState.FAILED, reason=reason, detail=detail)


@dataclass(frozen=True)
class PollingPolicy:
    """How often to poll and for how long.

    ``max_elapsed`` of None means wait until a terminal state or cancellation.
    """

    interval: float = DEFAULT_POLL_INTERVAL
    max_elapsed: float | None = None

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"poll interval must be positive, got {self.interval}")
        if self.max_elapsed is not None and self.max_elapsed < 0:
            raise ValueError(f"max_elapsed must not be negative, got {self.max_elapsed}")
