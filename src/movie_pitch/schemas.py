from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from .models import MovieField, MovieState


class FieldStatus(str, Enum):
    """Outcome of one pipeline step."""
    GENERATED = "generated"
    LOCKED = "locked"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class OperationResponse:
    operation: str
    state: MovieState

    def to_dict(self) -> Dict[str, Any]:
        return {"operation": self.operation, "state": self.state.to_dict()}


@dataclass
class RegenerateResponse:
    """
    Result of one regenerate run.

    ``state`` is the latest consistent snapshot; fields that failed keep
    their previous value and stay unlocked.
    """
    state: MovieState
    field_status: Dict[MovieField, FieldStatus] = field(default_factory=dict)
    errors: Dict[MovieField, str] = field(default_factory=dict)
    latency_ms: Optional[int] = None

    @property
    def failed_fields(self) -> FrozenSet[MovieField]:
        return frozenset(
            f for f, status in self.field_status.items() if status is FieldStatus.FAILED
        )

    @property
    def succeeded(self) -> bool:
        return not self.failed_fields

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": "regenerate",
            "state": self.state.to_dict(),
            "fieldStatus": {f.value: status.value for f, status in self.field_status.items()},
            "failedFields": sorted(f.value for f in self.failed_fields),
            "errors": {f.value: message for f, message in self.errors.items()},
            "latencyMs": self.latency_ms,
        }
