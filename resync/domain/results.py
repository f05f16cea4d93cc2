"""Tagged result values for sync operations.

Operations that can fail for a single entity type or record return one of
these instead of raising, so callers branch on the tag:

- Ok: the operation produced a value
- Skip: the entity type should be skipped, with a reason
- Fail: the operation failed, with a cause
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from resync.domain.entities import SkipReason

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Skip:
    reason: SkipReason
    message: str


@dataclass(frozen=True)
class Fail:
    cause: str
