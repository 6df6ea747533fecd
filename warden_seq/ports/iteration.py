"""Check result and iteration port definitions (DTOs)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

__all__ = ["CheckResult", "Iteration"]


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Immutable outcome of a single watcher check.

    Produced by the monitoring framework and owned by the caller.

    Attributes:
        watcher_name: Name of the watcher that ran the check.
        watcher_type: Kind of watcher (e.g. "WebWatcher").
        is_valid: True if the monitored condition was satisfied.
        started_at: When the check started.
        completed_at: When the check completed.
        execution_time: How long the check took.
        watcher_group: Optional group the watcher belongs to.
        description: Optional human-readable result description.
        exception: Error captured while running the check, if any.
    """

    watcher_name: str
    watcher_type: str
    is_valid: bool
    started_at: datetime
    completed_at: datetime
    execution_time: timedelta
    watcher_group: str | None = None
    description: str | None = None
    exception: BaseException | str | None = None


@dataclass(slots=True, frozen=True)
class Iteration:
    """One full round of checks performed by a warden.

    Attributes:
        warden_name: Name of the warden that ran the iteration.
        results: Check results in execution order.
    """

    warden_name: str
    results: tuple[CheckResult, ...] = ()
