"""Loading of warden iterations from JSON files."""

import json
import logging
from datetime import datetime, timedelta

from pydantic import BaseModel, Field, ValidationError

from warden_seq.ports.iteration import CheckResult, Iteration

__all__ = ["load_iteration"]

logger = logging.getLogger(__name__)


class _CheckResultRecord(BaseModel):
    """One check result as stored in an iteration file."""

    watcher_name: str
    watcher_type: str
    is_valid: bool
    started_at: datetime
    completed_at: datetime
    execution_time: timedelta | None = Field(
        default=None,
        description="Defaults to completed_at - started_at when omitted.",
    )
    watcher_group: str | None = None
    description: str | None = None
    exception: str | None = None

    def to_check_result(self) -> CheckResult:
        execution_time = self.execution_time
        if execution_time is None:
            execution_time = self.completed_at - self.started_at
        return CheckResult(
            watcher_name=self.watcher_name,
            watcher_type=self.watcher_type,
            is_valid=self.is_valid,
            started_at=self.started_at,
            completed_at=self.completed_at,
            execution_time=execution_time,
            watcher_group=self.watcher_group,
            description=self.description,
            exception=self.exception,
        )


class _IterationRecord(BaseModel):
    warden_name: str
    results: list[_CheckResultRecord] = Field(default_factory=list)


def load_iteration(path: str) -> Iteration:
    """Load and validate an iteration from a JSON file.

    Expected shape:
        {"warden_name": "...", "results": [{"watcher_name": ..., ...}, ...]}

    Args:
        path: Path to the JSON file.

    Returns:
        Iteration with results in file order.

    Raises:
        ValueError: If the file is missing, not JSON, or has the wrong shape.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ValueError(f"Iteration file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Iteration file contains invalid JSON: {path}") from e

    if not isinstance(data, dict):
        raise ValueError("Iteration file must be a JSON object")

    try:
        record = _IterationRecord.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Iteration file has an invalid shape: {e}") from e

    iteration = Iteration(
        warden_name=record.warden_name,
        results=tuple(r.to_check_result() for r in record.results),
    )
    logger.debug(f"Loaded {len(iteration.results)} check results from {path}")
    return iteration
