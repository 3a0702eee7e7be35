"""Maintenance of the condition list in a job's status."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import Iterable, Optional

from jobcommon.models import (
    ConditionStatus,
    JobCondition,
    JobConditionType,
    JobStatus,
)

JOB_CREATED_REASON = "JobCreated"
JOB_SUCCEEDED_REASON = "JobSucceeded"
JOB_RUNNING_REASON = "JobRunning"
JOB_FAILED_REASON = "JobFailed"
JOB_RESTARTING_REASON = "JobRestarting"


def _has_condition(status: JobStatus, cond_type: JobConditionType) -> bool:
    return any(
        c.type == cond_type and c.status == ConditionStatus.TRUE
        for c in status.conditions
    )


def is_succeeded(status: JobStatus) -> bool:
    """Tell whether the job has a true Succeeded condition."""
    return _has_condition(status, JobConditionType.SUCCEEDED)


def is_failed(status: JobStatus) -> bool:
    """Tell whether the job has a true Failed condition."""
    return _has_condition(status, JobConditionType.FAILED)


def update_job_conditions(
    job_status: JobStatus,
    condition_type: JobConditionType,
    reason: str,
    message: str,
) -> None:
    """Record a new true condition of the given type in ``job_status`` if needed."""
    set_condition(job_status, new_condition(condition_type, reason, message))


def new_condition(
    condition_type: JobConditionType, reason: str, message: str
) -> JobCondition:
    """Build a true condition stamped with the current time."""
    now = datetime.now(timezone.utc)
    return JobCondition(
        type=condition_type,
        status=ConditionStatus.TRUE,
        reason=reason,
        message=message,
        last_update_time=now,
        last_transition_time=now,
    )


def get_condition(
    status: JobStatus, cond_type: JobConditionType
) -> Optional[JobCondition]:
    """Return the first condition of the given type, or None."""
    return next((c for c in status.conditions if c.type == cond_type), None)


def set_condition(status: JobStatus, condition: JobCondition) -> None:
    """Put ``condition`` into ``status``, replacing any of the same type.

    A failed job is left alone, as is a condition whose status and reason
    are unchanged. The transition time is kept when the status is unchanged.
    """
    if is_failed(status):
        return

    current = get_condition(status, condition.type)
    if current is not None and current.status == condition.status:
        if current.reason == condition.reason:
            return
        condition = dataclasses.replace(
            condition, last_transition_time=current.last_transition_time
        )

    status.conditions = filter_out_condition(status.conditions, condition.type) + [
        condition
    ]


def filter_out_condition(
    conditions: Iterable[JobCondition], cond_type: JobConditionType
) -> list[JobCondition]:
    """Return copies of ``conditions`` without those that ``cond_type`` supersedes.

    Running and Restarting replace each other; a Failed or Succeeded
    condition turns a Running condition false.
    """
    result = []
    for c in conditions:
        if cond_type == JobConditionType.RESTARTING and c.type == JobConditionType.RUNNING:
            continue
        if cond_type == JobConditionType.RUNNING and c.type == JobConditionType.RESTARTING:
            continue
        if c.type == cond_type:
            continue
        c = dataclasses.replace(c)
        if (
            cond_type in (JobConditionType.FAILED, JobConditionType.SUCCEEDED)
            and c.type == JobConditionType.RUNNING
        ):
            c.status = ConditionStatus.FALSE
        result.append(c)
    return result