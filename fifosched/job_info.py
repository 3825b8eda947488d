"""Job state changes, comment updates and translation of run-check failures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fifosched.constants import Message, ReturnCode, StartWhere, message_for
from fifosched.model import Job, JobState

ATTR_COMMENT = "comment"
ATTR_PLANNED_NODES = "planned_nodes"
ATTR_WAITING_FOR = "waiting_for"
ATTR_PLANNED_START = "planned_start"
ATTR_FAIRSHARE_COST = "fairshare_cost"

AlterJob = Callable[[str, str, str], object]

_TRANSLATED_CODES = frozenset({
    ReturnCode.QUEUE_JOB_LIMIT_REACHED,
    ReturnCode.SERVER_JOB_LIMIT_REACHED,
    ReturnCode.SERVER_USER_LIMIT_REACHED,
    ReturnCode.QUEUE_USER_LIMIT_REACHED,
    ReturnCode.QUEUE_GROUP_LIMIT_REACHED,
    ReturnCode.SERVER_GROUP_LIMIT_REACHED,
    ReturnCode.CROSS_DED_TIME_BOUNDRY,
    ReturnCode.NO_AVAILABLE_NODE,
    ReturnCode.NOT_ENOUGH_NODES_AVAIL,
    ReturnCode.JOB_STARVING,
    ReturnCode.SCHD_ERROR,
    ReturnCode.SERVER_TOKEN_UTILIZATION,
    ReturnCode.JOB_FAILED_MOVE,
    ReturnCode.NODESPEC_NOT_ENOUGH_NODES_TOTAL,
    ReturnCode.NODESPEC_NOT_ENOUGH_NODES_INTERSECT,
    ReturnCode.CLUSTER_RUNNING,
    ReturnCode.CLUSTER_PERMISSIONS,
    ReturnCode.INSUFICIENT_SERVER_RESOURCE,
    ReturnCode.INSUFICIENT_QUEUE_RESOURCE,
    ReturnCode.INSUFICIENT_DYNAMIC_RESOURCE,
    ReturnCode.NODE_STILL_BOOTING,
    ReturnCode.QUEUE_PROC_LIMIT_REACHED,
    ReturnCode.QUEUE_USER_PROC_LIMIT_REACHED,
    ReturnCode.QUEUE_GROUP_PROC_LIMIT_REACHED,
    ReturnCode.REQUEST_NOT_MATCHED,
    ReturnCode.SCHEDULER_LOOP_RUN_LIMIT_REACHED,
    ReturnCode.UNKNOWN_LOCATION_PROPERTY_REQUEST,
    ReturnCode.JOB_SCHEDULED,
})


def set_state(state: str, job: Job) -> None:
    """Set the job state from a state code; unknown or empty codes leave it unchanged."""
    try:
        job.state = JobState.from_code(state)
    except ValueError:
        pass


def update_job_on_run(job: Job) -> None:
    """Record that the job has been started."""
    job.state = JobState.RUNNING


def update_job_on_move(job: Job) -> None:
    """Record that the job has been moved to another server."""
    job.state = JobState.CROSS_RUN


def translate_job_fail_code(fail_code: int, starving_job_id: str | None = None) -> Message | None:
    """Translate a run-check failure into a job comment and a log message.

    Returns None when the code carries no message worth reporting. Codes
    below the return-code base index resource checks and are rejected.
    """
    if fail_code < 1000:
        raise RuntimeError("Unexpected code path.")
    try:
        code = ReturnCode(fail_code)
    except ValueError:
        return None
    if code not in _TRANSLATED_CODES:
        return None
    message = message_for(code)
    if message is None:
        return None
    if code is ReturnCode.JOB_STARVING:
        if starving_job_id is None:
            raise ValueError("a starving job id is needed to describe JOB_STARVING")
        return Message(message.comment, message.info.format(starving_job_id))
    return message


@dataclass
class JobUpdater:
    """Sends job attribute changes to the batch server.

    ``alter`` is called as ``alter(job_id, attribute, value)`` and is expected
    to raise if the server refuses the change.
    """

    alter: AlterJob

    def update_comment(self, job: Job | None, comment: str) -> bool:
        """Set the job comment if it changed; return True if an update was sent."""
        if job is None or job.comment == comment:
            return False
        job.comment = comment
        self.alter(job.job_id, ATTR_COMMENT, comment)
        return True

    def update_planned_nodes(self, job: Job | None, nodes: str) -> bool:
        """Send the planned nodes if they differ from the job's; return True if sent."""
        if job is None or job.planned_nodes == nodes:
            return False
        self.alter(job.job_id, ATTR_PLANNED_NODES, nodes)
        return True

    def update_waiting_for(self, job: Job | None, waiting: str) -> bool:
        """Send what the job waits for if it differs; return True if sent."""
        if job is None or job.waiting_for == waiting:
            return False
        self.alter(job.job_id, ATTR_WAITING_FOR, waiting)
        return True

    def update_earliest_start(self, job: Job | None, earliest_start: int) -> bool:
        """Send the planned start time if it differs; return True if sent."""
        if job is None or job.planned_start == earliest_start:
            return False
        self.alter(job.job_id, ATTR_PLANNED_START, str(int(earliest_start)))
        return True

    def update_fairshare(self, job: Job | None, fairshare: float) -> bool:
        """Always send the fairshare cost, to three decimals; return True if sent."""
        if job is None:
            return False
        self.alter(job.job_id, ATTR_FAIRSHARE_COST, f"{fairshare:.3f}")
        return True


def update_jobs_cant_run(
    updater: JobUpdater,
    jobs: Sequence[Job],
    start: Job | None,
    comment: str,
    start_where: int,
) -> None:
    """Mark jobs as unable to run and set their comment.

    Marking begins at ``start`` (or the first job when ``start`` is None),
    shifted one place before or after it according to ``start_where``.
    Nothing is marked when ``start`` is absent from ``jobs`` or when the
    shift would move before the first job.
    """
    if start is None:
        index = 0
    else:
        index = next((i for i, job in enumerate(jobs) if job is start), len(jobs))
    if index >= len(jobs):
        return
    if start_where == StartWhere.BEFORE_JOB:
        index -= 1
    elif start_where == StartWhere.AFTER_JOB:
        index += 1
    if index < 0:
        return
    for job in jobs[index:]:
        job.can_not_run = True
        updater.update_comment(job, comment)