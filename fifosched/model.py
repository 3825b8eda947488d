"""Scheduler data model: jobs, queues, servers, configuration and cycle status."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from fifosched.constants import (
    MAX_DEDTIME_SIZE,
    MAX_HOLIDAY_SIZE,
    MAX_IGNORED_QUEUES,
    MAX_SLAVE_SERVERS,
)


class MagratheaState(IntEnum):
    """State of a virtualised node as reported by the node cache."""

    NONE = 0
    REMOVED = 1
    DOWN = 2
    DOWN_BOOTABLE = 3
    BOOTING = 4
    FREE = 5
    FREE_BOOTABLE = 6
    OCCUPIED_WOULD_PREEMPT = 7
    OCCUPIED = 8
    RUNNING_PREEMPTIBLE = 9
    RUNNING_PRIORITY = 10
    RUNNING = 11
    RUNNING_CLUSTER = 12
    PREEMPTED = 13
    FROZEN = 14
    DOWN_DISAPPEARED = 15
    SHUTTING_DOWN = 16


class JobState(Enum):
    """Batch job state, keyed by the single-letter code the server reports."""

    QUEUED = "Q"
    RUNNING = "R"
    TRANSIT = "T"
    HELD = "H"
    WAITING = "W"
    EXITING = "E"
    SUSPENDED = "S"
    COMPLETED = "C"
    CROSS_RUN = "X"

    @classmethod
    def from_code(cls, code: str) -> JobState:
        """Return the state named by the first letter of ``code``.

        Raises ValueError for an empty or unknown code.
        """
        if not code:
            raise ValueError("empty job state code")
        return cls(code[0])


@dataclass
class Token:
    """A pool of tokens of one kind."""

    identifier: str
    count: float


@dataclass(order=True)
class TimeGap:
    """A span of time, in seconds since the epoch."""

    start: int = 0
    end: int = 0


@dataclass(eq=False)
class Job:
    """A batch job as seen by the scheduler."""

    job_id: str
    state: JobState = JobState.QUEUED
    queue: Queue | None = None
    account: str = ""
    can_not_run: bool = False
    comment: str = ""
    ginfo: Any = None
    planned_nodes: str = ""
    waiting_for: str = ""
    planned_start: int = 0

    def suitable_for_run(self) -> bool:
        """Return True if the job is queued and not marked as unable to run."""
        return self.state is JobState.QUEUED and not self.can_not_run


@dataclass(eq=False)
class Queue:
    """A batch queue and the jobs it holds."""

    name: str
    is_started: bool = False
    is_exec: bool = False
    is_route: bool = False
    is_ok_to_run: bool = False
    is_global: bool = False
    dedtime_queue: bool = False
    excl_nodes_only: bool = False
    is_admin_queue: bool = False
    server: Server | None = None
    max_run: int = 0
    max_user_run: int = 0
    max_group_run: int = 0
    max_proc: int = 0
    max_user_proc: int = 0
    max_group_proc: int = 0
    priority: int = 0
    starving_support: int = 0
    fairshare_tree: str | None = None
    queue_cost: float = 0.0
    jobs: list[Job] = field(default_factory=list)
    running_jobs: list[Job] = field(default_factory=list)

    def add_job(self, job: Job) -> None:
        """Place a job in this queue, and on the queue's server if it has one."""
        job.queue = self
        self.jobs.append(job)
        if job.state is JobState.RUNNING:
            self.running_jobs.append(job)
        if self.server is not None:
            self.server.jobs.append(job)


@dataclass(eq=False)
class Server:
    """A batch server with its queues and all their jobs."""

    name: str
    queues: list[Queue] = field(default_factory=list)
    jobs: list[Job] = field(default_factory=list)

    @property
    def num_queues(self) -> int:
        return len(self.queues)

    def add_queue(self, queue: Queue) -> None:
        """Attach a queue to this server, taking over the jobs it already holds."""
        queue.server = self
        self.queues.append(queue)
        self.jobs.extend(queue.jobs)


def _append_limited(items: list, item: Any, limit: int, what: str) -> None:
    if len(items) >= limit:
        raise ValueError(f"too many {what} (limit {limit})")
    items.append(item)


@dataclass
class Config:
    """Scheduling policy read from the configuration files."""

    prime_rr: bool = False
    non_prime_rr: bool = False
    prime_bq: bool = False
    non_prime_bq: bool = False
    prime_sf: bool = False
    non_prime_sf: bool = False
    prime_fs: bool = False
    non_prime_fs: bool = False
    prime_lb: bool = False
    non_prime_lb: bool = False
    prime_hsv: bool = False
    non_prime_hsv: bool = False
    prime_sq: bool = False
    non_prime_sq: bool = False
    prime_lbrr: bool = False
    non_prime_lbrr: bool = False
    ignore_remote_local: bool = False
    move_jobs: bool = False
    priority_fairshare: bool = False
    sort_by: Any = None
    prime_sort: Any = None
    non_prime_sort: Any = None
    half_life: int = 0
    sync_time: int = 0
    holidays: list[int] = field(default_factory=list)
    ded_time: list[TimeGap] = field(default_factory=list)
    holiday_year: int = 0
    unknown_shares: int = 0
    log_filter: int = 0
    global_prefix: str = ""
    local_server: str = ""
    ded_prefix: str = ""
    max_starve: int = 0
    ignored_queues: list[str] = field(default_factory=list)
    slave_servers: list[str] = field(default_factory=list)
    max_user_run: int = 0
    max_cycle: int = 0

    def add_ignored_queue(self, name: str) -> None:
        """Add a queue to be ignored; raises ValueError past the limit."""
        _append_limited(self.ignored_queues, name, MAX_IGNORED_QUEUES, "ignored queues")

    def add_slave_server(self, name: str) -> None:
        """Add a slave server; raises ValueError past the limit."""
        _append_limited(self.slave_servers, name, MAX_SLAVE_SERVERS, "slave servers")

    def add_holiday(self, day: int) -> None:
        """Add a holiday as a day of the year; raises ValueError past the limit."""
        _append_limited(self.holidays, day, MAX_HOLIDAY_SIZE, "holidays")

    def add_dedicated_time(self, start: int, end: int) -> None:
        """Add a dedicated time span; raises ValueError past the limit."""
        _append_limited(self.ded_time, TimeGap(start, end), MAX_DEDTIME_SIZE,
                        "dedicated times")


@dataclass
class Status:
    """Scheduler state that may change from one cycle to the next."""

    round_robin: bool = False
    by_queue: bool = False
    strict_fifo: bool = False
    fair_share: bool = False
    load_balancing: bool = False
    load_balancing_rr: bool = False
    help_starving_jobs: bool = False
    sort_queues: bool = False
    is_prime: bool = False
    is_ded_time: bool = False
    sort_by: Any = None
    current_time: int = 0
    starving_job: Job | None = None