"""Scheduler-wide constants: return codes, time enums, file names and messages."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

# Unit multipliers; "b/w" means either byte or word.
KILO = 1024
MEGATOKILO = 1024
GIGATOKILO = 1048576
TERATOKILO = 1073741824

# Resources are kept in kilobytes; word-based sizes use this word size.
SIZE_OF_WORD = 8

RESC_UNSPECIFIED = -1
RESC_INFINITY = -2

# Return codes below this value are indexes into a resources-to-check table.
RET_BASE = 1000

USER = 0
GROUP = 1

# Configuration file names.
CONFIG_FILE = "sched_config"
USAGE_FILE = "usage"
HOLIDAYS_FILE = "holidays"
RESGROUP_FILE = "resource_group"
DEDTIME_FILE = "dedicated_time"
LAST_DECAY_FILE = "last_decay"

# Keys recognised on the left-hand side of the scheduler config file.
PARSE_ROUND_ROBIN = "round_robin"
PARSE_BY_QUEUE = "by_queue"
PARSE_STRICT_FIFO = "strict_fifo"
PARSE_FAIR_SHARE = "fair_share"
PARSE_FAIR_SHARE_PRIORITY = "fair_share_with_priority"
PARSE_HALF_LIFE = "half_life"
PARSE_SYNC_TIME = "sync_time"
PARSE_UNKNOWN_SHARES = "unknown_shares"
PARSE_SORT_BY = "sort_by"
PARSE_KEY = "key"
PARSE_LOG_FILTER = "log_filter"
PARSE_DEDICATED_PREFIX = "dedicated_prefix"
PARSE_IGNORE_REMOTE_LOCAL_QUEUES = "ignore_remote_local_queues"
PARSE_LOCAL_SERVER_NAME = "local_server"
PARSE_LOAD_BALANCING = "load_balancing"
PARSE_LOAD_BALANCING_RR = "load_balancing_rr"
PARSE_HELP_STARVING_JOBS = "help_starving_jobs"
PARSE_MAX_STARVE = "max_starve"
PARSE_SORT_QUEUES = "sort_queues"
PARSE_IGNORE_QUEUE = "ignore_queue"
PARSE_JOB_MOVING = "job_moving"
PARSE_CYCLE_TIME = "cycle_length"
PARSE_SLAVE_SERVER = "slave_server"
PARSE_MAX_USER_RUN = "max_user_run"

# Capacity limits.
MAX_HOLIDAY_SIZE = 50
MAX_DEDTIME_SIZE = 50
MAX_COMMENT_SIZE = 100
MAX_LOG_SIZE = 100
MAX_RES_NAME_SIZE = 256
MAX_RES_RET_SIZE = 256
MAX_IGNORED_QUEUES = 16
MAX_SLAVE_SERVERS = 32

COMMENT_STRICT_FIFO = "Not Running: Strict fifo order"


class ReturnCode(IntEnum):
    """Outcome of checking whether a job may run."""

    SUCCESS = RET_BASE + 1
    SCHD_ERROR = RET_BASE + 2
    NOT_QUEUED = RET_BASE + 3
    QUEUE_NOT_STARTED = RET_BASE + 4
    QUEUE_NOT_EXEC = RET_BASE + 5
    QUEUE_JOB_LIMIT_REACHED = RET_BASE + 6
    SERVER_JOB_LIMIT_REACHED = RET_BASE + 7
    SERVER_USER_LIMIT_REACHED = RET_BASE + 8
    QUEUE_USER_LIMIT_REACHED = RET_BASE + 9
    SERVER_GROUP_LIMIT_REACHED = RET_BASE + 10
    QUEUE_GROUP_LIMIT_REACHED = RET_BASE + 11
    DED_TIME = RET_BASE + 12
    CROSS_DED_TIME_BOUNDRY = RET_BASE + 13
    NO_AVAILABLE_NODE = RET_BASE + 14
    NOT_ENOUGH_NODES_AVAIL = RET_BASE + 15
    JOB_STARVING = RET_BASE + 16
    SERVER_TOKEN_UTILIZATION = RET_BASE + 17
    QUEUE_IGNORED = RET_BASE + 18
    QUEUE_REMOTE_LOCAL = RET_BASE + 19
    NODESPEC_NOT_ENOUGH_NODES_TOTAL = RET_BASE + 20
    NODESPEC_NOT_ENOUGH_NODES_INTERSECT = RET_BASE + 21
    JOB_MOVED = RET_BASE + 22
    JOB_FAILED_MOVE = RET_BASE + 22
    CLUSTER_RUNNING = RET_BASE + 23
    CLUSTER_PERMISSIONS = RET_BASE + 24
    INSUFICIENT_SERVER_RESOURCE = RET_BASE + 25
    INSUFICIENT_QUEUE_RESOURCE = RET_BASE + 26
    INSUFICIENT_DYNAMIC_RESOURCE = RET_BASE + 27
    NODE_STILL_BOOTING = RET_BASE + 28
    QUEUE_PROC_LIMIT_REACHED = RET_BASE + 29
    QUEUE_USER_PROC_LIMIT_REACHED = RET_BASE + 30
    QUEUE_GROUP_PROC_LIMIT_REACHED = RET_BASE + 31
    REQUEST_NOT_MATCHED = RET_BASE + 32
    SCHEDULER_LOOP_RUN_LIMIT_REACHED = RET_BASE + 33
    UNKNOWN_LOCATION_PROPERTY_REQUEST = RET_BASE + 34
    JOB_SCHEDULED = RET_BASE + 35

    @staticmethod
    def is_resource_index(value: int) -> bool:
        """Return True if the value indexes a resource check rather than naming a code."""
        return 0 <= value < RET_BASE


class PrimeTime(IntEnum):
    """Prime-time classification of a moment."""

    ALL = 0
    NONE = 1
    PRIME = 2
    NON_PRIME = 3
    HIGH_PRIME = 4


class Day(IntEnum):
    """Day categories used by the prime-time table."""

    SUNDAY = 0
    SATURDAY = 1
    WEEKDAY = 2
    HIGH_DAY = 3


class StartWhere(IntEnum):
    """Where to begin marking jobs relative to a given job."""

    BEFORE_JOB = -1
    WITH_JOB = 0
    AFTER_JOB = 1


class Message(NamedTuple):
    """A job comment together with its log message.

    The JOB_STARVING log message carries a ``{}`` placeholder for the job id.
    """

    comment: str
    info: str


_MESSAGES: dict[ReturnCode, Message] = {
    ReturnCode.QUEUE_NOT_STARTED: Message(
        "Not Running: Queue not started.", "Queue not started"),
    ReturnCode.QUEUE_NOT_EXEC: Message(
        "Not Running: Queue not an execution queue.", "Queue not an execution queue"),
    ReturnCode.QUEUE_JOB_LIMIT_REACHED: Message(
        "Not Running: Queue job limit has been reached.", "Queue job limit reached"),
    ReturnCode.SERVER_JOB_LIMIT_REACHED: Message(
        "Not Running: Server job limit has been reached.", "Server job limit reached"),
    ReturnCode.SERVER_USER_LIMIT_REACHED: Message(
        "Not Running: User has reached server running job limit.",
        "Server user limit reached"),
    ReturnCode.QUEUE_USER_LIMIT_REACHED: Message(
        "Not Running: User has reached queue running job limit.",
        "Queue user limit reached"),
    ReturnCode.SERVER_GROUP_LIMIT_REACHED: Message(
        "Not Running: Group has reached server running limit.",
        "Server group limit reached"),
    ReturnCode.QUEUE_GROUP_LIMIT_REACHED: Message(
        "Not Running: Group has reached queue running limit.",
        "Queue group limit reached"),
    ReturnCode.CROSS_DED_TIME_BOUNDRY: Message(
        "Not Running: Job would cross dedicated time boundry",
        "Job would not finish before dedicated time"),
    ReturnCode.DED_TIME: Message(
        "Not Running: Dedicated time conflict", "Dedicated Time"),
    ReturnCode.NO_AVAILABLE_NODE: Message(
        "Not Running: All timesharing nodes are too loaded to run job",
        "No available node to run job"),
    ReturnCode.NOT_QUEUED: Message(
        "Not Running: Job not in queued state", "Job is not in queued state"),
    ReturnCode.NOT_ENOUGH_NODES_AVAIL: Message(
        "Not Running: Not enough of the right type of nodes are available",
        "Not enough of the right type of nodes available"),
    ReturnCode.JOB_STARVING: Message(
        "Not Running: Draining system to allow starving job to run",
        "Draining system to allow {} to run"),
    ReturnCode.SCHD_ERROR: Message(
        "Not Running: An internal scheduling error has occured",
        "Internal Scheduling Error"),
    ReturnCode.SERVER_TOKEN_UTILIZATION: Message(
        "Not Running: Max token usage reached", "Max token usage reached"),
    ReturnCode.QUEUE_IGNORED: Message(
        "Not Running: Queue is configured to be ignored",
        "Queue is configured to be ignored"),
    ReturnCode.QUEUE_REMOTE_LOCAL: Message(
        "Not Runnning: Queue is local and remote", "Queue is local and remote"),
    ReturnCode.JOB_FAILED_MOVE: Message(
        "Not Moving: Job couldn't be assigned to any server",
        "Job couldn't be assigned to any server"),
    ReturnCode.NODESPEC_NOT_ENOUGH_NODES_TOTAL: Message(
        "Not Running: Not enough nodes fitting the nodespec found",
        "Not enough nodes fitting the nodespec found"),
    ReturnCode.NODESPEC_NOT_ENOUGH_NODES_INTERSECT: Message(
        "Not Running: Not enough nodes fitting the nodespec available",
        "Not enough nodes fitting the nodespec available"),
    ReturnCode.CLUSTER_RUNNING: Message(
        "Not Running: Cluster with the same name already running",
        "Cluster with the same name already running"),
    ReturnCode.CLUSTER_PERMISSIONS: Message(
        "Not Running: Job owner does not have permission to run jobs inside the cluster",
        "Job owner does not have permission to run jobs inside the cluster"),
    ReturnCode.INSUFICIENT_SERVER_RESOURCE: Message(
        "Not Running: Resource request couldn't be satisfied using server resources.",
        "Resource request couldn't be satisfied using server resources."),
    ReturnCode.INSUFICIENT_QUEUE_RESOURCE: Message(
        "Not Running: Resource request couldn't be satisfied using queue resources.",
        "Resource request couldn't be satisfied using queue resources."),
    ReturnCode.INSUFICIENT_DYNAMIC_RESOURCE: Message(
        "Not Running: Dynamic resource request couldn't be satisfied.",
        "Dynamic resource request couldn't be satisfied."),
    ReturnCode.NODE_STILL_BOOTING: Message(
        "Not Running: One of desired nodes is still booting.",
        "One of desired nodes is still booting."),
    ReturnCode.QUEUE_PROC_LIMIT_REACHED: Message(
        "Not Running: Queue has reached occupied processors limit.",
        "Queue has reached occupied processors limit."),
    ReturnCode.QUEUE_USER_PROC_LIMIT_REACHED: Message(
        "Not Running: User has reached queue occupied processors limit.",
        "User has reached queue occupied processors limit."),
    ReturnCode.QUEUE_GROUP_PROC_LIMIT_REACHED: Message(
        "Not Running: Group has reached queue occupied processor limit.",
        "Group has reached queue occupied processor limit."),
    ReturnCode.REQUEST_NOT_MATCHED: Message(
        "Never Running: This jobs requirements will never be satisfied under "
        "the current grid configuration.",
        "This jobs requirements will never be satisfied under the current grid "
        "configuration."),
    ReturnCode.SCHEDULER_LOOP_RUN_LIMIT_REACHED: Message(
        "Not Running: Internal scheduler limit for job executions of a single "
        "user reached.",
        "Internal scheduler limit for job executions of a single user reached."),
    ReturnCode.UNKNOWN_LOCATION_PROPERTY_REQUEST: Message(
        "Not Running: Unknown location property request.",
        "Unknown location property request."),
    ReturnCode.JOB_SCHEDULED: Message(
        "Not Running: Job has received an allocation of nodes, waiting for "
        "running jobs to end.",
        "Job has received an allocation of nodes, waiting for running jobs to end."),
}


def message_for(code: int) -> Message | None:
    """Return the comment and log message for a return code, or None if it has none."""
    try:
        return _MESSAGES.get(ReturnCode(code))
    except ValueError:
        return None