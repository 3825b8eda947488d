"""Selection of the next job for the scheduler to consider."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from fifosched.model import Job, JobState, Server, Status

FairshareExtractor = Callable[[Sequence[Job]], "Job | None"]


def job_is_movable(job: Job) -> bool:
    """Return True if the job may be moved to another server.

    The job must be suitable for running, queued, and sit in a global queue.
    """
    queue = job.queue
    if not job.suitable_for_run() or queue is None or not queue.is_global:
        return False
    return job.state is JobState.QUEUED


class JobSelector:
    """Walks the jobs of a server in the order the scheduling policy asks for.

    With ``status.by_queue`` set the queues are visited one after another.
    Otherwise all jobs of the server are treated as one large queue. Jobs
    marked ``can_not_run`` are skipped. With ``status.fair_share`` set the
    choice is delegated to ``extract_fairshare``. It is called with a
    sequence of jobs (a queue's jobs, or all the server's jobs) and returns
    the chosen job or None once that sequence has nothing more to offer.

    The policy flags are read from ``status`` on every call, so they may
    change between calls.
    """

    def __init__(
        self,
        server: Server,
        status: Status,
        extract_fairshare: FairshareExtractor | None = None,
    ) -> None:
        self.server = server
        self.status = status
        self.extract_fairshare = extract_fairshare
        self._last_queue = 0
        self._last_job = -1

    def _check_policy(self) -> None:
        if self.status.round_robin:
            raise ValueError("Round robin job scheduling no longer supported.")

    def _extract(self, jobs: Sequence[Job]) -> Job | None:
        if self.extract_fairshare is None:
            raise RuntimeError("fair share selection needs a fairshare extractor")
        return self.extract_fairshare(jobs)

    def reset(self) -> None:
        """Start again from the first queue and the first job."""
        self._check_policy()
        self._last_job = -1
        self._last_queue = 0

    def next_job(self) -> Job | None:
        """Return the next job to consider, or None when there are no more."""
        self._check_policy()
        if self.status.by_queue:
            return self._next_by_queue()
        return self._next_overall()

    def _next_by_queue(self) -> Job | None:
        queues = self.server.queues

        if self.status.fair_share:
            while self._last_queue < len(queues):
                job = self._extract(queues[self._last_queue].jobs)
                if job is not None:
                    return job
                self._last_queue += 1
            return None

        self._last_job += 1
        while self._last_queue < len(queues):
            jobs = queues[self._last_queue].jobs
            if self._last_job >= len(jobs):
                self._last_queue += 1
                self._last_job = 0
            elif jobs[self._last_job].can_not_run:
                self._last_job += 1
            else:
                return jobs[self._last_job]
        return None

    def _next_overall(self) -> Job | None:
        jobs = self.server.jobs

        if self.status.fair_share:
            return self._extract(jobs)

        self._last_job += 1
        while self._last_job < len(jobs) and jobs[self._last_job].can_not_run:
            self._last_job += 1
        if self._last_job >= len(jobs):
            return None
        return jobs[self._last_job]

    def __iter__(self) -> Iterator[Job]:
        """Yield jobs from the current position until none are left."""
        while (job := self.next_job()) is not None:
            yield job