import pytest

from fifosched.fifo import JobSelector, job_is_movable
from fifosched.model import Job, JobState, Queue, Server, Status


def make_server(*queue_specs):
    """Build a server; each spec is (queue name, list of jobs)."""
    server = Server("srv")
    for name, jobs in queue_specs:
        queue = Queue(name)
        server.add_queue(queue)
        for job in jobs:
            queue.add_job(job)
    return server


def first_unseen_extractor():
    seen = set()
    calls = []

    def extract(jobs):
        calls.append(list(jobs))
        for job in jobs:
            if id(job) not in seen and not job.can_not_run:
                seen.add(id(job))
                return job
        return None

    return extract, calls


# job_is_movable

def test_movable_queued_job_in_global_queue():
    queue = Queue("q", is_global=True)
    job = Job("1")
    queue.add_job(job)
    assert job_is_movable(job) is True


def test_not_movable_in_non_global_queue():
    queue = Queue("q", is_global=False)
    job = Job("1")
    queue.add_job(job)
    assert job_is_movable(job) is False


def test_not_movable_when_can_not_run():
    queue = Queue("q", is_global=True)
    job = Job("1", can_not_run=True)
    queue.add_job(job)
    assert job_is_movable(job) is False


def test_not_movable_when_running():
    queue = Queue("q", is_global=True)
    job = Job("1", state=JobState.RUNNING)
    queue.add_job(job)
    assert job_is_movable(job) is False


def test_not_movable_without_queue():
    assert job_is_movable(Job("1")) is False


# round robin

def test_round_robin_rejected_on_next_job():
    selector = JobSelector(make_server(), Status(round_robin=True))
    with pytest.raises(ValueError, match="Round robin"):
        selector.next_job()


def test_round_robin_rejected_on_reset():
    selector = JobSelector(make_server(), Status(round_robin=True))
    with pytest.raises(ValueError):
        selector.reset()


# whole system as one queue

def test_overall_order_skips_can_not_run():
    a, b, c = Job("a"), Job("b", can_not_run=True), Job("c")
    server = make_server(("q1", [a, b]), ("q2", [c]))
    selector = JobSelector(server, Status())
    selector.reset()
    assert list(selector) == [a, c]


def test_overall_exhausted_keeps_returning_none():
    a = Job("a")
    selector = JobSelector(make_server(("q", [a])), Status())
    selector.reset()
    assert selector.next_job() is a
    assert selector.next_job() is None
    assert selector.next_job() is None


def test_overall_empty_server():
    selector = JobSelector(make_server(), Status())
    selector.reset()
    assert selector.next_job() is None


def test_reset_restarts_iteration():
    a, b = Job("a"), Job("b")
    selector = JobSelector(make_server(("q", [a, b])), Status())
    selector.reset()
    first = list(selector)
    selector.reset()
    assert list(selector) == first == [a, b]


def test_job_marked_during_iteration_is_skipped():
    a, b, c = Job("a"), Job("b"), Job("c")
    selector = JobSelector(make_server(("q", [a, b, c])), Status())
    selector.reset()
    result = []
    for job in selector:
        result.append(job)
        if job is a:
            b.can_not_run = True
    assert result == [a, c]


# by queue

def test_by_queue_visits_queues_in_order_and_skips_empty():
    a, b, c, d = Job("a"), Job("b"), Job("c", can_not_run=True), Job("d")
    server = make_server(("q1", [a, b]), ("empty", []), ("q3", [c, d]))
    selector = JobSelector(server, Status(by_queue=True))
    selector.reset()
    assert list(selector) == [a, b, d]


def test_by_queue_all_blocked():
    jobs = [Job("a", can_not_run=True), Job("b", can_not_run=True)]
    selector = JobSelector(make_server(("q", jobs)), Status(by_queue=True))
    selector.reset()
    assert selector.next_job() is None
    assert selector.next_job() is None


def test_by_queue_yields_every_runnable_job_once():
    jobs = [Job(str(n), can_not_run=(n % 3 == 0)) for n in range(9)]
    server = make_server(("q1", jobs[:4]), ("q2", jobs[4:]))
    selector = JobSelector(server, Status(by_queue=True))
    selector.reset()
    result = list(selector)
    assert result == [job for job in jobs if not job.can_not_run]


# fair share

def test_fair_share_overall_uses_server_jobs():
    a, b = Job("a"), Job("b")
    server = make_server(("q1", [a]), ("q2", [b]))
    extract, calls = first_unseen_extractor()
    selector = JobSelector(server, Status(fair_share=True), extract)
    selector.reset()
    assert list(selector) == [a, b]
    assert calls[0] == server.jobs


def test_fair_share_by_queue_moves_to_next_queue():
    a, b, c = Job("a"), Job("b"), Job("c")
    server = make_server(("q1", [a]), ("q2", []), ("q3", [b, c]))
    extract, calls = first_unseen_extractor()
    selector = JobSelector(server, Status(by_queue=True, fair_share=True), extract)
    selector.reset()
    assert list(selector) == [a, b, c]
    assert selector.next_job() is None
    assert all(batch in [q.jobs for q in server.queues] for batch in calls)


def test_fair_share_without_extractor_raises():
    selector = JobSelector(make_server(("q", [Job("a")])), Status(fair_share=True))
    selector.reset()
    with pytest.raises(RuntimeError):
        selector.next_job()


def test_policy_read_on_each_call():
    a, b = Job("a"), Job("b")
    status = Status()
    selector = JobSelector(make_server(("q", [a, b])), status)
    selector.reset()
    assert selector.next_job() is a
    status.round_robin = True
    with pytest.raises(ValueError):
        selector.next_job()