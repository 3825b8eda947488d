# fifosched

The building blocks of a first-in, first-out batch-job scheduler. Jobs sit in
queues and queues sit on a server. The package decides which job the scheduler
should try next and what to tell the user when a job cannot run.

## Modules

- **`fifosched.constants`**
  - `ReturnCode`: the outcome of a run check.
  - `ReturnCode.is_resource_index(value)`: tells whether a value below the
    return-code base is an index into a resource-check table.
  - `PrimeTime`, `Day` and `StartWhere`: enums.
  - Configuration file names, config keys and capacity limits such as
    `MAX_IGNORED_QUEUES`.
  - `message_for(code)`: returns a `Message(comment, info)` for a code, or
    `None`.
- **`fifosched.model`**: dataclasses for the scheduler state.
  - `Job`. `Job.suitable_for_run()` is true when the job is queued and not
    marked `can_not_run`.
  - `Queue`. `Queue.add_job(job)` puts a job in the queue. It also adds the job
    to the queue's running list when the job is running, and to the queue's
    server when the queue has one.
  - `Server`. `Server.add_queue(queue)` attaches a queue and takes over the
    jobs the queue already holds.
  - `Config`. `add_ignored_queue`, `add_slave_server`, `add_holiday` and
    `add_dedicated_time` raise `ValueError` once their limits are reached.
  - `Status`, `Token` and `TimeGap`.
  - `JobState`, with `JobState.from_code(code)` taking the state from the
    first letter of `code`, and `MagratheaState`.
- **`fifosched.resources`**
  - `ResourceReq`: one resource request.
  - `ResourceReqList`: requests matched by exact name. It has `find`,
    `find_or_add` and `clone`.
  - `find_resource_req`, `find_alloc_resource_req` and
    `clone_resource_req_list`: these also accept `None` in place of a list.
- **`fifosched.job_info`**
  - `set_state(state, job)`: ignores unknown codes.
  - `update_job_on_run(job)` and `update_job_on_move(job)`.
  - `translate_job_fail_code(fail_code, starving_job_id)`: returns a `Message`
    or `None`. It raises `RuntimeError` for codes below 1000. For
    `JOB_STARVING` without a job id it raises `ValueError`.
  - `JobUpdater(alter)`: sends comment, planned-nodes, waiting-for and
    earliest-start changes through `alter(job_id, attribute, value)`. It sends
    them only when they differ from the job's current value. The fairshare cost
    is always sent, formatted to three decimals.
  - `update_jobs_cant_run(updater, jobs, start, comment, start_where)`: marks
    jobs from `start` onwards as unable to run and sets their comment.
- **`fifosched.fifo`**
  - `job_is_movable(job)`.
  - `JobSelector(server, status, extract_fairshare=None)`: walks jobs queue by
    queue (`status.by_queue`) or across the whole server, and skips jobs
    marked `can_not_run`. With `status.fair_share` set, the choice goes to
    `extract_fairshare`. Round-robin mode raises `ValueError`. `reset()` starts
    over, `next_job()` returns the next job or `None`, and iterating the
    selector yields jobs until none are left.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Example

```python
from fifosched.model import Job, JobState, Queue, Server, Status
from fifosched.fifo import JobSelector

server = Server(name="server")
queue = Queue(name="batch")
server.add_queue(queue)
queue.add_job(Job(job_id="1.server", state=JobState.QUEUED))
queue.add_job(Job(job_id="2.server", state=JobState.QUEUED))

for job in JobSelector(server, Status(by_queue=True)):
    print(job.job_id)
```

Failure messages:

```python
from fifosched.constants import ReturnCode
from fifosched.job_info import translate_job_fail_code

comment, log = translate_job_fail_code(ReturnCode.QUEUE_JOB_LIMIT_REACHED)
```

## What it does not do

The package is a library. It has no command, and it does not run a
scheduling loop.

It does not talk to a batch server. Server state has to be built from the
model classes. Attribute changes reach the server only through the `alter`
callable you give to `JobUpdater`.

It does not read configuration, holiday or dedicated-time files.
`fifosched.constants` gives the file names and config keys, and `Config` holds
the values, but you fill it in yourself.

It does not compute fair-share ordering. You supply that as a function to
`JobSelector`.