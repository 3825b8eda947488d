import pytest

from fifosched.constants import (
    RET_BASE,
    Day,
    Message,
    PrimeTime,
    ReturnCode,
    StartWhere,
    message_for,
)


def test_success_is_first_code_after_base():
    assert ReturnCode(RET_BASE + 1) is ReturnCode.SUCCESS
    assert min(ReturnCode) is ReturnCode.SUCCESS
    assert ReturnCode.is_resource_index(int(ReturnCode.SUCCESS)) is False


def test_job_moved_and_failed_move_share_a_value():
    assert ReturnCode(RET_BASE + 22) is ReturnCode.JOB_FAILED_MOVE
    assert ReturnCode.JOB_FAILED_MOVE is ReturnCode.JOB_MOVED
    assert message_for(ReturnCode.JOB_MOVED) == message_for(ReturnCode.JOB_FAILED_MOVE)


def test_all_codes_above_base():
    assert all(code > RET_BASE for code in ReturnCode)
    assert not any(ReturnCode.is_resource_index(int(code)) for code in ReturnCode)


def test_queue_job_limit_message():
    msg = message_for(ReturnCode.QUEUE_JOB_LIMIT_REACHED)
    assert msg == Message(
        "Not Running: Queue job limit has been reached.", "Queue job limit reached"
    )


def test_message_accepts_plain_int():
    assert message_for(int(ReturnCode.JOB_SCHEDULED)) == message_for(
        ReturnCode.JOB_SCHEDULED
    )


def test_failed_move_message():
    msg = message_for(ReturnCode.JOB_FAILED_MOVE)
    assert msg.comment == "Not Moving: Job couldn't be assigned to any server"
    assert msg.info == "Job couldn't be assigned to any server"


def test_starving_message_formats_job_id():
    msg = message_for(ReturnCode.JOB_STARVING)
    assert msg.info.format("42.server") == "Draining system to allow 42.server to run"


def test_unknown_code_has_no_message():
    assert message_for(RET_BASE + 500) is None
    assert message_for(ReturnCode.SUCCESS) is None


def test_every_failure_code_has_a_message():
    missing = [c for c in ReturnCode if c is not ReturnCode.SUCCESS and message_for(c) is None]
    assert missing == []


def test_comments_contain_info_text_mostly():
    msg = message_for(ReturnCode.NODE_STILL_BOOTING)
    assert msg.comment.endswith(msg.info)


@pytest.mark.parametrize(
    "value, expected",
    [(0, True), (5, True), (RET_BASE - 1, True), (RET_BASE, False),
     (int(ReturnCode.SUCCESS), False), (-1, False)],
)
def test_is_resource_index(value, expected):
    assert ReturnCode.is_resource_index(value) is expected


def test_prime_time_ordering():
    assert PrimeTime(0) is PrimeTime.ALL
    assert PrimeTime(4) is PrimeTime.HIGH_PRIME
    assert list(PrimeTime) == sorted(PrimeTime)
    assert PrimeTime.HIGH_PRIME == max(PrimeTime)


def test_day_high_day_counts_real_days():
    assert Day(0) is Day.SUNDAY
    assert Day(len(list(Day)) - 1) is Day.HIGH_DAY


def test_start_where_values():
    assert StartWhere(0) is StartWhere.WITH_JOB
    assert StartWhere(-1) is StartWhere.BEFORE_JOB
    assert StartWhere(1) is StartWhere.AFTER_JOB
    assert StartWhere.BEFORE_JOB < StartWhere.WITH_JOB < StartWhere.AFTER_JOB