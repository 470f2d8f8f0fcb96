# tests/utils/test_deadline.py
"""Tests for scrape timeout header parsing and deadline helpers."""

import asyncio

import pytest

from kubesummary.utils.deadline import deadline_after, parse_timeout_seconds, time_remaining, wait_until


@pytest.mark.parametrize(
    "value, expected",
    [
        ("10", 10.0),
        ("9.5", 9.5),
        (" 3 ", 3.0),
        ("0.25", 0.25),
    ],
)
def test_parse_valid_timeouts(value, expected):
    assert parse_timeout_seconds(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "10s", "0", "-1", "nan", "inf"])
def test_parse_invalid_timeouts_fall_back_to_none(value):
    assert parse_timeout_seconds(value) is None


def test_parse_invalid_timeout_is_logged(caplog):
    with caplog.at_level("WARNING"):
        parse_timeout_seconds("soon")
    assert "X-Prometheus-Scrape-Timeout-Seconds" in caplog.text


async def test_no_deadline():
    assert deadline_after(None) is None
    assert time_remaining(None) is None


async def test_deadline_remaining():
    deadline = deadline_after(30)
    remaining = time_remaining(deadline)
    assert 29 < remaining <= 30


async def test_remaining_never_negative():
    loop = asyncio.get_running_loop()
    assert time_remaining(loop.time() - 5) == 0.0


async def test_wait_until_returns_result():
    async def answer():
        return 42

    assert await wait_until(answer(), deadline_after(1)) == 42
    assert await wait_until(answer(), None) == 42


async def test_wait_until_times_out():
    with pytest.raises(asyncio.TimeoutError):
        await wait_until(asyncio.sleep(10), deadline_after(0.02))


async def test_wait_until_expired_deadline_does_not_start():
    started = False

    async def work():
        nonlocal started
        started = True

    loop = asyncio.get_running_loop()
    with pytest.raises(asyncio.TimeoutError):
        await wait_until(work(), loop.time() - 1)
    assert started is False
