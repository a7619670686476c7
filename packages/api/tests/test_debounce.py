# This project was developed with assistance from AI tools.
"""Tests for the keyed asyncio debouncer."""

import asyncio

import pytest

from src.core.debounce import Debouncer

_DELAY = 0.02


@pytest.mark.asyncio
async def test_burst_collapses_to_last_call():
    calls = []
    debouncer = Debouncer(_DELAY)

    for n in range(5):
        debouncer.call("ver_1", calls.append, n)
    assert debouncer.pending() == ["ver_1"]

    await asyncio.sleep(_DELAY * 5)
    assert calls == [4]
    assert debouncer.pending() == []


@pytest.mark.asyncio
async def test_call_waits_for_the_quiet_period():
    calls = []
    delay = 0.2
    debouncer = Debouncer(delay)

    debouncer.call("ver_1", calls.append, "saved")
    await asyncio.sleep(delay / 2)
    assert calls == []

    await asyncio.sleep(delay)
    assert calls == ["saved"]


@pytest.mark.asyncio
async def test_keys_are_independent():
    calls = []
    debouncer = Debouncer(_DELAY)

    debouncer.call("a", calls.append, "a")
    debouncer.call("b", calls.append, "b")
    await asyncio.sleep(_DELAY * 5)

    assert sorted(calls) == ["a", "b"]


@pytest.mark.asyncio
async def test_coroutine_callbacks_are_awaited():
    calls = []

    async def record(value):
        calls.append(value)

    debouncer = Debouncer(_DELAY)
    await debouncer.call("k", record, "done")
    assert calls == ["done"]


@pytest.mark.asyncio
async def test_cancel_prevents_call():
    calls = []
    debouncer = Debouncer(_DELAY)
    debouncer.call("k", calls.append, 1)

    assert debouncer.cancel("k") is True
    assert debouncer.cancel("k") is False
    await asyncio.sleep(_DELAY * 5)
    assert calls == []


@pytest.mark.asyncio
async def test_cancel_all_counts_pending():
    debouncer = Debouncer(1.0)
    debouncer.call("a", print)
    debouncer.call("b", print)

    assert debouncer.cancel_all() == 2
    assert debouncer.pending() == []


@pytest.mark.asyncio
async def test_failing_callback_is_logged_not_raised(caplog):
    def boom():
        raise RuntimeError("nope")

    debouncer = Debouncer(0)
    await debouncer.call("k", boom)
    assert "Debounced call for k failed" in caplog.text
