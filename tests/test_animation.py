import asyncio

import pytest

from animation.policy import AnimationPolicy
from animation.scheduler import AnimationScheduler, AnimationUnavailable, RepeatingTask

PATH = [(0.0, 0.0), (1.0, 1.0)]


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Stands in for loop.call_later; advance() fires everything that is due."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        handle = FakeHandle(callback)
        self.pending.append(handle)
        return handle

    def advance(self, ticks=1):
        for _ in range(ticks):
            due, self.pending = self.pending, []
            for handle in due:
                if not handle.cancelled:
                    handle.callback()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def styles():
    return []


@pytest.fixture
def scheduler(clock, styles):
    return AnimationScheduler(
        apply_style=lambda path, style: styles.append((path, style)),
        call_later=clock.call_later,
    )


def test_first_tick_runs_immediately(scheduler, styles):
    animation = scheduler.start(PATH)

    assert scheduler.running
    assert animation.offset == -1.0
    assert styles[0][1]["dashOffset"] == -1.0
    assert styles[0][1]["dashArray"] == "20, 20"


def test_offset_decreases_every_tick(scheduler, clock, styles):
    scheduler.start(PATH)
    clock.advance(4)

    offsets = [style["dashOffset"] for _, style in styles]
    assert offsets == [-1.0, -2.0, -3.0, -4.0, -5.0]


def test_step_comes_from_policy(clock):
    scheduler = AnimationScheduler(
        apply_style=lambda path, style: None,
        policy=AnimationPolicy(dash_step=2.5),
        call_later=clock.call_later,
    )
    animation = scheduler.start(PATH)
    clock.advance(1)

    assert animation.offset == -5.0


def test_stop_cancels_further_ticks(scheduler, clock, styles):
    scheduler.start(PATH)
    assert scheduler.stop()
    clock.advance(3)

    assert len(styles) == 1
    assert not scheduler.running
    assert not scheduler.stop()


def test_starting_again_cancels_previous_loop(scheduler, clock, styles):
    first = scheduler.start(PATH)
    second = scheduler.start([(5.0, 5.0), (6.0, 6.0)])
    clock.advance(2)

    assert first.offset == -1.0
    assert second.offset == -3.0
    # only one live scheduled tick
    assert len([h for h in clock.pending if not h.cancelled]) == 1


def test_task_cancelled_from_its_own_callback(clock):
    calls = []

    def callback():
        calls.append(1)
        task.cancel()

    task = RepeatingTask(callback, 0.1, call_later=clock.call_later)
    task.start()
    clock.advance(2)

    assert calls == [1]
    assert clock.pending == []


def test_task_cannot_start_twice(clock):
    task = RepeatingTask(lambda: None, 0.1, call_later=clock.call_later)
    task.start()
    with pytest.raises(RuntimeError):
        task.start()


def test_short_path_is_rejected(scheduler):
    with pytest.raises(ValueError):
        scheduler.start([(0.0, 0.0)])
    assert not scheduler.running


def test_invalid_policy_is_rejected():
    with pytest.raises(ValueError):
        AnimationPolicy(dash_step=0).validate()
    with pytest.raises(ValueError):
        AnimationPolicy(interval_s=-1).validate()


def test_runs_on_the_asyncio_loop_by_default():
    offsets = []

    async def scenario():
        scheduler = AnimationScheduler(
            apply_style=lambda path, style: offsets.append(style["dashOffset"]),
            policy=AnimationPolicy(interval_s=0.001),
        )
        scheduler.start(PATH)
        await asyncio.sleep(0.05)
        scheduler.stop()
        ticks = len(offsets)
        await asyncio.sleep(0.02)
        return ticks

    ticks = asyncio.run(scenario())

    assert ticks > 1
    assert len(offsets) == ticks
    assert offsets == sorted(offsets, reverse=True)


def test_starting_outside_a_loop_fails_before_any_tick():
    styles = []
    scheduler = AnimationScheduler(apply_style=lambda path, style: styles.append(style))

    with pytest.raises(AnimationUnavailable):
        scheduler.start(PATH)
    assert not scheduler.running
    assert scheduler.animation is None
    assert styles == []
