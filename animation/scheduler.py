"""
Purpose: Cancellable repeating task + the dash-offset animation it drives.
What it does:
- RepeatingTask: run a callback now, then every interval_s, until cancel().
  Scheduling goes through a call_later function (asyncio loop by default),
  so tests can drive ticks by hand.
- DashAnimation: holds the animated path and the current offset; each step
  lowers the offset by the policy's step and pushes the style to the renderer.
- AnimationScheduler: owns at most one running animation. Starting a new one
  cancels the previous handle first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Tuple

from .policy import AnimationPolicy, default_animation_policy

logger = logging.getLogger(__name__)

LatLon = Tuple[float, float]
Style = Dict[str, Any]


class AnimationUnavailable(RuntimeError):
    """No call_later was injected and no asyncio loop is running to schedule ticks on."""
    pass


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


CallLater = Callable[[float, Callable[[], None]], Cancellable]
StyleSink = Callable[[Tuple[LatLon, ...], Style], None]

# Playback path of the "animated route" button of the map demo (Cancún), (lat, lon)
DEMO_ANIMATION_PATH: Tuple[LatLon, ...] = (
    (21.177715, -86.910599),
    (21.175245, -86.909178),
    (21.172372, -86.911133),
    (21.171535, -86.912774),
    (21.169465, -86.911486),
    (21.185800, -86.879650),
    (21.186574, -86.877757),
    (21.190384, -86.870091),
    (21.198214, -86.854723),
    (21.199660, -86.852914),
    (21.200436, -86.850354),
    (21.200478, -86.847734),
    (21.199558, -86.847748),
    (21.198431, -86.848345),
    (21.189983, -86.845794),
    (21.187195, -86.847017),
    (21.186907, -86.847512),
    (21.186483, -86.847457),
    (21.182631, -86.849194),
    (21.181542, -86.849614),
    (21.181444, -86.849367),
    (21.182220, -86.849008),
    (21.180774, -86.848197),
    (21.187521, -86.834395),
    (21.177167, -86.828548),
    (21.178088, -86.826415),
    (21.175232, -86.824812),
    (21.174201, -86.826766),
    (21.170467, -86.826543),
    (21.164268, -86.825999),
    (21.163572, -86.826234),
    (21.162968, -86.825874),
    (21.157527, -86.825503),
    (21.157463, -86.825333),
    (21.157919, -86.825287),
)


def loop_call_later(delay: float, callback: Callable[[], None]) -> Cancellable:
    """Schedule on the running asyncio loop. Raises RuntimeError outside a loop."""
    return asyncio.get_running_loop().call_later(delay, callback)


class RepeatingTask:
    """
    Explicit handle for a callback that reschedules itself.
    Nothing runs after cancel(), including a tick that was already scheduled.
    """

    def __init__(self, callback: Callable[[], None], interval_s: float, call_later: Optional[CallLater] = None):
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.callback = callback
        self.interval_s = interval_s
        self._call_later = call_later or loop_call_later
        self._handle: Optional[Cancellable] = None
        self._started = False
        self._cancelled = False
        self.ticks = 0

    @property
    def active(self) -> bool:
        return self._started and not self._cancelled

    def start(self) -> None:
        if self._started:
            raise RuntimeError("RepeatingTask already started")
        self._started = True
        self._tick()

    def _tick(self) -> None:
        if self._cancelled:
            return
        self.ticks += 1
        self.callback()
        #the callback may have cancelled us
        if not self._cancelled:
            self._handle = self._call_later(self.interval_s, self._tick)

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


def _log_style(path: Tuple[LatLon, ...], style: Style) -> None:
    logger.debug("dash offset -> %s (%d points)", style.get("dashOffset"), len(path))


class DashAnimation:
    """
    The animated copy of a path. Only the offset changes; it never increases.
    """

    def __init__(self, path: Sequence[LatLon], apply_style: StyleSink, policy: AnimationPolicy):
        if len(path) < 2:
            raise ValueError(f"An animated path needs at least 2 points, got {len(path)}")
        self.path: Tuple[LatLon, ...] = tuple(path)
        self.apply_style = apply_style
        self.policy = policy
        self.offset = 0.0

    def style(self) -> Style:
        return {
            "color": self.policy.color,
            "weight": self.policy.weight,
            "opacity": self.policy.opacity,
            "dashArray": self.policy.dash_array,
            "dashOffset": self.offset,
        }

    def step(self) -> None:
        self.offset -= self.policy.dash_step
        self.apply_style(self.path, self.style())


class AnimationScheduler:
    """
    Owns the single running DashAnimation and its RepeatingTask.
    """

    def __init__(
            self,
            apply_style: Optional[StyleSink] = None,
            policy: Optional[AnimationPolicy] = None,
            call_later: Optional[CallLater] = None,
    ):
        self.apply_style = apply_style or _log_style
        self.policy = policy or default_animation_policy()
        self.call_later = call_later
        self.animation: Optional[DashAnimation] = None
        self._task: Optional[RepeatingTask] = None

    @property
    def running(self) -> bool:
        return self._task is not None and self._task.active

    def start(self, path: Sequence[LatLon]) -> DashAnimation:
        """
        Cancel whatever is running, then animate path from offset 0.
        Raises AnimationUnavailable, before any tick, when there is nothing to schedule on.
        """
        animation = DashAnimation(path, self.apply_style, self.policy)
        call_later = self.call_later
        if call_later is None:
            try:
                call_later = asyncio.get_running_loop().call_later
            except RuntimeError as e:
                raise AnimationUnavailable("Route animation needs a running event loop") from e
        self.stop()

        task = RepeatingTask(animation.step, self.policy.interval_s, call_later=call_later)
        self.animation = animation
        self._task = task
        task.start()
        logger.info("Route animation started (%d points)", len(animation.path))
        return animation

    def stop(self) -> bool:
        """Cancel the running animation. Returns False if nothing was running."""
        if self._task is None:
            return False
        self._task.cancel()
        logger.info("Route animation stopped after %d ticks", self._task.ticks)
        self._task = None
        self.animation = None
        return True
