#Marks animation as a package.
#Route playback: a dash offset that keeps decreasing on a fixed tick until cancelled.
#Purely presentational; knows nothing about geofences or routing.

from .policy import AnimationPolicy, default_animation_policy
from .scheduler import RepeatingTask, DashAnimation, AnimationScheduler, AnimationUnavailable, DEMO_ANIMATION_PATH

__all__ = [
    "AnimationPolicy",
    "default_animation_policy",
    "RepeatingTask",
    "DashAnimation",
    "AnimationScheduler",
    "AnimationUnavailable",
    "DEMO_ANIMATION_PATH",
]
