"""
Host Signals - Facts reported by the host environment.

The host emits signals (facts about what changed).
EventBridge converts signals into probe triggers or immediate overrides.
"""

from enum import Enum, auto


class HostSignal(Enum):
    """
    Signals emitted by a HostEnvironment.

    These are FACTS, not state. They carry no policy.
    EventBridge decides what to do with each signal.
    """

    # Host reports connectivity restored
    ONLINE = auto()

    # Host reports connectivity lost
    OFFLINE = auto()

    # Host returned to the foreground / became visible
    VISIBLE = auto()
