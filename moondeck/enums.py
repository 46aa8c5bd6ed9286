"""State enumerations shared between the buddy and stream applications."""

from enum import Enum, auto


class PcState(Enum):
    """Power state of the host PC."""

    Normal = auto()
    Restarting = auto()
    ShuttingDown = auto()
    Suspending = auto()


class StreamState(Enum):
    """State of the streaming session."""

    NotStreaming = auto()
    Streaming = auto()
    StreamEnding = auto()