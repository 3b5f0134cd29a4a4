from dataclasses import dataclass


@dataclass(frozen=True)
class BeingCaptured:
    """Marker for the target of the active capture session."""

    pass
