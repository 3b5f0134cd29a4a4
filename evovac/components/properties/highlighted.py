from dataclasses import dataclass


@dataclass(frozen=True)
class Highlighted:
    """Marker for the current detection candidate (at most one entity)."""

    pass
