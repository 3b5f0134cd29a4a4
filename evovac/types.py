"""Common type aliases and enumerations.

Enumerations are ``StrEnum`` so they read naturally in logs and event
payloads. ``Rarity`` member order is meaningful: the first member is the
fallback tier used when no weighted tier can be drawn.
"""

from enum import StrEnum, auto

EntityID = int


class Rarity(StrEnum):
    """Rarity tiers, lowest first."""

    COMMON = auto()
    UNCOMMON = auto()
    RARE = auto()
    EPIC = auto()
    LEGENDARY = auto()


class CapturePhase(StrEnum):
    """Phases of a capture session (``IDLE`` means no session)."""

    IDLE = auto()
    APPROACH = auto()
    ALIGN = auto()
    SHRINK = auto()
    COLLECTING = auto()


class AdmitResult(StrEnum):
    """Outcome of asking the resource pool to take an item."""

    ACCEPTED = auto()
    REJECTED_CAPACITY = auto()
    REJECTED_WEIGHT = auto()


class RejectReason(StrEnum):
    """Why a fully captured item was refused."""

    CAPACITY = auto()
    WEIGHT = auto()


class ReleaseReason(StrEnum):
    """Why a capture session ended without collecting."""

    STOPPED = auto()
    DEPLETED = auto()
    TARGET_LOST = auto()
    INPUT_DISABLED = auto()
    CLEARED = auto()


class ZoneShape(StrEnum):
    """Exclusion zone geometry."""

    CIRCLE = auto()
    BOX = auto()
    POLYGON = auto()


class Interpolation(StrEnum):
    """Segment interpolation used by :class:`evovac.utils.curves.Curve`."""

    LINEAR = auto()
    SMOOTH = auto()
