"""Piecewise keyframe curves.

A :class:`Curve` maps a scalar input to a scalar output through ordered
``(x, value)`` keys. Inputs outside the key range clamp to the nearest end
key. Between keys the segment is either linearly interpolated or eased with
``smoothstep`` (flat tangents at every key, i.e. the classic ease-in-out).

Evaluated values are always finite and non-negative so they can be used
directly as probability multipliers or force scales.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from evovac.types import Interpolation
from evovac.utils.math import lerp, smoothstep


@dataclass(frozen=True)
class CurveKey:
    """Single curve control point."""

    x: float
    value: float


@dataclass(frozen=True)
class Curve:
    """Immutable piecewise curve.

    Attributes:
        keys: Control points sorted by ``x`` (see :func:`make_curve`).
        interpolation: Segment interpolation mode.
    """

    keys: Tuple[CurveKey, ...] = ()
    interpolation: Interpolation = Interpolation.SMOOTH

    def evaluate(self, x: float) -> float:
        """Return the curve value at ``x`` (finite, ``>= 0``)."""
        if not self.keys:
            return 1.0
        if len(self.keys) == 1 or math.isnan(x):
            return _sanitize(self.keys[0].value)
        first, last = self.keys[0], self.keys[-1]
        if x <= first.x:
            return _sanitize(first.value)
        if x >= last.x:
            return _sanitize(last.value)
        for left, right in zip(self.keys, self.keys[1:]):
            if left.x <= x <= right.x:
                span = right.x - left.x
                if span <= 0.0:
                    return _sanitize(right.value)
                t = (x - left.x) / span
                if self.interpolation == Interpolation.SMOOTH:
                    t = smoothstep(t)
                return _sanitize(lerp(left.value, right.value, t))
        return _sanitize(last.value)


def _sanitize(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, value)


def make_curve(
    points: Iterable[Tuple[float, float]],
    interpolation: Interpolation = Interpolation.SMOOTH,
) -> Curve:
    """Build a curve from ``(x, value)`` pairs, sorting them by ``x``."""
    keys = tuple(sorted((CurveKey(x, v) for x, v in points), key=lambda k: k.x))
    return Curve(keys=keys, interpolation=interpolation)


def ease_in_out(x0: float, v0: float, x1: float, v1: float) -> Curve:
    return make_curve([(x0, v0), (x1, v1)], Interpolation.SMOOTH)


def linear(x0: float, v0: float, x1: float, v1: float) -> Curve:
    return make_curve([(x0, v0), (x1, v1)], Interpolation.LINEAR)


def constant(value: float = 1.0) -> Curve:
    return make_curve([(0.0, value)])
