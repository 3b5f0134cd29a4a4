"""Resource pool helpers.

Pure functions over :class:`evovac.components.ResourcePool`; each returns a
new pool. Admission is all-or-nothing: a rejected admit leaves the pool
exactly as it was.
"""

from dataclasses import replace
from typing import Optional, Tuple

from evovac.components import ResourcePool
from evovac.types import AdmitResult


def try_admit(pool: ResourcePool, footprint: int, weight: float) -> Tuple[ResourcePool, AdmitResult]:
    """Commit ``footprint`` and ``weight`` if both fit under their ceilings.

    Args:
        pool (ResourcePool): Current pool.
        footprint (int): Capacity units requested.
        weight (float): Weight requested.

    Returns:
        Tuple[ResourcePool, AdmitResult]: Updated pool (unchanged on rejection)
        and the outcome. Capacity is checked before weight.
    """
    if pool.capacity_used + footprint > pool.capacity_max:
        return pool, AdmitResult.REJECTED_CAPACITY
    if pool.weight_used + weight > pool.weight_max:
        return pool, AdmitResult.REJECTED_WEIGHT
    return (
        replace(
            pool,
            capacity_used=pool.capacity_used + footprint,
            weight_used=pool.weight_used + weight,
        ),
        AdmitResult.ACCEPTED,
    )


def drain(pool: ResourcePool, rate: float, dt: float) -> Tuple[ResourcePool, bool]:
    """Subtract ``rate * dt`` energy, clamping at 0.

    Returns:
        Tuple[ResourcePool, bool]: New pool and whether this call is the one
        that depleted it.
    """
    if rate < 0.0 or dt < 0.0:
        raise ValueError(f"drain needs non-negative rate and dt, got rate={rate} dt={dt}")
    energy = max(0.0, pool.energy - rate * dt)
    just_depleted = energy <= 0.0 and not pool.depleted
    return replace(pool, energy=energy, depleted=pool.depleted or just_depleted), just_depleted


def recharge(pool: ResourcePool, amount: Optional[float] = None) -> ResourcePool:
    """Raise energy by ``amount`` (``None`` refills), clamped to the maximum.

    The depleted flag is cleared whenever the resulting energy is positive.
    """
    if amount is not None and amount < 0.0:
        raise ValueError(f"recharge amount must be non-negative, got {amount}")
    if amount is None:
        energy = pool.energy_max
    else:
        energy = min(pool.energy_max, pool.energy + amount)
    return replace(pool, energy=energy, depleted=pool.depleted and energy <= 0.0)


def release(pool: ResourcePool, footprint: int, weight: float) -> ResourcePool:
    """Give back stored capacity and weight (floored at 0)."""
    return replace(
        pool,
        capacity_used=max(0, pool.capacity_used - footprint),
        weight_used=max(0.0, pool.weight_used - weight),
    )


def upgrade_capacity(pool: ResourcePool, amount: int) -> ResourcePool:
    if amount < 0:
        raise ValueError(f"capacity upgrade must be non-negative, got {amount}")
    return replace(pool, capacity_max=pool.capacity_max + amount)


def upgrade_energy_max(pool: ResourcePool, amount: float) -> ResourcePool:
    """Raise the energy ceiling and refill to it."""
    if amount < 0.0:
        raise ValueError(f"energy upgrade must be non-negative, got {amount}")
    energy_max = pool.energy_max + amount
    return replace(pool, energy_max=energy_max, energy=energy_max, depleted=False)
