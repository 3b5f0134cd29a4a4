"""Inventory manipulation helpers."""

from typing import Tuple

from evovac.archetypes import Archetype
from evovac.components import Inventory, InventoryEntry


def add_item(inventory: Inventory, archetype: Archetype, quantity: int = 1) -> Inventory:
    """Return a new inventory with ``quantity`` more of ``archetype``."""
    if quantity <= 0:
        raise ValueError(f"quantity must be positive, got {quantity}")
    entry = inventory.entries.get(archetype.name)
    held = entry.quantity if entry is not None else 0
    return Inventory(
        entries=inventory.entries.set(
            archetype.name, InventoryEntry(archetype=archetype, quantity=held + quantity)
        )
    )


def remove_item(inventory: Inventory, name: str, quantity: int = 1) -> Tuple[Inventory, int]:
    """Remove up to ``quantity`` items named ``name``.

    Returns:
        Tuple[Inventory, int]: New inventory and how many items were removed
        (0 when the name is not held). Emptied stacks are dropped.
    """
    if quantity <= 0:
        raise ValueError(f"quantity must be positive, got {quantity}")
    entry = inventory.entries.get(name)
    if entry is None:
        return inventory, 0
    removed = min(quantity, entry.quantity)
    remaining = entry.quantity - removed
    if remaining == 0:
        return Inventory(entries=inventory.entries.remove(name)), removed
    return (
        Inventory(entries=inventory.entries.set(name, InventoryEntry(entry.archetype, remaining))),
        removed,
    )


def item_count(inventory: Inventory, name: str) -> int:
    entry = inventory.entries.get(name)
    return entry.quantity if entry is not None else 0


def total_items(inventory: Inventory) -> int:
    return sum(entry.quantity for entry in inventory.entries.values())


def total_value(inventory: Inventory) -> int:
    """Sum of ``sell_value * quantity`` over every stack."""
    return sum(entry.archetype.sell_value * entry.quantity for entry in inventory.entries.values())
