"""Unloading collected items.

Removing items from the inventory (selling or recycling them) frees the
capacity and weight they occupied in the resource pool.
"""

import logging
from dataclasses import replace

from evovac.state import State
from evovac.utils.inventory import remove_item
from evovac.utils.resources import release

logger = logging.getLogger(__name__)


def unload_item(state: State, name: str, quantity: int = 1) -> State:
    """Remove up to ``quantity`` items named ``name`` and release their space."""
    entry = state.inventory.entries.get(name)
    inventory, removed = remove_item(state.inventory, name, quantity)
    if removed == 0 or entry is None:
        return state
    archetype = entry.archetype
    pool = release(state.resources, archetype.footprint * removed, archetype.weight * removed)
    logger.info("Unloaded %d x %s", removed, name)
    return replace(state, inventory=inventory, resources=pool)
